"""Tests for the feedback-cli command line."""

import pytest
from click.testing import CliRunner

from feedback_cli.client import HttpClient
from feedback_cli.controller import CONFIG_ERROR_MESSAGE, State, SubmissionStatus
from feedback_cli.display import console, render_status, summary_text
from feedback_cli.entry import cli
from feedback_cli.utils import Config, FormData, SubmitResult

ENDPOINT = "https://formspree.io/f/xjkwrqew"
VALID = ["--name", "Ana", "--email", "ana@example.com", "--comment", "Nice work"]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestSendCommand:
    def test_demo_mode_success(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["send", *VALID], env={"FEEDBACK_ENDPOINT": ""})

        assert result.exit_code == 0, result.output
        assert "Demo mode active" in result.output
        assert "Feedback sent successfully!" in result.output
        assert "ana@example.com" in result.output

    def test_invalid_input_reports_fields(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["send", "--name", "Ana", "--email", "nope"], env={"FEEDBACK_ENDPOINT": ""})

        assert result.exit_code == 1
        assert "E-mail: This field is required." in result.output
        assert "Comment: This field is required." in result.output
        assert "Name:" not in result.output

    def test_live_rejection(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        sent: list = []

        async def fake_submit(self, form: FormData) -> SubmitResult:
            sent.append((self.cfg.endpoint, form))
            return SubmitResult(ok=False, status_code=403, text="forbidden")

        monkeypatch.setattr(HttpClient, "submit", fake_submit)

        result = runner.invoke(cli, ["--endpoint", ENDPOINT, "send", *VALID])

        assert result.exit_code == 1
        assert CONFIG_ERROR_MESSAGE in result.output
        assert "Demo mode active" not in result.output
        assert sent == [(ENDPOINT, FormData(name="Ana", email="ana@example.com", comment="Nice work"))]


class TestConfig:
    def test_from_options(self) -> None:
        cfg = Config.from_options(f"  {ENDPOINT} ", 5, True, False)
        assert cfg.endpoint == ENDPOINT
        assert cfg.timeout == 5
        assert cfg.verify_tls is False
        assert cfg.reset_delay == 4.0

    def test_missing_endpoint(self) -> None:
        assert Config.from_options(None, 30, False, False).endpoint == ""


def test_summary_text_lists_submitted_values() -> None:
    text = summary_text(FormData(name="Ana", email="ana@example.com", comment="Hi"))
    assert text == "Name: Ana\nE-mail: ana@example.com\nComment: Hi"


class TestRenderStatus:
    def test_idle_and_submitting_print_nothing(self) -> None:
        with console.capture() as capture:
            render_status(SubmissionStatus(State.IDLE))
            render_status(SubmissionStatus(State.SUBMITTING))
        assert capture.get() == ""

    def test_error_banner(self) -> None:
        with console.capture() as capture:
            render_status(SubmissionStatus(State.ERROR, message="Error: timed out"))
        assert "Error: timed out" in capture.get()
