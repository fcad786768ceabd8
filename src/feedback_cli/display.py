import logging
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text
from rich.theme import Theme

from feedback_cli.controller import ControllerSnapshot, State, SubmissionStatus
from feedback_cli.utils import FIELD_LABELS, FormData
from feedback_cli.validation import ValidationResult

# ========== UI Theme ==========
custom_theme = Theme({
    "ok":   "bold green",
    "warn": "bold yellow",
    "err":  "bold red",
    "info": "bold cyan",
})
console = Console(theme=custom_theme)

REQUIRED_MESSAGE = "This field is required."


def setup_logging(debug: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=debug, rich_tracebacks=True)],
        force=True,
    )


def info_panel(title: str, msg: str, style: str = "cyan"):
    console.print(Panel.fit(Text(msg, no_wrap=False), title=title, border_style=style))


def ok_panel(title: str, msg: str):
    info_panel(title, msg, style="green")


def warn_panel(title: str, msg: str):
    info_panel(title, msg, style="yellow")


def error_panel(title: str, msg: str):
    info_panel(title, msg, style="red")


def print_rule(title: Optional[str] = None):
    if title:
        console.rule(f"[info]{title}[/info]")
    else:
        console.rule()


# ========== Form rendering ==========
def summary_text(form: FormData) -> str:
    return "\n".join(f"{FIELD_LABELS[field]}: {value}" for field, value in form.as_payload().items())


def render_demo_notice():
    warn_panel(
        "Demo mode active",
        "Submissions will be simulated and not actually sent.",
    )


def render_field_errors(errors: ValidationResult):
    for field in errors.invalid_fields():
        console.print(f"[err]{FIELD_LABELS[field]}:[/err] {REQUIRED_MESSAGE}")


def render_status(status: SubmissionStatus):
    if not status.is_transient:
        return
    if status.state is State.SUCCESS:
        body = status.message or ""
        if status.submitted is not None:
            body = f"{body}\n\n{summary_text(status.submitted)}"
        ok_panel("Success", body)
    else:
        error_panel("Send error.", status.message or "")


def render_snapshot(snapshot: ControllerSnapshot):
    if any(snapshot.errors.as_dict().values()):
        render_field_errors(snapshot.errors)
    render_status(snapshot.status)
