"""Submission workflow for the feedback form.

The controller owns the form values, the per-field validation flags and the
submission status. The presentation layer reads snapshots and only talks to
it through :meth:`SubmissionController.on_field_change` and
:meth:`SubmissionController.on_submit`.
"""
import asyncio
import enum
import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from feedback_cli.client import TransportMode, build_transport, resolve_transport_mode
from feedback_cli.utils import FIELDS, Config, FormData, SubmitResult
from feedback_cli.validation import ValidationResult, is_form_valid, validate

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Could not send your feedback!"
CONFIG_ERROR_MESSAGE = "Submission error: check the form configuration"
SUCCESS_MESSAGE = "Feedback sent successfully!"


class State(enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


# eq=False: reset timers compare status instances by identity
@dataclass(frozen=True, eq=False)
class SubmissionStatus:
    state: State
    message: Optional[str] = None
    submitted: Optional[FormData] = None

    @property
    def is_transient(self) -> bool:
        return self.state in (State.SUCCESS, State.ERROR)


IDLE = SubmissionStatus(State.IDLE)


@dataclass(frozen=True)
class ControllerSnapshot:
    form: FormData
    errors: ValidationResult
    status: SubmissionStatus
    is_demo_mode: bool

    @property
    def is_submitting(self) -> bool:
        return self.status.state is State.SUBMITTING


Listener = Callable[[ControllerSnapshot], None]


class SubmissionController:
    def __init__(self, cfg: Config, transport=None, listener: Optional[Listener] = None):
        self.cfg = cfg
        self.mode = resolve_transport_mode(cfg.endpoint)
        self.transport = transport if transport is not None else build_transport(cfg, self.mode)
        self.listener = listener

        self._form = FormData()
        self._errors = ValidationResult()
        self._status = IDLE
        self._timer: Optional[asyncio.TimerHandle] = None
        self._disposed = False

    # ========== Read-only views ==========
    @property
    def form(self) -> FormData:
        return replace(self._form)

    @property
    def errors(self) -> ValidationResult:
        return self._errors

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def is_demo_mode(self) -> bool:
        return self.mode is TransportMode.SIMULATED

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(
            form=self.form,
            errors=self._errors,
            status=self._status,
            is_demo_mode=self.is_demo_mode,
        )

    # ========== Entry points ==========
    def on_field_change(self, field: str, value: str) -> None:
        if field not in FIELDS:
            raise ValueError(f"Unknown form field: {field!r}")
        if self._disposed:
            return
        self._form = replace(self._form, **{field: value if value is not None else ""})
        self._errors = self._errors.cleared(field)
        self._notify()

    async def on_submit(self) -> SubmissionStatus:
        if self._disposed or self._status.state is State.SUBMITTING:
            return self._status

        # a new attempt always starts from a clean idle status
        self._cancel_timer()
        self._status = IDLE

        self._errors = validate(self._form)
        if not is_form_valid(self._errors):
            logger.debug("Submission rejected, invalid fields: %s", self._errors.invalid_fields())
            self._notify()
            return self._status

        self._set_status(SubmissionStatus(State.SUBMITTING))
        form = replace(self._form)
        try:
            result = await self.transport.submit(form)
        except Exception as e:
            if self._disposed:
                return self._status
            logger.error("Error: %s", e)
            if self.is_demo_mode:
                logger.info("DEMO MODE: ignoring the error and reporting success")
                return self._succeed(form)
            return self._fail(f"Error: {str(e) or 'connection failed'}")

        if self._disposed:
            return self._status
        if result.ok:
            logger.info("Form processed successfully")
            return self._succeed(form)
        return self._fail(self._failure_message(result))

    def dispose(self) -> None:
        self._cancel_timer()
        self._disposed = True
        self.listener = None

    # ========== Internal helpers ==========
    @staticmethod
    def _failure_message(result: SubmitResult) -> str:
        if result.status_code is not None:
            logger.error("Error processing form: %s", result.status_code)
            return CONFIG_ERROR_MESSAGE
        if result.error:
            return f"Error: {result.error}"
        return DEFAULT_ERROR_MESSAGE

    def _succeed(self, form: FormData) -> SubmissionStatus:
        self._form = FormData()
        status = SubmissionStatus(State.SUCCESS, message=SUCCESS_MESSAGE, submitted=form)
        self._set_status(status)
        self._arm_reset(status)
        return status

    def _fail(self, message: str) -> SubmissionStatus:
        status = SubmissionStatus(State.ERROR, message=message)
        self._set_status(status)
        self._arm_reset(status)
        return status

    def _arm_reset(self, status: SubmissionStatus) -> None:
        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.cfg.reset_delay, self._expire, status)

    def _expire(self, status: SubmissionStatus) -> None:
        # only the status the timer was armed for may be reverted
        if self._disposed or self._status is not status:
            return
        self._timer = None
        logger.debug("Status %s expired", status.state.value)
        self._set_status(IDLE)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _set_status(self, status: SubmissionStatus) -> None:
        self._status = status
        self._notify()

    def _notify(self) -> None:
        if self.listener is None:
            return
        # listener errors never interrupt a transition
        try:
            self.listener(self.snapshot())
        except Exception:
            logger.exception("Listener failed on %s", self._status.state.value)
