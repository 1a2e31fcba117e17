from __future__ import annotations

import logging
from typing import Any, Callable, Dict, FrozenSet

from .analytics import AnalyticsSink, NullSink
from .config import WidgetConfig
from .errors import InvalidTransitionError
from .events import (
    build_contact_submission_event,
    build_conversion_event,
    build_test_drive_event,
)
from .logger import ProcessLogger
from .models import (
    DEFAULT_VEHICLE,
    SubmissionResult,
    VehicleContext,
    WidgetSnapshot,
    WidgetState,
)
from .store import FormStateStore
from .validation import validate

logger = logging.getLogger(__name__)

ACKNOWLEDGMENT_MESSAGE = (
    "Thank you for your inquiry. A dealer representative will contact you shortly."
)

_ALLOWED_FROM: Dict[str, FrozenSet[WidgetState]] = {
    "open_contact": frozenset({WidgetState.CLOSED, WidgetState.ACKNOWLEDGED}),
    "cancel": frozenset({WidgetState.OPEN}),
    "update_field": frozenset({WidgetState.OPEN}),
    "submit": frozenset({WidgetState.OPEN}),
    "dismiss": frozenset({WidgetState.ACKNOWLEDGED}),
}


class InteractionController:
    """Drives the contact dialog and hands built events to the analytics sink.

    Every action runs to completion before returning. Sink calls are
    fire-and-forget: a failing sink never blocks the reset or the transition.
    """

    def __init__(
        self,
        *,
        config: WidgetConfig | None = None,
        sink: AnalyticsSink | None = None,
        store: FormStateStore | None = None,
        vehicle: VehicleContext = DEFAULT_VEHICLE,
        process_logger: ProcessLogger | None = None,
    ) -> None:
        self.config = config or WidgetConfig()
        self.sink: AnalyticsSink = sink or NullSink()
        self.store = store or FormStateStore()
        self.vehicle = vehicle
        self.logger = process_logger or ProcessLogger()
        self._state = WidgetState.CLOSED

    @property
    def state(self) -> WidgetState:
        return self._state

    def open_contact(self) -> None:
        self._require("open_contact")
        self._state = WidgetState.OPEN
        self.logger.log("dialog", "contact dialog opened")

    def cancel(self) -> None:
        self._require("cancel")
        self.store.reset()
        self._state = WidgetState.CLOSED
        self.logger.log("dialog", "contact dialog cancelled, edits discarded")

    def update_field(self, field: str, value: Any) -> None:
        self._require("update_field")
        self.store.update(field, value)
        self.logger.log("form", f"{field} updated")

    def submit(self) -> SubmissionResult:
        self._require("submit")
        data = self.store.read().values
        errors = validate(data)
        if errors:
            self.store.set_errors(errors)
            self.logger.log("submit", f"refused: {', '.join(sorted(errors))}")
            return SubmissionResult(accepted=False, errors=errors)

        conversion = build_conversion_event(data)
        submission = build_contact_submission_event(data, self.config.dealer)
        self._dispatch(self.sink.report_conversion, "conversion", conversion.to_payload())
        self._dispatch(self.sink.push_event, submission.name, submission.to_payload())

        self.store.reset()
        self._state = WidgetState.ACKNOWLEDGED
        self.logger.log("submit", "accepted, acknowledgment shown")
        return SubmissionResult(accepted=True)

    def dismiss(self) -> None:
        self._require("dismiss")
        self._state = WidgetState.CLOSED
        self.logger.log("dialog", "acknowledgment dismissed")

    def request_test_drive(self) -> None:
        event = build_test_drive_event(self.vehicle, self.config.dealer)
        self._dispatch(self.sink.push_event, event.name, event.to_payload())

    def snapshot(self) -> WidgetSnapshot:
        form = self.store.read()
        acknowledged = self._state is WidgetState.ACKNOWLEDGED
        return WidgetSnapshot(
            state=self._state,
            values=form.values,
            errors=form.errors,
            dialog_open=self._state is WidgetState.OPEN,
            notification=ACKNOWLEDGMENT_MESSAGE if acknowledged else None,
        )

    def _require(self, action: str) -> None:
        if self._state not in _ALLOWED_FROM[action]:
            raise InvalidTransitionError(
                f"Cannot {action.replace('_', ' ')} while {self._state.value}"
            )

    def _dispatch(
        self, send: Callable[[Dict[str, Any]], None], label: str, payload: Dict[str, Any]
    ) -> None:
        try:
            send(payload)
        except Exception:
            logger.exception("analytics sink raised", extra={"event": label})
            self.logger.log("analytics", f"{label} dropped")
            return
        self.logger.log("analytics", f"{label} handed to sink")
