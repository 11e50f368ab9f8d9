"""
Add-customer form state.

    idle -> submitting -> idle (success: fields cleared)
                       -> idle (error: fields retained)

While submitting, fields and the submit button render disabled.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from app.dashboard.modules.customers.service import FORM_FIELDS, SubmitResult

IDLE = "idle"
SUBMITTING = "submitting"


class FormBusy(RuntimeError):
    pass


def _blank() -> dict[str, str]:
    return {key: "" for key in FORM_FIELDS}


@dataclass
class AddCustomerForm:
    fields: dict[str, str] = field(default_factory=_blank)
    state: str = IDLE
    message: str | None = None
    message_type: str | None = None

    @property
    def disabled(self) -> bool:
        return self.state == SUBMITTING

    def begin(self) -> None:
        if self.state == SUBMITTING:
            raise FormBusy("A submission is already in flight.")
        self.state = SUBMITTING
        self.message = None
        self.message_type = None

    def finish(self, result: SubmitResult) -> None:
        self.state = IDLE
        self.message = result.message
        if result.ok:
            self.message_type = "success"
            self.fields = _blank()
        else:
            self.message_type = "danger"

    def submit(self, send: Callable[[dict[str, str]], SubmitResult]) -> SubmitResult:
        self.begin()
        try:
            result = send(dict(self.fields))
        except Exception:
            self.state = IDLE
            raise
        self.finish(result)
        return result
