from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from app.dashboard.backend_client import BackendClient, BackendRejected, BackendUnavailable
from app.dashboard.constants import (
    CUSTOMER_CREATE_PATH,
    MSG_BACKEND_UNAVAILABLE,
    MSG_CUSTOMER_ADDED,
    MSG_CUSTOMER_REJECTED,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "email", "phone")
SORT_FIELDS = ("name", "email", "phone")
DEFAULT_SORT = "name"

FORM_FIELDS = ("name", "email", "phone", "address")


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


@dataclass(frozen=True)
class SubmitResult:
    ok: bool
    message: str


def payload_from_form(form: Any) -> dict[str, str]:
    return {key: (form.get(key) or "").strip() for key in FORM_FIELDS}


def validate_customer_payload(payload: dict[str, Any]) -> list[ValidationError]:
    errs: list[ValidationError] = []
    for key in FORM_FIELDS:
        if not (payload.get(key) or "").strip():
            errs.append(ValidationError(key, f"{key.capitalize()} is required."))
    email = (payload.get("email") or "").strip()
    if email and "@" not in email:
        errs.append(ValidationError("email", "Email must be a valid email address."))
    return errs


def submit_customer(client: BackendClient, payload: dict[str, str]) -> SubmitResult:
    """
    Post a new customer to the backend. Exactly one request, no retry.
    """
    body = {key: payload.get(key, "") for key in FORM_FIELDS}
    logger.info("Submitting customer %r to backend", body["email"])
    try:
        client.post_json(CUSTOMER_CREATE_PATH, body)
    except BackendUnavailable as e:
        logger.warning("Customer submit failed, backend unreachable: %s", e)
        return SubmitResult(ok=False, message=MSG_BACKEND_UNAVAILABLE)
    except BackendRejected as e:
        logger.warning("Customer submit rejected with HTTP %s", e.status)
        return SubmitResult(ok=False, message=MSG_CUSTOMER_REJECTED)
    logger.info("Customer %r accepted by backend", body["email"])
    return SubmitResult(ok=True, message=MSG_CUSTOMER_ADDED)
