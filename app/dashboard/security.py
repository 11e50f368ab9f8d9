from __future__ import annotations

import secrets
import threading
from collections import deque

from flask import Request, session


def ensure_csrf_token() -> str:
    """Ensure a CSRF token exists in the session and return it."""
    token = session.get("csrf_token")
    if not token:
        token = secrets.token_urlsafe(32)
        session["csrf_token"] = token
    return token


def validate_csrf(req: Request) -> bool:
    """Token may come from the X-CSRF-Token header or the csrf_token form field."""
    token = req.headers.get("X-CSRF-Token") or req.form.get("csrf_token")
    expected = session.get("csrf_token")
    return bool(token and expected and secrets.compare_digest(token, expected))


class SubmissionGuard:
    """
    One-time form submission tokens.

    Each rendered form gets a fresh token. ``consume()`` succeeds once per token,
    across concurrent requests in this process, so a double click cannot fire two
    backend requests. Only the most recent ``capacity`` consumed tokens are
    remembered.
    """

    def __init__(self, capacity: int = 10_000) -> None:
        self._lock = threading.Lock()
        self._consumed: set[str] = set()
        self._order: deque[str] = deque()
        self._capacity = capacity

    def issue(self) -> str:
        return secrets.token_urlsafe(24)

    def consume(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            if token in self._consumed:
                return False
            self._consumed.add(token)
            self._order.append(token)
            while len(self._order) > self._capacity:
                self._consumed.discard(self._order.popleft())
            return True


submission_guard = SubmissionGuard()
