from __future__ import annotations

from flask import current_app

# Paths served by the external router; this app only issues the redirect.
_PATHS = {
    ("customer", "view"): "/view-customer/{id}",
    ("customer", "update"): "/update-customer/{id}",
    ("shop", "view"): "/view-shop/{id}",
    ("shop", "update"): "/update-shop/{id}",
}


def external_path(entity: str, action: str, record_id: int, *, base_url: str | None = None) -> str:
    if base_url is None:
        base_url = current_app.config.get("ROUTER_BASE_URL") or ""
    path = _PATHS[(entity, action)].format(id=record_id)
    return base_url.rstrip("/") + path
