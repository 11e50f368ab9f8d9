from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import render_template, url_for

from app.dashboard.projection import ListControls, Page

LAYOUTS = {
    "list": "_partials/{kind}_table.html",
    "card": "_partials/{kind}_cards.html",
}


def layout_template(kind: str, view_mode: str) -> str:
    return LAYOUTS.get(view_mode, LAYOUTS["list"]).format(kind=kind)


def render_list(
    kind: str,
    *,
    endpoint: str,
    page: Page,
    controls: ListControls,
    filter_keys: Mapping[str, str] | None = None,
    **context: Any,
) -> str:
    """
    Render a list screen. Both layouts receive the same page of records; only the
    partial differs. Pager and view-toggle links carry every other control.
    """
    args = controls.to_args(filter_keys)

    def link(**overrides: Any) -> str:
        return url_for(endpoint, **{**args, **{k: str(v) for k, v in overrides.items()}})

    return render_template(
        f"admin/{kind}/list.html",
        page=page,
        controls=controls,
        list_args=args,
        layout=layout_template(kind, controls.view_mode),
        prev_url=link(page=page.page - 1) if page.has_prev else None,
        next_url=link(page=page.page + 1) if page.has_next else None,
        view_urls={mode: link(view=mode) for mode in LAYOUTS},
        **context,
    )
