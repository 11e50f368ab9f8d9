"""
Filter -> sort -> paginate over an in-memory collection.

``project()`` is pure: it never mutates the records it is given. ``ListControls``
carries the per-screen controls (search text, categorical filters, sort, page,
presentation mode) parsed from the query string.
"""
from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from app.dashboard.constants import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_ORDER,
    DEFAULT_VIEW_MODE,
    SORT_ORDERS,
    VIEW_MODES,
)


@dataclass(frozen=True)
class ListControls:
    search: str = ""
    filters: tuple[tuple[str, str], ...] = ()
    sort_field: str = "name"
    sort_order: str = DEFAULT_SORT_ORDER
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    view_mode: str = DEFAULT_VIEW_MODE

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, str],
        *,
        filter_keys: Mapping[str, str] | None = None,
        sort_fields: Sequence[str] = ("name",),
        default_sort: str = "name",
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "ListControls":
        """
        Parse controls from request args. ``filter_keys`` maps query arg names to
        record attributes. Unknown or malformed values fall back to defaults.
        """
        filters = []
        for arg, attr in (filter_keys or {}).items():
            value = (args.get(arg) or "").strip()
            if value:
                filters.append((attr, value))

        sort_field = (args.get("sort") or "").strip()
        if sort_field not in sort_fields:
            sort_field = default_sort

        sort_order = (args.get("order") or "").strip().lower()
        if sort_order not in SORT_ORDERS:
            sort_order = DEFAULT_SORT_ORDER

        try:
            page = int(args.get("page") or "1")
        except ValueError:
            page = 1
        if page < 1:
            page = 1

        view_mode = (args.get("view") or "").strip().lower()
        if view_mode not in VIEW_MODES:
            view_mode = DEFAULT_VIEW_MODE

        return cls(
            search=(args.get("q") or "").strip(),
            filters=tuple(filters),
            sort_field=sort_field,
            sort_order=sort_order,
            page=page,
            page_size=page_size,
            view_mode=view_mode,
        )

    def to_args(self, filter_keys: Mapping[str, str] | None = None) -> dict[str, str]:
        """Inverse of from_args(); used to build links that keep the other controls."""
        arg_for_attr = {attr: arg for arg, attr in (filter_keys or {}).items()}
        args: dict[str, str] = {}
        if self.search:
            args["q"] = self.search
        for attr, value in self.filters:
            args[arg_for_attr.get(attr, attr)] = value
        args["sort"] = self.sort_field
        args["order"] = self.sort_order
        args["page"] = str(self.page)
        args["view"] = self.view_mode
        return args

    def with_page(self, page: int) -> "ListControls":
        return replace(self, page=page)

    def with_view(self, view_mode: str) -> "ListControls":
        return replace(self, view_mode=view_mode)


@dataclass(frozen=True)
class Page:
    items: tuple[Any, ...]
    page: int
    page_size: int
    total: int
    page_count: int
    has_prev: bool = field(init=False)
    has_next: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "has_prev", self.page > 1)
        object.__setattr__(self, "has_next", self.page < self.page_count)


def _field_text(record: Any, attr: str) -> str:
    value = getattr(record, attr, None)
    if value is None:
        return ""
    return str(value)


def matches(record: Any, search: str, search_fields: Sequence[str]) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(needle in _field_text(record, attr).lower() for attr in search_fields)


def filter_records(
    records: Sequence[Any],
    search: str,
    search_fields: Sequence[str],
    filters: Sequence[tuple[str, str]] = (),
) -> list[Any]:
    out = []
    for r in records:
        if not matches(r, search, search_fields):
            continue
        # Categorical filters compare exactly (case-sensitive).
        if any(_field_text(r, attr) != value for attr, value in filters):
            continue
        out.append(r)
    return out


def collation_key(value: str) -> tuple[str, str]:
    """Case-insensitive first, then the raw text to break ties between case variants."""
    return (value.casefold(), value)


def sort_records(records: Sequence[Any], sort_field: str, sort_order: str = "asc") -> list[Any]:
    """
    Stable sort on ``sort_field``. Records with a missing or empty value go last
    regardless of order.
    """
    present = [r for r in records if _field_text(r, sort_field)]
    missing = [r for r in records if not _field_text(r, sort_field)]
    present.sort(key=lambda r: collation_key(_field_text(r, sort_field)), reverse=sort_order == "desc")
    return present + missing


def page_count(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size > 0 else 0


def paginate(records: Sequence[Any], page: int, page_size: int) -> tuple[Any, ...]:
    start = (page - 1) * page_size
    return tuple(records[start:start + page_size])


def project(records: Sequence[Any], controls: ListControls, *, search_fields: Sequence[str]) -> Page:
    filtered = filter_records(records, controls.search, search_fields, controls.filters)
    ordered = sort_records(filtered, controls.sort_field, controls.sort_order)
    return Page(
        items=paginate(ordered, controls.page, controls.page_size),
        page=controls.page,
        page_size=controls.page_size,
        total=len(ordered),
        page_count=page_count(len(ordered), controls.page_size),
    )
