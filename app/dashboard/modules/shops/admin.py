from __future__ import annotations

from flask import Blueprint, current_app, redirect, request, url_for

from app.dashboard.constants import SHOP_TYPE_LABELS
from app.dashboard.modules.shops.service import (
    DEFAULT_SORT,
    FILTER_KEYS,
    SEARCH_FIELDS,
    SORT_FIELDS,
    warn_unlisted_shop_types,
)
from app.dashboard.navigation import external_path
from app.dashboard.presentation import render_list
from app.dashboard.projection import ListControls, project
from app.dashboard.store import remove_record, session_store

bp = Blueprint("shops", __name__)


def _check_filter_options(shops) -> None:
    warn_unlisted_shop_types(shops, current_app.config["SHOP_TYPE_OPTIONS"])


# ---------- List ----------
@bp.get("/shops")
def shops_list():
    store = session_store("shops", on_mount=_check_filter_options)
    controls = ListControls.from_args(
        request.args,
        filter_keys=FILTER_KEYS,
        sort_fields=SORT_FIELDS,
        default_sort=DEFAULT_SORT,
        page_size=current_app.config["PAGE_SIZE"],
    )
    page = project(store.items, controls, search_fields=SEARCH_FIELDS)
    filters = dict(controls.filters)
    return render_list(
        "shops",
        endpoint="shops.shops_list",
        page=page,
        controls=controls,
        filter_keys=FILTER_KEYS,
        category_filter=filters.get("shop_type", ""),
        package_filter=filters.get("package_type", ""),
        shop_type_options=[
            (value, SHOP_TYPE_LABELS.get(value, value)) for value in current_app.config["SHOP_TYPE_OPTIONS"]
        ],
        package_type_options=current_app.config["PACKAGE_TYPE_OPTIONS"],
    )


# ---------- Row actions ----------
@bp.post("/shops/<int:shop_id>/delete")
def shop_delete(shop_id: int):
    store = session_store("shops", on_mount=_check_filter_options)
    if remove_record("shops", store, shop_id):
        current_app.logger.info("Removed shop %s from session store", shop_id)
    return redirect(url_for("shops.shops_list", **request.args))


@bp.get("/shops/<int:shop_id>/view")
def shop_view(shop_id: int):
    return redirect(external_path("shop", "view", shop_id))


@bp.get("/shops/<int:shop_id>/update")
def shop_update(shop_id: int):
    return redirect(external_path("shop", "update", shop_id))
