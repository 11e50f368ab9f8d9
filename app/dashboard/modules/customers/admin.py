from __future__ import annotations

from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for

from app.dashboard.backend_client import client_from_config
from app.dashboard.constants import MSG_ALREADY_SUBMITTED
from app.dashboard.modules.customers.forms import AddCustomerForm
from app.dashboard.modules.customers.service import (
    DEFAULT_SORT,
    SEARCH_FIELDS,
    SORT_FIELDS,
    payload_from_form,
    submit_customer,
    validate_customer_payload,
)
from app.dashboard.navigation import external_path
from app.dashboard.presentation import render_list
from app.dashboard.projection import ListControls, project
from app.dashboard.security import submission_guard
from app.dashboard.store import remove_record, session_store

bp = Blueprint("customers", __name__)

_FORM_TOKEN_KEY = "form_token.add_customer"


def _controls() -> ListControls:
    return ListControls.from_args(
        request.args,
        sort_fields=SORT_FIELDS,
        default_sort=DEFAULT_SORT,
        page_size=current_app.config["PAGE_SIZE"],
    )


# ---------- List ----------
@bp.get("/customers")
def customers_list():
    store = session_store("customers")
    controls = _controls()
    page = project(store.items, controls, search_fields=SEARCH_FIELDS)
    return render_list(
        "customers",
        endpoint="customers.customers_list",
        page=page,
        controls=controls,
        sort_fields=SORT_FIELDS,
    )


# ---------- Row actions ----------
@bp.post("/customers/<int:customer_id>/delete")
def customer_delete(customer_id: int):
    store = session_store("customers")
    if remove_record("customers", store, customer_id):
        current_app.logger.info("Removed customer %s from session store", customer_id)
    return redirect(url_for("customers.customers_list", **request.args))


@bp.get("/customers/<int:customer_id>/view")
def customer_view(customer_id: int):
    return redirect(external_path("customer", "view", customer_id))


@bp.get("/customers/<int:customer_id>/update")
def customer_update(customer_id: int):
    return redirect(external_path("customer", "update", customer_id))


# ---------- New ----------
def _render_form(form: AddCustomerForm):
    token = submission_guard.issue()
    session[_FORM_TOKEN_KEY] = token
    return render_template("admin/customers/new.html", form=form, form_token=token)


@bp.get("/customers/new")
def customers_new_get():
    return _render_form(AddCustomerForm())


@bp.post("/customers/new")
def customers_new_post():
    form = AddCustomerForm(fields=payload_from_form(request.form))

    token = request.form.get("form_token")
    if token != session.get(_FORM_TOKEN_KEY) or not submission_guard.consume(token):
        current_app.logger.warning("Duplicate add-customer submission refused")
        flash(MSG_ALREADY_SUBMITTED, "warning")
        return redirect(url_for("customers.customers_new_get"))
    session.pop(_FORM_TOKEN_KEY, None)

    errs = validate_customer_payload(form.fields)
    if errs:
        for e in errs:
            flash(e.message, "danger")
        return _render_form(form), 400

    client = client_from_config(current_app.config)
    result = form.submit(lambda payload: submit_customer(client, payload))
    flash(result.message, form.message_type or "info")
    if result.ok:
        return redirect(url_for("customers.customers_new_get"))
    return _render_form(form)
