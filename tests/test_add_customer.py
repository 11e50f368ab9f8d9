"""Tests for the add customer form and its backend submission."""
import io
import json
import urllib.error
import urllib.request

import pytest

from app.dashboard import create_app
from app.dashboard.backend_client import BackendClient
from app.dashboard.modules.customers.forms import IDLE, SUBMITTING, AddCustomerForm, FormBusy
from app.dashboard.modules.customers.service import SubmitResult, submit_customer, validate_customer_payload

VALID = {
    "name": "Gina Grey",
    "email": "gina.grey@example.com",
    "phone": "9012345678",
    "address": "1 Main St",
}


class _FakeResponse:
    def __init__(self, body: bytes = b"{}") -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeBackend:
    """Records requests and answers with a fixed outcome."""

    def __init__(self, outcome: str = "ok") -> None:
        self.outcome = outcome
        self.requests: list[urllib.request.Request] = []

    def __call__(self, req, timeout=None):
        self.requests.append(req)
        if self.outcome == "ok":
            return _FakeResponse()
        if self.outcome == "rejected":
            raise urllib.error.HTTPError(req.full_url, 422, "Unprocessable", hdrs=None, fp=io.BytesIO(b"bad email"))
        raise urllib.error.URLError(ConnectionRefusedError(111, "Connection refused"))


@pytest.fixture()
def backend(monkeypatch):
    fake = FakeBackend()
    monkeypatch.setattr(urllib.request, "urlopen", fake)
    return fake


@pytest.fixture()
def client(monkeypatch, backend):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("DATA_SOURCE", "fixture")
    monkeypatch.setenv("BACKEND_URL", "http://backend.test")

    app = create_app()
    return app.test_client()


def _open_form(client) -> dict:
    r = client.get("/admin/customers/new")
    assert r.status_code == 200
    with client.session_transaction() as sess:
        return {"csrf_token": sess["csrf_token"], "form_token": sess["form_token.add_customer"]}


def test_form_renders(client):
    r = client.get("/admin/customers/new")
    assert r.status_code == 200
    assert b"Add Customer" in r.data
    for field in (b'name="name"', b'name="email"', b'name="phone"', b'name="address"'):
        assert field in r.data
    assert b'name="form_token"' in r.data


def test_submit_success_posts_json_and_clears(client, backend):
    tokens = _open_form(client)
    r = client.post("/admin/customers/new", data={**VALID, **tokens}, follow_redirects=True)
    assert r.status_code == 200
    assert b"Customer added successfully!" in r.data
    assert b"Gina Grey" not in r.data

    assert len(backend.requests) == 1
    req = backend.requests[0]
    assert req.full_url == "http://backend.test/customer"
    assert req.get_method() == "POST"
    assert req.get_header("Content-type") == "application/json"
    assert json.loads(req.data.decode("utf-8")) == VALID


def test_submit_rejected_keeps_fields(client, backend):
    backend.outcome = "rejected"
    tokens = _open_form(client)
    r = client.post("/admin/customers/new", data={**VALID, **tokens})
    assert r.status_code == 200
    assert b"Error: Could not add customer." in r.data
    assert b'value="Gina Grey"' in r.data
    assert len(backend.requests) == 1


def test_submit_transport_failure_keeps_fields(client, backend):
    backend.outcome = "down"
    tokens = _open_form(client)
    r = client.post("/admin/customers/new", data={**VALID, **tokens})
    assert r.status_code == 200
    assert b"Error: Unable to connect to the server." in r.data
    assert b'value="gina.grey@example.com"' in r.data


def test_resubmit_after_error_is_allowed(client, backend):
    backend.outcome = "down"
    tokens = _open_form(client)
    client.post("/admin/customers/new", data={**VALID, **tokens})

    backend.outcome = "ok"
    with client.session_transaction() as sess:
        tokens["form_token"] = sess["form_token.add_customer"]
    r = client.post("/admin/customers/new", data={**VALID, **tokens}, follow_redirects=True)
    assert b"Customer added successfully!" in r.data
    assert len(backend.requests) == 2


def test_duplicate_submit_fires_one_request(client, backend):
    tokens = _open_form(client)
    client.post("/admin/customers/new", data={**VALID, **tokens})
    # Replay the same rendered form, as a double click would.
    with client.session_transaction() as sess:
        sess["form_token.add_customer"] = tokens["form_token"]
    r = client.post("/admin/customers/new", data={**VALID, **tokens}, follow_redirects=True)
    assert b"This form was already submitted." in r.data
    assert len(backend.requests) == 1


def test_missing_form_token_is_refused(client, backend):
    tokens = _open_form(client)
    r = client.post("/admin/customers/new", data={**VALID, "csrf_token": tokens["csrf_token"]}, follow_redirects=True)
    assert b"This form was already submitted." in r.data
    assert backend.requests == []


def test_validation_errors_do_not_reach_backend(client, backend):
    tokens = _open_form(client)
    r = client.post("/admin/customers/new", data={**VALID, "email": "not-an-email", "phone": "", **tokens})
    assert r.status_code == 400
    assert b"Phone is required." in r.data
    assert b"Email must be a valid email address." in r.data
    assert b'value="Gina Grey"' in r.data
    assert backend.requests == []


class TestAddCustomerForm:
    """Tests for the form state machine"""

    def test_success_clears_fields(self):
        form = AddCustomerForm(fields=dict(VALID))
        result = form.submit(lambda payload: SubmitResult(ok=True, message="done"))
        assert result.ok
        assert form.state == IDLE
        assert form.fields == {"name": "", "email": "", "phone": "", "address": ""}
        assert form.message_type == "success"

    def test_error_retains_fields(self):
        form = AddCustomerForm(fields=dict(VALID))
        form.submit(lambda payload: SubmitResult(ok=False, message="nope"))
        assert form.state == IDLE
        assert form.fields == VALID
        assert form.message == "nope"
        assert form.message_type == "danger"

    def test_disabled_while_submitting(self):
        form = AddCustomerForm(fields=dict(VALID))
        seen = []

        def send(payload):
            seen.append((form.state, form.disabled))
            with pytest.raises(FormBusy):
                form.begin()
            return SubmitResult(ok=True, message="done")

        form.submit(send)
        assert seen == [(SUBMITTING, True)]
        assert not form.disabled

    def test_exception_returns_to_idle(self):
        form = AddCustomerForm(fields=dict(VALID))

        def boom(payload):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            form.submit(boom)
        assert form.state == IDLE
        assert form.fields == VALID


def test_validate_customer_payload():
    assert validate_customer_payload(VALID) == []
    errs = validate_customer_payload({"name": " ", "email": "x"})
    fields = [e.field for e in errs]
    assert fields == ["name", "phone", "address", "email"]


def test_submit_customer_outcomes(backend):
    client = BackendClient(base_url="http://backend.test/")
    assert submit_customer(client, VALID).ok is True
    backend.outcome = "rejected"
    assert submit_customer(client, VALID).message == "Error: Could not add customer."
    backend.outcome = "down"
    assert submit_customer(client, VALID).message == "Error: Unable to connect to the server."
    assert [r.full_url for r in backend.requests] == ["http://backend.test/customer"] * 3
