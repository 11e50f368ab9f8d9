"""Tests for the shop list screen."""
import pytest

from app.dashboard import create_app
from app.dashboard.fixtures import SHOPS
from app.dashboard.modules.shops.service import unlisted_shop_types


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("DATA_SOURCE", "fixture")
    for k in ("PAGE_SIZE", "ROUTER_BASE_URL", "SHOP_TYPE_OPTIONS", "PACKAGE_TYPE_OPTIONS"):
        monkeypatch.delenv(k, raising=False)

    app = create_app()
    return app.test_client()


def _csrf(client) -> str:
    with client.session_transaction() as sess:
        sess["csrf_token"] = "test-csrf"
    return "test-csrf"


def test_shops_list_ok(client):
    r = client.get("/admin/shops")
    assert r.status_code == 200
    assert b"Shop List" in r.data
    assert b'class="shop-table"' in r.data
    assert b"Page 1 of 2" in r.data
    # name ascending: Electrical Bazaar .. Medical Supplies on page 1, Tech World on page 2
    assert b"Electrical Bazaar" in r.data
    assert b"Tech World" not in r.data


def test_sort_descending(client):
    r = client.get("/admin/shops?order=desc")
    assert b"Tech World" in r.data
    assert b"Electrical Bazaar" not in r.data
    assert r.data.index(b"Tech World") < r.data.index(b"Medical Supplies")


def test_category_filter_exact(client):
    r = client.get("/admin/shops?category=Medical")
    assert b"Medical Supplies" in r.data
    assert b"General Store" not in r.data
    assert b"Page 1 of 1" in r.data

    r = client.get("/admin/shops?category=medical")
    assert b"No shops found" in r.data


def test_package_filter(client):
    r = client.get("/admin/shops?package=Premium")
    assert b"Footwear Hub" in r.data
    assert b"Tech World" in r.data
    assert b"General Store" not in r.data


def test_search_by_id(client):
    r = client.get("/admin/shops?q=4")
    assert b"Electrical Bazaar" in r.data
    assert b"General Store" not in r.data


def test_search_by_owner_and_location(client):
    r = client.get("/admin/shops?q=sara")
    assert b"Fashion Paradise" in r.data
    r = client.get("/admin/shops?q=TEXAS")
    assert b"Footwear Hub" in r.data
    assert b"Fashion Paradise" not in r.data


def test_electronics_has_no_filter_option_but_is_searchable(client):
    r = client.get("/admin/shops")
    assert b'<option value="General">General Shop</option>' in r.data
    assert b'value="Electronics"' not in r.data

    r = client.get("/admin/shops?q=electronics")
    assert b"Tech World" in r.data


def test_shop_type_options_are_configurable(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    monkeypatch.setenv("ENV", "test")
    monkeypatch.setenv("SHOP_TYPE_OPTIONS", "General,Medical,Footwear,Electrical,Clothes,Electronics")
    client = create_app().test_client()
    r = client.get("/admin/shops?category=Electronics")
    assert b'value="Electronics" selected' in r.data
    assert b"Tech World" in r.data


def test_unlisted_shop_types():
    assert unlisted_shop_types(SHOPS, ("General", "Medical", "Footwear", "Electrical", "Clothes")) == ["Electronics"]
    assert unlisted_shop_types(SHOPS, [s.shop_type for s in SHOPS]) == []


def test_card_view(client):
    r = client.get("/admin/shops?view=card&package=Basic")
    assert b'class="shop-card"' in r.data
    assert b"Owner: John Doe" in r.data
    assert b"Owner: Bob Johnson" in r.data
    assert b"package=Basic" in r.data


def test_delete_keeps_filters(client):
    token = _csrf(client)
    r = client.post("/admin/shops/3/delete?package=Premium", data={"csrf_token": token}, follow_redirects=True)
    assert r.status_code == 200
    assert b"Footwear Hub" not in r.data
    assert b"Tech World" in r.data


def test_view_and_update_hand_off_to_router(client):
    r = client.get("/admin/shops/2/view", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["Location"].endswith("/view-shop/2")
    r = client.get("/admin/shops/2/update", follow_redirects=False)
    assert r.headers["Location"].endswith("/update-shop/2")
