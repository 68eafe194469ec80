import pytest
import requests

from storefront.client import StoreAPIError, StoreClient
from storefront.session import ERROR, LOADING, READY, CheckoutError, Storefront


class DownSession:
    def request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")


def test_starts_loading_then_ready(seeded_sdk):
    store = Storefront(seeded_sdk)
    assert store.phase == LOADING
    assert store.load_products()
    assert store.phase == READY
    assert len(store.products) == 8


def test_failed_load_shows_error_and_retry_recovers(seeded_sdk):
    broken = StoreClient(base_url="http://testserver", session=DownSession())
    store = Storefront(broken)
    assert not store.load_products()
    assert store.phase == ERROR
    assert "connection refused" in store.error

    broken.session = seeded_sdk.session
    assert store.retry()
    assert store.phase == READY
    assert store.error is None


def test_find_product_by_id_or_name(seeded_sdk):
    store = Storefront(seeded_sdk)
    store.load_products()
    webcam = store.find_product("webcam")
    assert webcam["name"] == "Webcam"
    assert store.find_product(webcam["_id"]) is webcam
    assert store.find_product("toaster") is None


def test_checkout_requires_name_and_email(seeded_sdk):
    store = Storefront(seeded_sdk)
    store.load_products()
    store.add_to_cart(store.products[0])
    store.customer_name = "Alice"
    with pytest.raises(CheckoutError, match="name and email"):
        store.checkout()
    assert len(store.cart) == 1
    assert seeded_sdk.list_orders() == []


def test_checkout_places_one_order_and_clears_cart(seeded_sdk):
    store = Storefront(seeded_sdk)
    store.load_products()
    a, b = store.products[0], store.products[1]
    store.add_to_cart(a)
    store.add_to_cart(a)
    store.add_to_cart(b)
    store.open_cart()
    expected_total = store.get_total()
    store.customer_name = "Alice"
    store.customer_email = "alice@example.com"

    order = store.checkout()

    assert order["status"] == "confirmed"
    assert order["total"] == pytest.approx(expected_total)
    assert [(it["productId"], it["quantity"]) for it in order["items"]] == [(a["_id"], 2), (b["_id"], 1)]
    assert store.receipt == order
    assert store.order_complete
    assert len(store.cart) == 0
    assert store.customer_name == "" and store.customer_email == ""
    assert seeded_sdk.get_order(order["_id"])["orderId"] == order["orderId"]

    store.close_receipt()
    assert not store.order_complete
    assert not store.show_cart


def test_checkout_failure_keeps_cart(seeded_sdk, monkeypatch):
    store = Storefront(seeded_sdk)
    store.load_products()
    store.add_to_cart(store.products[0])
    store.customer_name = "Alice"
    store.customer_email = "alice@example.com"

    def fail(**kwargs):
        raise StoreAPIError("boom", status_code=500)

    monkeypatch.setattr(seeded_sdk, "create_order", fail)
    with pytest.raises(CheckoutError, match="boom"):
        store.checkout()
    assert len(store.cart) == 1
    assert store.customer_name == "Alice"
    assert not store.order_complete
    assert store.receipt is None


def test_sdk_surfaces_error_message(sdk):
    with pytest.raises(StoreAPIError) as exc:
        sdk.get_product("missing")
    assert exc.value.status_code == 404
    assert str(exc.value) == "Product not found"


def test_sdk_product_crud(sdk):
    p = sdk.create_product("Lamp", 12.5, stock=3)
    assert sdk.update_product(p["_id"], price=10)["price"] == 10
    assert sdk.delete_product(p["_id"]) == {"message": "Product deleted"}
    assert sdk.list_products() == []
