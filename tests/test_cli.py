from rich.console import Console

from storefront import cli
from storefront.session import Storefront


def _recording(monkeypatch):
    con = Console(record=True, width=140, color_system=None)
    monkeypatch.setattr(cli, "console", con)
    return con


def test_show_receipt(monkeypatch):
    con = _recording(monkeypatch)
    cli.show_receipt({
        "orderId": "ORD-1700000000000",
        "customer": {"name": "Alice", "email": "alice@example.com"},
        "items": [{"productId": "x", "name": "Webcam", "price": 89.99, "quantity": 2}],
        "total": 179.98,
        "status": "confirmed",
    })
    out = con.export_text()
    assert "ORD-1700000000000" in out
    assert "Alice <alice@example.com>" in out
    assert "$179.98" in out


def test_show_cart_lists_subtotals(monkeypatch, sdk):
    con = _recording(monkeypatch)
    store = Storefront(sdk)
    store.add_to_cart({"_id": "p1", "name": "Mug", "price": 8.0})
    store.update_quantity("p1", 3)
    cli.show_cart(store)
    out = con.export_text()
    assert "Mug" in out
    assert "$24.00" in out


def test_empty_cart(monkeypatch, sdk):
    con = _recording(monkeypatch)
    cli.show_cart(Storefront(sdk))
    assert "Your cart is empty" in con.export_text()
