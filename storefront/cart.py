from typing import Any, Dict, List


class Cart:
    """Client-side shopping cart.

    Maps product id to a snapshot of the product and a quantity that is
    always at least 1. Nothing here talks to the server.
    """

    def __init__(self):
        self._entries: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, product_id: str) -> bool:
        return product_id in self._entries

    @property
    def items(self) -> List[Dict[str, Any]]:
        return [{"product": e["product"], "quantity": e["quantity"]} for e in self._entries.values()]

    def quantity(self, product_id: str) -> int:
        entry = self._entries.get(product_id)
        return entry["quantity"] if entry else 0

    def add(self, product: Dict[str, Any]):
        pid = product["_id"]
        entry = self._entries.get(pid)
        if entry:
            entry["quantity"] += 1
        else:
            self._entries[pid] = {"product": dict(product), "quantity": 1}

    def remove(self, product_id: str):
        self._entries.pop(product_id, None)

    def update_quantity(self, product_id: str, new_qty: int):
        # below 1 is ignored; removal only goes through remove()
        if new_qty < 1 or product_id not in self._entries:
            return
        self._entries[product_id]["quantity"] = new_qty

    def total(self) -> float:
        return sum(e["product"]["price"] * e["quantity"] for e in self._entries.values())

    def count(self) -> int:
        return sum(e["quantity"] for e in self._entries.values())

    def clear(self):
        self._entries.clear()

    def to_order_items(self) -> List[Dict[str, Any]]:
        return [
            {
                "productId": pid,
                "name": e["product"]["name"],
                "price": e["product"]["price"],
                "quantity": e["quantity"],
            }
            for pid, e in self._entries.items()
        ]
