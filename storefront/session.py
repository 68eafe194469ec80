"""Page-level state of the storefront.

``Storefront`` mirrors what a single-page shop keeps in memory: the catalog
load phase, the local cart, which view is showing, the customer fields of
the checkout form and the receipt of the last order.
"""
from typing import Any, Dict, List, Optional

from .cart import Cart
from .client import StoreAPIError, StoreClient

LOADING = "loading"
ERROR = "error"
READY = "ready"


class CheckoutError(Exception):
    """Raised when checkout cannot go ahead; the message is meant for the user."""


class Storefront:
    def __init__(self, client: StoreClient):
        self.client = client
        self.phase = LOADING
        self.error: Optional[str] = None
        self.products: List[Dict[str, Any]] = []
        self.cart = Cart()
        self.show_cart = False
        self.customer_name = ""
        self.customer_email = ""
        self.order_complete = False
        self.receipt: Optional[Dict[str, Any]] = None

    # Catalog
    def load_products(self) -> bool:
        self.phase = LOADING
        try:
            self.products = self.client.list_products()
        except StoreAPIError as e:
            self.phase = ERROR
            self.error = str(e)
            return False
        self.phase = READY
        self.error = None
        return True

    def retry(self) -> bool:
        return self.load_products()

    def find_product(self, key: str) -> Optional[Dict[str, Any]]:
        """Look a product up by id, or by name ignoring case."""
        for p in self.products:
            if p["_id"] == key:
                return p
        lowered = key.strip().lower()
        for p in self.products:
            if p["name"].lower() == lowered:
                return p
        return None

    # Views
    def open_cart(self):
        self.show_cart = True

    def open_catalog(self):
        self.show_cart = False

    # Cart
    def add_to_cart(self, product: Dict[str, Any]):
        self.cart.add(product)

    def remove_from_cart(self, product_id: str):
        self.cart.remove(product_id)

    def update_quantity(self, product_id: str, new_qty: int):
        self.cart.update_quantity(product_id, new_qty)

    def get_total(self) -> float:
        return self.cart.total()

    # Checkout
    def checkout(self) -> Dict[str, Any]:
        if not self.customer_name or not self.customer_email:
            raise CheckoutError("Please enter your name and email")
        try:
            order = self.client.create_order(
                customer={"name": self.customer_name, "email": self.customer_email},
                items=self.cart.to_order_items(),
                total=self.get_total(),
            )
        except StoreAPIError as e:
            raise CheckoutError(f"Error creating order: {e}") from e

        self.receipt = order
        self.order_complete = True
        self.cart.clear()
        self.customer_name = ""
        self.customer_email = ""
        return order

    def close_receipt(self):
        self.order_complete = False
        self.show_cart = False
