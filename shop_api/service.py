import threading
import time
from typing import Any, Dict, List

from pydantic import ValidationError

from .core import OrderIn, ProductIn, ProductUpdate, _make_order_doc, _make_product_doc
from .errors import InvalidRecordError, NotFoundError
from .log import get_logger

# This file contains the core logic for all API endpoints. Every function
# takes the store it works against; nothing here holds a connection.

logger = get_logger(__name__)


class OrderNumbers:
    """Hands out ``ORD-<ms timestamp>`` identifiers.

    Values are strictly increasing within a process: when two orders land in
    the same millisecond the second one takes the next free number.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            stamp = max(int(self._clock() * 1000), self._last + 1)
            self._last = stamp
        return f"ORD-{stamp}"


# Product endpoints
def list_products_logic(store) -> List[Dict[str, Any]]:
    return store.list_products()


def get_product_logic(store, product_id: str) -> Dict[str, Any]:
    p = store.get_product(product_id)
    if not p:
        raise NotFoundError("Product", product_id)
    return p


def create_product_logic(store, payload: ProductIn) -> Dict[str, Any]:
    product = store.insert_product(_make_product_doc(payload))
    logger.info("product created", product_id=product["_id"], name=product["name"])
    return product


def update_product_logic(store, product_id: str, payload: ProductUpdate) -> Dict[str, Any]:
    changes = payload.changes()
    current = get_product_logic(store, product_id)
    # re-validate the merged record, not just the patch
    merged = {k: current.get(k) for k in ProductIn.model_fields}
    merged.update(changes)
    try:
        ProductIn(**merged)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(x) for x in err["loc"])
        raise InvalidRecordError(f"Product validation failed: {loc}: {err['msg']}") from e
    p = store.update_product(product_id, changes)
    if not p:
        raise NotFoundError("Product", product_id)
    logger.info("product updated", product_id=product_id, fields=sorted(changes))
    return p


def delete_product_logic(store, product_id: str) -> Dict[str, str]:
    if not store.delete_product(product_id):
        raise NotFoundError("Product", product_id)
    logger.info("product deleted", product_id=product_id)
    return {"message": "Product deleted"}


# Orders
def create_order_logic(store, payload: OrderIn, numbers: OrderNumbers) -> Dict[str, Any]:
    # items, prices and total are stored exactly as the client sent them
    order = store.insert_order(_make_order_doc(numbers.next(), payload))
    logger.info(
        "order created",
        order_id=order["orderId"],
        items=len(order["items"]),
        total=order["total"],
    )
    return order


def list_orders_logic(store) -> List[Dict[str, Any]]:
    return store.list_orders()


def get_order_logic(store, order_id: str) -> Dict[str, Any]:
    o = store.get_order(order_id)
    if not o:
        raise NotFoundError("Order", order_id)
    return o
