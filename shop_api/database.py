"""Document stores for products and orders.

The service never reaches for a global connection: a store object is built
once at startup and handed to every request. ``MemoryStore`` keeps both
collections in process (used when no ``MONGODB_URI`` is configured, and by
the tests); ``MongoStore`` persists them with pymongo.
"""
import copy
import threading
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError

from .config import Settings
from .errors import InvalidRecordError


class MemoryStore:
    name = "memory"

    def __init__(self):
        self.PRODUCTS: Dict[str, Dict[str, Any]] = {}
        self.ORDERS: Dict[str, Dict[str, Any]] = {}
        self._order_seq: Dict[str, int] = {}
        self._lock = threading.Lock()

    # Products
    def count_products(self) -> int:
        with self._lock:
            return len(self.PRODUCTS)

    def list_products(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [copy.deepcopy(p) for p in self.PRODUCTS.values()]

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            p = self.PRODUCTS.get(product_id)
            return copy.deepcopy(p) if p else None

    def insert_product(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        pid = str(ObjectId())
        stored = {"_id": pid, **copy.deepcopy(doc)}
        with self._lock:
            self.PRODUCTS[pid] = stored
        return copy.deepcopy(stored)

    def insert_products(self, docs: List[Dict[str, Any]]) -> int:
        for doc in docs:
            self.insert_product(doc)
        return len(docs)

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            p = self.PRODUCTS.get(product_id)
            if not p:
                return None
            p.update(copy.deepcopy(changes))
            return copy.deepcopy(p)

    def delete_product(self, product_id: str) -> bool:
        with self._lock:
            return self.PRODUCTS.pop(product_id, None) is not None

    # Orders
    def insert_order(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        oid = str(ObjectId())
        stored = {"_id": oid, **copy.deepcopy(doc)}
        with self._lock:
            if any(o["orderId"] == doc["orderId"] for o in self.ORDERS.values()):
                raise InvalidRecordError(f"duplicate orderId: {doc['orderId']}")
            self.ORDERS[oid] = stored
            self._order_seq[oid] = len(self._order_seq)
        return copy.deepcopy(stored)

    def list_orders(self) -> List[Dict[str, Any]]:
        with self._lock:
            ordered = sorted(
                self.ORDERS.values(),
                key=lambda o: (o["createdAt"], self._order_seq[o["_id"]]),
                reverse=True,
            )
            return [copy.deepcopy(o) for o in ordered]

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            o = self.ORDERS.get(order_id)
            if o is None:
                o = next((x for x in self.ORDERS.values() if x["orderId"] == order_id), None)
            return copy.deepcopy(o) if o else None

    def close(self):
        pass


# ---------------------------
# MongoDB
# ---------------------------
def _object_id(raw: str) -> Optional[ObjectId]:
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        return None


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    if doc is None:
        return None
    d = {**doc}
    for k, v in list(d.items()):
        if isinstance(v, ObjectId):
            d[k] = str(v)
    return d


class MongoStore:
    name = "mongodb"

    def __init__(self, uri: str, db_name: str = "vibe_commerce", client: Optional[MongoClient] = None):
        self.client = client or MongoClient(uri, tz_aware=True, serverSelectionTimeoutMS=5000)
        self.db = self.client.get_default_database(default=db_name)
        self.products = self.db["products"]
        self.orders = self.db["orders"]

    def ensure_indexes(self):
        self.orders.create_index([("orderId", ASCENDING)], unique=True)
        self.orders.create_index([("createdAt", DESCENDING)])

    # Products
    def count_products(self) -> int:
        return self.products.count_documents({})

    def list_products(self) -> List[Dict[str, Any]]:
        return [serialize_doc(p) for p in self.products.find()]

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(product_id)
        if oid is None:
            return None
        return serialize_doc(self.products.find_one({"_id": oid}))

    def insert_product(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        stored = dict(doc)
        result = self.products.insert_one(stored)
        stored["_id"] = result.inserted_id
        return serialize_doc(stored)

    def insert_products(self, docs: List[Dict[str, Any]]) -> int:
        result = self.products.insert_many([dict(d) for d in docs])
        return len(result.inserted_ids)

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        oid = _object_id(product_id)
        if oid is None:
            return None
        if not changes:
            return self.get_product(product_id)
        doc = self.products.find_one_and_update(
            {"_id": oid}, {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def delete_product(self, product_id: str) -> bool:
        oid = _object_id(product_id)
        if oid is None:
            return False
        return self.products.delete_one({"_id": oid}).deleted_count == 1

    # Orders
    def insert_order(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        stored = dict(doc)
        try:
            result = self.orders.insert_one(stored)
        except DuplicateKeyError as e:
            raise InvalidRecordError(f"duplicate orderId: {doc['orderId']}") from e
        stored["_id"] = result.inserted_id
        return serialize_doc(stored)

    def list_orders(self) -> List[Dict[str, Any]]:
        cursor = self.orders.find().sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
        return [serialize_doc(o) for o in cursor]

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(order_id)
        query = {"_id": oid} if oid is not None else {"orderId": order_id}
        return serialize_doc(self.orders.find_one(query))

    def close(self):
        self.client.close()


def open_store(settings: Settings):
    """Build the store selected by the configuration."""
    if settings.mongodb_uri:
        return MongoStore(settings.mongodb_uri, settings.mongodb_db)
    return MemoryStore()
