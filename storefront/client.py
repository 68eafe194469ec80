# storefront/client.py
import os
from typing import Any, Dict, List, Optional

import httpx
import requests

DEFAULT_BASE_URL = "http://localhost:5000"


class StoreAPIError(Exception):
    """Raised when the store API cannot be reached or answers with an error.

    ``status_code`` is ``None`` for network failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


def _error_message(r) -> str:
    try:
        body = r.json()
    except ValueError:
        return f"HTTP {r.status_code}: {r.text}"
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return f"HTTP {r.status_code}"


class StoreClient:
    def __init__(self, base_url: Optional[str] = None, timeout: int = 10, session=None):
        base_url = base_url or os.getenv("STORE_API_URL", DEFAULT_BASE_URL)
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise StoreAPIError(f"could not reach store at {self.base_url}: {e}") from e
        if r.status_code >= 400:
            raise StoreAPIError(_error_message(r), status_code=r.status_code)
        try:
            return r.json()
        except ValueError as e:
            raise StoreAPIError(f"invalid JSON from {path}", status_code=r.status_code) from e

    # Products
    def list_products(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/products")

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/products/{product_id}")

    def create_product(self, name: str, price: float, stock: Optional[int] = None, description: Optional[str] = None):
        payload: Dict[str, Any] = {"name": name, "price": price}
        if stock is not None:
            payload["stock"] = stock
        if description is not None:
            payload["description"] = description
        return self._request("POST", "/api/products", json=payload)

    def update_product(self, product_id: str, **fields):
        return self._request("PUT", f"/api/products/{product_id}", json=fields)

    def delete_product(self, product_id: str):
        return self._request("DELETE", f"/api/products/{product_id}")

    # Orders
    def create_order(self, customer: Dict[str, str], items: List[Dict[str, Any]], total: float):
        return self._request("POST", "/api/orders", json={"customer": customer, "items": items, "total": total})

    def list_orders(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/orders")

    def get_order(self, order_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/orders/{order_id}")

    # Async order submission (used by the concurrency demo)
    async def create_order_async(
        self,
        customer: Dict[str, str],
        items: List[Dict[str, Any]],
        total: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> Dict[str, Any]:
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport) as client:
            try:
                r = await client.post("/api/orders", json={"customer": customer, "items": items, "total": total})
            except httpx.HTTPError as e:
                raise StoreAPIError(f"could not reach store at {self.base_url}: {e}") from e
        if r.status_code >= 400:
            raise StoreAPIError(_error_message(r), status_code=r.status_code)
        return r.json()
