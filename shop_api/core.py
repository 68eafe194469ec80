from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

# Request schemas. Unknown fields are ignored, the way the document schema
# drops paths it does not declare.


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    stock: int = 100
    description: Optional[str] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    stock: Optional[int] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def _required_fields_not_null(self):
        for name in ("name", "price"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} is required")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CustomerIn(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)


class OrderItemIn(BaseModel):
    productId: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = Field(None, allow_inf_nan=False)
    quantity: Optional[int] = None


class OrderIn(BaseModel):
    customer: CustomerIn
    items: List[OrderItemIn] = []
    total: float = Field(..., allow_inf_nan=False)


# ---------------------------
# Document builders
# ---------------------------
def _now() -> datetime:
    return datetime.now(timezone.utc)


def _make_product_doc(p: ProductIn) -> Dict[str, Any]:
    return {
        "name": p.name,
        "price": p.price,
        "stock": p.stock,
        "description": p.description,
        "createdAt": _now(),
    }


def _make_order_doc(order_id: str, o: OrderIn) -> Dict[str, Any]:
    return {
        "orderId": order_id,
        "customer": o.customer.model_dump(),
        "items": [it.model_dump() for it in o.items],
        "total": o.total,
        "status": "confirmed",
        "createdAt": _now(),
    }
