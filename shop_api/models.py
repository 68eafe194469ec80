# shop_api/models.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    price: float
    stock: int = 100
    description: Optional[str] = None
    createdAt: datetime


class Customer(BaseModel):
    name: str
    email: str


class OrderItem(BaseModel):
    productId: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None


class Order(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    orderId: str
    customer: Customer
    items: List[OrderItem] = []
    total: float
    status: str = "confirmed"
    createdAt: datetime


class Message(BaseModel):
    message: str
