"""Schemas for order intake and the account order history."""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from app.schemas.common import CamelModel

MAX_ITEMS_PER_ORDER = 100


class OrderItemIn(CamelModel):
    product_id: str = Field(..., min_length=1, max_length=64)
    title: str = Field(default="", max_length=512, description="Product title as shown in the cart")
    quantity: int = Field(..., ge=1, le=1000)
    price: int = Field(..., ge=0, description="Unit price in minor units")


class CustomerIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(default="", max_length=64)
    telegram: str = Field(default="", max_length=255)
    address: str = Field(default="", max_length=2000)


class CreateOrderRequest(CamelModel):
    """Checkout payload. At least one item and a positive total are required."""

    items: list[OrderItemIn] = Field(..., min_length=1, max_length=MAX_ITEMS_PER_ORDER)
    customer: CustomerIn
    comment: str = Field(default="", max_length=2000)
    total: int = Field(..., gt=0, description="Order total in minor units")


class OrderCreatedResponse(BaseModel):
    message: str
    id: uuid.UUID


class OrderItemOut(CamelModel):
    id: uuid.UUID
    order_id: uuid.UUID
    product_id: str
    title: str
    price: int
    quantity: int


class OrderOut(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID | None
    status: str
    total: int
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemOut]


class OrderListResponse(BaseModel):
    items: list[OrderOut]
