from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlaceOrderIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    cart_id: Optional[int] = Field(None, alias="cartId")


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    cart_id: int
    user_id: int
    created_at: datetime


class OrderItemOut(BaseModel):
    item_id: int
    name: str
    qty: int


class OrderSummaryOut(BaseModel):
    id: int
    created_at: datetime
    status: str
    items: List[OrderItemOut]
