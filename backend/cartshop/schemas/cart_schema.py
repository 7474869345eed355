from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cartshop.models.cart import CartStatus


class AddItemsIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    item_id: Optional[int] = Field(None, alias="itemId")
    item_ids: List[int] = Field(default_factory=list, alias="itemIds")


class CartOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    name: str
    status: CartStatus
    created_at: datetime


class CartItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    cart_id: int
    item_id: int


class CartWithItemsOut(BaseModel):
    cart: CartOut
    cart_items: List[CartItemOut]
