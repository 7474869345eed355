from sqlalchemy import Column, ForeignKey, Integer

from cartshop.db import Base


class CartItem(Base):
    """One unit of an item in a cart. Quantity is the row count per item_id."""

    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=False, index=True)
