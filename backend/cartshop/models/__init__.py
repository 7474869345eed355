# import all models so SQLAlchemy registers them on Base.metadata
from cartshop.models.user import User
from cartshop.models.item import Item
from cartshop.models.cart import Cart, CartStatus
from cartshop.models.cart_item import CartItem
from cartshop.models.order import Order, OrderLine

__all__ = ["User", "Item", "Cart", "CartStatus", "CartItem", "Order", "OrderLine"]
