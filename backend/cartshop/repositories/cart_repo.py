from typing import List, Optional

from sqlalchemy.orm import Session

from cartshop.models.cart import Cart, CartStatus
from cartshop.models.cart_item import CartItem


class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, cart_id: int) -> Optional[Cart]:
        return self.db.get(Cart, cart_id)

    def get_by_user(self, user_id: int) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.user_id == user_id).first()

    def get_active_by_user(self, user_id: int) -> Optional[Cart]:
        return (
            self.db.query(Cart)
            .filter(Cart.user_id == user_id, Cart.status == CartStatus.ACTIVE)
            .first()
        )

    def list(self) -> List[Cart]:
        return self.db.query(Cart).order_by(Cart.id).all()

    def create(self, user_id: int) -> Cart:
        c = Cart(user_id=user_id, name="", status=CartStatus.ACTIVE)
        self.db.add(c)
        self.db.flush()
        return c

    def items(self, cart_id: int) -> List[CartItem]:
        return (
            self.db.query(CartItem)
            .filter(CartItem.cart_id == cart_id)
            .order_by(CartItem.id)
            .all()
        )

    def count_items(self, cart_id: int) -> int:
        return self.db.query(CartItem).filter(CartItem.cart_id == cart_id).count()

    def find_item(self, cart_id: int, item_id: int) -> Optional[CartItem]:
        return (
            self.db.query(CartItem)
            .filter(CartItem.cart_id == cart_id, CartItem.item_id == item_id)
            .first()
        )

    def add_item(self, cart_id: int, item_id: int) -> CartItem:
        ci = CartItem(cart_id=cart_id, item_id=item_id)
        self.db.add(ci)
        # flush so the next find_item in the same call sees this row
        self.db.flush()
        return ci

    def delete_item(self, cart_item: CartItem):
        self.db.delete(cart_item)
        self.db.flush()

    def clear_items(self, cart_id: int) -> int:
        return (
            self.db.query(CartItem)
            .filter(CartItem.cart_id == cart_id)
            .delete(synchronize_session=False)
        )

    def reclaim(self, cart: Cart) -> Cart:
        """ORDERED -> ACTIVE: clear the name and drop every association row."""
        self.clear_items(cart.id)
        cart.status = CartStatus.ACTIVE
        cart.name = ""
        self.db.flush()
        return cart

    def mark_ordered(self, cart_id: int) -> int:
        """
        Conditional ACTIVE -> ORDERED update. Returns the affected row count,
        0 when another request already ordered the cart.
        """
        return (
            self.db.query(Cart)
            .filter(Cart.id == cart_id, Cart.status == CartStatus.ACTIVE)
            .update({Cart.status: CartStatus.ORDERED}, synchronize_session="fetch")
        )
