from collections import Counter
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from cartshop.errors import ConflictError, ForbiddenError, ValidationError
from cartshop.models.cart import CartStatus
from cartshop.models.order import Order
from cartshop.repositories.cart_repo import CartRepository
from cartshop.repositories.item_repo import ItemRepository
from cartshop.repositories.order_repo import OrderRepository
from cartshop.utils.logging import get_logger
from cartshop.utils.transactions import atomic

log = get_logger(__name__)

# orders have no lifecycle after placement
ORDER_STATUS_PLACED = "PLACED"
UNKNOWN_ITEM_NAME = "Unknown"


class OrderService:
    def __init__(self, db: Session, snapshot_lines: bool):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.item_repo = ItemRepository(db)
        self.order_repo = OrderRepository(db)
        self.snapshot_lines = snapshot_lines

    def place_order(self, user_id: int, cart_id: Optional[int]) -> int:
        """
        Freeze the user's cart into an order and return the order id.

        Checks, first failure wins: cart exists, belongs to the caller, is not
        already ordered, is not empty. The status flip, the order row and the
        order lines are written in one transaction.
        """
        if not cart_id:
            raise ValidationError("cartId required")

        cart = self.cart_repo.get(cart_id)
        if cart is None:
            raise ValidationError("cart not found")
        if cart.user_id != user_id:
            raise ForbiddenError("not your cart")
        if cart.status == CartStatus.ORDERED:
            raise ConflictError("cart already ordered")

        if self.cart_repo.count_items(cart.id) == 0:
            raise ConflictError("cart is empty")

        with atomic(self.db):
            # conditional update; a concurrent placement sees 0 rows here
            if self.cart_repo.mark_ordered(cart.id) == 0:
                raise ConflictError("cart already ordered")
            # re-read under the write lock; removals may have landed since the check
            cart_items = self.cart_repo.items(cart.id)
            if not cart_items:
                raise ConflictError("cart is empty")
            order = self.order_repo.create(cart_id=cart.id, user_id=user_id)
            if self.snapshot_lines:
                quantities = Counter(ci.item_id for ci in cart_items)
                names = self.item_repo.names_by_id(quantities)
                self.order_repo.add_lines(order, quantities, names)
            order_id = order.id

        log.info("order %s placed from cart %s by user %s", order_id, cart_id, user_id)
        return order_id

    def list_orders(self, user_id: int) -> List[Order]:
        return self.order_repo.list_for_user(user_id)

    def list_orders_with_items(self, user_id: int) -> List[Dict]:
        """Caller's orders, newest first, each with its item names and quantities."""
        return [self._summarize(o) for o in self.order_repo.list_for_user(user_id)]

    def _summarize(self, order: Order) -> Dict:
        if order.lines:
            items = [
                {"item_id": ln.item_id, "name": ln.name, "qty": ln.qty}
                for ln in order.lines
            ]
        else:
            items = self._replay_cart_items(order.cart_id)
        return {
            "id": order.id,
            "created_at": order.created_at,
            "status": ORDER_STATUS_PLACED,
            "items": items,
        }

    def _replay_cart_items(self, cart_id: int) -> List[Dict]:
        # only accurate until the cart is reclaimed
        quantities = Counter(ci.item_id for ci in self.cart_repo.items(cart_id))
        names = self.item_repo.names_by_id(quantities)
        return [
            {
                "item_id": item_id,
                "name": names.get(item_id, UNKNOWN_ITEM_NAME),
                "qty": quantities[item_id],
            }
            for item_id in sorted(quantities)
        ]
