from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cartshop.errors import NotFoundError, ValidationError
from cartshop.models.cart import Cart, CartStatus
from cartshop.models.cart_item import CartItem
from cartshop.repositories.cart_repo import CartRepository
from cartshop.repositories.item_repo import ItemRepository
from cartshop.utils.logging import get_logger
from cartshop.utils.transactions import atomic

log = get_logger(__name__)

CartView = Tuple[Cart, List[CartItem]]


def collect_item_ids(item_id: Optional[int], item_ids: Optional[Iterable[int]]) -> List[int]:
    """Merge the single ``itemId`` and the ``itemIds`` list of a request body."""
    # a zero itemId means "absent"; ids in the list are all checked against the catalog
    ids = list(item_ids or [])
    if item_id:
        ids.append(item_id)
    return ids


class CartService:
    """
    Each user owns exactly one cart for life. The cart moves between ACTIVE
    and ORDERED; touching an ORDERED cart through ``resolve_active_cart``
    reclaims it (empty, ACTIVE) for the next purchase.
    """

    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.item_repo = ItemRepository(db)

    def resolve_active_cart(self, user_id: int) -> Cart:
        cart = self.cart_repo.get_by_user(user_id)

        if cart is None:
            try:
                with atomic(self.db):
                    cart = self.cart_repo.create(user_id)
            except IntegrityError:
                # another request created this user's cart first
                cart = self.cart_repo.get_by_user(user_id)
                if cart is None:
                    raise
            else:
                log.info("created cart %s for user %s", cart.id, user_id)
                return cart

        if cart.status == CartStatus.ORDERED:
            with atomic(self.db):
                self.cart_repo.reclaim(cart)
            log.info("reclaimed ordered cart %s for user %s", cart.id, user_id)

        return cart

    def my_cart(self, user_id: int) -> CartView:
        cart = self.resolve_active_cart(user_id)
        return cart, self.cart_repo.items(cart.id)

    def add_items(self, user_id: int, item_ids: List[int]) -> CartView:
        """
        Add each catalog item to the user's cart at most once. Every id is
        checked before anything is written, so one bad id rejects the call.
        """
        if not item_ids:
            raise ValidationError("itemId or itemIds required")

        missing = self.item_repo.missing_ids(item_ids)
        if missing:
            log.info("user %s tried to add unknown items %s", user_id, missing)
            raise ValidationError("invalid item id")

        cart = self.resolve_active_cart(user_id)

        added = 0
        with atomic(self.db):
            for item_id in item_ids:
                if self.cart_repo.find_item(cart.id, item_id) is None:
                    self.cart_repo.add_item(cart.id, item_id)
                    added += 1
        log.debug("cart %s: %d of %d items added", cart.id, added, len(item_ids))

        return cart, self.cart_repo.items(cart.id)

    def remove_item(self, user_id: int, item_id: int) -> CartView:
        if not item_id or item_id <= 0:
            raise ValidationError("invalid itemId")

        cart = self.cart_repo.get_active_by_user(user_id)
        if cart is None:
            raise NotFoundError("no active cart")

        cart_item = self.cart_repo.find_item(cart.id, item_id)
        if cart_item is None:
            raise NotFoundError("item not found in cart")

        with atomic(self.db):
            self.cart_repo.delete_item(cart_item)
        log.debug("cart %s: removed item %s", cart.id, item_id)

        return cart, self.cart_repo.items(cart.id)

    def list_carts(self) -> List[Cart]:
        return self.cart_repo.list()
