from typing import Dict, List

from sqlalchemy.orm import Session

from cartshop.models.order import Order, OrderLine


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, cart_id: int, user_id: int) -> Order:
        o = Order(cart_id=cart_id, user_id=user_id)
        self.db.add(o)
        self.db.flush()
        return o

    def add_lines(self, order: Order, quantities: Dict[int, int], names: Dict[int, str]):
        for item_id in sorted(quantities):
            self.db.add(
                OrderLine(
                    order_id=order.id,
                    item_id=item_id,
                    name=names.get(item_id, "Unknown"),
                    qty=quantities[item_id],
                )
            )
        self.db.flush()

    def list_for_user(self, user_id: int) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.user_id == user_id)
            .order_by(Order.id.desc())
            .all()
        )
