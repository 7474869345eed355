import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String

from cartshop.db import Base


class CartStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    ORDERED = "ORDERED"


class Cart(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True, index=True)
    # one cart per user for the user's whole lifetime
    user_id = Column(
        Integer, ForeignKey("users.id"), unique=True, index=True, nullable=False
    )
    name = Column(String(128), nullable=False, default="")
    status = Column(Enum(CartStatus), nullable=False, default=CartStatus.ACTIVE)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self):
        return f"<Cart id={self.id} user_id={self.user_id} status={self.status}>"
