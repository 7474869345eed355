from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from cartshop.db import Base


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    # informational only, not checked when adding to a cart
    status = Column(String(32), nullable=False, default="ACTIVE")
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self):
        return f"<Item id={self.id} name={self.name}>"
