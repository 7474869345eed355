from typing import List, Optional

from sqlalchemy.orm import Session

from cartshop.errors import ValidationError
from cartshop.models.item import Item
from cartshop.repositories.item_repo import ItemRepository
from cartshop.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_ITEM_STATUS = "ACTIVE"


class ItemService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ItemRepository(db)

    def create_item(self, name: str, status: Optional[str] = None) -> Item:
        name = (name or "").strip()
        if not name:
            raise ValidationError("name required")
        status = (status or "").strip() or DEFAULT_ITEM_STATUS

        it = self.repo.create(name=name, status=status)
        self.db.commit()
        self.db.refresh(it)
        log.info("catalog item %s (%s) created", it.id, it.name)
        return it

    def list_items(self) -> List[Item]:
        return self.repo.list()
