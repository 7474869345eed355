from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from cartshop.models.item import Item


class ItemRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, item_id: int) -> Optional[Item]:
        return self.db.get(Item, item_id)

    def list(self) -> List[Item]:
        return self.db.query(Item).order_by(Item.id).all()

    def names_by_id(self, item_ids: Iterable[int]) -> Dict[int, str]:
        ids = set(item_ids)
        if not ids:
            return {}
        rows = self.db.query(Item.id, Item.name).filter(Item.id.in_(ids)).all()
        return {row.id: row.name for row in rows}

    def missing_ids(self, item_ids: Iterable[int]) -> List[int]:
        """Return the ids (in input order, without repeats) that have no catalog row."""
        wanted = list(dict.fromkeys(item_ids))
        if not wanted:
            return []
        found = {
            row.id for row in self.db.query(Item.id).filter(Item.id.in_(wanted)).all()
        }
        return [i for i in wanted if i not in found]

    def create(self, name: str, status: str = "ACTIVE") -> Item:
        it = Item(name=name, status=status)
        self.db.add(it)
        self.db.flush()
        return it
