from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ItemIn(BaseModel):
    name: str = ""
    status: Optional[str] = None


class ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    status: str
    created_at: datetime
