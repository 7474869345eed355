from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CredentialsIn(BaseModel):
    username: str = ""
    password: str = ""


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    username: str
    created_at: datetime


class TokenOut(BaseModel):
    token: str
