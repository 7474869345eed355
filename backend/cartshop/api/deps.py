from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from cartshop.config import Settings
from cartshop.db import get_db
from cartshop.errors import AuthError
from cartshop.models.user import User
from cartshop.services.cart_service import CartService
from cartshop.services.item_service import ItemService
from cartshop.services.order_service import OrderService
from cartshop.services.user_service import UserService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> UserService:
    return UserService(db, bcrypt_rounds=settings.BCRYPT_ROUNDS)


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(db)


def get_item_service(db: Session = Depends(get_db)) -> ItemService:
    return ItemService(db)


def get_order_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> OrderService:
    return OrderService(db, snapshot_lines=settings.ORDER_LINE_SNAPSHOT)


def get_current_user(
    authorization: Optional[str] = Header(None),
    svc: UserService = Depends(get_user_service),
) -> User:
    """Resolve ``Authorization: Bearer <token>`` to a user or fail with 401."""
    try:
        return svc.authenticate(authorization)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
