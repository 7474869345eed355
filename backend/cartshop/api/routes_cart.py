from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from cartshop.api.deps import get_cart_service, get_current_user
from cartshop.errors import ShopError
from cartshop.models.user import User
from cartshop.schemas.cart_schema import AddItemsIn, CartOut, CartWithItemsOut
from cartshop.services.cart_service import CartService, collect_item_ids
from cartshop.utils.logging import get_logger

router = APIRouter(prefix="/carts", tags=["cart"])

log = get_logger(__name__)


def _cart_body(cart, cart_items) -> dict:
    return {"cart": cart, "cart_items": cart_items}


@router.post("", response_model=CartWithItemsOut, summary="Add items to my cart")
def add_items(
    payload: AddItemsIn,
    user: User = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    ids = collect_item_ids(payload.item_id, payload.item_ids)
    try:
        return _cart_body(*svc.add_items(user.id, ids))
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except SQLAlchemyError as e:
        log.error("add_items failed for user %s: %s", user.id, e)
        raise HTTPException(status_code=500, detail="could not create cart")


@router.get("", response_model=List[CartOut], summary="List all carts")
def list_carts(svc: CartService = Depends(get_cart_service)):
    return svc.list_carts()


@router.get("/me", response_model=CartWithItemsOut, summary="Get my cart")
def my_cart(
    user: User = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return _cart_body(*svc.my_cart(user.id))
    except SQLAlchemyError as e:
        log.error("my_cart failed for user %s: %s", user.id, e)
        raise HTTPException(status_code=500, detail="could not get cart")


@router.delete("/items/{item_id}", response_model=CartWithItemsOut, summary="Remove item from my cart")
def remove_item(
    item_id: int,
    user: User = Depends(get_current_user),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return _cart_body(*svc.remove_item(user.id, item_id))
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except SQLAlchemyError as e:
        log.error("remove_item failed for user %s: %s", user.id, e)
        raise HTTPException(status_code=500, detail="failed to delete")
