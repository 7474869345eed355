from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from cartshop.api.deps import get_current_user, get_order_service
from cartshop.errors import ShopError
from cartshop.models.user import User
from cartshop.schemas.order_schema import OrderOut, OrderSummaryOut, PlaceOrderIn
from cartshop.services.order_service import OrderService
from cartshop.utils.logging import get_logger

router = APIRouter(prefix="/orders", tags=["orders"])

log = get_logger(__name__)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Place an order from my cart")
def place_order(
    payload: PlaceOrderIn,
    user: User = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    try:
        return {"orderId": svc.place_order(user.id, payload.cart_id)}
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except SQLAlchemyError as e:
        log.error("place_order failed for user %s: %s", user.id, e)
        raise HTTPException(status_code=500, detail="could not place order")


@router.get("", response_model=List[OrderOut], summary="My raw orders")
def list_orders(
    user: User = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders(user.id)


@router.get("/me", response_model=List[OrderSummaryOut], summary="My orders with items")
def my_orders(
    user: User = Depends(get_current_user),
    svc: OrderService = Depends(get_order_service),
):
    return svc.list_orders_with_items(user.id)
