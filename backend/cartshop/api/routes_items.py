from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from cartshop.api.deps import get_item_service
from cartshop.errors import ShopError
from cartshop.schemas.item_schema import ItemIn, ItemOut
from cartshop.services.item_service import ItemService

router = APIRouter(prefix="/items", tags=["catalog"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Add a catalog item")
def create_item(payload: ItemIn, svc: ItemService = Depends(get_item_service)):
    try:
        return svc.create_item(payload.name, payload.status)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[ItemOut], summary="List catalog items")
def list_items(svc: ItemService = Depends(get_item_service)):
    return svc.list_items()
