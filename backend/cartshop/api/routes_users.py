from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from cartshop.api.deps import get_current_user, get_user_service
from cartshop.errors import ShopError
from cartshop.models.user import User
from cartshop.schemas.user_schema import CredentialsIn, TokenOut, UserOut
from cartshop.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserOut, summary="Register")
def register(payload: CredentialsIn, svc: UserService = Depends(get_user_service)):
    try:
        return svc.register(payload.username, payload.password)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[UserOut], summary="List users")
def list_users(svc: UserService = Depends(get_user_service)):
    return svc.list_users()


@router.post("/login", response_model=TokenOut, summary="Log in and get a bearer token")
def login(payload: CredentialsIn, svc: UserService = Depends(get_user_service)):
    try:
        return {"token": svc.login(payload.username, payload.password)}
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/logout", summary="Invalidate the current token")
def logout(
    user: User = Depends(get_current_user),
    svc: UserService = Depends(get_user_service),
):
    svc.logout(user)
    return {"ok": True}
