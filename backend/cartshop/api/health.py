from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter()


@router.get("/health", tags=["health"])
def health(request: Request):
    db_ok = False
    try:
        db_ok = request.app.state.database.ping()
    except SQLAlchemyError:
        db_ok = False

    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
    }
