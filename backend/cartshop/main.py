from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cartshop.api.health import router as health_router
from cartshop.api.routes_cart import router as cart_router
from cartshop.api.routes_items import router as items_router
from cartshop.api.routes_order import router as order_router
from cartshop.api.routes_users import router as users_router
from cartshop.config import Settings, settings as default_settings
from cartshop.db import Database
from cartshop.utils.logging import configure_logging, get_logger

log = get_logger("main")


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"invalid request: {field} {first.get('msg', '')}".strip()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # startup
        database = Database(settings.DATABASE_URL)
        database.init_db(seed=settings.SEED_CATALOG)
        app.state.database = database
        log.info("store opened at %s", settings.DATABASE_URL)

        try:
            yield
        finally:
            database.dispose()
            log.info("store closed")

    app = FastAPI(title="Cartshop - Backend", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.FRONTEND_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Origin", "Accept"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    app.include_router(health_router, tags=["health"])
    app.include_router(users_router)
    app.include_router(items_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.APP_HOST, port=default_settings.APP_PORT)
