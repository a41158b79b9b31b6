"""Application wiring: settings, logging, database, routers and error handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import (
    InventoryError,
    http_exception_handler,
    inventory_exception_handler,
    validation_exception_handler,
)
from .core.logging import configure_logging
from .db.seed import seed_sample_data
from .db.session import SessionLocal, init_db
from .middlewares import RequestIdMiddleware
from .routers import ROUTERS

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(RequestIdMiddleware)

    for router in ROUTERS:
        app.include_router(router)

    app.add_exception_handler(InventoryError, inventory_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    Instrumentator().instrument(app).expose(app)

    @app.on_event("startup")
    def _startup() -> None:
        init_db()
        if settings.SEED_SAMPLE_DATA:
            db = SessionLocal()
            try:
                seed_sample_data(db)
            finally:
                db.close()
        logger.info("app.started", extra={"extra_data": {"database": settings.database_url.split("://", 1)[0]}})

    return app


configure_logging()
app = create_app()

__all__ = ["app", "create_app"]
