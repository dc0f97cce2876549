"""ASGI entry point: `uvicorn cafe_api.main:app`.

create_app() wires CORS, the health and cafes routers, the error handlers,
and (when a built front-end exists in ./static) the home page at "/".
The database is opened in the lifespan, not at import time.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from cafe_api.api.error_handlers import register_error_handlers
from cafe_api.api.routes import cafes, health
from cafe_api.config import Settings, get_settings
from cafe_api.infrastructure.database import (
    configure_database, database_from_settings,
)
from cafe_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

STATIC_DIR = "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database = configure_database(database_from_settings(settings))
    logger.info("Cafe API started")
    try:
        yield
    finally:
        configure_database(None)
        await database.dispose()
        logger.info("Cafe API stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Cafe API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(health.router)
    app.include_router(cafes.router)
    register_error_handlers(app)
    # Mounted last so /api/v1/* routes win over the catch-all static mount
    if os.path.isdir(STATIC_DIR):
        app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="home")
    return app


app = create_app()
