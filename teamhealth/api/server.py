"""FastAPI server for team health checks."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from teamhealth import __version__
from teamhealth.api.health_check_routes import health_check_router
from teamhealth.config import settings
from teamhealth.records.service import RecordService
from teamhealth.records.store import build_store

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent.parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the record store on startup and close it on shutdown."""
    store = build_store(settings)
    app.state.record_service = RecordService(store)
    logger.info("Record store ready — backend=%s table=%s", store.name, settings.store_table)

    try:
        yield
    finally:
        store.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Team Health Check",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(health_check_router, prefix="/api")

    @app.get("/")
    async def index():
        return FileResponse(STATIC_DIR / "index.html")

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


app = create_app()
