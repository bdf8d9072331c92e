from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from outage import __version__
from outage.core.config import get_settings
from outage.core.db import init_db
from outage.core.errors import register_error_handlers
from outage.core.gate import register_access_gate


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db()
    if not settings.admin_username or not settings.admin_password:
        logger.warning("admin.credentials_missing login disabled until OUTAGE_ADMIN_USERNAME/PASSWORD are set")
    logger.info("startup db=%s", settings.sqlite_path)
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version=__version__, lifespan=lifespan)

    register_error_handlers(app)
    register_access_gate(app)

    @app.get("/health", tags=["system"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    # ---- Routers ----
    from outage.api.admin import router as admin_router
    from outage.api.reports import router as reports_router

    app.include_router(reports_router)
    app.include_router(admin_router)

    # ---- Public page and assets, after every API route ----
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True, check_dir=False), name="static")
    return app


app = create_app()
