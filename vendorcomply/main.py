"""VendorComply API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vendorcomply import __version__
from vendorcomply.core.config import settings
from vendorcomply.core.exceptions import register_exception_handlers
from vendorcomply.db.base import create_all
from vendorcomply.middleware.request_log import RequestLogMiddleware
from vendorcomply.schemas.common import HealthResponse

# v1 routers
from vendorcomply.routers.v1.audit_logs import router as audit_logs_router
from vendorcomply.routers.v1.billing import router as billing_router
from vendorcomply.routers.v1.document_types import router as document_types_router
from vendorcomply.routers.v1.documents import router as documents_router
from vendorcomply.routers.v1.notification_rules import router as notification_rules_router
from vendorcomply.routers.v1.portal import router as portal_router
from vendorcomply.routers.v1.stats import router as stats_router
from vendorcomply.routers.v1.users import router as users_router
from vendorcomply.routers.v1.vendors import router as vendors_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.is_development else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Local SQLite databases are bootstrapped directly; everything else goes through Alembic
    if settings.is_development and settings.database_url.startswith("sqlite"):
        await create_all()
        logger.info("Development schema ensured on %s", settings.database_url)
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    yield


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    for router in (
        users_router,
        vendors_router,
        document_types_router,
        documents_router,
        portal_router,
        stats_router,
        audit_logs_router,
        billing_router,
        notification_rules_router,
    ):
        app.include_router(router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()
