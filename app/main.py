"""Wedding Planner API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.db.base import engine
from app.middleware.request_logging import RequestLoggingMiddleware
from app.routers.v1 import actions, categories, changes, dashboard, emails, outreach, vendors
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

V1_ROUTERS = (
    categories.router,
    vendors.router,
    outreach.router,
    actions.router,
    emails.router,
    dashboard.router,
    changes.router,
)


def _configure_logging() -> None:
    """One stdout handler for the whole app; DEBUG while developing."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for noisy in ("sqlalchemy.engine", "httpcore", "httpx", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "%s starting (env=%s, ai=%s, email=%s)",
        settings.app_name,
        settings.app_env,
        "on" if settings.ai_enabled else "off",
        "on" if settings.email_enabled else "off",
    )
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
    )

    # --- CORS: the dashboard is served from SITE_URL ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    for router in V1_ROUTERS:
        app.include_router(router, prefix="/api/v1")

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(
            app=settings.app_name,
            env=settings.app_env,
            ai_enabled=settings.ai_enabled,
            email_enabled=settings.email_enabled,
        )

    return app


app = create_app()
