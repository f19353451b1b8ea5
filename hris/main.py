"""
HRIS — Application entry point.

This is the **only** file that assembles the app. Business logic lives
in the `services/` package; `api/` only wires HTTP onto it.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hris.api import functions
from hris.api.v1.api import api_router
from hris.api.v1.endpoints.auth import limiter
from hris.core.config import settings
from hris.core.exceptions import register_exception_handlers
from hris.db.base import Base
from hris.db.session import async_session_factory, engine

# Ensure all models are imported so metadata.create_all can see them
from hris.models.attendance import Attendance  # noqa: F401
from hris.models.leave import Leave  # noqa: F401
from hris.models.profile import Profile  # noqa: F401
from hris.models.user import Role
from hris.services import provisioning

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    # Seed default admin (login + profile) on first run
    async with async_session_factory() as session:
        if await provisioning.get_user_by_email(session, settings.FIRST_ADMIN_EMAIL) is None:
            await provisioning.sign_up(
                session,
                email=settings.FIRST_ADMIN_EMAIL,
                password=settings.FIRST_ADMIN_PASSWORD,
                name=settings.FIRST_ADMIN_NAME,
                position="Administrator",
                role=Role.ADMIN,
            )
            logger.info(
                "Default admin created: %s (password: <redacted>)",
                settings.FIRST_ADMIN_EMAIL,
            )

    logger.info("HRIS v%s started", settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Employee directory, leave workflow and daily attendance",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Login rate limiting
    application.state.limiter = limiter

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    # Mount API v1
    application.include_router(api_router, prefix=settings.API_V1_PREFIX)

    # Privileged functions
    application.include_router(functions.router, prefix=settings.FUNCTIONS_PREFIX)

    return application


app = create_app()
