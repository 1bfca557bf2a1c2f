"""Ward Air Quality Backend - FastAPI Application."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from .core.config import settings
from .core.database import async_session_factory, check_database
from .core.errors import sqlalchemy_error_handler
from .core.version import get_version
from .routers import (
    alerts,
    analytics,
    auth,
    policy,
    prediction,
    reports,
    version,
    wards,
    weather,
)
from .services.auth import create_officer_user, get_user_by_email

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


async def ensure_officer_user() -> None:
    """Create the initial officer account if it does not exist yet."""
    async with async_session_factory() as db:
        # Several workers may start at once; retry on duplicate entry or deadlock
        for attempt in range(5):
            try:
                existing = await get_user_by_email(db, settings.officer_email)
                if existing is None:
                    await create_officer_user(db, settings.officer_email, settings.officer_password)
                    await db.commit()
                else:
                    logger.info(f"Officer account already exists: {settings.officer_email}")
                break
            except (IntegrityError, OperationalError) as e:
                await db.rollback()
                # 1062 = Duplicate entry, 1213 = Deadlock
                error_str = str(e.orig) if hasattr(e, "orig") else str(e)
                if ("1062" in error_str or "1213" in error_str) and attempt < 4:
                    wait = (attempt + 1) * 0.5
                    logger.info(
                        f"Race condition during officer creation (attempt {attempt + 1}), "
                        f"retrying in {wait}s..."
                    )
                    await asyncio.sleep(wait)
                    continue
                raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(f"Ward Air Quality Backend v{get_version()} starting...")

    # The API keeps serving default data while the database is down
    try:
        from .core.database import init_db

        await init_db()
        await ensure_officer_user()
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            f"Database initialization failed ({type(e).__name__}), "
            "starting with default data only"
        )

    yield


app = FastAPI(
    title="Ward Air Quality Monitor",
    description="Ward-level air quality monitoring, alerting and trend prediction",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)

# Register routers
app.include_router(auth.router)
app.include_router(wards.router)
app.include_router(weather.router)
app.include_router(alerts.router)
app.include_router(analytics.router)
app.include_router(prediction.router)
app.include_router(policy.router)
app.include_router(reports.router)
app.include_router(version.router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint reporting database connectivity."""
    if await check_database():
        return JSONResponse({"status": "ok", "database": "connected"})
    return JSONResponse(
        {"status": "degraded", "database": "disconnected"},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )
