"""Database connection and session management."""

import asyncio
import logging
import time
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from alembic import command
from alembic.config import Config
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import settings

logger = logging.getLogger(__name__)

# Re-check availability at most every 5 seconds
DB_CHECK_CACHE_SECONDS = 5.0


def _engine_options(database_url: str) -> dict[str, Any]:
    """Build engine keyword arguments; SQLite has no connection pool to size."""
    options: dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=1800,
        )
    return options


# Create async engine
engine: AsyncEngine = create_async_engine(
    settings.database_url, **_engine_options(settings.database_url)
)

# Create async session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

_last_db_check: tuple[bool, float] | None = None


async def check_database(force: bool = False) -> bool:
    """Return True if the database answers a trivial query.

    The result is cached for a few seconds so health probes do not hammer an
    unavailable server.
    """
    global _last_db_check
    now = time.monotonic()
    if (
        not force
        and _last_db_check is not None
        and now - _last_db_check[1] < DB_CHECK_CACHE_SECONDS
    ):
        return _last_db_check[0]

    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            available = result.scalar() == 1
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database availability check failed: {e.__class__.__name__}")
        available = False

    _last_db_check = (available, now)
    return available


async def run_migrations() -> bool:
    """Run Alembic migrations if they exist.

    Uses a database advisory lock to ensure only one worker runs migrations
    at a time, preventing race conditions in multi-worker deployments.

    Returns:
        True if migrations were run, False if no migrations exist.
    """
    migrations_dir = Path(__file__).parent.parent.parent / "migrations" / "versions"
    if not migrations_dir.exists():
        return False

    migration_files = [
        f
        for f in migrations_dir.iterdir()
        if f.is_file() and f.suffix == ".py" and f.name != "__init__.py"
    ]
    if not migration_files:
        return False

    if not settings.database_url.startswith("mysql"):
        logger.info("Advisory-locked migrations require MySQL, skipping")
        return False

    # Container layout first, then the project root for local development
    alembic_ini_path = Path("/app/alembic.ini")
    if not alembic_ini_path.exists():
        project_root = Path(__file__).parent.parent.parent.parent
        alembic_ini_path = project_root / "alembic.ini"
    if not alembic_ini_path.exists():
        logger.warning("alembic.ini not found, skipping migrations")
        return False

    def _run_migrations_sync() -> None:
        """Run migrations synchronously while holding a MySQL GET_LOCK()."""
        from urllib.parse import urlparse

        import pymysql

        sync_url = settings.database_url.replace("+aiomysql", "+pymysql")
        parsed = urlparse(sync_url.replace("mysql+pymysql://", "mysql://"))
        conn_params = {
            "host": parsed.hostname or "localhost",
            "port": parsed.port or 3306,
            "user": parsed.username,
            "password": parsed.password,
            "database": parsed.path.lstrip("/") if parsed.path else None,
        }

        conn = pymysql.connect(**conn_params)
        try:
            with conn.cursor() as cursor:
                cursor.execute("SELECT GET_LOCK('ward_aqi_migrations', 30)")
                result = cursor.fetchone()
                if result[0] != 1:
                    logger.info("Another worker is running migrations, skipping")
                    return

                try:
                    alembic_cfg = Config(str(alembic_ini_path))
                    alembic_cfg.set_main_option("sqlalchemy.url", sync_url)
                    command.upgrade(alembic_cfg, "head")
                finally:
                    cursor.execute("SELECT RELEASE_LOCK('ward_aqi_migrations')")
        finally:
            conn.close()

    try:
        logger.info("Running database migrations...")
        await asyncio.to_thread(_run_migrations_sync)
        logger.info("Database migrations completed")
        return True
    except Exception as e:
        logger.error(f"Failed to run migrations: {e}", exc_info=True)
        return False


async def init_db() -> None:
    """Initialize database schema.

    First tries to run Alembic migrations if they exist.
    Falls back to creating schema from models if no migrations exist.
    """
    migrations_ran = await run_migrations()

    if not migrations_ran:
        # Import here to avoid circular imports
        from ward_aqi.models import Base

        logger.info("No migrations applied, initializing schema from models...")
        try:
            async with engine.begin() as conn:
                await conn.run_sync(
                    lambda sync_conn: Base.metadata.create_all(sync_conn, checkfirst=True)
                )
            logger.info("Database schema initialized from models")
        except Exception as e:
            if "already exists" in str(e).lower():
                logger.info("Database tables already exist, skipping schema creation")
            else:
                logger.error(f"Failed to initialize database schema: {e}")
                raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
