#!/usr/bin/env python3
"""Create the initial officer account before workers start.

Runs once during container startup, after migrations and before uvicorn
spawns its workers, so the account is never created twice.
"""

import asyncio
import logging
import os
import sys

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


async def init_officer() -> None:
    """Create the officer account from settings if it doesn't exist."""
    from ward_aqi.core.config import settings
    from ward_aqi.core.database import async_session_factory, engine
    from ward_aqi.services.auth import create_officer_user, get_user_by_email

    try:
        async with async_session_factory() as db:
            existing = await get_user_by_email(db, settings.officer_email)
            if existing is None:
                await create_officer_user(db, settings.officer_email, settings.officer_password)
                await db.commit()
            else:
                logger.info(f"Officer account already exists: {settings.officer_email}")
    finally:
        await engine.dispose()


def main() -> None:
    """Main entry point."""
    asyncio.run(init_officer())


if __name__ == "__main__":
    main()
