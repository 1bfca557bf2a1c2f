#!/usr/bin/env python3
"""Replace the ward data with the reference dataset.

Usage: DATABASE_URL=... python scripts/seed.py
"""

import asyncio
import logging
import os
import sys

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


async def seed() -> None:
    """Seed all reference wards in a single transaction."""
    from ward_aqi.core.database import async_session_factory, engine, init_db
    from ward_aqi.services.seeding import seed_reference_data

    try:
        await init_db()
        async with async_session_factory() as db:
            try:
                count = await seed_reference_data(db)
                await db.commit()
            except Exception:
                await db.rollback()
                logger.error("Seeding failed, no changes were made")
                raise
        logger.info(f"Database seeded with {count} wards")
    finally:
        await engine.dispose()


def main() -> None:
    """Main entry point."""
    asyncio.run(seed())


if __name__ == "__main__":
    main()
