"""Seed the exercise/achievement/program catalog. Safe to re-run.

Usage: python scripts/seed.py
"""

import asyncio
import logging
import os
import sys

# Add parent directory to path so we can import app modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from app.core import cache
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db import async_session_maker, engine
from app.services.seeding import seed_catalog

logger = logging.getLogger("app.seed")


async def main() -> None:
    configure_logging(get_settings())
    logger.info("Seeding catalog...")
    async with async_session_maker() as session:
        try:
            summary = await seed_catalog(session)
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Seeding failed")
            raise
    for prefix in ("exercises:", "programs:"):
        await cache.invalidate_prefix(prefix)
    await cache.close_redis()
    await engine.dispose()
    for table, count in summary.items():
        print(f"  {count} {table}")
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
