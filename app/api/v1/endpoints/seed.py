"""Secret-protected catalog seeding over HTTP (for hosts without a shell)."""

import hmac
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import cache
from app.core.config import get_settings
from app.db.session import get_db
from app.services.seeding import seed_catalog

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def seed(secret: str = "", db: AsyncSession = Depends(get_db)):
    """Upsert exercises, achievements and programs. Idempotent."""
    expected = get_settings().seed_secret
    if not expected:
        raise HTTPException(status_code=500, detail="SEED_SECRET is not configured.")
    if not secret or not hmac.compare_digest(secret, expected):
        logger.warning("Seed route called with an invalid secret")
        raise HTTPException(status_code=401, detail="Invalid or missing ?secret= parameter.")

    summary = await seed_catalog(db)
    for prefix in ("exercises:", "programs:"):
        await cache.invalidate_prefix(prefix)
    return {"message": "Database seeded successfully.", "seeded": summary}
