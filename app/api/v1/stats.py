"""Homepage statistics endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.cache import BaseCache, get_cache
from app.db.session import get_db
from app.schemas.stats import HomepageStats
from app.services.stats_service import get_homepage_stats

router = APIRouter()


@router.get("", response_model=HomepageStats)
async def homepage_stats(
    db: AsyncSession = Depends(get_db),
    cache: BaseCache = Depends(get_cache),
):
    """
    Homepage statistics

    Served from cache; numbers can be up to ``CACHE_STATS_TTL`` seconds old.
    """
    return await get_homepage_stats(db, cache)
