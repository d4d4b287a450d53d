"""Trend discovery routes for the HachiTrend API."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from hachitrend.api.dependencies import get_credential_store, get_trend_service
from hachitrend.api.errors import to_http_exception
from hachitrend.api.schemas import NicheResponse, TrendRequest
from hachitrend.models.niche import NICHE_CATEGORY_MAP, Niche
from hachitrend.services.trend_service import TrendService
from hachitrend.utils.credentials import CredentialStore
from hachitrend.utils.errors import HachiTrendError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Trends"])


@router.get(
    "/api/niches",
    response_model=list[NicheResponse],
    summary="List niches",
    description="Niches that can be browsed, with their YouTube category ids.",
)
async def list_niches() -> list[dict]:
    """List all niches."""
    return [{"name": niche.value, "category_id": NICHE_CATEGORY_MAP.get(niche)} for niche in Niche]


@router.post(
    "/api/trends",
    summary="Discover trends",
    description=(
        "Cluster currently popular videos for a niche or keyword into trends. "
        "Falls back to Google-grounded Gemini search when YouTube is unavailable."
    ),
    responses={400: {"description": "YouTube API key required"}, 502: {"description": "Upstream failure"}},
)
async def discover_trends(
    request: TrendRequest,
    service: TrendService = Depends(get_trend_service),
    store: CredentialStore = Depends(get_credential_store),
) -> dict:
    """Discover trends.

    Args:
        request: Niche and optional keyword

    Returns:
        Dict with the trends
    """
    api_key = store.get()
    loop = asyncio.get_running_loop()

    try:
        trends = await loop.run_in_executor(
            None, lambda: service.fetch_trends(request.niche, api_key, request.keyword)
        )
    except HachiTrendError as e:
        logger.error(f"Trend discovery failed: {e}")
        raise to_http_exception(e)

    return {
        "niche": request.niche,
        "keyword": request.keyword,
        "trends": [trend.to_dict() for trend in trends],
    }
