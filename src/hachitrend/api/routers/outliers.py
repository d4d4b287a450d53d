"""Outlier hunter routes for the HachiTrend API."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from hachitrend.api.dependencies import get_credential_store, get_outlier_finder_factory
from hachitrend.api.errors import to_http_exception
from hachitrend.api.schemas import OutlierSearchRequest, OutlierTrendRequest
from hachitrend.models.outlier import OutlierVideo, calculate_tier
from hachitrend.utils.credentials import CredentialStore
from hachitrend.utils.errors import HachiTrendError, MissingCredentialError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Outlier Hunter"])


@router.post(
    "/api/outliers/search",
    summary="Hunt outliers",
    description=(
        "Find recent videos that outperform their channel's lifetime average, "
        "sorted by performance ratio. YouTube failures are reported, never replaced."
    ),
    responses={400: {"description": "YouTube API key required"}, 502: {"description": "YouTube API error"}},
)
async def search_outliers(
    request: OutlierSearchRequest,
    store: CredentialStore = Depends(get_credential_store),
    finder_factory=Depends(get_outlier_finder_factory),
) -> dict:
    """Run an outlier search.

    Args:
        request: Niche and optional keyword

    Returns:
        Search result with outliers
    """
    api_key = store.get()
    if not api_key:
        raise to_http_exception(MissingCredentialError())

    service = finder_factory(api_key)
    loop = asyncio.get_running_loop()

    def run_search():
        return service.find_outliers(request.niche, request.keyword)

    try:
        result = await loop.run_in_executor(None, run_search)
    except HachiTrendError as e:
        logger.error(f"Outlier search failed: {e}")
        raise to_http_exception(e)

    return result.to_dict()


@router.post(
    "/api/outliers/trend",
    summary="Outlier to trend",
    description="Turn an outlier into a single-video trend that /api/ideas accepts.",
)
async def outlier_to_trend(request: OutlierTrendRequest) -> dict:
    """Convert an outlier into a trend."""
    payload = request.outlier
    outlier = OutlierVideo(
        video_id=payload.video_id,
        title=payload.title,
        channel_id=payload.channel_id,
        channel_name=payload.channel_name,
        published_at=payload.published_at,
        thumbnail_url=payload.thumbnail_url,
        view_count=payload.view_count,
        like_count=payload.like_count,
        comment_count=payload.comment_count,
        channel_subscriber_count=payload.channel_subscriber_count,
        channel_typical_views=payload.channel_typical_views,
        performance_ratio=payload.performance_ratio,
        tier=calculate_tier(payload.performance_ratio),
    )
    return outlier.to_trend().to_dict()
