"""Video optimizer routes for the HachiTrend API."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from hachitrend.api.dependencies import get_credential_store, get_optimizer_service
from hachitrend.api.errors import to_http_exception
from hachitrend.api.schemas import OptimizeVideoRequest, ThumbnailEditRequest, ThumbnailResponse
from hachitrend.services.video_optimizer_service import VideoOptimizerService
from hachitrend.utils.credentials import CredentialStore
from hachitrend.utils.errors import HachiTrendError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Video Optimizer"])


@router.post(
    "/api/optimizer/video",
    summary="Optimize video",
    description=(
        "Fetch an existing video by URL and suggest better titles, description, tags "
        "and thumbnail. `optimization` is null when the analysis failed."
    ),
    responses={
        400: {"description": "Invalid URL or missing YouTube API key"},
        404: {"description": "Video not found"},
        502: {"description": "YouTube API error"},
    },
)
async def optimize_video(
    request: OptimizeVideoRequest,
    service: VideoOptimizerService = Depends(get_optimizer_service),
    store: CredentialStore = Depends(get_credential_store),
) -> dict:
    """Fetch and analyze a video."""
    api_key = store.get()
    loop = asyncio.get_running_loop()

    try:
        result = await loop.run_in_executor(None, service.optimize, request.url, api_key)
    except HachiTrendError as e:
        logger.error(f"Video optimization failed: {e}")
        raise to_http_exception(e)

    return result.to_dict()


@router.post(
    "/api/optimizer/thumbnail",
    response_model=ThumbnailResponse,
    summary="Edit thumbnail",
    description="Edit an uploaded thumbnail following an instruction. `image` is null on failure.",
    responses={400: {"description": "Image is not a base64 data URL"}},
)
async def edit_thumbnail(
    request: ThumbnailEditRequest,
    service: VideoOptimizerService = Depends(get_optimizer_service),
) -> dict:
    """Edit a thumbnail image."""
    loop = asyncio.get_running_loop()
    try:
        image = await loop.run_in_executor(
            None, service.edit_thumbnail, request.image, request.instruction
        )
    except ValueError as e:
        raise to_http_exception(e)

    return {"image": image}
