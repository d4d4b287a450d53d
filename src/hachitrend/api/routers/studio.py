"""Idea, script, channel analysis and thumbnail routes for the HachiTrend API."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from hachitrend.api.dependencies import get_ai_service
from hachitrend.api.errors import to_http_exception
from hachitrend.api.schemas import (
    ChannelAnalysisRequest,
    IdeasRequest,
    ScriptRequest,
    ThumbnailGenerateRequest,
    ThumbnailResponse,
)
from hachitrend.models.trend import Trend, VideoIdea
from hachitrend.services.ai_service import AIService
from hachitrend.utils.errors import HachiTrendError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Studio"])


@router.post(
    "/api/ideas",
    summary="Generate video ideas",
    description="Generate video ideas for a trend. An empty list means generation failed.",
    responses={400: {"description": "Invalid trend"}},
)
async def generate_ideas(
    request: IdeasRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> dict:
    """Generate ideas for a trend."""
    trend = Trend.from_dict(request.trend)
    if trend is None:
        raise HTTPException(status_code=400, detail="Trend must have a title")

    loop = asyncio.get_running_loop()
    ideas = await loop.run_in_executor(
        None, lambda: ai_service.generate_video_ideas(trend, request.idea_count)
    )
    return {"trend_id": trend.id, "ideas": [idea.to_dict() for idea in ideas]}


@router.post(
    "/api/scripts",
    summary="Generate script",
    description="Write a full Markdown script for a video idea.",
    responses={400: {"description": "Invalid idea"}, 502: {"description": "Generation failed"}},
)
async def generate_script(
    request: ScriptRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> dict:
    """Generate a script for an idea."""
    idea = VideoIdea.from_dict(request.idea)
    if idea is None:
        raise HTTPException(status_code=400, detail="Idea must have a title")

    loop = asyncio.get_running_loop()
    try:
        script = await loop.run_in_executor(None, ai_service.generate_script, idea)
    except HachiTrendError as e:
        logger.error(f"Script generation failed: {e}")
        raise to_http_exception(e)

    return script.to_dict()


@router.post(
    "/api/channels/analyze",
    summary="Analyze channel",
    description="Summarize a channel's strategy and suggest ideas in its style.",
    responses={502: {"description": "Analysis failed"}},
)
async def analyze_channel(
    request: ChannelAnalysisRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> dict:
    """Analyze a YouTube channel by name."""
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(
            None, ai_service.analyze_channel, request.channel_name.strip()
        )
    except HachiTrendError as e:
        logger.error(f"Channel analysis failed: {e}")
        raise to_http_exception(e)

    return result.to_dict()


@router.post(
    "/api/thumbnails/generate",
    response_model=ThumbnailResponse,
    summary="Generate thumbnail",
    description="Generate a thumbnail image. `image` is null when generation failed.",
)
async def generate_thumbnail(
    request: ThumbnailGenerateRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> dict:
    """Generate a thumbnail from a description."""
    loop = asyncio.get_running_loop()
    image = await loop.run_in_executor(None, ai_service.generate_thumbnail, request.description)
    return {"image": image}
