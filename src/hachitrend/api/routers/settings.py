"""Credential settings routes for the HachiTrend API."""

import logging

from fastapi import APIRouter, Depends

from hachitrend.api.dependencies import get_credential_store
from hachitrend.api.schemas import SettingsResponse, YouTubeKeyRequest
from hachitrend.utils.credentials import CredentialStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Settings"])


@router.get(
    "/api/settings",
    response_model=SettingsResponse,
    summary="Credential status",
    description="Whether a YouTube Data API key is stored. The key itself is never returned.",
)
async def get_settings(store: CredentialStore = Depends(get_credential_store)) -> dict:
    """Report whether the YouTube key is configured."""
    return {"youtube_api_key_configured": store.is_configured}


@router.put(
    "/api/settings/youtube-key",
    response_model=SettingsResponse,
    summary="Save YouTube API key",
)
async def save_youtube_key(
    request: YouTubeKeyRequest,
    store: CredentialStore = Depends(get_credential_store),
) -> dict:
    """Store the YouTube Data API key."""
    store.save(request.api_key)
    return {"youtube_api_key_configured": store.is_configured}


@router.delete(
    "/api/settings/youtube-key",
    response_model=SettingsResponse,
    summary="Clear YouTube API key",
)
async def clear_youtube_key(store: CredentialStore = Depends(get_credential_store)) -> dict:
    """Remove the stored YouTube Data API key."""
    store.clear()
    return {"youtube_api_key_configured": False}
