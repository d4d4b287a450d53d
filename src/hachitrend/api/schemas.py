"""Pydantic request/response models for the HachiTrend API."""

from typing import Any

from pydantic import BaseModel, Field

from hachitrend.models.niche import Niche

# =============================================================================
# Response Models
# =============================================================================


class RootResponse(BaseModel):
    """Root endpoint response."""

    message: str
    version: str

    model_config = {"json_schema_extra": {"examples": [{"message": "HachiTrend API", "version": "1.0.0"}]}}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str

    model_config = {"json_schema_extra": {"examples": [{"status": "healthy"}]}}


class SettingsResponse(BaseModel):
    """Credential status. The key itself is never returned."""

    youtube_api_key_configured: bool


class NicheResponse(BaseModel):
    """A browsable niche and its YouTube category id."""

    name: str
    category_id: str | None = None


class ThumbnailResponse(BaseModel):
    """Generated or edited thumbnail."""

    image: str | None = Field(default=None, description="data: URL of the image, null on failure")


# =============================================================================
# Request Models
# =============================================================================


class YouTubeKeyRequest(BaseModel):
    """Request to store the YouTube Data API key."""

    api_key: str = Field(..., min_length=1, description="YouTube Data API v3 key")


class TrendRequest(BaseModel):
    """Trend discovery parameters."""

    niche: str = Field(default=Niche.GAMING.value, description="Niche name")
    keyword: str | None = Field(default=None, description="Optional keyword, overrides the niche")

    model_config = {"json_schema_extra": {"examples": [{"niche": "Gaming", "keyword": None}]}}


class IdeasRequest(BaseModel):
    """Idea generation for a trend (as returned by /api/trends)."""

    trend: dict[str, Any]
    idea_count: int = Field(default=4, ge=1, le=10)


class ScriptRequest(BaseModel):
    """Script generation for an idea (as returned by /api/ideas)."""

    idea: dict[str, Any]


class ChannelAnalysisRequest(BaseModel):
    """Channel analysis parameters."""

    channel_name: str = Field(..., min_length=1)


class ThumbnailGenerateRequest(BaseModel):
    """Thumbnail generation from a visual description."""

    description: str = Field(..., min_length=1)


class OutlierSearchRequest(BaseModel):
    """Outlier hunt parameters."""

    niche: str = Field(default=Niche.GAMING.value, description="Niche name")
    keyword: str | None = Field(default=None, description="Optional keyword, overrides the niche")


class OutlierPayload(BaseModel):
    """An outlier as returned by /api/outliers/search."""

    video_id: str
    title: str
    channel_id: str = ""
    channel_name: str = ""
    published_at: str = ""
    thumbnail_url: str = ""
    view_count: int = Field(ge=0)
    like_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    channel_subscriber_count: int | None = None
    channel_typical_views: int = Field(ge=0)
    performance_ratio: float = Field(ge=0)


class OutlierTrendRequest(BaseModel):
    """Convert an outlier into a trend."""

    outlier: OutlierPayload


class OptimizeVideoRequest(BaseModel):
    """Video optimizer parameters."""

    url: str = Field(..., min_length=1, description="YouTube video URL")

    model_config = {
        "json_schema_extra": {"examples": [{"url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"}]}
    }


class ThumbnailEditRequest(BaseModel):
    """Edit an uploaded thumbnail."""

    image: str = Field(..., min_length=1, description="Source image as a base64 data: URL")
    instruction: str = Field(..., min_length=1)
