"""Data models for the YouTube outlier hunter."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from hachitrend.models.channel import format_subscriber_count
from hachitrend.models.trend import (
    Trend,
    TrendNature,
    TrendSource,
    TrendStats,
    classify_trend_nature,
)
VIRAL_ANOMALY_RATIO = 10.0
EXPLOSIVE_RATIO = 5.0


class OutlierTier(str, Enum):
    """Severity of a video's over-performance."""

    OUTLIER = "Outlier"
    EXPLOSIVE = "Explosive"
    VIRAL_ANOMALY = "Viral Anomaly"


@dataclass(frozen=True)
class OutlierClassification:
    """Performance ratio of a video against its channel baseline."""

    ratio: float  # full precision, used for sorting and tiering
    tier: OutlierTier

    @property
    def display_ratio(self) -> float:
        """Ratio rounded to two decimals."""
        return round(self.ratio, 2)


def calculate_tier(ratio: float) -> OutlierTier:
    """Calculate the outlier tier for a performance ratio.

    Args:
        ratio: video views / channel typical views

    Returns:
        OutlierTier, first match wins: >10 Viral Anomaly, >5 Explosive, else Outlier
    """
    if ratio > VIRAL_ANOMALY_RATIO:
        return OutlierTier.VIRAL_ANOMALY
    elif ratio > EXPLOSIVE_RATIO:
        return OutlierTier.EXPLOSIVE
    else:
        return OutlierTier.OUTLIER


def classify_outlier(view_count: int, typical_views: int) -> Optional[OutlierClassification]:
    """Compare a video's views with its channel's typical views.

    Args:
        view_count: Video view count
        typical_views: Channel baseline

    Returns:
        OutlierClassification, or None when the channel has no baseline.
        A missing baseline excludes the video rather than yielding 0 or inf.
    """
    if typical_views <= 0:
        return None
    ratio = view_count / typical_views
    return OutlierClassification(ratio=ratio, tier=calculate_tier(ratio))


@dataclass(frozen=True)
class OutlierVideo:
    """A video compared against its channel's lifetime average."""

    video_id: str
    title: str
    channel_id: str
    channel_name: str
    published_at: str
    thumbnail_url: str
    view_count: int
    like_count: int
    comment_count: int
    channel_subscriber_count: Optional[int]  # None = "Unknown"
    channel_typical_views: int
    performance_ratio: float
    tier: OutlierTier

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @property
    def display_ratio(self) -> float:
        return round(self.performance_ratio, 2)

    @property
    def subscriber_label(self) -> str:
        return format_subscriber_count(self.channel_subscriber_count)

    @property
    def channel_nature(self) -> TrendNature:
        """Competitive nature of the channel; unknown subscribers count as a viral opportunity."""
        if self.channel_subscriber_count is None:
            return TrendNature.VIRAL_OPPORTUNITY
        return classify_trend_nature(self.channel_subscriber_count)

    def to_trend(self) -> Trend:
        """Turn this outlier into a single-video trend for idea generation."""
        stats = TrendStats(
            average_views=str(self.view_count),
            average_likes=str(self.like_count),
            average_comments=str(self.comment_count),
            engagement_rate="N/A",
            average_subscriber_count=self.subscriber_label,
            average_channel_views=str(self.channel_typical_views),
        )
        return Trend(
            id=self.video_id,
            title=self.title,
            description=(
                f'Analysis of viral outlier video: "{self.title}" by {self.channel_name}. '
                f"This video has {self.display_ratio}x more views than the channel average."
            ),
            search_query=self.title,
            relevance_score=100,
            sources=[TrendSource(uri=self.url, title=self.title)],
            stats=stats,
            video_count=1,
            trend_nature=self.channel_nature.value,
            computed_nature=self.channel_nature,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "video_id": self.video_id,
            "title": self.title,
            "url": self.url,
            "thumbnail_url": self.thumbnail_url,
            "channel_id": self.channel_id,
            "channel_name": self.channel_name,
            "published_at": self.published_at,
            "view_count": self.view_count,
            "like_count": self.like_count,
            "comment_count": self.comment_count,
            "channel_subscriber_count": self.channel_subscriber_count,
            "channel_subscribers": self.subscriber_label,
            "channel_typical_views": self.channel_typical_views,
            "performance_ratio": self.display_ratio,
            "tier": self.tier.value,
        }


@dataclass
class OutlierSearchResult:
    """Result of an outlier search operation."""

    outliers: List[OutlierVideo] = field(default_factory=list)
    niche: str = ""
    keyword: Optional[str] = None
    videos_scanned: int = 0
    channels_analyzed: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "niche": self.niche,
            "keyword": self.keyword,
            "videos_scanned": self.videos_scanned,
            "channels_analyzed": self.channels_analyzed,
            "outliers_found": len(self.outliers),
            "outliers": [o.to_dict() for o in self.outliers],
        }
