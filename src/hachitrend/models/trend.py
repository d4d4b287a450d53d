"""Data models for trends, ideas, scripts and channel analysis."""

import logging
import math
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from hachitrend.utils.formatting import parse_compact_number

logger = logging.getLogger(__name__)

BIG_CREATOR_THRESHOLD = 1_000_000
VIRAL_OPPORTUNITY_THRESHOLD = 200_000

INTENSITY_POINTS = 7


class TrendNature(str, Enum):
    """Competitive nature of a trend, by the size of the channels driving it."""

    BIG_CREATOR_DOMINATED = "Big Creator Dominated"
    VIRAL_OPPORTUNITY = "Viral Opportunity"
    MIXED = "Mixed"


class Effort(str, Enum):
    """Estimated production effort of a video idea."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def classify_trend_nature(average_subscriber_count: float) -> TrendNature:
    """Classify a cluster of videos by its average subscriber count.

    Both boundaries (exactly 1,000,000 and exactly 200,000) fall in the
    Mixed band.

    Args:
        average_subscriber_count: Mean subscriber count of the cluster's channels

    Returns:
        TrendNature tier
    """
    if average_subscriber_count > BIG_CREATOR_THRESHOLD:
        return TrendNature.BIG_CREATOR_DOMINATED
    elif average_subscriber_count < VIRAL_OPPORTUNITY_THRESHOLD:
        return TrendNature.VIRAL_OPPORTUNITY
    else:
        return TrendNature.MIXED


def _str(value, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip()


def _int(value, default: Optional[int] = None) -> Optional[int]:
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return default


def _str_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if isinstance(v, (str, int, float)) and str(v).strip()]


@dataclass
class TrendSource:
    """A video or web page exemplifying a trend."""

    uri: str
    title: str

    @classmethod
    def from_dict(cls, data: dict) -> Optional["TrendSource"]:
        if not isinstance(data, dict):
            return None
        uri = _str(data.get("uri"))
        title = _str(data.get("title"))
        if not uri:
            return None
        return cls(uri=uri, title=title or uri)

    @property
    def video_id(self) -> Optional[str]:
        """YouTube video id when the source is a watch URL."""
        if "watch?v=" not in self.uri:
            return None
        return self.uri.split("watch?v=", 1)[1].split("&", 1)[0] or None


@dataclass
class TrendStats:
    """Aggregate statistics of a trend, as formatted strings ("1.2M")."""

    average_views: str = ""
    average_likes: str = ""
    average_comments: str = ""
    engagement_rate: str = ""
    average_subscriber_count: str = ""
    average_channel_views: str = ""

    # Model output uses camelCase keys
    _KEYS = {
        "average_views": "averageViews",
        "average_likes": "averageLikes",
        "average_comments": "averageComments",
        "engagement_rate": "engagementRate",
        "average_subscriber_count": "averageSubscriberCount",
        "average_channel_views": "averageChannelViews",
    }

    @classmethod
    def from_dict(cls, data: dict) -> Optional["TrendStats"]:
        if not isinstance(data, dict):
            return None
        values = {}
        for attr, camel in cls._KEYS.items():
            values[attr] = _str(data.get(attr, data.get(camel)))
        return cls(**values)

    def average_subscriber_value(self) -> float:
        """Numeric value of the average subscriber count, NaN when unparseable."""
        return parse_compact_number(self.average_subscriber_count)

    def to_dict(self) -> dict:
        return {attr: getattr(self, attr) for attr in self._KEYS}


@dataclass
class Trend:
    """A cluster of topically related videos identified as trending.

    ``trend_nature`` is the label the generative model assigned and is kept
    verbatim. ``computed_nature`` is the deterministic classification from
    real channel data, when it could be computed. The two may disagree.
    """

    id: str
    title: str
    description: str
    search_query: str
    relevance_score: int
    sources: List[TrendSource] = field(default_factory=list)
    stats: Optional[TrendStats] = None
    intensity: List[int] = field(default_factory=list)
    video_count: Optional[int] = None
    trend_nature: Optional[str] = None
    computed_nature: Optional[TrendNature] = None

    @classmethod
    def from_dict(cls, data: dict, index: int = 0) -> Optional["Trend"]:
        """Parse a trend from model output or an API payload.

        Accepts both camelCase (model output) and snake_case (API) keys.
        Returns None for entries without a title.
        """
        if not isinstance(data, dict):
            return None

        title = _str(data.get("title"))
        if not title:
            return None

        sources = [
            source
            for source in (TrendSource.from_dict(s) for s in data.get("sources") or [])
            if source is not None
        ]

        intensity = []
        raw_intensity = data.get("intensity")
        if isinstance(raw_intensity, list):
            for point in raw_intensity[:INTENSITY_POINTS]:
                value = _int(point)
                if value is not None:
                    intensity.append(max(0, min(100, value)))

        relevance = _int(data.get("relevance_score", data.get("relevanceScore")), 0)

        computed = data.get("computed_nature")
        try:
            computed_nature = TrendNature(computed) if computed else None
        except ValueError:
            computed_nature = None

        trend_id = _str(data.get("id")) or f"trend-{int(time.time() * 1000)}-{index}"

        return cls(
            id=trend_id,
            title=title,
            description=_str(data.get("description")),
            search_query=_str(data.get("search_query", data.get("searchQuery")), title),
            relevance_score=max(0, min(100, relevance)),
            sources=sources,
            stats=TrendStats.from_dict(data.get("stats")),
            intensity=intensity,
            video_count=_int(data.get("video_count", data.get("videoCount"))),
            trend_nature=_str(data.get("trend_nature", data.get("trendNature"))) or None,
            computed_nature=computed_nature,
        )

    def with_computed_nature(self, average_subscriber_count: float) -> "Trend":
        """Return a copy carrying the deterministic nature for the given average."""
        if average_subscriber_count is None or math.isnan(average_subscriber_count):
            return self
        return replace(self, computed_nature=classify_trend_nature(average_subscriber_count))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "search_query": self.search_query,
            "relevance_score": self.relevance_score,
            "sources": [{"uri": s.uri, "title": s.title} for s in self.sources],
            "stats": self.stats.to_dict() if self.stats else None,
            "intensity": list(self.intensity),
            "video_count": self.video_count,
            "trend_nature": self.trend_nature,
            "computed_nature": self.computed_nature.value if self.computed_nature else None,
        }


@dataclass
class VideoIdea:
    """A video concept generated from a trend."""

    title: str
    hook: str
    thumbnail_description: str
    target_audience: str
    estimated_effort: Effort
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Optional["VideoIdea"]:
        if not isinstance(data, dict):
            return None
        title = _str(data.get("title"))
        if not title:
            return None

        effort_raw = _str(data.get("estimated_effort", data.get("estimatedEffort")), "Medium")
        try:
            effort = Effort(effort_raw.capitalize())
        except ValueError:
            logger.debug(f"Unknown effort '{effort_raw}', defaulting to Medium")
            effort = Effort.MEDIUM

        return cls(
            title=title,
            hook=_str(data.get("hook")),
            thumbnail_description=_str(
                data.get("thumbnail_description", data.get("thumbnailDescription"))
            ),
            target_audience=_str(data.get("target_audience", data.get("targetAudience"))),
            estimated_effort=effort,
            tags=_str_list(data.get("tags")),
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "hook": self.hook,
            "thumbnail_description": self.thumbnail_description,
            "target_audience": self.target_audience,
            "estimated_effort": self.estimated_effort.value,
            "tags": list(self.tags),
        }


@dataclass
class ScriptData:
    """A full video script."""

    title: str
    outline: str
    full_script: str

    @classmethod
    def from_dict(cls, data: dict) -> Optional["ScriptData"]:
        if not isinstance(data, dict):
            return None
        full_script = _str(data.get("full_script", data.get("fullScript")))
        if not full_script:
            return None
        outline = data.get("outline")
        if isinstance(outline, list):
            outline = "\n".join(f"- {_str(line)}" for line in outline)
        return cls(
            title=_str(data.get("title")),
            outline=_str(outline),
            full_script=full_script,
        )

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "outline": self.outline,
            "full_script": self.full_script,
        }


@dataclass
class ChannelAnalysisResult:
    """Strategy summary and tailored ideas for a channel."""

    channel_name: str
    summary: str
    subscriber_count_estimate: Optional[str] = None
    ideas: List[VideoIdea] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Optional["ChannelAnalysisResult"]:
        if not isinstance(data, dict):
            return None
        channel_name = _str(data.get("channel_name", data.get("channelName")))
        if not channel_name:
            return None
        ideas = [
            idea
            for idea in (VideoIdea.from_dict(i) for i in data.get("ideas") or [])
            if idea is not None
        ]
        estimate = _str(
            data.get("subscriber_count_estimate", data.get("subscriberCountEstimate"))
        )
        return cls(
            channel_name=channel_name,
            summary=_str(data.get("summary")),
            subscriber_count_estimate=estimate or None,
            ideas=ideas,
        )

    @property
    def estimated_nature(self) -> Optional[TrendNature]:
        """Deterministic nature from the subscriber estimate, when numeric."""
        if not self.subscriber_count_estimate:
            return None
        value = parse_compact_number(self.subscriber_count_estimate)
        if math.isnan(value):
            return None
        return classify_trend_nature(value)

    def to_dict(self) -> dict:
        nature = self.estimated_nature
        return {
            "channel_name": self.channel_name,
            "summary": self.summary,
            "subscriber_count_estimate": self.subscriber_count_estimate,
            "estimated_nature": nature.value if nature else None,
            "ideas": [idea.to_dict() for idea in self.ideas],
        }
