"""Data models for channel baselines."""

import math
from dataclasses import dataclass
from typing import Optional

from hachitrend.models.video import parse_count
from hachitrend.utils.formatting import format_compact_number

UNKNOWN_SUBSCRIBERS = "Unknown"


def format_subscriber_count(subscriber_count: Optional[int]) -> str:
    """Compact subscriber count ("1.2M"), or "Unknown" when hidden."""
    if subscriber_count is None:
        return UNKNOWN_SUBSCRIBERS
    return format_compact_number(subscriber_count)


def compute_baseline(total_views: int, total_video_count: int) -> int:
    """Compute a channel's typical views per video.

    Args:
        total_views: Lifetime channel view count
        total_video_count: Lifetime channel video count

    Returns:
        total_views / total_video_count rounded half up, or 0 when the
        channel has no videos
    """
    if total_video_count <= 0:
        return 0
    return math.floor(total_views / total_video_count + 0.5)


@dataclass(frozen=True)
class ChannelBaseline:
    """Lifetime channel statistics used as the expected-performance reference."""

    channel_id: str
    total_views: int
    total_video_count: int
    subscriber_count: Optional[int] = None  # None when hidden or unknown

    @property
    def typical_views(self) -> int:
        """Views an arbitrary video from this channel is expected to get."""
        return compute_baseline(self.total_views, self.total_video_count)

    @property
    def subscriber_label(self) -> str:
        """Subscriber count for display, or "Unknown"."""
        return format_subscriber_count(self.subscriber_count)

    @classmethod
    def from_api_item(cls, item: dict) -> "ChannelBaseline":
        """Build a baseline from a channels.list item (statistics part).

        Args:
            item: Raw API item

        Returns:
            ChannelBaseline with counts parsed to integers
        """
        stats = item.get("statistics", {})

        subscriber_count = None
        if not stats.get("hiddenSubscriberCount") and stats.get("subscriberCount") is not None:
            subscriber_count = parse_count(stats.get("subscriberCount"))

        return cls(
            channel_id=item["id"],
            total_views=parse_count(stats.get("viewCount")),
            total_video_count=parse_count(stats.get("videoCount")),
            subscriber_count=subscriber_count,
        )
