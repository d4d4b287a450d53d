"""Data models for YouTube video observations."""

from dataclasses import dataclass, field
from typing import Tuple


def parse_count(value) -> int:
    """Parse a count from the YouTube API's decimal strings.

    Missing or malformed values count as zero; negatives are clamped.
    """
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class VideoRecord:
    """One platform video observation."""

    video_id: str
    channel_id: str
    title: str
    channel_name: str
    published_at: str  # ISO 8601, as returned by the API
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    description: str = ""
    thumbnail_url: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def url(self) -> str:
        """Watch URL for the video."""
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @classmethod
    def from_api_item(cls, item: dict) -> "VideoRecord":
        """Build a record from a videos.list item (snippet + statistics parts).

        Args:
            item: Raw API item

        Returns:
            VideoRecord with counts parsed to integers
        """
        snippet = item.get("snippet", {})
        stats = item.get("statistics", {})
        thumbnails = snippet.get("thumbnails", {})
        thumbnail = thumbnails.get("high") or thumbnails.get("medium") or thumbnails.get("default") or {}

        return cls(
            video_id=item["id"],
            channel_id=snippet.get("channelId", ""),
            title=snippet.get("title", ""),
            channel_name=snippet.get("channelTitle", ""),
            published_at=snippet.get("publishedAt", ""),
            view_count=parse_count(stats.get("viewCount")),
            like_count=parse_count(stats.get("likeCount")),
            comment_count=parse_count(stats.get("commentCount")),
            description=snippet.get("description", ""),
            thumbnail_url=thumbnail.get("url", ""),
            tags=tuple(snippet.get("tags", [])),
        )

    def summary(self, description_chars: int = 100) -> dict:
        """Compact summary sent to the generative model for clustering."""
        description = self.description
        if description:
            description = description[:description_chars] + "..."
        return {
            "id": self.video_id,
            "title": self.title,
            "channel": self.channel_name,
            "views": self.view_count,
            "description": description,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "video_id": self.video_id,
            "channel_id": self.channel_id,
            "title": self.title,
            "channel_name": self.channel_name,
            "published_at": self.published_at,
            "url": self.url,
            "thumbnail_url": self.thumbnail_url,
            "view_count": self.view_count,
            "like_count": self.like_count,
            "comment_count": self.comment_count,
            "description": self.description,
            "tags": list(self.tags),
        }
