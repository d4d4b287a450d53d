"""YouTube Data API service for trend and outlier discovery.

Uses the official YouTube Data API v3 through google-api-python-client.

Quota Budget (10,000 units/day free):
- search.list: 100 units
- videos.list: 1 unit (batched, 50 per request)
- channels.list: 1 unit (batched, 50 per request)

Every method raises YouTubeAPIError on a non-success response. Whether that
error is shown to the user or replaced by a fallback is decided by the
calling flow.
"""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from hachitrend.models.channel import ChannelBaseline
from hachitrend.models.video import VideoRecord
from hachitrend.utils.errors import HachiTrendError

logger = logging.getLogger(__name__)


class YouTubeAPIError(HachiTrendError):
    """Error response from the YouTube Data API."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def _unique(ids: Iterable[str]) -> List[str]:
    """Drop empty and duplicate ids, keeping first-seen order."""
    seen = set()
    result = []
    for item_id in ids:
        if item_id and item_id not in seen:
            seen.add(item_id)
            result.append(item_id)
    return result


class YouTubeAPIService:
    """Service for interacting with YouTube Data API v3.

    Features:
    - Batched requests (50 ids per request)
    - Quota tracking
    - Keyword search with a recency floor, or most-popular chart by category
    """

    MAX_BATCH_SIZE = 50  # YouTube API limit

    # Quota costs
    QUOTA_SEARCH = 100
    QUOTA_CHANNELS = 1
    QUOTA_VIDEOS = 1

    def __init__(self, api_key: str):
        """Initialize the YouTube API service.

        Args:
            api_key: YouTube Data API v3 key
        """
        self.api_key = api_key
        self.youtube = build("youtube", "v3", developerKey=api_key, cache_discovery=False)
        self._quota_used = 0
        self._lock = threading.RLock()

    @property
    def quota_used(self) -> int:
        """Get total quota units used in this session."""
        return self._quota_used

    def _execute_request(self, request, quota_cost: int, operation: str) -> dict:
        """Execute an API request, translating HTTP and transport errors.

        Args:
            request: Google API request object
            quota_cost: Quota units the request consumes
            operation: Human-readable name used in error messages

        Returns:
            API response

        Raises:
            YouTubeAPIError: On any non-success response or transport failure
        """
        try:
            with self._lock:
                response = request.execute()
                self._quota_used += quota_cost
            return response
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            reason = e.reason if getattr(e, "reason", None) else str(e)
            logger.error(f"YouTube API error during {operation}: {reason}")
            raise YouTubeAPIError(f"YouTube {operation} failed: {reason}", status=status) from e
        except (OSError, httplib2.HttpLib2Error) as e:
            logger.error(f"YouTube transport error during {operation}: {e}")
            raise YouTubeAPIError(f"YouTube {operation} failed: {e}") from e

    @staticmethod
    def published_after(days: int, now: Optional[datetime] = None) -> str:
        """RFC 3339 timestamp for `days` ago, as search.list expects."""
        now = now or datetime.now(timezone.utc)
        return (now - timedelta(days=days)).strftime("%Y-%m-%dT%H:%M:%SZ")

    def search_video_ids(
        self,
        query: str,
        max_results: int = 25,
        published_after: Optional[str] = None,
        order: str = "relevance",
        category_id: Optional[str] = None,
    ) -> List[str]:
        """Search for video ids by query.

        Args:
            query: Search query
            max_results: Maximum number of ids to return (at most 50)
            published_after: Only return videos published after this date (RFC 3339)
            order: Sort order ("relevance", "date", "viewCount", "rating")
            category_id: Optional video category restriction

        Returns:
            List of video ids in API order
        """
        request_params = {
            "part": "id",
            "q": query,
            "type": "video",
            "maxResults": min(self.MAX_BATCH_SIZE, max_results),
            "order": order,
        }
        if published_after:
            request_params["publishedAfter"] = published_after
        if category_id:
            request_params["videoCategoryId"] = category_id

        request = self.youtube.search().list(**request_params)
        response = self._execute_request(request, self.QUOTA_SEARCH, "search")

        video_ids = [
            item.get("id", {}).get("videoId")
            for item in response.get("items", [])
        ]
        video_ids = _unique(video_ids)
        logger.info(f"Search '{query}' returned {len(video_ids)} videos")
        return video_ids

    def get_most_popular(
        self,
        category_id: Optional[str] = None,
        region_code: str = "US",
        max_results: int = 25,
    ) -> List[VideoRecord]:
        """Get the most-popular chart, optionally restricted to a category.

        Args:
            category_id: YouTube video category id (None = all categories)
            region_code: ISO 3166-1 region
            max_results: Maximum number of videos (at most 50)

        Returns:
            List of VideoRecord in chart order
        """
        request_params = {
            "part": "snippet,statistics",
            "chart": "mostPopular",
            "regionCode": region_code,
            "maxResults": min(self.MAX_BATCH_SIZE, max_results),
        }
        if category_id:
            request_params["videoCategoryId"] = category_id

        request = self.youtube.videos().list(**request_params)
        response = self._execute_request(request, self.QUOTA_VIDEOS, "most popular chart")

        videos = [VideoRecord.from_api_item(item) for item in response.get("items", [])]
        logger.info(f"Most popular chart (category={category_id}) returned {len(videos)} videos")
        return videos

    def get_video_details(self, video_ids: List[str]) -> Dict[str, VideoRecord]:
        """Get snippet and statistics for multiple videos (batched).

        Args:
            video_ids: List of video ids

        Returns:
            Dict mapping video_id to VideoRecord, in request order
        """
        results: Dict[str, VideoRecord] = {}
        video_ids = _unique(video_ids)

        for i in range(0, len(video_ids), self.MAX_BATCH_SIZE):
            batch = video_ids[i:i + self.MAX_BATCH_SIZE]
            request = self.youtube.videos().list(
                part="snippet,statistics",
                id=",".join(batch),
            )
            response = self._execute_request(request, self.QUOTA_VIDEOS, "video details")

            for item in response.get("items", []):
                record = VideoRecord.from_api_item(item)
                results[record.video_id] = record

        return results

    def get_channel_stats(self, channel_ids: List[str]) -> Dict[str, ChannelBaseline]:
        """Get lifetime statistics for multiple channels (batched).

        Duplicate ids are collapsed first, so a sample of N videos from M
        channels costs one request per 50 distinct channels.

        Args:
            channel_ids: List of channel ids, duplicates allowed

        Returns:
            Dict mapping channel_id to ChannelBaseline
        """
        results: Dict[str, ChannelBaseline] = {}
        channel_ids = _unique(channel_ids)

        for i in range(0, len(channel_ids), self.MAX_BATCH_SIZE):
            batch = channel_ids[i:i + self.MAX_BATCH_SIZE]
            request = self.youtube.channels().list(
                part="statistics",
                id=",".join(batch),
            )
            response = self._execute_request(request, self.QUOTA_CHANNELS, "channel statistics")

            for item in response.get("items", []):
                baseline = ChannelBaseline.from_api_item(item)
                results[baseline.channel_id] = baseline

        return results


# Factory function for creating service instance
_service_instance: Optional[YouTubeAPIService] = None


def get_youtube_api_service(api_key: str) -> YouTubeAPIService:
    """Get or create the YouTubeAPIService instance for a key.

    The instance is rebuilt when the key changes.

    Args:
        api_key: YouTube Data API key

    Returns:
        YouTubeAPIService instance
    """
    global _service_instance

    if _service_instance is None or _service_instance.api_key != api_key:
        _service_instance = YouTubeAPIService(api_key)

    return _service_instance
