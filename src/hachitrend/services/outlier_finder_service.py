"""YouTube Outlier Finder Service.

Finds videos that significantly outperform their channel's lifetime average.

Flow:
1. Search (keyword, or niche category) ordered by view count, last 30 days
2. One batched videos.list for statistics
3. One batched channels.list for the distinct channels of the sample
4. Baseline per channel, ratio and tier per video
5. Inclusion filter, then sort by ratio descending

Upstream failures propagate unchanged: an outlier list is only worth anything
when it is built from real platform data.
"""

import logging
from typing import Dict, Iterable, List, Optional

from hachitrend.models.channel import ChannelBaseline
from hachitrend.models.niche import category_for_niche
from hachitrend.models.outlier import OutlierSearchResult, OutlierVideo, classify_outlier
from hachitrend.models.video import VideoRecord
from hachitrend.services.youtube_api_service import YouTubeAPIService

logger = logging.getLogger(__name__)

DEFAULT_MIN_VIEWS = 1000


def assemble_outliers(
    videos: Iterable[VideoRecord],
    baselines: Dict[str, ChannelBaseline],
    min_views: int = DEFAULT_MIN_VIEWS,
    min_ratio: float = 0.0,
) -> List[OutlierVideo]:
    """Merge videos with their channel baselines into sorted outlier records.

    A video is kept when its view count is strictly above ``min_views``, its
    channel has a positive baseline and its ratio is at least ``min_ratio``.
    A video whose channel is missing from ``baselines`` has an unknown
    subscriber count and a zero baseline, so it is excluded.

    Args:
        videos: Sampled videos
        baselines: Channel baselines keyed by channel id
        min_views: Exclusive view-count floor
        min_ratio: Inclusive ratio floor

    Returns:
        New list sorted by ratio descending, ties by video id ascending
    """
    outliers = []
    for video in videos:
        if video.view_count <= min_views:
            continue

        baseline = baselines.get(video.channel_id)
        typical_views = baseline.typical_views if baseline else 0
        classification = classify_outlier(video.view_count, typical_views)
        if classification is None or classification.ratio < min_ratio:
            continue

        outliers.append(
            OutlierVideo(
                video_id=video.video_id,
                title=video.title,
                channel_id=video.channel_id,
                channel_name=video.channel_name,
                published_at=video.published_at,
                thumbnail_url=video.thumbnail_url,
                view_count=video.view_count,
                like_count=video.like_count,
                comment_count=video.comment_count,
                channel_subscriber_count=baseline.subscriber_count if baseline else None,
                channel_typical_views=typical_views,
                performance_ratio=classification.ratio,
                tier=classification.tier,
            )
        )

    outliers.sort(key=lambda o: (-o.performance_ratio, o.video_id))
    return outliers


class OutlierFinderService:
    """Service to find outperforming YouTube videos for a niche or keyword."""

    def __init__(
        self,
        youtube: YouTubeAPIService,
        max_results: int = 50,
        search_window_days: int = 30,
        min_views: int = DEFAULT_MIN_VIEWS,
        min_ratio: float = 0.0,
    ):
        """Initialize the outlier finder.

        Args:
            youtube: YouTube client bound to the caller's API key
            max_results: Videos sampled per search (at most 50)
            search_window_days: Only consider videos published in this window
            min_views: Exclusive view-count floor
            min_ratio: Inclusive ratio floor (0 keeps every positive baseline)
        """
        self.youtube = youtube
        self.max_results = max_results
        self.search_window_days = search_window_days
        self.min_views = min_views
        self.min_ratio = min_ratio

    def find_outliers(self, niche: str, keyword: Optional[str] = None) -> OutlierSearchResult:
        """Find outperforming videos.

        Args:
            niche: Niche name; its category restricts the search when no keyword
            keyword: Optional free-text keyword

        Returns:
            OutlierSearchResult with outliers sorted by ratio

        Raises:
            YouTubeAPIError: If any YouTube request fails
        """
        keyword = keyword.strip() if keyword else None
        result = OutlierSearchResult(niche=niche, keyword=keyword)

        if keyword:
            query, category_id = keyword, None
        else:
            query, category_id = niche, category_for_niche(niche)

        logger.info(f"Searching outliers for '{query}' (category={category_id})")

        video_ids = self.youtube.search_video_ids(
            query,
            max_results=self.max_results,
            published_after=self.youtube.published_after(self.search_window_days),
            order="viewCount",
            category_id=category_id,
        )
        if not video_ids:
            return result

        details = self.youtube.get_video_details(video_ids)
        videos: List[VideoRecord] = [details[v] for v in video_ids if v in details]
        result.videos_scanned = len(videos)
        if not videos:
            return result

        baselines = self.youtube.get_channel_stats([v.channel_id for v in videos])
        result.channels_analyzed = len(baselines)

        result.outliers = assemble_outliers(videos, baselines, self.min_views, self.min_ratio)
        logger.info(
            f"Found {len(result.outliers)} outliers in {result.videos_scanned} videos "
            f"from {result.channels_analyzed} channels"
        )
        return result
