"""Trend discovery flow.

Pulls real popular videos from YouTube, attaches channel subscriber counts and
asks Gemini to cluster them into macro trends. When the YouTube or clustering
stage fails, the flow falls back to a Gemini search grounded on Google Search.
"""

import logging
import math
from typing import Callable, Dict, List, Optional

from hachitrend.models.channel import ChannelBaseline
from hachitrend.models.niche import category_for_niche
from hachitrend.models.trend import Trend
from hachitrend.models.video import VideoRecord
from hachitrend.services.ai_service import AIService, AIServiceError
from hachitrend.services.youtube_api_service import (
    YouTubeAPIError,
    YouTubeAPIService,
    get_youtube_api_service,
)
from hachitrend.utils.errors import ErrorPolicy, MissingCredentialError, ResponseParseError

logger = logging.getLogger(__name__)

YouTubeFactory = Callable[[str], YouTubeAPIService]


def average_source_subscribers(
    trend: Trend,
    videos: Dict[str, VideoRecord],
    baselines: Dict[str, ChannelBaseline],
) -> float:
    """Average subscriber count of the channels behind a trend's sources.

    Sources that are not sampled videos, and channels with hidden or unknown
    subscriber counts, are skipped.

    Returns:
        The mean, or NaN when no source maps to a known subscriber count
    """
    counts = []
    seen_channels = set()
    for source in trend.sources:
        video = videos.get(source.video_id) if source.video_id else None
        if video is None or video.channel_id in seen_channels:
            continue
        seen_channels.add(video.channel_id)
        baseline = baselines.get(video.channel_id)
        if baseline is not None and baseline.subscriber_count is not None:
            counts.append(baseline.subscriber_count)

    if not counts:
        return math.nan
    return sum(counts) / len(counts)


class TrendService:
    """Trend discovery with a YouTube-backed path and a grounded-search fallback."""

    def __init__(
        self,
        ai_service: AIService,
        youtube_factory: YouTubeFactory = get_youtube_api_service,
        missing_key_policy: ErrorPolicy = ErrorPolicy.PROPAGATE,
        region_code: str = "US",
        search_window_days: int = 30,
        max_results: int = 25,
        trend_count: int = 5,
    ):
        """Initialize the trend service.

        Args:
            ai_service: Gemini service used for clustering and the fallback
            youtube_factory: Builds a YouTube client for an API key
            missing_key_policy: PROPAGATE raises MissingCredentialError without a
                key, FALLBACK goes straight to grounded search
            region_code: Region of the most-popular chart
            search_window_days: Recency floor for keyword search
            max_results: Videos sampled per discovery (at most 50)
            trend_count: Trends requested from the model
        """
        self.ai_service = ai_service
        self.youtube_factory = youtube_factory
        self.missing_key_policy = ErrorPolicy(missing_key_policy)
        self.region_code = region_code
        self.search_window_days = search_window_days
        self.max_results = max_results
        self.trend_count = trend_count

    def fetch_trends(
        self,
        niche: str,
        api_key: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[Trend]:
        """Discover current trends for a niche or keyword.

        Args:
            niche: Niche name (see models.niche.Niche)
            api_key: YouTube Data API key
            keyword: Optional free-text keyword; takes precedence over the niche

        Returns:
            List of trends, possibly empty

        Raises:
            MissingCredentialError: If no key is given and the policy is PROPAGATE
            AIServiceError: If the grounded-search fallback itself fails
        """
        keyword = keyword.strip() if keyword else None

        if not api_key:
            if self.missing_key_policy is ErrorPolicy.PROPAGATE:
                raise MissingCredentialError()
            logger.info("No YouTube API key, using grounded search")
            return self.ai_service.search_trends(niche, keyword, self.trend_count)

        try:
            return self._fetch_from_youtube(niche, api_key, keyword)
        except (YouTubeAPIError, AIServiceError, ResponseParseError) as e:
            logger.warning(f"YouTube trend path failed, falling back to grounded search: {e}")
            return self.ai_service.search_trends(niche, keyword, self.trend_count)

    def _sample_videos(
        self,
        youtube: YouTubeAPIService,
        niche: str,
        keyword: Optional[str],
    ) -> List[VideoRecord]:
        if keyword:
            video_ids = youtube.search_video_ids(
                keyword,
                max_results=self.max_results,
                published_after=youtube.published_after(self.search_window_days),
                order="relevance",
            )
            if not video_ids:
                return []
            details = youtube.get_video_details(video_ids)
            return [details[v] for v in video_ids if v in details]

        return youtube.get_most_popular(
            category_id=category_for_niche(niche),
            region_code=self.region_code,
            max_results=self.max_results,
        )

    def _fetch_from_youtube(
        self,
        niche: str,
        api_key: str,
        keyword: Optional[str],
    ) -> List[Trend]:
        youtube = self.youtube_factory(api_key)

        videos = self._sample_videos(youtube, niche, keyword)
        if not videos:
            logger.info("No videos found for trend discovery")
            return []

        baselines = youtube.get_channel_stats([v.channel_id for v in videos])

        summaries = []
        for video in videos:
            summary = video.summary()
            baseline = baselines.get(video.channel_id)
            summary["subscribers"] = baseline.subscriber_label if baseline else "Unknown"
            summaries.append(summary)

        subject = f'the keyword "{keyword}"' if keyword else f'the niche "{niche}"'
        trends = self.ai_service.cluster_trends(summaries, subject, self.trend_count)

        by_id = {v.video_id: v for v in videos}
        return [
            trend.with_computed_nature(average_source_subscribers(trend, by_id, baselines))
            for trend in trends
        ]
