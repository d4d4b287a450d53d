"""Shared pytest fixtures for HachiTrend tests."""

import tempfile
from pathlib import Path
from typing import Dict, Generator, Optional
from unittest.mock import Mock

import pytest

from hachitrend.models.channel import ChannelBaseline
from hachitrend.models.video import VideoRecord


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config(temp_dir) -> Dict:
    """Sample configuration for testing."""
    return {
        "gemini_api_key": "test_gemini_key",
        "youtube_api_key": None,
        "settings_file": str(temp_dir / "settings.json"),
        "gemini_model": "gemini-3-flash-preview",
        "gemini_script_model": "gemini-3-pro-preview",
        "gemini_image_model": "gemini-2.5-flash-image",
        "region_code": "US",
        "search_window_days": 30,
        "trend_max_results": 25,
        "trend_count": 5,
        "trend_missing_key_policy": "propagate",
        "outlier_max_results": 50,
        "outlier_min_views": 1000,
        "outlier_min_ratio": 0.0,
        "log_level": "INFO",
        "log_json": False,
        "cors_origins": ["http://localhost:5173"],
    }


@pytest.fixture
def video_api_item() -> Dict:
    """A videos.list item with snippet and statistics parts."""
    return {
        "id": "abc123def45",
        "snippet": {
            "channelId": "UC_channel_1",
            "channelTitle": "Speedrun Central",
            "title": "Any% World Record in 12 Minutes",
            "description": "The run that finally broke the barrier.",
            "publishedAt": "2026-10-01T15:00:00Z",
            "tags": ["speedrun", "world record"],
            "thumbnails": {
                "default": {"url": "https://i.ytimg.com/vi/abc123def45/default.jpg"},
                "medium": {"url": "https://i.ytimg.com/vi/abc123def45/mqdefault.jpg"},
                "high": {"url": "https://i.ytimg.com/vi/abc123def45/hqdefault.jpg"},
            },
        },
        "statistics": {
            "viewCount": "250000",
            "likeCount": "12000",
            "commentCount": "830",
        },
    }


@pytest.fixture
def channel_api_item() -> Dict:
    """A channels.list item with the statistics part."""
    return {
        "id": "UC_channel_1",
        "statistics": {
            "viewCount": "5000000",
            "videoCount": "200",
            "subscriberCount": "150000",
            "hiddenSubscriberCount": False,
        },
    }


@pytest.fixture
def make_video():
    """Factory for VideoRecord instances."""

    def _make(
        video_id: str,
        channel_id: str = "UC_a",
        view_count: int = 10_000,
        title: Optional[str] = None,
        **kwargs,
    ) -> VideoRecord:
        return VideoRecord(
            video_id=video_id,
            channel_id=channel_id,
            title=title or f"Video {video_id}",
            channel_name=kwargs.pop("channel_name", f"Channel {channel_id}"),
            published_at=kwargs.pop("published_at", "2026-10-01T00:00:00Z"),
            view_count=view_count,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_baseline():
    """Factory for ChannelBaseline instances with a chosen typical view count."""

    def _make(
        channel_id: str,
        typical_views: int = 1_000,
        video_count: int = 100,
        subscriber_count: Optional[int] = 50_000,
    ) -> ChannelBaseline:
        return ChannelBaseline(
            channel_id=channel_id,
            total_views=typical_views * video_count,
            total_video_count=video_count,
            subscriber_count=subscriber_count,
        )

    return _make


@pytest.fixture
def mock_youtube():
    """Mock YouTubeAPIService for testing."""
    mock = Mock()
    mock.search_video_ids = Mock(return_value=[])
    mock.get_most_popular = Mock(return_value=[])
    mock.get_video_details = Mock(return_value={})
    mock.get_channel_stats = Mock(return_value={})
    mock.published_after = Mock(return_value="2026-09-18T00:00:00Z")
    return mock


@pytest.fixture
def mock_ai_service():
    """Mock AIService for testing."""
    mock = Mock()
    mock.cluster_trends = Mock(return_value=[])
    mock.search_trends = Mock(return_value=[])
    mock.generate_video_ideas = Mock(return_value=[])
    mock.analyze_channel = Mock()
    mock.generate_script = Mock()
    mock.generate_thumbnail = Mock(return_value=None)
    mock.edit_thumbnail = Mock(return_value=None)
    mock.analyze_video_for_optimization = Mock()
    return mock
