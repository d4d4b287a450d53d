"""Unit tests for OutlierFinderService."""

from unittest.mock import patch

import pytest

from hachitrend.models.outlier import OutlierTier
from hachitrend.services.outlier_finder_service import OutlierFinderService
from hachitrend.services.youtube_api_service import YouTubeAPIError, YouTubeAPIService


@pytest.fixture
def finder(mock_youtube):
    return OutlierFinderService(youtube=mock_youtube, max_results=50, search_window_days=30)


class TestFindOutliers:
    """Tests for OutlierFinderService.find_outliers()."""

    def test_keyword_search(self, finder, mock_youtube, make_video, make_baseline):
        videos = {
            "v1": make_video("v1", "UC_a", view_count=50_000),
            "v2": make_video("v2", "UC_b", view_count=6_000),
        }
        mock_youtube.search_video_ids.return_value = ["v1", "v2"]
        mock_youtube.get_video_details.return_value = videos
        mock_youtube.get_channel_stats.return_value = {
            "UC_a": make_baseline("UC_a", typical_views=1_000),
            "UC_b": make_baseline("UC_b", typical_views=1_000),
        }

        result = finder.find_outliers("Gaming", keyword="  speedrun  ")

        mock_youtube.search_video_ids.assert_called_once_with(
            "speedrun",
            max_results=50,
            published_after="2026-09-18T00:00:00Z",
            order="viewCount",
            category_id=None,
        )
        mock_youtube.published_after.assert_called_once_with(30)
        assert result.keyword == "speedrun"
        assert result.videos_scanned == 2
        assert result.channels_analyzed == 2
        assert [o.video_id for o in result.outliers] == ["v1", "v2"]
        assert result.outliers[0].tier == OutlierTier.VIRAL_ANOMALY
        assert result.outliers[1].tier == OutlierTier.EXPLOSIVE

    def test_niche_search_uses_category(self, finder, mock_youtube):
        finder.find_outliers("Finance")

        args, kwargs = mock_youtube.search_video_ids.call_args
        assert args == ("Finance",)
        assert kwargs["category_id"] == "25"
        assert kwargs["order"] == "viewCount"

    def test_channel_stats_fetched_once_for_distinct_channels(
        self, finder, mock_youtube, make_video, make_baseline
    ):
        # 12 videos from 3 channels
        videos = {
            f"v{i:02d}": make_video(f"v{i:02d}", f"UC_{i % 3}", view_count=5_000)
            for i in range(12)
        }
        mock_youtube.search_video_ids.return_value = list(videos)
        mock_youtube.get_video_details.return_value = videos
        mock_youtube.get_channel_stats.return_value = {
            f"UC_{i}": make_baseline(f"UC_{i}") for i in range(3)
        }

        result = finder.find_outliers("Gaming")

        mock_youtube.get_channel_stats.assert_called_once()
        requested = mock_youtube.get_channel_stats.call_args.args[0]
        assert sorted(set(requested)) == ["UC_0", "UC_1", "UC_2"]
        assert len(result.outliers) == 12

    def test_no_search_results_short_circuits(self, finder, mock_youtube):
        result = finder.find_outliers("Gaming")

        assert result.outliers == []
        assert result.videos_scanned == 0
        mock_youtube.get_video_details.assert_not_called()
        mock_youtube.get_channel_stats.assert_not_called()

    def test_no_details_short_circuits(self, finder, mock_youtube):
        mock_youtube.search_video_ids.return_value = ["gone"]
        mock_youtube.get_video_details.return_value = {}

        result = finder.find_outliers("Gaming")

        assert result.outliers == []
        mock_youtube.get_channel_stats.assert_not_called()

    def test_youtube_errors_propagate(self, finder, mock_youtube, make_video):
        mock_youtube.search_video_ids.return_value = ["v1"]
        mock_youtube.get_video_details.return_value = {"v1": make_video("v1")}
        mock_youtube.get_channel_stats.side_effect = YouTubeAPIError("quota exceeded", status=403)

        with pytest.raises(YouTubeAPIError):
            finder.find_outliers("Gaming")

    def test_transport_errors_propagate_as_youtube_errors(self):
        with patch("hachitrend.services.youtube_api_service.build") as mock_build:
            client = mock_build.return_value
            client.search.return_value.list.return_value.execute.side_effect = TimeoutError(
                "timed out"
            )
            finder = OutlierFinderService(youtube=YouTubeAPIService("yt-key"))

            with pytest.raises(YouTubeAPIError, match="timed out"):
                finder.find_outliers("Gaming", keyword="speedrun")

    def test_min_views_floor(self, mock_youtube, make_video, make_baseline):
        finder = OutlierFinderService(youtube=mock_youtube, min_views=10_000)
        videos = {
            "small": make_video("small", "UC_a", view_count=9_000),
            "big": make_video("big", "UC_a", view_count=20_000),
        }
        mock_youtube.search_video_ids.return_value = list(videos)
        mock_youtube.get_video_details.return_value = videos
        mock_youtube.get_channel_stats.return_value = {"UC_a": make_baseline("UC_a")}

        result = finder.find_outliers("Gaming")

        assert [o.video_id for o in result.outliers] == ["big"]

    def test_to_dict(self, finder, mock_youtube, make_video, make_baseline):
        mock_youtube.search_video_ids.return_value = ["v1"]
        mock_youtube.get_video_details.return_value = {"v1": make_video("v1", "UC_a", view_count=3_000)}
        mock_youtube.get_channel_stats.return_value = {"UC_a": make_baseline("UC_a")}

        data = finder.find_outliers("Tech").to_dict()

        assert data["niche"] == "Tech"
        assert data["outliers_found"] == 1
        assert data["outliers"][0]["performance_ratio"] == 3.0
