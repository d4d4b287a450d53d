"""Unit tests for the video optimizer."""

from unittest.mock import Mock

import pytest

from hachitrend.models.optimization import VideoOptimizationResult
from hachitrend.services.ai_service import AIServiceError
from hachitrend.services.video_optimizer_service import (
    InvalidVideoUrlError,
    VideoNotFoundError,
    VideoOptimizerService,
    extract_video_id,
)
from hachitrend.services.youtube_api_service import YouTubeAPIError
from hachitrend.utils.errors import MissingCredentialError, ResponseParseError


class TestExtractVideoId:
    """Tests for extract_video_id()."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
            "https://youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ?si=abc",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "https://www.youtube.com/v/dQw4w9WgXcQ",
            "  https://www.youtube.com/watch?v=dQw4w9WgXcQ  ",
        ],
    )
    def test_valid_urls(self, url):
        assert extract_video_id(url) == "dQw4w9WgXcQ"

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "https://www.youtube.com/",
            "https://www.youtube.com/watch?v=short",
            "https://example.com/page",
        ],
    )
    def test_invalid_urls(self, url):
        assert extract_video_id(url) is None


@pytest.fixture
def optimizer(mock_ai_service, mock_youtube):
    return VideoOptimizerService(ai_service=mock_ai_service, youtube_factory=Mock(return_value=mock_youtube))


class TestOptimize:
    """Tests for VideoOptimizerService.optimize()."""

    URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"

    def test_returns_details_and_optimization(self, optimizer, mock_ai_service, mock_youtube, make_video):
        video = make_video("dQw4w9WgXcQ")
        mock_youtube.get_video_details.return_value = {"dQw4w9WgXcQ": video}
        suggestions = VideoOptimizationResult(critique="ok", improved_titles=["A"])
        mock_ai_service.analyze_video_for_optimization.return_value = suggestions

        result = optimizer.optimize(self.URL, "yt-key")

        optimizer.youtube_factory.assert_called_once_with("yt-key")
        mock_youtube.get_video_details.assert_called_once_with(["dQw4w9WgXcQ"])
        assert result.video is video
        assert result.optimization is suggestions
        assert result.to_dict()["optimization"]["improved_titles"] == ["A"]

    @pytest.mark.parametrize("error", [AIServiceError("down"), ResponseParseError("bad json")])
    def test_analysis_failure_keeps_details(self, optimizer, mock_ai_service, mock_youtube, make_video, error):
        mock_youtube.get_video_details.return_value = {"dQw4w9WgXcQ": make_video("dQw4w9WgXcQ")}
        mock_ai_service.analyze_video_for_optimization.side_effect = error

        result = optimizer.optimize(self.URL, "yt-key")

        assert result.optimization is None
        assert result.to_dict()["video"]["video_id"] == "dQw4w9WgXcQ"

    def test_invalid_url(self, optimizer, mock_youtube):
        with pytest.raises(InvalidVideoUrlError):
            optimizer.optimize("https://example.com", "yt-key")
        mock_youtube.get_video_details.assert_not_called()

    def test_missing_key(self, optimizer):
        with pytest.raises(MissingCredentialError):
            optimizer.optimize(self.URL, None)

    def test_unknown_video(self, optimizer, mock_youtube):
        mock_youtube.get_video_details.return_value = {}

        with pytest.raises(VideoNotFoundError):
            optimizer.optimize(self.URL, "yt-key")

    def test_youtube_error_propagates(self, optimizer, mock_youtube, mock_ai_service):
        mock_youtube.get_video_details.side_effect = YouTubeAPIError("forbidden", status=403)

        with pytest.raises(YouTubeAPIError):
            optimizer.optimize(self.URL, "yt-key")
        mock_ai_service.analyze_video_for_optimization.assert_not_called()

    def test_edit_thumbnail_delegates(self, optimizer, mock_ai_service):
        mock_ai_service.edit_thumbnail.return_value = "data:image/png;base64,AAAA"

        assert optimizer.edit_thumbnail("data:image/png;base64,BBBB", "brighter") == "data:image/png;base64,AAAA"
        mock_ai_service.edit_thumbnail.assert_called_once_with("data:image/png;base64,BBBB", "brighter")
