"""Integration tests for the HTTP API with services mocked."""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from hachitrend.api import dependencies
from hachitrend.api.server import app
from hachitrend.models.optimization import VideoOptimizationResult
from hachitrend.models.outlier import OutlierSearchResult
from hachitrend.models.trend import ChannelAnalysisResult, Effort, ScriptData, Trend, VideoIdea
from hachitrend.services.ai_service import AIServiceError
from hachitrend.services.outlier_finder_service import OutlierFinderService, assemble_outliers
from hachitrend.services.video_optimizer_service import (
    InvalidVideoUrlError,
    VideoNotFoundError,
    VideoOptimization,
)
from hachitrend.services.youtube_api_service import YouTubeAPIError
from hachitrend.utils.credentials import CredentialStore
from hachitrend.utils.errors import MissingCredentialError


@pytest.fixture
def store(temp_dir):
    return CredentialStore(temp_dir / "settings.json")


@pytest.fixture
def trend_service():
    return Mock()


@pytest.fixture
def optimizer_service():
    return Mock()


@pytest.fixture
def finder_factory(mock_youtube):
    factory = Mock(side_effect=lambda api_key: OutlierFinderService(youtube=mock_youtube))
    return factory


@pytest.fixture
def client(store, trend_service, mock_ai_service, optimizer_service, finder_factory):
    app.dependency_overrides[dependencies.get_credential_store] = lambda: store
    app.dependency_overrides[dependencies.get_trend_service] = lambda: trend_service
    app.dependency_overrides[dependencies.get_ai_service] = lambda: mock_ai_service
    app.dependency_overrides[dependencies.get_optimizer_service] = lambda: optimizer_service
    app.dependency_overrides[dependencies.get_outlier_finder_factory] = lambda: finder_factory
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestCoreRoutes:
    """Tests for root, health and niches."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "HachiTrend API"

    def test_health_and_request_id(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-42"})

        assert response.json() == {"status": "healthy"}
        assert response.headers["X-Request-ID"] == "req-42"

    def test_niches(self, client):
        niches = {n["name"]: n["category_id"] for n in client.get("/api/niches").json()}

        assert niches["Gaming"] == "20"
        assert niches["Artificial Intelligence"] == "28"
        assert len(niches) == 7


class TestSettingsRoutes:
    """Tests for the credential endpoints."""

    def test_save_and_clear(self, client, store):
        assert client.get("/api/settings").json() == {"youtube_api_key_configured": False}

        response = client.put("/api/settings/youtube-key", json={"api_key": "AIza-key"})
        assert response.json() == {"youtube_api_key_configured": True}
        assert store.get() == "AIza-key"
        assert "AIza-key" not in client.get("/api/settings").text

        response = client.delete("/api/settings/youtube-key")
        assert response.json() == {"youtube_api_key_configured": False}
        assert store.get() is None

    def test_empty_key_rejected(self, client):
        assert client.put("/api/settings/youtube-key", json={"api_key": ""}).status_code == 422


class TestTrendRoutes:
    """Tests for /api/trends."""

    def test_passes_stored_key(self, client, store, trend_service):
        store.save("yt-key")
        trend_service.fetch_trends.return_value = [Trend.from_dict({"id": "t1", "title": "GTA 6 Hype"})]

        response = client.post("/api/trends", json={"niche": "Gaming", "keyword": "gta"})

        assert response.status_code == 200
        assert response.json()["trends"][0]["title"] == "GTA 6 Hype"
        trend_service.fetch_trends.assert_called_once_with("Gaming", "yt-key", "gta")

    def test_missing_key_is_400(self, client, trend_service):
        trend_service.fetch_trends.side_effect = MissingCredentialError()

        response = client.post("/api/trends", json={"niche": "Gaming"})

        assert response.status_code == 400
        assert response.json()["detail"] == "YouTube API key required"

    def test_upstream_error_is_502(self, client, trend_service):
        trend_service.fetch_trends.side_effect = AIServiceError("Gemini request failed")

        assert client.post("/api/trends", json={"niche": "Tech"}).status_code == 502


class TestStudioRoutes:
    """Tests for ideas, scripts, channel analysis and thumbnails."""

    def test_ideas(self, client, mock_ai_service):
        mock_ai_service.generate_video_ideas.return_value = [
            VideoIdea("Idea", "Hook", "Thumb", "Gamers", Effort.LOW, ["tag"])
        ]

        response = client.post("/api/ideas", json={"trend": {"id": "t1", "title": "GTA 6 Hype"}})

        assert response.status_code == 200
        body = response.json()
        assert body["trend_id"] == "t1"
        assert body["ideas"][0]["estimated_effort"] == "Low"
        trend, count = mock_ai_service.generate_video_ideas.call_args.args
        assert trend.title == "GTA 6 Hype"
        assert count == 4

    def test_ideas_need_trend_title(self, client):
        assert client.post("/api/ideas", json={"trend": {}}).status_code == 400

    def test_script(self, client, mock_ai_service):
        mock_ai_service.generate_script.return_value = ScriptData("T", "- Intro", "# Script")

        response = client.post("/api/scripts", json={"idea": {"title": "T", "hook": "H"}})

        assert response.json() == {"title": "T", "outline": "- Intro", "full_script": "# Script"}

    def test_script_failure_is_502(self, client, mock_ai_service):
        mock_ai_service.generate_script.side_effect = AIServiceError("down")

        assert client.post("/api/scripts", json={"idea": {"title": "T"}}).status_code == 502

    def test_channel_analysis(self, client, mock_ai_service):
        mock_ai_service.analyze_channel.return_value = ChannelAnalysisResult(
            channel_name="Speedrun Central", summary="Records.", subscriber_count_estimate="150K"
        )

        response = client.post("/api/channels/analyze", json={"channel_name": " speedrun "})

        assert response.json()["estimated_nature"] == "Viral Opportunity"
        mock_ai_service.analyze_channel.assert_called_once_with("speedrun")

    def test_thumbnail_failure_is_null(self, client, mock_ai_service):
        mock_ai_service.generate_thumbnail.return_value = None

        response = client.post("/api/thumbnails/generate", json={"description": "shocked face"})

        assert response.status_code == 200
        assert response.json() == {"image": None}


class TestOutlierRoutes:
    """Tests for the outlier hunter endpoints."""

    def test_requires_key(self, client, finder_factory):
        response = client.post("/api/outliers/search", json={"niche": "Gaming"})

        assert response.status_code == 400
        finder_factory.assert_not_called()

    def test_search(self, client, store, finder_factory, mock_youtube, make_video, make_baseline):
        store.save("yt-key")
        videos = {"v1": make_video("v1", "UC_a", view_count=12_000)}
        mock_youtube.search_video_ids.return_value = ["v1"]
        mock_youtube.get_video_details.return_value = videos
        mock_youtube.get_channel_stats.return_value = {"UC_a": make_baseline("UC_a")}

        response = client.post("/api/outliers/search", json={"niche": "Gaming"})

        assert response.status_code == 200
        body = response.json()
        assert body["outliers"][0]["tier"] == "Viral Anomaly"
        assert body["outliers"][0]["performance_ratio"] == 12.0
        finder_factory.assert_called_once_with("yt-key")

    def test_youtube_error_is_502(self, client, store, mock_youtube):
        store.save("yt-key")
        mock_youtube.search_video_ids.side_effect = YouTubeAPIError("quotaExceeded", status=403)

        response = client.post("/api/outliers/search", json={"niche": "Gaming"})

        assert response.status_code == 502
        assert "quotaExceeded" in response.json()["detail"]

    def test_outlier_to_trend(self, client, make_video, make_baseline):
        outlier = assemble_outliers(
            [make_video("abc123def45", "UC_a", view_count=12_000)],
            {"UC_a": make_baseline("UC_a", subscriber_count=None)},
        )[0]
        payload = OutlierSearchResult(outliers=[outlier]).to_dict()["outliers"][0]

        response = client.post("/api/outliers/trend", json={"outlier": payload})

        body = response.json()
        assert body["id"] == "abc123def45"
        assert body["relevance_score"] == 100
        assert body["computed_nature"] == "Viral Opportunity"
        assert body["trend_nature"] == "Viral Opportunity"
        assert body["stats"]["average_subscriber_count"] == "Unknown"


class TestOptimizerRoutes:
    """Tests for the video optimizer endpoints."""

    URL = "https://youtu.be/dQw4w9WgXcQ"

    def test_optimize(self, client, store, optimizer_service, make_video):
        store.save("yt-key")
        optimizer_service.optimize.return_value = VideoOptimization(
            video=make_video("dQw4w9WgXcQ"),
            optimization=VideoOptimizationResult(critique="Fine", improved_titles=["A"]),
        )

        response = client.post("/api/optimizer/video", json={"url": self.URL})

        assert response.status_code == 200
        assert response.json()["optimization"]["critique"] == "Fine"
        optimizer_service.optimize.assert_called_once_with(self.URL, "yt-key")

    @pytest.mark.parametrize(
        "error, status",
        [
            (InvalidVideoUrlError("Invalid YouTube URL"), 400),
            (MissingCredentialError(), 400),
            (VideoNotFoundError("Video not found"), 404),
            (YouTubeAPIError("forbidden", status=403), 502),
        ],
    )
    def test_error_mapping(self, client, optimizer_service, error, status):
        optimizer_service.optimize.side_effect = error

        assert client.post("/api/optimizer/video", json={"url": self.URL}).status_code == status

    def test_edit_thumbnail(self, client, optimizer_service):
        optimizer_service.edit_thumbnail.return_value = "data:image/png;base64,AAAA"

        response = client.post(
            "/api/optimizer/thumbnail",
            json={"image": "data:image/png;base64,BBBB", "instruction": "brighter"},
        )

        assert response.json() == {"image": "data:image/png;base64,AAAA"}

    def test_edit_thumbnail_bad_image(self, client, optimizer_service):
        optimizer_service.edit_thumbnail.side_effect = ValueError("Expected a base64 data URL")

        response = client.post(
            "/api/optimizer/thumbnail",
            json={"image": "https://example.com/a.png", "instruction": "brighter"},
        )

        assert response.status_code == 400
