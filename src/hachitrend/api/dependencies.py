"""Service singletons and dependency injection for the HachiTrend API."""

from hachitrend.services.ai_service import AIService
from hachitrend.services.outlier_finder_service import OutlierFinderService
from hachitrend.services.trend_service import TrendService
from hachitrend.services.video_optimizer_service import VideoOptimizerService
from hachitrend.services.youtube_api_service import get_youtube_api_service
from hachitrend.utils.config import load_config
from hachitrend.utils.credentials import CredentialStore
from hachitrend.utils.errors import ErrorPolicy

# Service singletons
_config: dict | None = None
_ai_service: AIService | None = None
_credential_store: CredentialStore | None = None
_trend_service: TrendService | None = None
_optimizer_service: VideoOptimizerService | None = None


def get_config() -> dict:
    """Get the configuration, loaded once per process."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_ai_service() -> AIService:
    """Get or create the AI service instance."""
    global _ai_service
    if _ai_service is None:
        config = get_config()
        _ai_service = AIService(
            api_key=config.get("gemini_api_key") or "",
            model_name=config.get("gemini_model", "gemini-3-flash-preview"),
            script_model_name=config.get("gemini_script_model", "gemini-3-pro-preview"),
            image_model_name=config.get("gemini_image_model", "gemini-2.5-flash-image"),
        )
    return _ai_service


def get_credential_store() -> CredentialStore:
    """Get or create the credential store."""
    global _credential_store
    if _credential_store is None:
        config = get_config()
        _credential_store = CredentialStore(
            config["settings_file"],
            default_key=config.get("youtube_api_key"),
        )
    return _credential_store


def get_trend_service() -> TrendService:
    """Get or create the trend service instance."""
    global _trend_service
    if _trend_service is None:
        config = get_config()
        _trend_service = TrendService(
            ai_service=get_ai_service(),
            youtube_factory=get_youtube_api_service,
            missing_key_policy=ErrorPolicy(config.get("trend_missing_key_policy", "propagate")),
            region_code=config.get("region_code", "US"),
            search_window_days=config.get("search_window_days", 30),
            max_results=config.get("trend_max_results", 25),
            trend_count=config.get("trend_count", 5),
        )
    return _trend_service


def get_optimizer_service() -> VideoOptimizerService:
    """Get or create the video optimizer service instance."""
    global _optimizer_service
    if _optimizer_service is None:
        _optimizer_service = VideoOptimizerService(
            ai_service=get_ai_service(),
            youtube_factory=get_youtube_api_service,
        )
    return _optimizer_service


def create_outlier_finder(api_key: str) -> OutlierFinderService:
    """Build an outlier finder bound to a YouTube API key.

    Not a singleton: the key is passed per call.
    """
    config = get_config()
    return OutlierFinderService(
        youtube=get_youtube_api_service(api_key),
        max_results=config.get("outlier_max_results", 50),
        search_window_days=config.get("search_window_days", 30),
        min_views=config.get("outlier_min_views", 1000),
        min_ratio=config.get("outlier_min_ratio", 0.0),
    )


def get_outlier_finder_factory():
    """Dependency returning the outlier finder factory."""
    return create_outlier_finder
