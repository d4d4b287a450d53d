"""Configuration loading and validation for HachiTrend."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from rich.logging import RichHandler

from hachitrend.utils.errors import ErrorPolicy

# Project root (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_SETTINGS_FILE = Path.home() / ".hachitrend" / "settings.json"

# Policies a missing YouTube key may trigger in trend discovery
TREND_KEY_POLICIES = (ErrorPolicy.PROPAGATE.value, ErrorPolicy.FALLBACK.value)


def load_config() -> dict:
    """Load configuration from environment variables."""

    config = {
        # Required API keys
        "gemini_api_key": os.getenv("GEMINI_API_KEY"),
        # Seed for the credential store; the stored key wins once saved
        "youtube_api_key": os.getenv("YOUTUBE_API_KEY"),
        "settings_file": os.getenv("HACHITREND_SETTINGS_FILE", str(DEFAULT_SETTINGS_FILE)),
        # Model configurations
        "gemini_model": os.getenv("GEMINI_MODEL", "gemini-3-flash-preview"),
        "gemini_script_model": os.getenv("GEMINI_SCRIPT_MODEL", "gemini-3-pro-preview"),
        "gemini_image_model": os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
        # YouTube search settings
        "region_code": os.getenv("YOUTUBE_REGION_CODE", "US"),
        "search_window_days": int(os.getenv("SEARCH_WINDOW_DAYS", "30")),
        # Trend discovery
        "trend_max_results": int(os.getenv("TREND_MAX_RESULTS", "25")),
        "trend_count": int(os.getenv("TREND_COUNT", "5")),
        "trend_missing_key_policy": os.getenv(
            "TREND_MISSING_KEY_POLICY", ErrorPolicy.PROPAGATE.value
        ).lower(),
        # Outlier hunting
        "outlier_max_results": int(os.getenv("OUTLIER_MAX_RESULTS", "50")),
        "outlier_min_views": int(os.getenv("OUTLIER_MIN_VIEWS", "1000")),
        "outlier_min_ratio": float(os.getenv("OUTLIER_MIN_RATIO", "0.0")),
        # Logging
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": os.getenv("LOG_JSON", "false").lower() == "true",
        # Web server
        "cors_origins": [
            origin.strip()
            for origin in os.getenv(
                "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
            ).split(",")
            if origin.strip()
        ],
    }

    return config


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of errors."""
    errors = []

    if not config.get("gemini_api_key"):
        errors.append("GEMINI_API_KEY is required")

    if config.get("trend_missing_key_policy") not in TREND_KEY_POLICIES:
        errors.append(
            "TREND_MISSING_KEY_POLICY must be one of: " + ", ".join(TREND_KEY_POLICIES)
        )

    for key in ("search_window_days", "trend_max_results", "trend_count", "outlier_max_results"):
        if config.get(key, 0) <= 0:
            errors.append(f"{key.upper()} must be a positive integer")

    # search.list and videos.list both cap maxResults at 50
    for key in ("trend_max_results", "outlier_max_results"):
        if config.get(key, 0) > 50:
            errors.append(f"{key.upper()} cannot exceed 50")

    if config.get("outlier_min_views", 0) < 0:
        errors.append("OUTLIER_MIN_VIEWS cannot be negative")

    if config.get("outlier_min_ratio", 0.0) < 0:
        errors.append("OUTLIER_MIN_RATIO cannot be negative")

    return errors


def setup_logging(log_level: str = "INFO") -> None:
    """Set up logging with Rich for terminal output (used by the CLI)."""
    logging.root.handlers.clear()

    rich_handler = RichHandler(
        show_time=True,
        show_level=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,  # Disable markup to avoid conflicts
    )

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )

    # Suppress noisy third-party loggers
    noisy_loggers = [
        "httpx",
        "google_genai",
        "google_genai.models",
        "googleapiclient.discovery",
        "googleapiclient.discovery_cache",
        "urllib3.connectionpool",
    ]

    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
