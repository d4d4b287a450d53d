"""Local storage for the single YouTube Data API credential."""

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class CredentialStore:
    """Load-on-start, save-on-change store for the YouTube API key.

    The key is read once from a JSON settings file when the store is
    created and written back whenever it changes. Callers read the value
    and pass it explicitly to the services that need it.
    """

    def __init__(self, settings_file: Path | str, default_key: Optional[str] = None):
        """Initialize the credential store.

        Args:
            settings_file: Path of the JSON settings file
            default_key: Key to use when the settings file holds none (e.g. from env)
        """
        self.settings_file = Path(settings_file)
        self._youtube_api_key = self._load_settings().get("youtube_api_key") or default_key or None

    def _load_settings(self) -> dict:
        """Load settings from file."""
        try:
            if self.settings_file.exists():
                return json.loads(self.settings_file.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load settings from {self.settings_file}: {e}")
        return {}

    def _save_settings(self) -> None:
        """Persist settings to file."""
        self.settings_file.parent.mkdir(parents=True, exist_ok=True)
        settings = {"youtube_api_key": self._youtube_api_key}
        self.settings_file.write_text(json.dumps(settings))
        logger.debug(f"Settings saved to {self.settings_file}")

    @property
    def is_configured(self) -> bool:
        """Whether a YouTube API key is available."""
        return bool(self._youtube_api_key)

    def get(self) -> Optional[str]:
        """Return the stored YouTube API key, or None."""
        return self._youtube_api_key

    def save(self, api_key: str) -> None:
        """Store a new YouTube API key.

        Args:
            api_key: Key to store; surrounding whitespace is dropped
        """
        self._youtube_api_key = api_key.strip() or None
        self._save_settings()
        logger.info("YouTube API key updated")

    def clear(self) -> None:
        """Remove the stored YouTube API key."""
        self._youtube_api_key = None
        self._save_settings()
        logger.info("YouTube API key cleared")
