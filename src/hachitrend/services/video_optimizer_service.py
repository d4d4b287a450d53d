"""Video optimizer: fetch an existing video and get AI packaging suggestions."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from hachitrend.models.optimization import VideoOptimizationResult
from hachitrend.models.video import VideoRecord
from hachitrend.services.ai_service import AIService, AIServiceError
from hachitrend.services.youtube_api_service import YouTubeAPIService, get_youtube_api_service
from hachitrend.utils.errors import HachiTrendError, MissingCredentialError, ResponseParseError

logger = logging.getLogger(__name__)

_VIDEO_ID_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")
VIDEO_ID_LENGTH = 11


class InvalidVideoUrlError(HachiTrendError):
    """Raised when no YouTube video id can be extracted from a URL."""

    pass


class VideoNotFoundError(HachiTrendError):
    """Raised when the YouTube API has no video for an id."""

    pass


def extract_video_id(url: str) -> Optional[str]:
    """Extract the 11-character video id from a YouTube URL.

    Handles watch?v=, &v=, embed/, v/, u/x/ and youtu.be/ forms.

    Returns:
        The id, or None when the URL does not carry one
    """
    match = _VIDEO_ID_RE.match(url.strip())
    if match and len(match.group(2)) == VIDEO_ID_LENGTH:
        return match.group(2)
    return None


@dataclass
class VideoOptimization:
    """A fetched video and, when the analysis succeeded, its suggestions."""

    video: VideoRecord
    optimization: Optional[VideoOptimizationResult] = None

    def to_dict(self) -> dict:
        return {
            "video": self.video.to_dict(),
            "optimization": self.optimization.to_dict() if self.optimization else None,
        }


class VideoOptimizerService:
    """Fetches video details and asks Gemini for title, description and tag improvements."""

    def __init__(
        self,
        ai_service: AIService,
        youtube_factory: Callable[[str], YouTubeAPIService] = get_youtube_api_service,
    ):
        self.ai_service = ai_service
        self.youtube_factory = youtube_factory

    def optimize(self, url: str, api_key: Optional[str]) -> VideoOptimization:
        """Fetch a video by URL and analyze it.

        The analysis is best effort: when it fails the details are still
        returned, without an optimization.

        Raises:
            InvalidVideoUrlError: If the URL carries no video id
            MissingCredentialError: If no API key is given
            VideoNotFoundError: If the video does not exist
            YouTubeAPIError: If the details request fails
        """
        video_id = extract_video_id(url)
        if video_id is None:
            raise InvalidVideoUrlError(
                "Invalid YouTube URL. Please copy and paste a full video link."
            )
        if not api_key:
            raise MissingCredentialError()

        youtube = self.youtube_factory(api_key)
        details = youtube.get_video_details([video_id])
        video = details.get(video_id)
        if video is None:
            raise VideoNotFoundError(f"Video not found: {video_id}")

        result = VideoOptimization(video=video)
        try:
            result.optimization = self.ai_service.analyze_video_for_optimization(video)
        except (AIServiceError, ResponseParseError) as e:
            logger.error(f"Analysis failed for {video_id}: {e}")

        return result

    def edit_thumbnail(self, image_data_url: str, instruction: str) -> Optional[str]:
        """Edit a thumbnail image; returns a data URL or None on failure."""
        return self.ai_service.edit_thumbnail(image_data_url, instruction)
