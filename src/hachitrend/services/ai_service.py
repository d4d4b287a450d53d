"""AI service for trend clustering, idea generation and optimization using Google GenAI.

Every method that talks to Gemini translates SDK and transport failures into
AIServiceError. Malformed JSON from the model raises ResponseParseError
internally. Each public method decides whether that propagates or turns into
an empty result, matching what its flow tolerates.
"""

import base64
import binascii
import json
import logging
from typing import Any, List, Optional, Tuple

import httpx
from google.genai import Client
from google.genai import errors as genai_errors
from google.genai import types

from hachitrend.models.optimization import VideoOptimizationResult
from hachitrend.models.trend import (
    ChannelAnalysisResult,
    ScriptData,
    Trend,
    TrendSource,
    VideoIdea,
)
from hachitrend.models.video import VideoRecord
from hachitrend.services.prompts import (
    CHANNEL_ANALYZER_V1,
    SCRIPT_WRITER_V1,
    THUMBNAIL_EDITOR_V1,
    THUMBNAIL_GENERATOR_V1,
    TREND_CLUSTERER_V2,
    TREND_SEARCH_V1,
    VIDEO_IDEAS_V1,
    VIDEO_OPTIMIZER_V1,
    strip_markdown_code_blocks,
)
from hachitrend.utils.errors import HachiTrendError, ResponseParseError

logger = logging.getLogger(__name__)

SCRIPT_THINKING_BUDGET = 1024


class AIServiceError(HachiTrendError):
    """Error response from the generative model service."""

    pass


def parse_json_response(text: Optional[str]) -> Any:
    """Parse a JSON payload from model output, tolerating markdown fences.

    Args:
        text: Raw response text

    Returns:
        Decoded JSON value

    Raises:
        ResponseParseError: If the text is empty or not valid JSON
    """
    if not text:
        raise ResponseParseError("AI response is empty")
    cleaned = strip_markdown_code_blocks(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.debug(f"Raw response: {text[:500]}")
        raise ResponseParseError(f"Failed to parse AI response as JSON: {e}") from e


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """Split a base64 data URL into (mime_type, bytes).

    Raises:
        ValueError: If the string is not a base64 data URL
    """
    if not data_url.startswith("data:") or ";base64," not in data_url:
        raise ValueError("Expected a base64 data URL")
    header, payload = data_url[5:].split(";base64,", 1)
    try:
        return header or "image/png", base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def encode_data_url(mime_type: str, data: bytes) -> str:
    """Render raw image bytes as a data URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def _idea_schema() -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING),
            "hook": types.Schema(type=types.Type.STRING),
            "thumbnailDescription": types.Schema(type=types.Type.STRING),
            "targetAudience": types.Schema(type=types.Type.STRING),
            "estimatedEffort": types.Schema(
                type=types.Type.STRING, enum=["Low", "Medium", "High"]
            ),
            "tags": types.Schema(
                type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING)
            ),
        },
        required=[
            "title",
            "hook",
            "thumbnailDescription",
            "targetAudience",
            "estimatedEffort",
            "tags",
        ],
    )


def _script_schema() -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING),
            "outline": types.Schema(type=types.Type.STRING),
            "fullScript": types.Schema(type=types.Type.STRING),
        },
        required=["title", "outline", "fullScript"],
    )


def _optimization_schema() -> types.Schema:
    string_list = types.Schema(type=types.Type.ARRAY, items=types.Schema(type=types.Type.STRING))
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "critique": types.Schema(type=types.Type.STRING),
            "improvedTitles": string_list,
            "improvedDescription": types.Schema(type=types.Type.STRING),
            "improvedTags": string_list,
            "thumbnailSuggestions": types.Schema(type=types.Type.STRING),
        },
        required=[
            "critique",
            "improvedTitles",
            "improvedDescription",
            "improvedTags",
            "thumbnailSuggestions",
        ],
    )


class AIService:
    """Service for AI-powered trend analysis and content generation using Gemini."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-3-flash-preview",
        script_model_name: str = "gemini-3-pro-preview",
        image_model_name: str = "gemini-2.5-flash-image",
    ):
        """Initialize Google GenAI client.

        Args:
            api_key: Google GenAI API key
            model_name: Gemini model for analysis and structured output
            script_model_name: Gemini model for long-form scripts
            image_model_name: Gemini model for thumbnail images
        """
        self.api_key = api_key
        self.model_name = model_name
        self.script_model_name = script_model_name
        self.image_model_name = image_model_name
        self.client = Client(api_key=api_key)

        logger.info(f"Initialized AI service with model: {model_name}")

    def _generate(self, contents, model: Optional[str] = None, **config_kwargs):
        """Call generate_content, translating SDK and transport failures.

        Raises:
            AIServiceError: On API or network errors
        """
        model = model or self.model_name
        try:
            return self.client.models.generate_content(
                model=model,
                contents=contents,
                config=types.GenerateContentConfig(**config_kwargs) if config_kwargs else None,
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error ({model}): {e}")
            raise AIServiceError(f"Gemini request failed: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Network error calling Gemini ({model}): {e}")
            raise AIServiceError(f"Network error calling Gemini: {e}") from e

    @staticmethod
    def _parse_trends(payload: Any) -> List[Trend]:
        if isinstance(payload, dict):
            # Some responses wrap the array: {"trends": [...]}
            payload = payload.get("trends", [])
        if not isinstance(payload, list):
            raise ResponseParseError("Trend response is not a list")
        trends = []
        for index, item in enumerate(payload):
            trend = Trend.from_dict(item, index=index)
            if trend is not None:
                trends.append(trend)
        return trends

    @staticmethod
    def _grounding_sources(response) -> List[TrendSource]:
        """Extract web sources from a grounded response's metadata."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        metadata = getattr(candidates[0], "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []

        sources = []
        for chunk in chunks:
            web = getattr(chunk, "web", None)
            uri = getattr(web, "uri", None)
            title = getattr(web, "title", None)
            if uri and title:
                sources.append(TrendSource(uri=uri, title=title))
        return sources

    def cluster_trends(
        self,
        videos: List[dict],
        subject: str,
        trend_count: int = 5,
    ) -> List[Trend]:
        """Cluster real video data into macro trends.

        Args:
            videos: Video summaries (id, title, channel, views, subscribers, description)
            subject: Human-readable subject, e.g. 'the niche "Gaming"'
            trend_count: Number of trends to ask for

        Returns:
            Parsed trends; empty when the model returns no text

        Raises:
            AIServiceError: If the Gemini call itself fails
            ResponseParseError: If the model returns text that is not a trend list
        """
        if not videos:
            return []

        prompt = TREND_CLUSTERER_V2.format(
            video_count=len(videos),
            subject=subject,
            video_data=json.dumps(videos),
            trend_count=trend_count,
        )

        response = self._generate(prompt, response_mime_type="application/json")
        if not response.text:
            logger.warning("Trend clustering returned no text")
            return []

        try:
            trends = self._parse_trends(parse_json_response(response.text))
        except ResponseParseError as e:
            logger.warning(f"Trend clustering returned unusable output: {e}")
            raise

        logger.info(f"Clustered {len(videos)} videos into {len(trends)} trends")
        return trends

    def search_trends(
        self,
        niche: str,
        keyword: Optional[str] = None,
        trend_count: int = 5,
    ) -> List[Trend]:
        """Discover trends with Google Search grounding, without YouTube data.

        Web sources from the grounding metadata are attached to the first trend.

        Raises:
            AIServiceError: If the Gemini call fails
        """
        if keyword:
            context = f'specifically related to the keyword: "{keyword}".'
        else:
            context = f"specifically within the '{niche}' niche."

        prompt = TREND_SEARCH_V1.format(context=context, trend_count=trend_count)

        # JSON mode cannot be combined with the search tool; rely on the prompt
        response = self._generate(
            prompt,
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

        try:
            trends = self._parse_trends(parse_json_response(response.text))
        except ResponseParseError as e:
            logger.error(f"Failed to parse trends JSON: {e}")
            return []

        sources = self._grounding_sources(response)
        if trends and sources:
            trends[0].sources = sources

        logger.info(f"Grounded search found {len(trends)} trends")
        return trends

    def generate_video_ideas(self, trend: Trend, idea_count: int = 4) -> List[VideoIdea]:
        """Generate video ideas that capitalize on a trend.

        Returns:
            List of ideas; empty on any failure
        """
        prompt = VIDEO_IDEAS_V1.format(
            title=trend.title,
            description=trend.description,
            idea_count=idea_count,
        )

        try:
            response = self._generate(
                prompt,
                response_mime_type="application/json",
                response_schema=types.Schema(type=types.Type.ARRAY, items=_idea_schema()),
            )
            payload = parse_json_response(response.text)
        except (AIServiceError, ResponseParseError) as e:
            logger.error(f"Error generating ideas: {e}")
            return []

        if not isinstance(payload, list):
            logger.error("Idea generation response is not a list")
            return []

        ideas = [idea for idea in (VideoIdea.from_dict(item) for item in payload) if idea]
        logger.info(f"Generated {len(ideas)} ideas for trend '{trend.title}'")
        return ideas

    def analyze_channel(self, channel_name: str) -> ChannelAnalysisResult:
        """Analyze a channel's strategy with Google Search grounding.

        Raises:
            AIServiceError: If the Gemini call fails
            ResponseParseError: If no usable analysis came back
        """
        prompt = CHANNEL_ANALYZER_V1.format(channel_name=channel_name)

        response = self._generate(
            prompt,
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

        payload = parse_json_response(response.text)
        result = ChannelAnalysisResult.from_dict(payload)
        if result is None:
            raise ResponseParseError("No analysis generated")

        logger.info(f"Analyzed channel '{result.channel_name}' ({len(result.ideas)} ideas)")
        return result

    def generate_script(self, idea: VideoIdea) -> ScriptData:
        """Write a full video script for an idea.

        Raises:
            AIServiceError: If the Gemini call fails
            ResponseParseError: If no script came back
        """
        prompt = SCRIPT_WRITER_V1.format(
            title=idea.title,
            target_audience=idea.target_audience,
            hook=idea.hook,
        )

        response = self._generate(
            prompt,
            model=self.script_model_name,
            response_mime_type="application/json",
            response_schema=_script_schema(),
            thinking_config=types.ThinkingConfig(thinking_budget=SCRIPT_THINKING_BUDGET),
        )

        script = ScriptData.from_dict(parse_json_response(response.text))
        if script is None:
            raise ResponseParseError("No script generated")

        logger.info(f"Script generated: '{script.title}' ({len(script.full_script)} chars)")
        return script

    @staticmethod
    def _first_image(response) -> Optional[str]:
        candidates = getattr(response, "candidates", None) or []
        if not candidates or not getattr(candidates[0], "content", None):
            return None
        for part in candidates[0].content.parts or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data and inline_data.data:
                return encode_data_url(inline_data.mime_type or "image/png", inline_data.data)
        return None

    def generate_thumbnail(self, description: str) -> Optional[str]:
        """Generate a thumbnail image from a description.

        Returns:
            data: URL of the image, or None on failure
        """
        prompt = THUMBNAIL_GENERATOR_V1.format(description=description)
        try:
            response = self._generate(prompt, model=self.image_model_name)
        except AIServiceError as e:
            logger.error(f"Error generating thumbnail: {e}")
            return None

        image = self._first_image(response)
        if image is None:
            logger.warning("Thumbnail response contained no image")
        return image

    def edit_thumbnail(self, image_data_url: str, instruction: str) -> Optional[str]:
        """Edit an uploaded thumbnail following an instruction.

        Args:
            image_data_url: The source image as a base64 data URL
            instruction: What to change

        Returns:
            data: URL of the edited image, or None on failure

        Raises:
            ValueError: If image_data_url is not a base64 data URL
        """
        mime_type, data = decode_data_url(image_data_url)
        contents = [
            types.Part.from_bytes(data=data, mime_type=mime_type),
            THUMBNAIL_EDITOR_V1.format(instruction=instruction),
        ]
        try:
            response = self._generate(contents, model=self.image_model_name)
        except AIServiceError as e:
            logger.error(f"Error editing thumbnail: {e}")
            return None

        image = self._first_image(response)
        if image is None:
            logger.warning("Thumbnail edit response contained no image")
        return image

    def analyze_video_for_optimization(self, video: VideoRecord) -> VideoOptimizationResult:
        """Critique a video's metadata and propose improvements.

        Raises:
            AIServiceError: If the Gemini call fails
            ResponseParseError: If no usable suggestions came back
        """
        prompt = VIDEO_OPTIMIZER_V1.format(
            title=video.title,
            channel_name=video.channel_name,
            view_count=video.view_count,
            like_count=video.like_count,
            comment_count=video.comment_count,
            tags=", ".join(video.tags) if video.tags else "(none)",
            description=video.description or "(empty)",
        )

        response = self._generate(
            prompt,
            response_mime_type="application/json",
            response_schema=_optimization_schema(),
        )

        result = VideoOptimizationResult.from_dict(parse_json_response(response.text))
        if result is None:
            raise ResponseParseError("No optimization suggestions generated")
        return result
