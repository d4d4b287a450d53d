"""Prompts module - centralized prompt templates for AI services.

Re-exports all prompt constants and utilities for easy importing:
    from hachitrend.services.prompts import PROMPT_VERSIONS, strip_markdown_code_blocks
    from hachitrend.services.prompts import TREND_CLUSTERER_V2, VIDEO_IDEAS_V1
"""

from hachitrend.services.prompts._base import strip_markdown_code_blocks
from hachitrend.services.prompts.ideas import (
    CHANNEL_ANALYZER_V1,
    SCRIPT_WRITER_V1,
    THUMBNAIL_GENERATOR_V1,
    VIDEO_IDEAS_V1,
)
from hachitrend.services.prompts.optimization import THUMBNAIL_EDITOR_V1, VIDEO_OPTIMIZER_V1
from hachitrend.services.prompts.trends import TREND_CLUSTERER_V2, TREND_SEARCH_V1

# Increment these when prompts change
PROMPT_VERSIONS = {
    "cluster_trends": "v2",  # v2: stats, intensity and trendNature fields
    "search_trends": "v1",
    "generate_video_ideas": "v1",
    "analyze_channel": "v1",
    "generate_script": "v1",
    "generate_thumbnail": "v1",
    "optimize_video": "v1",
    "edit_thumbnail": "v1",
}

__all__ = [
    # Utilities
    "strip_markdown_code_blocks",
    # Version tracking
    "PROMPT_VERSIONS",
    # Trend prompts
    "TREND_CLUSTERER_V2",
    "TREND_SEARCH_V1",
    # Idea and script prompts
    "VIDEO_IDEAS_V1",
    "CHANNEL_ANALYZER_V1",
    "SCRIPT_WRITER_V1",
    "THUMBNAIL_GENERATOR_V1",
    # Optimizer prompts
    "VIDEO_OPTIMIZER_V1",
    "THUMBNAIL_EDITOR_V1",
]
