"""Base utilities for prompts module.

Contains shared helper functions used across prompt modules.
"""

import re

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_markdown_code_blocks(text: str) -> str:
    """Strip markdown code fences from AI response text.

    Args:
        text: Raw text that may contain markdown code blocks

    Returns:
        Cleaned text with every ``` / ```json fence removed
    """
    return _FENCE_RE.sub("", text or "").strip()
