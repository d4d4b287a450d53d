"""Shared exception types and per-flow error policies."""

from enum import Enum


class ErrorPolicy(str, Enum):
    """What a call site does when a stage below it fails.

    Each flow picks its own policy: trend discovery may degrade to the
    Gemini-only path, outlier hunting must surface the real failure.
    """

    PROPAGATE = "propagate"
    FALLBACK = "fallback"
    SUPPRESS = "suppress"


class HachiTrendError(Exception):
    """Base error for the application."""

    pass


class MissingCredentialError(HachiTrendError):
    """Raised when a flow needs the YouTube API key and none is stored."""

    def __init__(self, message: str = "YouTube API key required"):
        super().__init__(message)


class ResponseParseError(HachiTrendError):
    """Raised when a generative-model response cannot be parsed."""

    pass
