"""Translation of service exceptions into HTTP responses."""

import logging

from fastapi import HTTPException

from hachitrend.services.video_optimizer_service import InvalidVideoUrlError, VideoNotFoundError
from hachitrend.utils.errors import HachiTrendError, MissingCredentialError

logger = logging.getLogger(__name__)


def to_http_exception(error: Exception) -> HTTPException:
    """Map an exception raised by a service to an HTTPException.

    400 for missing configuration or bad input, 404 for unknown videos,
    502 for YouTube, Gemini and response-parsing failures, 500 otherwise.
    """
    if isinstance(error, (MissingCredentialError, InvalidVideoUrlError, ValueError)):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, VideoNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, HachiTrendError):
        return HTTPException(status_code=502, detail=str(error))

    logger.exception(f"Unhandled error: {error}")
    return HTTPException(status_code=500, detail="Internal server error")
