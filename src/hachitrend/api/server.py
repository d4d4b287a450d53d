"""FastAPI server for the HachiTrend web interface."""

import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from hachitrend import __version__
from hachitrend.api.dependencies import get_config
from hachitrend.api.routers import core, optimizer, outliers, settings, studio, trends
from hachitrend.utils.logging import (
    clear_request_context,
    get_logger,
    set_request_context,
    setup_logging,
)

config = get_config()
setup_logging(config.get("log_level", "INFO"), json_output=config.get("log_json", False))
logger = get_logger(__name__)

app = FastAPI(
    title="HachiTrend API",
    version=__version__,
    description="YouTube trend discovery, idea generation, outlier hunting and video optimization.",
)

# CORS middleware for the web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("cors_origins", []),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line of a request with a correlation id."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
    set_request_context(request_id)
    start = time.perf_counter()
    try:
        response = await call_next(request)
        logger.info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        clear_request_context()


app.include_router(core.router)
app.include_router(settings.router)
app.include_router(trends.router)
app.include_router(studio.router)
app.include_router(outliers.router)
app.include_router(optimizer.router)
