"""Core routes for the HachiTrend API (root and health check)."""

from fastapi import APIRouter

from hachitrend import __version__
from hachitrend.api.schemas import HealthResponse, RootResponse

router = APIRouter(tags=["Core"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="API root",
    description="Returns API name and version.",
)
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "HachiTrend API", "version": __version__}


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns server health status.",
)
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
