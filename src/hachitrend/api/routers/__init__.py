"""API routers for the HachiTrend server."""

from hachitrend.api.routers import core, optimizer, outliers, settings, studio, trends

__all__ = ["core", "optimizer", "outliers", "settings", "studio", "trends"]
