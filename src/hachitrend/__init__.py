"""HachiTrend: YouTube content-strategy assistant."""

__version__ = "1.0.0"
