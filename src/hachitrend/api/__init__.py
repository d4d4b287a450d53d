"""HTTP API for HachiTrend."""
