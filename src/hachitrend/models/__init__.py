# Data models for HachiTrend
from .video import VideoRecord, parse_count
from .channel import ChannelBaseline, compute_baseline
from .niche import Niche, NICHE_CATEGORY_MAP, category_for_niche
from .trend import (
    ChannelAnalysisResult,
    Effort,
    ScriptData,
    Trend,
    TrendNature,
    TrendSource,
    TrendStats,
    VideoIdea,
    classify_trend_nature,
)
from .outlier import (
    OutlierClassification,
    OutlierSearchResult,
    OutlierTier,
    OutlierVideo,
    calculate_tier,
    classify_outlier,
)
from .optimization import VideoOptimizationResult

__all__ = [
    "VideoRecord",
    "parse_count",
    "ChannelBaseline",
    "compute_baseline",
    "Niche",
    "NICHE_CATEGORY_MAP",
    "category_for_niche",
    # Trends
    "Trend",
    "TrendNature",
    "TrendSource",
    "TrendStats",
    "classify_trend_nature",
    # Ideas and scripts
    "VideoIdea",
    "Effort",
    "ScriptData",
    "ChannelAnalysisResult",
    # Outlier hunter
    "OutlierVideo",
    "OutlierTier",
    "OutlierClassification",
    "OutlierSearchResult",
    "calculate_tier",
    "classify_outlier",
    # Optimizer
    "VideoOptimizationResult",
]
