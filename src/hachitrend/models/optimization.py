"""Data models for the video optimizer."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class VideoOptimizationResult:
    """AI suggestions for an existing video's metadata."""

    critique: str
    improved_titles: List[str] = field(default_factory=list)
    improved_description: str = ""
    improved_tags: List[str] = field(default_factory=list)
    thumbnail_suggestions: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Optional["VideoOptimizationResult"]:
        if not isinstance(data, dict):
            return None

        def _strings(value) -> List[str]:
            if not isinstance(value, list):
                return []
            return [str(v).strip() for v in value if str(v).strip()]

        critique = str(data.get("critique") or "").strip()
        titles = _strings(data.get("improvedTitles", data.get("improved_titles")))
        if not critique and not titles:
            return None

        return cls(
            critique=critique,
            improved_titles=titles,
            improved_description=str(
                data.get("improvedDescription", data.get("improved_description")) or ""
            ).strip(),
            improved_tags=_strings(data.get("improvedTags", data.get("improved_tags"))),
            thumbnail_suggestions=str(
                data.get("thumbnailSuggestions", data.get("thumbnail_suggestions")) or ""
            ).strip(),
        )

    def to_dict(self) -> dict:
        return {
            "critique": self.critique,
            "improved_titles": list(self.improved_titles),
            "improved_description": self.improved_description,
            "improved_tags": list(self.improved_tags),
            "thumbnail_suggestions": self.thumbnail_suggestions,
        }
