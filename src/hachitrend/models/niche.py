"""Content niches and their YouTube video category ids."""

from enum import Enum
from typing import Optional


class Niche(str, Enum):
    """Content niches a creator can browse."""

    GAMING = "Gaming"
    TECH = "Tech"
    LIFESTYLE = "Lifestyle"
    EDUCATION = "Education"
    ENTERTAINMENT = "Entertainment"
    FINANCE = "Finance"
    AI = "Artificial Intelligence"


NICHE_CATEGORY_MAP = {
    Niche.GAMING: "20",
    Niche.TECH: "28",
    Niche.LIFESTYLE: "26",  # Howto & Style
    Niche.EDUCATION: "27",
    Niche.ENTERTAINMENT: "24",
    Niche.FINANCE: "25",  # News & Politics
    Niche.AI: "28",  # Science & Technology
}


def category_for_niche(niche: str) -> Optional[str]:
    """Return the YouTube category id for a niche name, or None if unmapped."""
    try:
        return NICHE_CATEGORY_MAP[Niche(niche)]
    except ValueError:
        return None
