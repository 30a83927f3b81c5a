"""
Review Analysis Data Models
===========================

Structured outputs from the review text-analysis pipeline.
`sentiment` and `keywords` are persisted on the review record; the rest
feed labels, badges and dashboard filters.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional, Set, Tuple


class EmotionalIntensity(str, Enum):
    """Emotional intensity bucket derived from the sentiment score."""
    VERY_POSITIVE = "very positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    VERY_NEGATIVE = "very negative"


class ReviewLabel(str, Enum):
    """Labels attached to a review at ingestion time."""
    URGENT = "urgent"
    MEDIUM_PRIORITY = "medium-priority"
    MENTIONS_COMPETITOR = "mentions-competitor"
    FAVORABLE_COMPARISON = "favorable-comparison"
    UNFAVORABLE_COMPARISON = "unfavorable-comparison"


class MarketPlatform(str, Enum):
    """Review sources a team can connect."""
    GOOGLE_MAPS = "GOOGLE_MAPS"
    FACEBOOK = "FACEBOOK"
    YELP = "YELP"


@dataclass(frozen=True)
class ReviewInput:
    """Raw review text plus the metadata the analyzers look at."""
    text: Optional[str]
    rating: float
    business_category: Optional[str] = None
    has_photos: bool = False


@dataclass
class ReviewAnalysis:
    """Composite analysis of one review. Defaults are the 'nothing to analyze' result."""
    sentiment: float = 0.0
    keywords: List[str] = field(default_factory=list)
    topics: Set[str] = field(default_factory=set)
    emotional: str = EmotionalIntensity.NEUTRAL.value
    actionable: bool = False

    def to_dict(self) -> Dict:
        return {
            "sentiment": self.sentiment,
            "keywords": list(self.keywords),
            "topics": sorted(self.topics),
            "emotional": self.emotional,
            "actionable": self.actionable,
        }


@dataclass
class CompetitiveInsight:
    """Comparative mentions found in a review (heuristic, not NER)."""
    competitor_mentions: List[str] = field(default_factory=list)
    comparative_positive: bool = False

    @property
    def mentions_competitor(self) -> bool:
        return len(self.competitor_mentions) > 0

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class EnrichedReview:
    """
    A scraped review with all derived fields attached.

    Mirrors the columns the dashboard stores per review.
    """
    external_id: str
    source: str
    author: Optional[str]
    rating: float
    text: str
    published_at: Optional[str]
    photo_count: int
    photo_urls: List[str]
    reply: Optional[str]
    reply_date: Optional[str]
    has_reply: bool
    language: str
    source_url: Optional[str]
    author_image: Optional[str]

    # Derived
    sentiment: float
    keywords: List[str]
    topics: List[str]
    emotional: str
    actionable: bool
    response_urgency: int
    competitor_mentions: List[str]
    comparative_positive: bool
    labels: List[str]

    # Triage state
    is_read: bool = False
    is_important: bool = False

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class ReviewMetrics:
    """Dashboard overview metrics for a set of stored reviews."""
    total_reviews: int
    avg_rating: float
    reply_rate: float                     # % of reviews with a reply
    avg_response_days: float              # replied reviews only
    sentiment_distribution: Dict[str, float]
    platform_counts: Dict[str, int]
    rating_distribution: Dict[int, int]
    rating_trend: float                   # % change of 30-day avg vs overall avg
    top_keywords: List[Tuple[str, int]]
    skipped_reviews: int = 0              # unparseable records left out

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["top_keywords"] = [list(kw) for kw in self.top_keywords]
        return data
