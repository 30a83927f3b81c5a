"""
Review Scoring Configuration
============================

Every numeric threshold used by the review analysis pipeline.

The sentiment scale (5) and the emotional thresholds (0.7 / 0.3) are tied
to each other: raw lexicon scores are divided by the scale, so anything
beyond +/-5 saturates, and the dashboard buckets (0.33) were tuned on
that distribution. Change them together or not at all.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SentimentConfig:
    """Sentiment normalisation and intensity buckets."""
    # raw lexicon score / scale, then clamped to [-1, 1]
    scale: float = 5.0

    # |score| > very_threshold -> "very positive" / "very negative"
    very_threshold: float = 0.7
    # |score| > mild_threshold -> "positive" / "negative"
    mild_threshold: float = 0.3

    # Dashboard sentiment breakdown (positive > 0.33, negative < -0.33)
    dashboard_threshold: float = 0.33


@dataclass(frozen=True)
class UrgencyConfig:
    """
    Additive response-urgency scoring (1-10).

    Adjustments stack; the total is capped at max_score.
    """
    base_score: int = 5
    max_score: int = 10
    no_text_score: int = 1
    error_score: int = 5

    low_rating_max: float = 2        # rating <= 2
    low_rating_bonus: int = 3
    mid_rating: float = 3            # rating == 3
    mid_rating_bonus: int = 1

    long_text_chars: int = 200       # len(text) > 200
    long_text_bonus: int = 1

    photo_bonus: int = 2
    urgent_keyword_bonus: int = 2    # applied once


@dataclass(frozen=True)
class LabelConfig:
    """Thresholds for the labels attached to reviews at ingestion."""
    urgent_min: int = 8
    medium_priority_min: int = 5


@dataclass(frozen=True)
class ScoringConfig:
    """Bundle of all review scoring configs."""
    sentiment: SentimentConfig = field(default_factory=SentimentConfig)
    urgency: UrgencyConfig = field(default_factory=UrgencyConfig)
    labels: LabelConfig = field(default_factory=LabelConfig)


DEFAULT_SCORING = ScoringConfig()
