"""
Review Signal Extractor (Deterministic)
========================================

Per-review signals used to triage incoming reviews: the composite text
analysis, competitor comparisons and how urgently the owner should reply.
No model calls. Every function here is total: bad input produces the
documented default, never an exception.

Usage:
    analysis = analyze_review(text, rating, business_category)
    urgency = calculate_response_urgency(text, rating, has_photos)
    insight = analyze_competitive_insights(text)
"""

import logging
import re
from typing import Optional

from .fail_soft import fail_soft
from .review_keywords import extract_keywords, DEFAULT_KEYWORD_COUNT
from .review_lexicons import DEFAULT_LEXICONS, ReviewLexicons
from .review_models import CompetitiveInsight, ReviewAnalysis, ReviewInput
from .review_sentiment import analyze_sentiment, emotional_intensity
from .review_text import is_blank
from .review_topics import classify_topics
from .scoring_config import DEFAULT_SCORING, ScoringConfig, UrgencyConfig

logger = logging.getLogger(__name__)


def _contains_any(lower_text: str, phrases) -> bool:
    return any(phrase in lower_text for phrase in phrases)


# =============================================================================
# COMPETITIVE INSIGHTS
# =============================================================================

@fail_soft(default=CompetitiveInsight())
def analyze_competitive_insights(
    text: Optional[str],
    *,
    lexicons: ReviewLexicons = DEFAULT_LEXICONS,
) -> CompetitiveInsight:
    """
    Detect comparisons with other businesses.

    Competitor names are every capitalized word in the text (with an
    optional possessive 's), unfiltered and possibly duplicated. They are
    only collected when a comparative phrase is present.
    """
    if is_blank(text):
        return CompetitiveInsight()

    lower_text = text.lower()
    if not _contains_any(lower_text, lexicons.comparative_phrases):
        return CompetitiveInsight()

    mentions = re.findall(lexicons.competitor_name_pattern, text)

    positive = sum(1 for p in lexicons.positive_comparative_phrases if p in lower_text)
    negative = sum(1 for p in lexicons.negative_comparative_phrases if p in lower_text)

    return CompetitiveInsight(
        competitor_mentions=mentions,
        comparative_positive=positive > negative,
    )


# =============================================================================
# RESPONSE URGENCY
# =============================================================================

@fail_soft(default=DEFAULT_SCORING.urgency.error_score)
def calculate_response_urgency(
    text: Optional[str],
    rating: float,
    has_photos: bool,
    *,
    lexicons: ReviewLexicons = DEFAULT_LEXICONS,
    config: UrgencyConfig = DEFAULT_SCORING.urgency,
) -> int:
    """
    How urgently a review needs an owner response, 1 (low) to 10 (high).

    Base 5, then stacking bonuses:
        rating <= 2        +3   (rating == 3: +1)
        text > 200 chars   +1
        has photos         +2
        urgent keyword     +2   (once)
    capped at 10. No text scores 1: there is nothing to respond to.
    """
    if is_blank(text):
        return config.no_text_score

    score = config.base_score

    if rating <= config.low_rating_max:
        score += config.low_rating_bonus
    elif rating == config.mid_rating:
        score += config.mid_rating_bonus

    if len(text) > config.long_text_chars:
        score += config.long_text_bonus

    if has_photos:
        score += config.photo_bonus

    if _contains_any(text.lower(), lexicons.urgent_keywords):
        score += config.urgent_keyword_bonus

    return min(config.max_score, score)


# =============================================================================
# COMPOSITE ANALYSIS
# =============================================================================

def is_actionable(text: str, lexicons: ReviewLexicons = DEFAULT_LEXICONS) -> bool:
    """True if the review suggests something the business could act on."""
    return _contains_any(text.lower(), lexicons.actionable_terms)


@fail_soft(default=ReviewAnalysis())
def analyze_review(
    text: Optional[str],
    rating: float,
    business_category: Optional[str] = None,
    *,
    keyword_count: int = DEFAULT_KEYWORD_COUNT,
    lexicons: ReviewLexicons = DEFAULT_LEXICONS,
    scoring: ScoringConfig = DEFAULT_SCORING,
) -> ReviewAnalysis:
    """
    Sentiment, keywords, topics, emotional intensity and actionability.

    `rating` is accepted for call-site symmetry with the other signals;
    the text alone drives the analysis. Empty text returns the default
    ReviewAnalysis without running any analyzer.
    """
    if is_blank(text):
        return ReviewAnalysis()

    sentiment = analyze_sentiment(text, lexicons=lexicons, config=scoring.sentiment)

    return ReviewAnalysis(
        sentiment=sentiment,
        keywords=extract_keywords(text, keyword_count, lexicons=lexicons),
        topics=classify_topics(text, business_category, lexicons=lexicons),
        emotional=emotional_intensity(sentiment, scoring.sentiment),
        actionable=is_actionable(text, lexicons),
    )


def analyze_review_input(
    review: ReviewInput,
    *,
    keyword_count: int = DEFAULT_KEYWORD_COUNT,
    lexicons: ReviewLexicons = DEFAULT_LEXICONS,
    scoring: ScoringConfig = DEFAULT_SCORING,
) -> ReviewAnalysis:
    """analyze_review() for a ReviewInput."""
    return analyze_review(
        review.text,
        review.rating,
        review.business_category,
        keyword_count=keyword_count,
        lexicons=lexicons,
        scoring=scoring,
    )
