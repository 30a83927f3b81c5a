"""
Review Lexicons
===============

Every word list used by the review text-analysis pipeline, kept as data.

Topic triggers, comparative phrases, urgent keywords and actionable terms
are matched as case-insensitive substrings of the review text (not as
tokens), so "ill" also fires on "will" and "close" on "closed". Lists are
kept exactly as the dashboard shipped them so outputs stay comparable
with already-stored reviews.

Usage:
    from src.reviews.review_lexicons import DEFAULT_LEXICONS, load_lexicons

    lexicons = load_lexicons("config/lexicons.json")  # partial override
    topics = classify_topics(text, lexicons=lexicons)
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

logger = logging.getLogger(__name__)


# =============================================================================
# TOPIC TRIGGERS
# =============================================================================
# category -> trigger substrings. A category fires on its first matching trigger.

TOPIC_TRIGGERS: Dict[str, Tuple[str, ...]] = {
    "service": (
        "service", "staff", "friendly", "helpful", "polite",
        "professional", "attentive", "rude", "slow",
    ),
    "quality": (
        "quality", "excellent", "great", "good", "bad",
        "poor", "terrible", "amazing", "awesome",
    ),
    "price": (
        "price", "expensive", "cheap", "affordable", "value",
        "worth", "overpriced", "reasonable",
    ),
    "cleanliness": (
        "clean", "dirty", "spotless", "filthy", "hygiene",
        "neat", "tidy", "mess",
    ),
    "food": (
        "food", "delicious", "tasty", "flavor", "menu",
        "dish", "meal", "portion", "ingredient",
    ),
    "location": (
        "location", "parking", "convenient", "close", "far",
        "accessibility", "distance",
    ),
    "atmosphere": (
        "atmosphere", "ambiance", "environment", "noise", "quiet",
        "loud", "music", "cozy", "comfortable",
    ),
    "wait": (
        "wait", "time", "quick", "fast", "slow",
        "delay", "prompt", "waited", "minutes", "hour",
    ),
    "product": (
        "product", "item", "purchase", "bought", "broken",
        "works", "quality", "durable",
    ),
}

# Only added when the business category mentions "restaurant".
RESTAURANT_TOPIC_TRIGGERS: Dict[str, Tuple[str, ...]] = {
    "taste": (
        "taste", "flavor", "delicious", "bland", "spicy",
        "sweet", "sour", "bitter", "savory",
    ),
    "portion": (
        "portion", "serving", "size", "generous", "small",
        "large", "enough", "tiny", "huge",
    ),
    "freshness": (
        "fresh", "rotten", "stale", "new", "old", "soggy", "crispy",
    ),
}


# =============================================================================
# COMPETITIVE PHRASES
# =============================================================================

COMPARATIVE_PHRASES: Tuple[str, ...] = (
    "better than", "worse than", "compared to", "similar to", "unlike",
    "prefer", "rather go to", "instead of", "more than", "less than",
)

# Phrases that favour the reviewed business vs. the competitor.
POSITIVE_COMPARATIVE_PHRASES: Tuple[str, ...] = ("better than", "prefer", "more than")
NEGATIVE_COMPARATIVE_PHRASES: Tuple[str, ...] = ("worse than", "rather go to", "instead of")

# Naive stand-in for named-entity recognition.
COMPETITOR_NAME_PATTERN = r"[A-Z][a-z]+(?:'s)?"


# =============================================================================
# URGENCY / ACTIONABILITY
# =============================================================================

URGENT_KEYWORDS: Tuple[str, ...] = (
    "terrible", "awful", "horrible", "never again", "disaster", "emergency",
    "health", "safety", "danger", "sick", "ill", "food poisoning", "dirty",
    "filthy", "gross", "disgusting", "refund", "manager", "lawsuit", "legal",
)

ACTIONABLE_TERMS: Tuple[str, ...] = (
    "should", "need", "improve", "fix", "better", "change", "consider",
    "recommend", "suggestion", "try", "please", "would", "could", "wish",
)


# =============================================================================
# SENTIMENT NEGATION
# =============================================================================
# A negator directly before a scored word flips that word's sign.

NEGATORS: Tuple[str, ...] = (
    "not", "non",
    "dont", "don't",
    "cant", "can't",
    "doesnt", "doesn't",
    "isnt", "isn't",
    "wont", "won't",
)


# =============================================================================
# STOPWORDS
# =============================================================================
# scikit-learn's English list also drops content nouns and adjectives that
# carry meaning in a review ("the bill was wrong", "found a hair").

REVIEW_CONTENT_WORDS: Tuple[str, ...] = (
    "bill", "bottom", "computer", "cry", "describe", "detail", "empty",
    "fill", "find", "fire", "found", "front", "full", "interest", "move",
    "part", "serious", "show", "side", "sincere", "system", "thick",
    "thin", "top",
)

STOPWORDS = frozenset(ENGLISH_STOP_WORDS - set(REVIEW_CONTENT_WORDS))


# =============================================================================
# LEXICON BUNDLE
# =============================================================================

@dataclass(frozen=True)
class ReviewLexicons:
    """
    Read-only bundle of all analysis word lists.

    sentiment_lexicon=None means "use the AFINN-165 word table".
    """
    topic_triggers: Mapping[str, Tuple[str, ...]]
    restaurant_topic_triggers: Mapping[str, Tuple[str, ...]]
    comparative_phrases: Tuple[str, ...]
    positive_comparative_phrases: Tuple[str, ...]
    negative_comparative_phrases: Tuple[str, ...]
    competitor_name_pattern: str
    urgent_keywords: Tuple[str, ...]
    actionable_terms: Tuple[str, ...]
    stopwords: frozenset
    negators: frozenset = frozenset(NEGATORS)
    sentiment_lexicon: Optional[Mapping[str, float]] = None


DEFAULT_LEXICONS = ReviewLexicons(
    topic_triggers=TOPIC_TRIGGERS,
    restaurant_topic_triggers=RESTAURANT_TOPIC_TRIGGERS,
    comparative_phrases=COMPARATIVE_PHRASES,
    positive_comparative_phrases=POSITIVE_COMPARATIVE_PHRASES,
    negative_comparative_phrases=NEGATIVE_COMPARATIVE_PHRASES,
    competitor_name_pattern=COMPETITOR_NAME_PATTERN,
    urgent_keywords=URGENT_KEYWORDS,
    actionable_terms=ACTIONABLE_TERMS,
    stopwords=STOPWORDS,
)

_MAPPING_FIELDS = {"topic_triggers", "restaurant_topic_triggers"}


def _coerce(name: str, value):
    """Convert JSON values (lists/dicts) into the frozen shapes used above."""
    if name in _MAPPING_FIELDS:
        return {str(k): tuple(v) for k, v in dict(value).items()}
    if name in ("stopwords", "negators"):
        return frozenset(str(w).lower() for w in value)
    if name == "sentiment_lexicon":
        return {str(k).lower(): float(v) for k, v in dict(value).items()}
    if name == "competitor_name_pattern":
        return str(value)
    return tuple(value)


def lexicons_from_dict(data: Dict, base: ReviewLexicons = DEFAULT_LEXICONS) -> ReviewLexicons:
    """
    Overlay a plain dict onto `base`.

    Raises:
        ValueError: on keys that are not ReviewLexicons fields
    """
    known = {f.name for f in fields(ReviewLexicons)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown lexicon fields: {', '.join(unknown)}")

    overrides = {name: _coerce(name, value) for name, value in data.items()}
    return replace(base, **overrides)


def load_lexicons(path, base: ReviewLexicons = DEFAULT_LEXICONS) -> ReviewLexicons:
    """
    Load a JSON lexicon override file.

    Keys present in the file replace the matching default list; anything
    missing keeps its default.

    Raises:
        FileNotFoundError: if `path` does not exist
        ValueError: on unknown keys or a non-object document
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Lexicon file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Lexicon file {path} must contain a JSON object")

    lexicons = lexicons_from_dict(data, base)
    logger.info(f"Loaded lexicon overrides from {path}: {sorted(data)}")
    return lexicons
