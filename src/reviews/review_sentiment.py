"""
Review Sentiment Scorer
=======================

AFINN lexicon scoring: each known word contributes its integer weight
(-5..+5), a directly preceding negator ("not", "don't", "isn't", ...)
flips the sign, and the raw sum is divided by a fixed scale and clamped
to [-1, 1].

The word table is AFINN-165 as shipped with the `afinn` package. Words
only: multi-word AFINN entries never match a single token.
"""

import logging
from functools import lru_cache
from typing import AbstractSet, Mapping, Optional

from afinn import Afinn
from afinn.afinn import LANGUAGE_TO_FILENAME

from .fail_soft import fail_soft
from .review_lexicons import DEFAULT_LEXICONS, NEGATORS, ReviewLexicons
from .review_models import EmotionalIntensity
from .review_text import is_blank, sentiment_tokens
from .scoring_config import DEFAULT_SCORING, SentimentConfig

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def afinn_lexicon() -> Mapping[str, int]:
    """Load the AFINN-165 word table once per process."""
    afinn = Afinn(language="en")
    lexicon = afinn.read_word_file(afinn.full_filename(LANGUAGE_TO_FILENAME["en"]))
    logger.debug(f"Loaded AFINN-165 lexicon: {len(lexicon)} entries")
    return lexicon


def raw_sentiment_score(
    text: str,
    lexicon: Optional[Mapping[str, float]] = None,
    negators: AbstractSet[str] = frozenset(NEGATORS),
) -> float:
    """Sum of word weights, with single-word negation. Unbounded."""
    if lexicon is None:
        lexicon = afinn_lexicon()

    score = 0
    previous = None
    for token in sentiment_tokens(text):
        weight = lexicon.get(token)
        if weight:
            if previous in negators:
                weight = -weight
            score += weight
        previous = token
    return score


@fail_soft(default=0.0)
def analyze_sentiment(
    text: Optional[str],
    *,
    lexicons: ReviewLexicons = DEFAULT_LEXICONS,
    config: SentimentConfig = DEFAULT_SCORING.sentiment,
) -> float:
    """
    Sentiment of `text` normalised to [-1, 1].

    Empty text and internal failures return 0 (neutral). Raw scores beyond
    +/- config.scale saturate at +/-1.
    """
    if is_blank(text):
        return 0.0

    raw = raw_sentiment_score(text, lexicons.sentiment_lexicon, lexicons.negators)
    return max(-1.0, min(1.0, raw / config.scale))


def emotional_intensity(
    sentiment: float,
    config: SentimentConfig = DEFAULT_SCORING.sentiment,
) -> str:
    """Bucket a sentiment score. Boundaries fall to the weaker bucket."""
    magnitude = abs(sentiment)
    if magnitude > config.very_threshold:
        bucket = EmotionalIntensity.VERY_POSITIVE if sentiment > 0 else EmotionalIntensity.VERY_NEGATIVE
    elif magnitude > config.mild_threshold:
        bucket = EmotionalIntensity.POSITIVE if sentiment > 0 else EmotionalIntensity.NEGATIVE
    else:
        bucket = EmotionalIntensity.NEUTRAL
    return bucket.value


def sentiment_bucket(
    sentiment: float,
    config: SentimentConfig = DEFAULT_SCORING.sentiment,
) -> str:
    """Dashboard breakdown bucket: positive / neutral / negative."""
    if sentiment > config.dashboard_threshold:
        return "positive"
    if sentiment < -config.dashboard_threshold:
        return "negative"
    return "neutral"
