"""
Review text tokenization and stopword filtering.
"""

import logging
import re
from typing import Iterable, List, Optional

from .review_lexicons import DEFAULT_LEXICONS

logger = logging.getLogger(__name__)

# Word characters only; apostrophes and hyphens split words ("joe's" -> "joe", "s").
WORD_PATTERN = re.compile(r"\w+")

# Sentiment tokens keep apostrophes so negators like "don't" survive.
_SENTIMENT_STRIP = re.compile(r"[.,/#!$%^&*;:{}=_`\"~()?]")


def is_blank(text: Optional[str]) -> bool:
    """True for None, empty and whitespace-only text."""
    return not text or not text.strip()


def tokenize(text: str) -> List[str]:
    """Lowercase `text` and split it into word tokens."""
    return WORD_PATTERN.findall(text.lower())


def sentiment_tokens(text: str) -> List[str]:
    """Whitespace tokens with punctuation stripped, for lexicon lookups."""
    cleaned = _SENTIMENT_STRIP.sub("", text.lower().replace("\n", " "))
    return cleaned.split()


def remove_stopwords(tokens: List[str], stopwords: Optional[Iterable[str]] = None) -> List[str]:
    """
    Drop stopwords from `tokens`.

    Falls back to the unfiltered tokens if filtering fails; keyword
    extraction should degrade, not disappear.
    """
    if stopwords is None:
        stopwords = DEFAULT_LEXICONS.stopwords
    try:
        return [t for t in tokens if t not in stopwords]
    except Exception as e:
        logger.warning(f"Stopword removal failed, using original tokens: {e}")
        return list(tokens)
