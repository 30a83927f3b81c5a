"""
Rule-based review topic classifier.
"""

import logging
from typing import Dict, Optional, Set, Tuple

from .fail_soft import fail_soft
from .review_lexicons import DEFAULT_LEXICONS, ReviewLexicons
from .review_text import is_blank

logger = logging.getLogger(__name__)


def topic_triggers_for(
    business_category: Optional[str],
    lexicons: ReviewLexicons = DEFAULT_LEXICONS,
) -> Dict[str, Tuple[str, ...]]:
    """Trigger map for a business; restaurants get taste/portion/freshness too."""
    triggers = dict(lexicons.topic_triggers)
    if business_category and "restaurant" in business_category.lower():
        triggers.update(lexicons.restaurant_topic_triggers)
    return triggers


@fail_soft(default=set())
def classify_topics(
    text: Optional[str],
    business_category: Optional[str] = None,
    *,
    lexicons: ReviewLexicons = DEFAULT_LEXICONS,
) -> Set[str]:
    """
    Topics mentioned in `text`.

    A topic fires when any of its trigger strings is a substring of the
    lowercased text. Empty text and internal failures return an empty set.
    """
    if is_blank(text):
        return set()

    lower_text = text.lower()
    return {
        topic
        for topic, keywords in topic_triggers_for(business_category, lexicons).items()
        if any(kw in lower_text for kw in keywords)
    }
