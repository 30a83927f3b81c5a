"""
Review Keyword Extractor
========================

TF-IDF over a single document: the review itself. With a one-document
corpus every term has the same IDF, so the ranking is plain term
frequency; ties keep the order in which terms first appear.
"""

import logging
from typing import List, Optional

from sklearn.feature_extraction.text import TfidfVectorizer

from .fail_soft import fail_soft
from .review_lexicons import DEFAULT_LEXICONS, ReviewLexicons
from .review_text import is_blank, remove_stopwords, tokenize

logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 3
DEFAULT_KEYWORD_COUNT = 5


def _identity(tokens: List[str]) -> List[str]:
    return tokens


def rank_terms(tokens: List[str]) -> List[str]:
    """Rank distinct tokens by single-document TF-IDF weight, best first."""
    if not tokens:
        return []

    vectorizer = TfidfVectorizer(analyzer=_identity, lowercase=False)
    matrix = vectorizer.fit_transform([tokens])
    weights = matrix.toarray()[0]
    vocabulary = vectorizer.vocabulary_

    first_seen = {}
    for position, token in enumerate(tokens):
        first_seen.setdefault(token, position)

    return sorted(
        first_seen,
        key=lambda term: (-weights[vocabulary[term]], first_seen[term]),
    )


@fail_soft(default=[])
def extract_keywords(
    text: Optional[str],
    count: int = DEFAULT_KEYWORD_COUNT,
    *,
    lexicons: ReviewLexicons = DEFAULT_LEXICONS,
) -> List[str]:
    """
    Top `count` keywords of `text`, most relevant first.

    Stopwords are removed and only terms of 3+ characters are kept.
    Empty text and internal failures return [].
    """
    if is_blank(text) or count <= 0:
        return []

    tokens = tokenize(text)
    if not tokens:
        return []

    filtered = remove_stopwords(tokens, lexicons.stopwords)
    ranked = [term for term in rank_terms(filtered) if len(term) >= MIN_KEYWORD_LENGTH]
    return ranked[:count]
