"""
Review Insight Aggregator
==========================

Aggregates stored reviews into the team overview metrics: rating,
reply behaviour, sentiment breakdown, platform mix and top keywords.

Usage:
    aggregator = ReviewMetricsAggregator()
    metrics = aggregator.build_metrics(reviews)
"""

import json
import logging
import math
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple, Union

from .review_models import ReviewMetrics
from .review_sentiment import sentiment_bucket
from .scoring_config import DEFAULT_SCORING, SentimentConfig

logger = logging.getLogger(__name__)

TREND_WINDOW_DAYS = 30
TOP_KEYWORDS = 5


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (trailing 'Z' allowed) into an aware datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _review_keywords(review: Dict) -> List[str]:
    """Keywords are stored either as a list or as a JSON-encoded string."""
    keywords = review.get("keywords")
    if not keywords:
        return []
    if isinstance(keywords, str):
        keywords = json.loads(keywords)
    if not isinstance(keywords, list):
        raise ValueError(f"keywords must be a list, got {type(keywords).__name__}")
    return [str(k) for k in keywords]


@dataclass
class StoredReview:
    """The fields of a stored review dict the metrics read, parsed."""
    rating: float
    sentiment: Optional[float]
    reviewed_at: Optional[datetime]
    replied: bool
    answered_at: Optional[datetime]
    keywords: List[str]
    source: str

    @classmethod
    def from_dict(cls, review: Dict) -> "StoredReview":
        """
        Raises:
            KeyError: if rating is missing
            ValueError / TypeError: on unparseable rating, sentiment, dates or keywords
        """
        sentiment = review.get("sentiment")
        return cls(
            rating=float(review["rating"]),
            sentiment=float(sentiment) if sentiment is not None else None,
            reviewed_at=parse_timestamp(review.get("date")),
            replied=bool(review.get("reply")),
            answered_at=parse_timestamp(review.get("updated_at")),
            keywords=_review_keywords(review),
            source=review.get("source") or "UNKNOWN",
        )


class ReviewMetricsAggregator:
    """
    Builds dashboard metrics from stored review dicts.

    Expected keys per review: rating, reply, date, updated_at, sentiment,
    keywords, source. Records that cannot be parsed are skipped with a
    warning and counted in ReviewMetrics.skipped_reviews.
    """

    def __init__(self, sentiment_config: SentimentConfig = DEFAULT_SCORING.sentiment):
        self.sentiment_config = sentiment_config

    def parse_reviews(self, reviews: List[Dict]) -> Tuple[List[StoredReview], int]:
        """Parse stored review dicts; returns (parsed reviews, skipped count)."""
        parsed: List[StoredReview] = []
        skipped = 0
        for index, review in enumerate(reviews):
            try:
                parsed.append(StoredReview.from_dict(review))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                skipped += 1
                logger.warning(
                    f"Skipping stored review {index}: {type(e).__name__}: {e}",
                    extra={"stage": "metrics"},
                )
        return parsed, skipped

    def build_metrics(
        self,
        reviews: List[Dict],
        now: Optional[datetime] = None,
    ) -> Optional[ReviewMetrics]:
        """
        Compute overview metrics. Returns None when no review is usable.

        Sentiment breakdown only counts reviews with a non-zero stored
        sentiment; unanalysed (None) and exactly-neutral (0) reviews are
        left out of all three buckets.
        """
        parsed, skipped = self.parse_reviews(reviews or [])
        if not parsed:
            return None

        now = parse_timestamp(now) if now else datetime.now(timezone.utc)

        total = len(parsed)
        avg_rating = sum(r.rating for r in parsed) / total

        # Replies
        replied = [r for r in parsed if r.replied]
        reply_rate = len(replied) / total * 100

        response_days = [
            (r.answered_at - r.reviewed_at).total_seconds() / 86400
            for r in replied if r.reviewed_at and r.answered_at
        ]
        avg_response_days = sum(response_days) / len(response_days) if response_days else 0.0

        # Sentiment breakdown
        buckets = Counter(
            sentiment_bucket(r.sentiment, self.sentiment_config)
            for r in parsed if r.sentiment
        )
        bucketed = sum(buckets.values())
        sentiment_distribution = {
            name: (buckets[name] / bucketed * 100 if bucketed else 0.0)
            for name in ("positive", "neutral", "negative")
        }

        platform_counts = dict(Counter(r.source for r in parsed))
        rating_distribution = dict(Counter(math.floor(r.rating) for r in parsed))

        # Trend: last 30 days vs overall
        cutoff = now - timedelta(days=TREND_WINDOW_DAYS)
        recent = [r.rating for r in parsed if r.reviewed_at and r.reviewed_at >= cutoff]
        recent_avg = sum(recent) / len(recent) if recent else 0.0
        rating_trend = (recent_avg - avg_rating) / avg_rating * 100 if avg_rating else 0.0

        keyword_counts = Counter()
        for r in parsed:
            keyword_counts.update(r.keywords)

        metrics = ReviewMetrics(
            total_reviews=total,
            avg_rating=avg_rating,
            reply_rate=reply_rate,
            avg_response_days=avg_response_days,
            sentiment_distribution=sentiment_distribution,
            platform_counts=platform_counts,
            rating_distribution=rating_distribution,
            rating_trend=rating_trend,
            top_keywords=keyword_counts.most_common(TOP_KEYWORDS),
            skipped_reviews=skipped,
        )

        logger.info(
            f"Built metrics for {total} reviews: avg_rating={avg_rating:.2f}, "
            f"reply_rate={reply_rate:.1f}%, skipped={skipped}",
            extra={"stage": "metrics", "count": total},
        )
        return metrics
