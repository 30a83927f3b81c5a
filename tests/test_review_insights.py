"""
Tests for dashboard metrics aggregation.

Usage:
    pytest tests/test_review_insights.py -v
"""

from datetime import datetime, timezone

import pytest

from src.reviews.review_insights import ReviewMetricsAggregator, parse_timestamp


NOW = datetime(2025, 3, 31, tzinfo=timezone.utc)


def make_stored_review(
    rating: float,
    sentiment=None,
    date: str = "2025-03-20T00:00:00Z",
    reply=None,
    updated_at=None,
    keywords=None,
    source: str = "GOOGLE_MAPS",
) -> dict:
    """Helper to create a stored review dict."""
    return {
        "rating": rating,
        "sentiment": sentiment,
        "date": date,
        "reply": reply,
        "updated_at": updated_at or date,
        "keywords": keywords or [],
        "source": source,
    }


STORED_REVIEWS = [
    make_stored_review(
        5, sentiment=0.8, reply="Thank you!", date="2025-02-27T00:00:00Z",
        updated_at="2025-03-01T12:00:00Z", keywords=["pizza", "staff"],
    ),
    make_stored_review(4, sentiment=0.0, keywords='["pizza", "crust"]', date="2025-01-10T00:00:00Z"),
    make_stored_review(1, sentiment=-0.5, keywords=["cold", "pizza"], source="YELP"),
    make_stored_review(4.5, sentiment=0.2, date="2024-12-01T00:00:00Z"),
]


class TestParseTimestamp:

    def test_zulu_suffix(self):
        assert parse_timestamp("2025-03-01T00:00:00.000Z") == datetime(2025, 3, 1, tzinfo=timezone.utc)

    def test_naive_assumed_utc(self):
        assert parse_timestamp("2025-03-01T00:00:00").tzinfo == timezone.utc

    def test_datetime_passthrough(self):
        assert parse_timestamp(NOW) == NOW

    def test_none(self):
        assert parse_timestamp(None) is None


class TestReviewMetrics:
    """Tests for ReviewMetricsAggregator.build_metrics()."""

    def setup_method(self):
        self.aggregator = ReviewMetricsAggregator()
        self.metrics = self.aggregator.build_metrics(STORED_REVIEWS, now=NOW)

    def test_empty_returns_none(self):
        assert self.aggregator.build_metrics([]) is None

    def test_totals(self):
        assert self.metrics.total_reviews == 4
        assert self.metrics.avg_rating == pytest.approx(14.5 / 4)

    def test_reply_rate(self):
        assert self.metrics.reply_rate == pytest.approx(25.0)

    def test_avg_response_days(self):
        assert self.metrics.avg_response_days == pytest.approx(2.5)

    def test_sentiment_distribution_skips_zero(self):
        """0.0 sentiment is not counted; 0.8 / -0.5 / 0.2 are."""
        dist = self.metrics.sentiment_distribution
        assert dist["positive"] == pytest.approx(100 / 3)
        assert dist["neutral"] == pytest.approx(100 / 3)
        assert dist["negative"] == pytest.approx(100 / 3)

    def test_sentiment_distribution_all_unanalysed(self):
        metrics = self.aggregator.build_metrics([make_stored_review(5), make_stored_review(3, 0.0)], now=NOW)
        assert metrics.sentiment_distribution == {"positive": 0.0, "neutral": 0.0, "negative": 0.0}

    def test_platform_counts(self):
        assert self.metrics.platform_counts == {"GOOGLE_MAPS": 3, "YELP": 1}

    def test_rating_distribution_floors(self):
        assert self.metrics.rating_distribution == {5: 1, 4: 2, 1: 1}

    def test_rating_trend(self):
        """Only the Mar 20 review (rating 1) falls in the last 30 days."""
        recent_avg = 1.0
        overall = 14.5 / 4
        assert self.metrics.rating_trend == pytest.approx((recent_avg - overall) / overall * 100)

    def test_rating_trend_without_recent_reviews(self):
        metrics = self.aggregator.build_metrics(
            [make_stored_review(4, date="2020-01-01T00:00:00Z")], now=NOW,
        )
        assert metrics.rating_trend == pytest.approx(-100.0)

    def test_top_keywords(self):
        assert self.metrics.top_keywords[0] == ("pizza", 3)
        assert dict(self.metrics.top_keywords) == {"pizza": 3, "staff": 1, "crust": 1, "cold": 1}

    def test_to_dict(self):
        data = self.metrics.to_dict()
        assert data["total_reviews"] == 4
        assert data["top_keywords"][0] == ["pizza", 3]

    def test_malformed_records_skipped(self, caplog):
        reviews = STORED_REVIEWS + [
            make_stored_review(3, date="last tuesday"),
            make_stored_review(2, keywords='["pizza", '),
            make_stored_review(5, keywords='"just a string"'),
            {"sentiment": 0.5},
            "not a review",
        ]
        with caplog.at_level("WARNING"):
            metrics = self.aggregator.build_metrics(reviews, now=NOW)

        assert metrics.skipped_reviews == 5
        assert metrics.total_reviews == 4
        assert metrics.avg_rating == pytest.approx(14.5 / 4)
        assert "Skipping stored review 4" in caplog.text

    def test_only_malformed_records_returns_none(self):
        assert self.aggregator.build_metrics([make_stored_review(4, date="soon")]) is None

    def test_nothing_skipped(self):
        assert self.metrics.skipped_reviews == 0
