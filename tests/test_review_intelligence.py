"""
Tests for the review text analyzers.

Covers the leaf analyzers of the pipeline:
- Tokenization and stopword filtering
- Lexicon sentiment: normalisation, clamping, negation, intensity buckets
- Keyword extraction: single-document TF-IDF ranking, length filter, count
- Topic classification: substring triggers, restaurant extension
- Fail-soft behaviour: failures return the documented default

Usage:
    pytest tests/test_review_intelligence.py -v
"""

import pytest

from src.reviews.review_keywords import extract_keywords, rank_terms
from src.reviews.review_lexicons import DEFAULT_LEXICONS, lexicons_from_dict
from src.reviews.review_sentiment import (
    analyze_sentiment,
    emotional_intensity,
    raw_sentiment_score,
    sentiment_bucket,
)
from src.reviews.review_text import is_blank, remove_stopwords, sentiment_tokens, tokenize
from src.reviews.review_topics import classify_topics, topic_triggers_for


# ============================================================================
# TEST DATA
# ============================================================================

# Small fixed lexicon so scores are exact.
TOY_LEXICONS = lexicons_from_dict({"sentiment_lexicon": {"good": 2, "bad": -2, "love": 4}})

BLANK_TEXTS = [None, "", "   ", "\n\t"]

SAMPLE_REVIEWS = [
    "The pizza was great, the pizza crust was perfect and the service was great",
    "Terrible experience. The waiter was rude and the soup was cold!!!",
    "Okay place, nothing special. Parking is far away.",
    "I love it here, the staff is so friendly and helpful :)",
    "12345 ### ??? ...",
]


# ============================================================================
# TEXT UTILITIES
# ============================================================================

class TestReviewText:
    """Tokenizer and stopword filter."""

    def test_is_blank(self):
        for text in BLANK_TEXTS:
            assert is_blank(text)
        assert not is_blank(" a ")

    def test_tokenize_lowercases_and_splits_punctuation(self):
        assert tokenize("Joe's Diner, GREAT food!") == ["joe", "s", "diner", "great", "food"]

    def test_sentiment_tokens_keep_apostrophes(self):
        assert sentiment_tokens("I don't like it. Really!") == ["i", "don't", "like", "it", "really"]

    def test_remove_stopwords(self):
        assert remove_stopwords(["the", "pizza", "was", "great"]) == ["pizza", "great"]

    def test_remove_stopwords_custom_list(self):
        assert remove_stopwords(["the", "pizza"], {"pizza"}) == ["the"]

    def test_remove_stopwords_falls_back_to_tokens(self):
        """A broken stopword list must not lose the tokens."""
        assert remove_stopwords(["the", "pizza"], 42) == ["the", "pizza"]


# ============================================================================
# SENTIMENT
# ============================================================================

class TestSentiment:
    """Tests for analyze_sentiment()."""

    def test_blank_text_is_neutral(self):
        for text in BLANK_TEXTS:
            assert analyze_sentiment(text) == 0.0

    def test_negative_text(self):
        score = analyze_sentiment("This place is terrible and awful")
        assert -1.0 <= score < 0.0

    def test_positive_text(self):
        score = analyze_sentiment("Lovely staff and a great meal")
        assert 0.0 < score <= 1.0

    def test_strong_negative_saturates(self):
        assert analyze_sentiment("terrible awful horrible disgusting worst nasty") == -1.0

    def test_strong_positive_saturates(self):
        assert analyze_sentiment("amazing excellent wonderful fantastic perfect awesome") == 1.0

    def test_scale_is_five(self):
        """raw / 5: one 'good' (2) -> 0.4."""
        assert analyze_sentiment("good", lexicons=TOY_LEXICONS) == pytest.approx(0.4)
        assert analyze_sentiment("bad", lexicons=TOY_LEXICONS) == pytest.approx(-0.4)

    def test_clamped_to_one(self):
        """raw 6 -> 1.2 -> clamped to 1.0."""
        assert analyze_sentiment("good good good", lexicons=TOY_LEXICONS) == 1.0

    def test_negation_flips_sign(self):
        assert analyze_sentiment("not good", lexicons=TOY_LEXICONS) == pytest.approx(-0.4)
        assert analyze_sentiment("not bad", lexicons=TOY_LEXICONS) == pytest.approx(0.4)

    def test_punctuation_ignored(self):
        assert analyze_sentiment("Good!!!", lexicons=TOY_LEXICONS) == pytest.approx(0.4)

    def test_afinn_weights(self):
        """AFINN-165: amazing +4, good +3, awful -3."""
        assert analyze_sentiment("Amazing pizza") == pytest.approx(0.8)
        assert emotional_intensity(analyze_sentiment("Amazing pizza")) == "very positive"
        assert analyze_sentiment("Good food") == pytest.approx(0.6)
        assert analyze_sentiment("Awful") == pytest.approx(-0.6)

    def test_raw_score_is_integer_sum(self):
        """friendly +2, helpful +2, rude -2."""
        score = raw_sentiment_score("friendly and helpful but rude")
        assert score == 2
        assert isinstance(score, int)

    def test_only_listed_negators_flip(self):
        assert analyze_sentiment("nothing bad here") == pytest.approx(-0.6)
        assert analyze_sentiment("never good") == pytest.approx(0.6)
        assert analyze_sentiment("not good") == pytest.approx(-0.6)
        assert analyze_sentiment("It isn't good") == pytest.approx(-0.6)
        assert analyze_sentiment("dont like it") == pytest.approx(-0.4)

    def test_negators_are_lexicon_data(self):
        lexicons = lexicons_from_dict({"negators": ["never"], "sentiment_lexicon": {"good": 2}})
        assert analyze_sentiment("never good", lexicons=lexicons) == pytest.approx(-0.4)
        assert analyze_sentiment("not good", lexicons=lexicons) == pytest.approx(0.4)

    def test_unknown_words_score_zero(self):
        assert raw_sentiment_score("pasta table chair", {"good": 2}) == 0.0

    def test_always_in_range(self):
        for text in SAMPLE_REVIEWS:
            assert -1.0 <= analyze_sentiment(text) <= 1.0

    def test_idempotent(self):
        text = SAMPLE_REVIEWS[1]
        assert analyze_sentiment(text) == analyze_sentiment(text)

    def test_failure_returns_zero(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("lexicon unavailable")

        monkeypatch.setattr("src.reviews.review_sentiment.raw_sentiment_score", boom)
        assert analyze_sentiment("great food") == 0.0


class TestEmotionalIntensity:
    """Tests for emotional_intensity() and sentiment_bucket()."""

    @pytest.mark.parametrize("score,expected", [
        (1.0, "very positive"),
        (0.71, "very positive"),
        (0.7, "positive"),       # boundary falls to the weaker bucket
        (0.31, "positive"),
        (0.3, "neutral"),
        (0.0, "neutral"),
        (-0.3, "neutral"),
        (-0.5, "negative"),
        (-0.7, "negative"),
        (-0.9, "very negative"),
    ])
    def test_buckets(self, score, expected):
        assert emotional_intensity(score) == expected

    @pytest.mark.parametrize("score,expected", [
        (0.34, "positive"),
        (0.33, "neutral"),
        (-0.33, "neutral"),
        (-0.34, "negative"),
    ])
    def test_dashboard_buckets(self, score, expected):
        assert sentiment_bucket(score) == expected


# ============================================================================
# KEYWORDS
# ============================================================================

class TestKeywords:
    """Tests for extract_keywords()."""

    def test_blank_text_returns_empty(self):
        for text in BLANK_TEXTS:
            assert extract_keywords(text) == []

    def test_ranked_by_frequency_then_first_occurrence(self):
        keywords = extract_keywords(SAMPLE_REVIEWS[0], 3)
        assert keywords == ["pizza", "great", "crust"]

    def test_stopwords_removed(self):
        keywords = extract_keywords(SAMPLE_REVIEWS[0], 10)
        assert "the" not in keywords
        assert "was" not in keywords
        assert "and" not in keywords

    def test_repeated_terms_ranked_once(self):
        keywords = extract_keywords("pizza pizza pizza pizza", 5)
        assert keywords == ["pizza"]

    def test_default_count_is_five(self):
        text = "alpha bravo charlie delta echo foxtrot golf hotel"
        assert extract_keywords(text) == ["alpha", "bravo", "charlie", "delta", "echo"]

    def test_short_terms_filtered(self):
        assert extract_keywords("ok ok ok tv tv menu") == ["menu"]

    def test_count_and_length_bounds(self):
        for text in SAMPLE_REVIEWS:
            for n in (0, 1, 3, 5, 20):
                keywords = extract_keywords(text, n)
                assert len(keywords) <= n
                assert all(len(k) >= 3 for k in keywords)

    def test_review_content_words_survive(self):
        keywords = extract_keywords("The bill was wrong and the fire alarm went off", 10)
        assert "bill" in keywords
        assert "fire" in keywords
        assert "the" not in keywords

    def test_default_stopword_list(self):
        """scikit-learn's English list, minus words reviews use as content."""
        assert "the" in DEFAULT_LEXICONS.stopwords
        assert "would" in DEFAULT_LEXICONS.stopwords
        for word in ("bill", "found", "system", "fire", "empty"):
            assert word not in DEFAULT_LEXICONS.stopwords

    def test_only_stopwords_returns_empty(self):
        assert extract_keywords("the and was of it") == []

    def test_rank_terms_empty(self):
        assert rank_terms([]) == []

    def test_idempotent(self):
        text = SAMPLE_REVIEWS[3]
        assert extract_keywords(text) == extract_keywords(text)

    def test_failure_returns_empty(self, monkeypatch):
        def boom(tokens):
            raise ValueError("vectorizer exploded")

        monkeypatch.setattr("src.reviews.review_keywords.rank_terms", boom)
        assert extract_keywords("great pizza place") == []

    def test_failure_default_is_a_fresh_list(self, monkeypatch):
        def boom(tokens):
            raise ValueError("vectorizer exploded")

        monkeypatch.setattr("src.reviews.review_keywords.rank_terms", boom)
        first = extract_keywords("great pizza place")
        first.append("leaked")
        assert extract_keywords("great pizza place") == []


# ============================================================================
# TOPICS
# ============================================================================

class TestTopics:
    """Tests for classify_topics()."""

    def test_blank_text_returns_empty(self):
        for text in BLANK_TEXTS:
            assert classify_topics(text) == set()

    def test_staff_and_food(self):
        topics = classify_topics("The staff was friendly but the food was cold", "Italian Restaurant")
        assert "service" in topics
        assert "food" in topics

    def test_restaurant_extension_uses_substrings(self):
        """'cold' contains 'old', a freshness trigger."""
        topics = classify_topics("The staff was friendly but the food was cold", "Italian Restaurant")
        assert topics == {"service", "food", "freshness"}

    def test_no_restaurant_extension_for_other_businesses(self):
        topics = classify_topics("The staff was friendly but the food was cold", "Bookstore")
        assert topics == {"service", "food"}

    def test_no_category(self):
        topics = classify_topics("The food was bland and tiny")
        assert topics == {"food"}

    def test_restaurant_match_is_case_insensitive(self):
        topics = classify_topics("The food was bland and tiny", "FAST FOOD RESTAURANT")
        assert topics == {"food", "taste", "portion"}

    def test_case_insensitive_text(self):
        assert "price" in classify_topics("WAY TOO EXPENSIVE")

    def test_returns_set(self):
        topics = classify_topics("slow slow slow service")
        assert isinstance(topics, set)
        assert topics == {"service", "wait"}

    def test_trigger_map_not_mutated(self):
        triggers = topic_triggers_for("restaurant")
        assert "taste" in triggers
        assert "taste" not in DEFAULT_LEXICONS.topic_triggers

    def test_failure_returns_empty(self, monkeypatch):
        def boom(*args, **kwargs):
            raise KeyError("broken map")

        monkeypatch.setattr("src.reviews.review_topics.topic_triggers_for", boom)
        assert classify_topics("great food") == set()
