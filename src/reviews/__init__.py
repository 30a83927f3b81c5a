"""
Review Text Analysis
====================

Deterministic analysis of customer review text: sentiment, keywords,
topics, emotional intensity, actionability, competitor comparisons and
response urgency. Every analyzer is pure and fail-soft.

Modules:
    review_models     — Data models (ReviewAnalysis, CompetitiveInsight, EnrichedReview, ReviewMetrics)
    review_lexicons   — Word lists as swappable data (ReviewLexicons)
    review_text       — Tokenization and stopword filtering
    review_sentiment  — Lexicon sentiment score in [-1, 1]
    review_keywords   — Single-document TF-IDF keywords
    review_topics     — Rule-based topic classification
    review_signals    — Competitive insights, response urgency, composite analysis
    review_enrichment — Scraper dataset items -> enriched, labelled reviews
    review_insights   — Dashboard metrics over stored reviews
"""

from .review_models import (
    ReviewInput,
    ReviewAnalysis,
    CompetitiveInsight,
    EnrichedReview,
    ReviewMetrics,
    EmotionalIntensity,
)
from .review_lexicons import DEFAULT_LEXICONS, ReviewLexicons, load_lexicons
from .review_sentiment import analyze_sentiment
from .review_keywords import extract_keywords
from .review_topics import classify_topics
from .review_signals import (
    analyze_review,
    analyze_competitive_insights,
    calculate_response_urgency,
)
from .review_enrichment import ReviewEnricher, derive_review_labels
from .review_insights import ReviewMetricsAggregator
