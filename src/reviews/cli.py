"""
Review Analysis CLI
===================

Command-line interface for the review text-analysis pipeline.

Commands:
    analyze   - Analyze a single review text
    enrich    - Enrich a Google Maps scraper dataset (JSON array)
    metrics   - Dashboard metrics for stored reviews (JSON array)

Usage:
    python -m src.reviews.cli analyze "Staff was rude, I want a refund" --rating 1
    python -m src.reviews.cli enrich dataset.json --output enriched.json
    python -m src.reviews.cli metrics enriched.json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import load_config
from .logging_config import setup_logging
from .review_enrichment import ReviewEnricher, derive_review_labels
from .review_insights import ReviewMetricsAggregator
from .review_signals import (
    analyze_competitive_insights,
    analyze_review,
    calculate_response_urgency,
)

logger = logging.getLogger(__name__)


def _load_json_array(path: str) -> Optional[List]:
    """Read a JSON array from `path`; None (with an error printed) if unusable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read {path}: {e}", file=sys.stderr)
        return None
    if not isinstance(data, list):
        print(f"Error: {path} must contain a JSON array", file=sys.stderr)
        return None
    return data


def cmd_analyze(args, config) -> int:
    """Analyze one review and print the result as JSON."""
    lexicons = config.lexicons()

    analysis = analyze_review(
        args.text, args.rating, args.category,
        keyword_count=config.keyword_count, lexicons=lexicons,
    )
    urgency = calculate_response_urgency(args.text, args.rating, args.photos, lexicons=lexicons)
    insight = analyze_competitive_insights(args.text, lexicons=lexicons)

    output = {
        "analysis": analysis.to_dict(),
        "response_urgency": urgency,
        "competitive": insight.to_dict(),
        "labels": derive_review_labels(urgency, insight),
    }
    print(json.dumps(output, indent=2))
    return 0


def cmd_enrich(args, config) -> int:
    """Enrich a scraper dataset dump."""
    items = _load_json_array(args.input)
    if items is None:
        return 1

    enricher = ReviewEnricher(lexicons=config.lexicons(), keyword_count=config.keyword_count)
    result = enricher.enrich_batch(items, business_category=args.category)

    records = [review.to_dict() for review in result.reviews]
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
    else:
        print(json.dumps(records, indent=2))

    print(f"Enriched: {result.enriched_count}", file=sys.stderr)
    print(f"Skipped:  {result.skipped_count}", file=sys.stderr)
    for index, reason in result.skipped:
        print(f"  item {index}: {reason}", file=sys.stderr)

    urgent = sum(1 for r in result.reviews if "urgent" in r.labels)
    print(f"Urgent:   {urgent}", file=sys.stderr)
    return 0


def cmd_metrics(args, config) -> int:
    """Print dashboard metrics for stored reviews."""
    reviews = _load_json_array(args.input)
    if reviews is None:
        return 1

    metrics = ReviewMetricsAggregator().build_metrics(reviews)
    print(json.dumps(metrics.to_dict() if metrics else None, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Review text analysis: sentiment, keywords, topics, urgency",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # analyze
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a single review")
    analyze_parser.add_argument("text", help="Review text")
    analyze_parser.add_argument("--rating", type=float, required=True, help="Star rating (1-5)")
    analyze_parser.add_argument("--category", default=None, help="Business category, e.g. 'Italian restaurant'")
    analyze_parser.add_argument("--photos", action="store_true", help="Review has photos")

    # enrich
    enrich_parser = subparsers.add_parser("enrich", help="Enrich a scraper dataset")
    enrich_parser.add_argument("input", help="JSON array of scraper dataset items")
    enrich_parser.add_argument("--output", "-o", default=None, help="Write enriched reviews here instead of stdout")
    enrich_parser.add_argument("--category", default=None, help="Override the items' business category")

    # metrics
    metrics_parser = subparsers.add_parser("metrics", help="Dashboard metrics for stored reviews")
    metrics_parser.add_argument("input", help="JSON array of stored reviews")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = load_config()
    setup_logging(config, verbose=args.verbose)

    commands = {
        "analyze": cmd_analyze,
        "enrich": cmd_enrich,
        "metrics": cmd_metrics,
    }
    return commands[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
