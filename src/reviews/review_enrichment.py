"""
Review Enrichment (ingestion)
=============================

Turns Google Maps scraper dataset items into review records with every
derived field attached: sentiment and keywords for storage, plus the
triage labels the dashboard filters on.

Usage:
    enricher = ReviewEnricher()
    result = enricher.enrich_batch(dataset_items)
    for review in result.reviews:
        save(review.to_dict())
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from .review_keywords import DEFAULT_KEYWORD_COUNT
from .review_lexicons import DEFAULT_LEXICONS, ReviewLexicons
from .review_models import (
    CompetitiveInsight,
    EnrichedReview,
    MarketPlatform,
    ReviewLabel,
)
from .review_signals import (
    analyze_competitive_insights,
    analyze_review,
    calculate_response_urgency,
)
from .scoring_config import DEFAULT_SCORING, LabelConfig, ScoringConfig

logger = logging.getLogger(__name__)


class ScrapedReviewItem(BaseModel):
    """One item of the Google Maps reviews scraper dataset."""
    reviewId: str = Field(alias="review_id")
    stars: float = Field(ge=0, le=5)
    text: Optional[str] = None
    name: Optional[str] = None
    reviewerPhotoUrl: Optional[str] = Field(None, alias="reviewer_photo_url")
    reviewImageUrls: Optional[List[str]] = Field(None, alias="review_image_urls")
    categoryName: Optional[str] = Field(None, alias="category_name")
    publishedAtDate: Optional[str] = Field(None, alias="published_at_date")
    responseFromOwnerText: Optional[str] = Field(None, alias="response_from_owner_text")
    responseFromOwnerDate: Optional[str] = Field(None, alias="response_from_owner_date")
    originalLanguage: Optional[str] = Field(None, alias="original_language")
    reviewUrl: Optional[str] = Field(None, alias="review_url")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @property
    def photo_urls(self) -> List[str]:
        return list(self.reviewImageUrls or [])


def derive_review_labels(
    urgency: int,
    insight: CompetitiveInsight,
    config: LabelConfig = DEFAULT_SCORING.labels,
) -> List[str]:
    """
    Ingestion labels from urgency and competitor comparisons.

        urgency >= 8          -> urgent
        urgency >= 5          -> medium-priority
        competitor mentioned  -> mentions-competitor + favorable/unfavorable-comparison
    """
    labels: List[str] = []

    if urgency >= config.urgent_min:
        labels.append(ReviewLabel.URGENT.value)
    elif urgency >= config.medium_priority_min:
        labels.append(ReviewLabel.MEDIUM_PRIORITY.value)

    if insight.mentions_competitor:
        labels.append(ReviewLabel.MENTIONS_COMPETITOR.value)
        if insight.comparative_positive:
            labels.append(ReviewLabel.FAVORABLE_COMPARISON.value)
        else:
            labels.append(ReviewLabel.UNFAVORABLE_COMPARISON.value)

    return labels


@dataclass
class EnrichmentBatchResult:
    """Outcome of enriching one scraper dataset."""
    reviews: List[EnrichedReview] = field(default_factory=list)
    skipped: List[Tuple[int, str]] = field(default_factory=list)  # (item index, reason)

    @property
    def enriched_count(self) -> int:
        return len(self.reviews)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class ReviewEnricher:
    """
    Stateless enricher: create once, call enrich() for every scraped item.
    """

    def __init__(
        self,
        lexicons: Optional[ReviewLexicons] = None,
        scoring: Optional[ScoringConfig] = None,
        keyword_count: int = DEFAULT_KEYWORD_COUNT,
    ):
        self.lexicons = lexicons or DEFAULT_LEXICONS
        self.scoring = scoring or DEFAULT_SCORING
        self.keyword_count = keyword_count

    def enrich(
        self,
        item: Union[Dict, ScrapedReviewItem],
        business_category: Optional[str] = None,
    ) -> EnrichedReview:
        """
        Enrich a single dataset item.

        Args:
            item: raw dataset dict or an already validated ScrapedReviewItem
            business_category: overrides the item's own categoryName

        Raises:
            pydantic.ValidationError: if a raw dict lacks reviewId/stars
        """
        if not isinstance(item, ScrapedReviewItem):
            item = ScrapedReviewItem.model_validate(item)

        category = business_category if business_category is not None else (item.categoryName or "")
        photo_urls = item.photo_urls

        analysis = analyze_review(
            item.text,
            item.stars,
            category,
            keyword_count=self.keyword_count,
            lexicons=self.lexicons,
            scoring=self.scoring,
        )
        urgency = calculate_response_urgency(
            item.text,
            item.stars,
            len(photo_urls) > 0,
            lexicons=self.lexicons,
            config=self.scoring.urgency,
        )
        insight = analyze_competitive_insights(item.text, lexicons=self.lexicons)

        labels = derive_review_labels(urgency, insight, self.scoring.labels)
        logger.debug(
            f"Enriched review: urgency={urgency} labels={labels}",
            extra={"stage": "enrich", "review_id": item.reviewId},
        )

        return EnrichedReview(
            external_id=item.reviewId,
            source=MarketPlatform.GOOGLE_MAPS.value,
            author=item.name,
            rating=item.stars,
            text=item.text or "",
            published_at=item.publishedAtDate,
            photo_count=len(photo_urls),
            photo_urls=photo_urls,
            reply=item.responseFromOwnerText,
            reply_date=item.responseFromOwnerDate,
            has_reply=bool(item.responseFromOwnerText),
            language=item.originalLanguage or "en",
            source_url=item.reviewUrl,
            author_image=item.reviewerPhotoUrl,
            sentiment=analysis.sentiment,
            keywords=analysis.keywords,
            topics=sorted(analysis.topics),
            emotional=analysis.emotional,
            actionable=analysis.actionable,
            response_urgency=urgency,
            competitor_mentions=insight.competitor_mentions,
            comparative_positive=insight.comparative_positive,
            labels=labels,
        )

    def enrich_batch(
        self,
        items: Iterable[Dict],
        business_category: Optional[str] = None,
    ) -> EnrichmentBatchResult:
        """
        Enrich a whole dataset. Items that fail validation are skipped and
        reported; they never abort the batch.
        """
        result = EnrichmentBatchResult()

        for index, item in enumerate(items):
            try:
                result.reviews.append(self.enrich(item, business_category))
            except ValidationError as e:
                reason = "; ".join(
                    f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
                )
                result.skipped.append((index, reason))
                logger.warning(
                    f"Skipping dataset item {index}: {reason}",
                    extra={"stage": "enrich"},
                )

        logger.info(
            f"Enriched {result.enriched_count} reviews, skipped {result.skipped_count}",
            extra={"stage": "enrich", "count": result.enriched_count},
        )
        return result
