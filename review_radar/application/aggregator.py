"""
Sentiment Aggregator
====================

Scores each review and rolls the scores up into an AnalysisSummary.

Per-review label is a strict sign test on the score. The overall label
uses a wider neutral band on the mean score: above 0.5 is positive,
below -0.5 is negative.
"""

import logging
from typing import List, Sequence, Tuple

from ..domain.models import AnalysisSummary, ClassifiedReview, OverallLabel, SentimentLabel
from ..infrastructure.llm import SentimentScorer

logger = logging.getLogger(__name__)

OVERALL_THRESHOLD = 0.5


def overall_label(score_sum: int, total: int) -> OverallLabel:
    if total == 0:
        return OverallLabel.NO_REVIEWS

    average = score_sum / total
    if average > OVERALL_THRESHOLD:
        return OverallLabel.POSITIVE
    if average < -OVERALL_THRESHOLD:
        return OverallLabel.NEGATIVE
    return OverallLabel.NEUTRAL


class SentimentAggregator:
    """
    USAGE:
        aggregator = SentimentAggregator(LexiconSentimentScorer())
        summary, reviews = aggregator.aggregate(["Loved it", "Cold food"])
    """

    def __init__(self, scorer: SentimentScorer):
        self._scorer = scorer

    def classify(self, text: str) -> ClassifiedReview:
        score = int(self._scorer.score(text))
        return ClassifiedReview(text=text, score=score, label=SentimentLabel.from_score(score))

    def aggregate(self, texts: Sequence[str]) -> Tuple[AnalysisSummary, List[ClassifiedReview]]:
        classified = [self.classify(text) for text in texts]

        counts = {label: 0 for label in SentimentLabel}
        for review in classified:
            counts[review.label] += 1

        score_sum = sum(review.score for review in classified)
        total = len(classified)

        summary = AnalysisSummary(
            positive_count=counts[SentimentLabel.POSITIVE],
            negative_count=counts[SentimentLabel.NEGATIVE],
            neutral_count=counts[SentimentLabel.NEUTRAL],
            total_count=total,
            overall_score_sum=score_sum,
            overall_label=overall_label(score_sum, total),
        )
        logger.debug(
            f"Aggregated {total} reviews: +{summary.positive_count} "
            f"-{summary.negative_count} ={summary.neutral_count} -> {summary.overall_label.value}"
        )
        return summary, classified
