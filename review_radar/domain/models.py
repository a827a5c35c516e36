"""
Domain Models - Review Analysis Records
========================================

Plain immutable records shared by every layer. No I/O here.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class SentimentLabel(Enum):
    """Per-review sentiment classification."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

    @classmethod
    def from_score(cls, score: int) -> "SentimentLabel":
        """Strict sign test."""
        if score > 0:
            return cls.POSITIVE
        if score < 0:
            return cls.NEGATIVE
        return cls.NEUTRAL


class OverallLabel(Enum):
    """Aggregate verdict for a place."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    NO_REVIEWS = "no_reviews"


class SortOrder(Enum):
    """
    Review listing orders requested from the reviews endpoint.
    Values are the `sort_by` parameter expected on the wire.
    """
    NEWEST = "newestFirst"
    LOWEST_RATING = "ratingLow"
    HIGHEST_RATING = "ratingHigh"


@dataclass(frozen=True)
class ResolvedPlace:
    """Result of a successful place search."""
    place_id: str
    name: str
    query: str


@dataclass(frozen=True)
class RawReview:
    """Review entry as returned by the reviews endpoint."""
    text: str
    rating: Optional[float] = None
    author: str = ""
    sort_order: Optional[SortOrder] = None


@dataclass(frozen=True)
class ClassifiedReview:
    text: str
    score: int
    label: SentimentLabel

    def to_dict(self) -> dict:
        return {"text": self.text, "score": self.score, "sentiment": self.label.value}

    @classmethod
    def from_dict(cls, data: dict) -> "ClassifiedReview":
        return cls(
            text=data["text"],
            score=int(data["score"]),
            label=SentimentLabel(data["sentiment"]),
        )


@dataclass(frozen=True)
class AnalysisSummary:
    positive_count: int = 0
    negative_count: int = 0
    neutral_count: int = 0
    total_count: int = 0
    overall_score_sum: int = 0
    overall_label: OverallLabel = OverallLabel.NO_REVIEWS

    @property
    def average_score(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.overall_score_sum / self.total_count

    def to_dict(self) -> dict:
        return {
            "positive": self.positive_count,
            "negative": self.negative_count,
            "neutral": self.neutral_count,
            "total": self.total_count,
            "score_sum": self.overall_score_sum,
            "overall": self.overall_label.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisSummary":
        return cls(
            positive_count=int(data["positive"]),
            negative_count=int(data["negative"]),
            neutral_count=int(data["neutral"]),
            total_count=int(data["total"]),
            overall_score_sum=int(data["score_sum"]),
            overall_label=OverallLabel(data["overall"]),
        )


@dataclass(frozen=True)
class AnalysisRecord:
    """
    Persisted analysis for one place.

    Written once per place_id; later requests for the same place
    receive this record unchanged.
    """
    input: str
    place_name: str
    place_id: str
    summary: AnalysisSummary
    reviews: Tuple[ClassifiedReview, ...] = field(default_factory=tuple)
    created_at: str = ""
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "input": self.input,
            "place_name": self.place_name,
            "place_id": self.place_id,
            "summary": self.summary.to_dict(),
            "reviews": [review.to_dict() for review in self.reviews],
            "created_at": self.created_at,
        }
