"""Merge overlapping review result sets into unique review texts."""

from typing import Dict, Iterable, List

from ..domain.models import RawReview


def deduplicate_reviews(raw_reviews: Iterable[RawReview]) -> List[str]:
    """
    Unique review texts across all sort orders.

    Exact text is the key; the reviews endpoint has no stable review id.
    Reviews without text are dropped.
    """
    unique: Dict[str, RawReview] = {}
    for review in raw_reviews:
        if not review.text:
            continue
        unique[review.text] = review
    return list(unique)
