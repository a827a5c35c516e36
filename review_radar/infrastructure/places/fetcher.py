"""
Review Fetcher - Concurrent Multi-Sort Review Retrieval
========================================================

One reviews call per sort order, all in flight at once. Total latency is
bounded by the slowest call instead of the sum.

FAILURE BEHAVIOR:
- A failed call logs a warning and contributes no reviews
- Sibling calls are never cancelled
- No retries: one attempt per sort order
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence

from ...domain.models import RawReview, SortOrder
from .client import SerpApiClient, SerpApiError

logger = logging.getLogger(__name__)

DEFAULT_SORT_ORDERS = (SortOrder.NEWEST, SortOrder.LOWEST_RATING, SortOrder.HIGHEST_RATING)


def parse_reviews(data: dict, sort_order: Optional[SortOrder] = None) -> List[RawReview]:
    """Convert a reviews response body into RawReview entries."""
    reviews = []
    for entry in data.get("reviews") or []:
        if not isinstance(entry, dict):
            continue

        extracted = entry.get("extracted_snippet")
        text = entry.get("snippet") or (
            extracted.get("original") if isinstance(extracted, dict) else None
        ) or ""

        user = entry.get("user")
        author = user.get("name", "") if isinstance(user, dict) else ""

        reviews.append(RawReview(
            text=text.strip() if isinstance(text, str) else "",
            rating=entry.get("rating"),
            author=author,
            sort_order=sort_order,
        ))
    return reviews


class ReviewFetcher:
    """
    Fetches reviews for a place across several sort orders concurrently.

    USAGE:
        fetcher = ReviewFetcher(client)
        raw_reviews = fetcher.fetch("ChIJ...")
    """

    def __init__(self, client: SerpApiClient, sort_orders: Sequence[SortOrder] = DEFAULT_SORT_ORDERS):
        if not sort_orders:
            raise ValueError("At least one sort order is required")
        self._client = client
        self._sort_orders = tuple(sort_orders)

    @property
    def sort_orders(self) -> tuple:
        return self._sort_orders

    def fetch(self, place_id: str) -> List[RawReview]:
        """
        Fetch all sort orders and return the concatenated reviews.
        Waits for every call to finish.
        """
        results: Dict[SortOrder, List[RawReview]] = {}

        with ThreadPoolExecutor(max_workers=len(self._sort_orders)) as executor:
            futures = {
                executor.submit(self._fetch_one, place_id, order): order
                for order in self._sort_orders
            }
            for future in as_completed(futures):
                order = futures[future]
                try:
                    results[order] = future.result()
                except Exception as e:
                    logger.warning(f"Review retrieval for {place_id} ({order.name}) crashed: {e}")
                    results[order] = []

        combined = []
        for order in self._sort_orders:
            combined.extend(results.get(order, []))

        failed = [order.name for order in self._sort_orders if not results.get(order)]
        logger.info(
            f"Fetched {len(combined)} reviews for {place_id} "
            f"across {len(self._sort_orders)} sort orders"
            + (f" (empty: {', '.join(failed)})" if failed else "")
        )
        return combined

    def _fetch_one(self, place_id: str, order: SortOrder) -> List[RawReview]:
        try:
            data = self._client.list_reviews(place_id, order.value)
        except SerpApiError as e:
            logger.warning(f"Review retrieval for {place_id} ({order.name}) failed: {e}")
            return []
        return parse_reviews(data, order)
