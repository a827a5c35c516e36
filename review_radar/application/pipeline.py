"""
Analysis Pipeline - Orchestration
==================================

normalize -> resolve -> cache check -> fetch -> dedup -> aggregate -> persist

Stages run strictly in order for one request. Any AnalysisError stops the
run and nothing is persisted. The only fan-out is inside ReviewFetcher.

CACHE CONSISTENCY:
- Within one process, requests for the same place_id are serialized, so
  only the first performs the fetch; the rest see the cached record.
- Across processes, the repository's insert-if-absent keeps exactly one
  record per place_id and every caller gets that record back. A caller
  whose insert lost reports the stored record as cached.
"""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import List, Optional

from ..domain.models import AnalysisRecord
from ..infrastructure.config import Settings, get_settings
from ..infrastructure.llm import SentimentScorer, create_sentiment_scorer
from ..infrastructure.persistence import AnalysisRepository, init_database, utc_timestamp
from ..infrastructure.places import PlaceResolver, ReviewFetcher, SerpApiClient
from .aggregator import SentimentAggregator
from .deduplicator import deduplicate_reviews
from .normalizer import normalize_place_reference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    record: AnalysisRecord
    cached: bool


class _PlaceLocks:
    """One lock per place_id, dropped once nobody holds or waits on it."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}
        self._users = defaultdict(int)

    def acquire(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
            self._users[key] += 1
        lock.acquire()
        return lock

    def release(self, key: str, lock: threading.Lock):
        lock.release()
        with self._guard:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]


class AnalysisPipeline:
    """
    USAGE:
        pipeline = AnalysisPipeline.from_settings()
        outcome = pipeline.analyze("https://www.google.com/maps/place/Blue+Bottle+Coffee/...")
        print(outcome.record.summary.overall_label)
    """

    def __init__(
        self,
        resolver: PlaceResolver,
        fetcher: ReviewFetcher,
        aggregator: SentimentAggregator,
        repository: AnalysisRepository,
    ):
        self._resolver = resolver
        self._fetcher = fetcher
        self._aggregator = aggregator
        self._repository = repository
        self._locks = _PlaceLocks()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        repository: Optional[AnalysisRepository] = None,
        scorer: Optional[SentimentScorer] = None,
    ) -> "AnalysisPipeline":
        """Wire the production collaborators from configuration."""
        settings = settings or get_settings()
        client = SerpApiClient(settings.serpapi)
        return cls(
            resolver=PlaceResolver(client),
            fetcher=ReviewFetcher(client, settings.reviews.sort_orders),
            aggregator=SentimentAggregator(scorer or create_sentiment_scorer(settings)),
            repository=repository or init_database(settings.database.path),
        )

    def analyze(self, raw_input: Optional[str]) -> AnalysisOutcome:
        """
        Analyze a place reference, reusing a stored analysis when present.

        Raises:
            AnalysisError subclasses; see review_radar.domain.errors.
        """
        query = normalize_place_reference(raw_input)
        place = self._resolver.resolve(query)

        lock = self._locks.acquire(place.place_id)
        try:
            cached = self._repository.get_by_place_id(place.place_id)
            if cached is not None:
                logger.info(f"Cache hit for {place.place_id} ({cached.place_name})")
                return AnalysisOutcome(record=cached, cached=True)

            logger.info(f"Cache miss for {place.place_id}, fetching reviews")
            raw_reviews = self._fetcher.fetch(place.place_id)
            texts = deduplicate_reviews(raw_reviews)
            summary, classified = self._aggregator.aggregate(texts)

            written = AnalysisRecord(
                input=str(raw_input).strip(),
                place_name=place.name,
                place_id=place.place_id,
                summary=summary,
                reviews=tuple(classified),
                created_at=utc_timestamp(),
            )
            record = self._repository.save_if_absent(written)
        finally:
            self._locks.release(place.place_id, lock)

        # another process stored this place between our cache check and insert
        if record.created_at != written.created_at:
            logger.info(f"Kept analysis stored elsewhere for {place.place_id} ({record.place_name})")
            return AnalysisOutcome(record=record, cached=True)

        logger.info(
            f"Analyzed {record.place_name}: {record.summary.total_count} unique reviews "
            f"from {len(raw_reviews)} fetched, overall {record.summary.overall_label.value}"
        )
        return AnalysisOutcome(record=record, cached=False)

    def list_analyses(self, limit: Optional[int] = None) -> List[AnalysisRecord]:
        """Stored analyses, most recent first."""
        return self._repository.list_recent(limit)
