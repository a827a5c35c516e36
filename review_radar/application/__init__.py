# Application Layer
# =================
# Use cases and orchestration: input normalization, review merging,
# sentiment aggregation and the cache-or-compute pipeline.

from .aggregator import SentimentAggregator, overall_label
from .deduplicator import deduplicate_reviews
from .normalizer import normalize_place_reference
from .pipeline import AnalysisOutcome, AnalysisPipeline

__all__ = [
    "AnalysisOutcome",
    "AnalysisPipeline",
    "SentimentAggregator",
    "deduplicate_reviews",
    "normalize_place_reference",
    "overall_label",
]
