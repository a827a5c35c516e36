# Domain Layer
# ============
# Immutable records and the error taxonomy. No external dependencies.

from .errors import (
    AnalysisError,
    InvalidInput,
    PersistenceFailure,
    PlaceNotFound,
    UnresolvableUrl,
    UpstreamUnavailable,
)
from .models import (
    AnalysisRecord,
    AnalysisSummary,
    ClassifiedReview,
    OverallLabel,
    RawReview,
    ResolvedPlace,
    SentimentLabel,
    SortOrder,
)

__all__ = [
    "AnalysisError",
    "AnalysisRecord",
    "AnalysisSummary",
    "ClassifiedReview",
    "InvalidInput",
    "OverallLabel",
    "PersistenceFailure",
    "PlaceNotFound",
    "RawReview",
    "ResolvedPlace",
    "SentimentLabel",
    "SortOrder",
    "UnresolvableUrl",
    "UpstreamUnavailable",
]
