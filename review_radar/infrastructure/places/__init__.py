from .client import SerpApiClient, SerpApiError, SerpApiResponseError, SerpApiTransportError
from .fetcher import DEFAULT_SORT_ORDERS, ReviewFetcher, parse_reviews
from .resolver import PLACE_ID_EXTRACTORS, PlaceResolver, extract_place_id

__all__ = [
    "DEFAULT_SORT_ORDERS",
    "PLACE_ID_EXTRACTORS",
    "PlaceResolver",
    "ReviewFetcher",
    "SerpApiClient",
    "SerpApiError",
    "SerpApiResponseError",
    "SerpApiTransportError",
    "extract_place_id",
    "parse_reviews",
]
