"""
Place Resolver - Query to Canonical place_id
=============================================

A place search can come back in several shapes: a single exact match
(`place_results`) or a list of candidates (`local_results`). The
identifier is taken from the first extractor, in priority order, that
finds a non-empty value.
"""

import logging
from typing import Callable, Optional, Sequence

from ...domain.errors import PlaceNotFound, UpstreamUnavailable
from ...domain.models import ResolvedPlace
from .client import SerpApiClient, SerpApiResponseError, SerpApiTransportError

logger = logging.getLogger(__name__)

Extractor = Callable[[dict], Optional[str]]


def _first_local_result(data: dict) -> dict:
    results = data.get("local_results")
    if isinstance(results, list) and results and isinstance(results[0], dict):
        return results[0]
    return {}


def _clean(value) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def place_results_id(data: dict) -> Optional[str]:
    """Direct single-result match."""
    place = data.get("place_results")
    if isinstance(place, dict):
        return _clean(place.get("place_id"))
    return None


def first_local_result_id(data: dict) -> Optional[str]:
    """Identifier of the first entry in the results list."""
    return _clean(_first_local_result(data).get("place_id"))


def first_local_result_coordinates_id(data: dict) -> Optional[str]:
    """Identifier nested under the first entry's GPS coordinates."""
    coordinates = _first_local_result(data).get("gps_coordinates")
    if isinstance(coordinates, dict):
        return _clean(coordinates.get("place_id"))
    return None


PLACE_ID_EXTRACTORS: Sequence[Extractor] = (
    place_results_id,
    first_local_result_id,
    first_local_result_coordinates_id,
)


def extract_place_id(data: dict, extractors: Sequence[Extractor] = PLACE_ID_EXTRACTORS) -> Optional[str]:
    for extractor in extractors:
        place_id = extractor(data)
        if place_id:
            return place_id
    return None


def extract_place_name(data: dict) -> Optional[str]:
    place = data.get("place_results")
    if isinstance(place, dict) and _clean(place.get("title")):
        return _clean(place.get("title"))
    return _clean(_first_local_result(data).get("title"))


class PlaceResolver:
    """Resolves a normalized place query to a single place_id."""

    def __init__(self, client: SerpApiClient, extractors: Sequence[Extractor] = PLACE_ID_EXTRACTORS):
        self._client = client
        self._extractors = tuple(extractors)

    def resolve(self, query: str) -> ResolvedPlace:
        """
        Search for the place and pick its identifier.

        Raises:
            PlaceNotFound: the search answered but no identifier is present.
            UpstreamUnavailable: the search service could not be reached.
        """
        try:
            data = self._client.search_places(query)
        except SerpApiTransportError as e:
            logger.error(f"Place search failed for '{query}': {e}")
            raise UpstreamUnavailable(detail=str(e)) from e
        except SerpApiResponseError as e:
            logger.info(f"Place search rejected '{query}': {e}")
            raise PlaceNotFound(detail=str(e)) from e

        place_id = extract_place_id(data, self._extractors)
        if not place_id:
            logger.info(f"No place identifier in search results for '{query}'")
            raise PlaceNotFound(detail=f"no identifier for query {query!r}")

        name = extract_place_name(data) or query
        logger.info(f"Resolved '{query}' -> {place_id} ({name})")
        return ResolvedPlace(place_id=place_id, name=name, query=query)
