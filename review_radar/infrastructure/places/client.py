"""
SerpAPI Client - Place Search and Review Listing
=================================================

Thin HTTP wrapper around the SerpAPI search endpoint.

ENGINES USED:
- google_maps:          place search (query -> place_id)
- google_maps_reviews:  review listing for one place_id, one sort order per call

This module knows nothing about caching or sentiment; it only turns
HTTP responses into dicts or typed errors.
"""

import logging
from typing import Optional

import requests

from ..config import SerpApiSettings, get_settings

logger = logging.getLogger(__name__)


class SerpApiError(Exception):
    """Base exception for SerpAPI failures."""
    pass


class SerpApiTransportError(SerpApiError):
    """Connection error, timeout, 5xx or undecodable body."""
    pass


class SerpApiResponseError(SerpApiError):
    """Well-formed response that reports a failure (4xx or an "error" field)."""
    pass


class SerpApiClient:
    """
    SerpAPI client.

    USAGE:
        client = SerpApiClient()
        data = client.search_places("Blue Bottle Coffee")
        reviews = client.list_reviews(place_id, SortOrder.NEWEST)

    Each request is a standalone requests.get, so no connection state is
    shared between the fetcher's worker threads.
    """

    SEARCH_ENGINE = "google_maps"
    REVIEWS_ENGINE = "google_maps_reviews"

    HEADERS = {"User-Agent": "ReviewRadar/1.0"}

    def __init__(self, settings: Optional[SerpApiSettings] = None):
        settings = settings or get_settings().serpapi
        self._api_key = settings.api_key
        self._base_url = settings.base_url
        self._locale = settings.locale
        self._country = settings.country
        self._timeout = settings.timeout_seconds

        if not self._api_key:
            logger.warning("No SERPAPI_API_KEY set. Requests will be rejected upstream.")

    def search_places(self, query: str) -> dict:
        """Run a place search and return the decoded JSON body."""
        params = {
            "engine": self.SEARCH_ENGINE,
            "q": query,
            "hl": self._locale,
            "gl": self._country,
            "type": "search",
        }
        return self._get(params)

    def list_reviews(self, place_id: str, sort_by: str) -> dict:
        """Fetch one page of reviews for a place in the given sort order."""
        params = {
            "engine": self.REVIEWS_ENGINE,
            "place_id": place_id,
            "hl": self._locale,
            "sort_by": sort_by,
        }
        return self._get(params)

    def _get(self, params: dict) -> dict:
        engine = params.get("engine")
        params = {**params, "api_key": self._api_key}

        try:
            response = requests.get(
                self._base_url,
                params=params,
                headers=self.HEADERS,
                timeout=self._timeout
            )
        except requests.Timeout as e:
            raise SerpApiTransportError(f"{engine} request timed out after {self._timeout}s") from e
        except requests.RequestException as e:
            raise SerpApiTransportError(f"{engine} request failed: {e}") from e

        if response.status_code >= 500:
            raise SerpApiTransportError(f"{engine} returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise SerpApiTransportError(f"{engine} returned a non-JSON body") from e

        if response.status_code != 200:
            message = data.get("error") if isinstance(data, dict) else None
            raise SerpApiResponseError(
                f"{engine} returned HTTP {response.status_code}: {message or 'no detail'}"
            )

        if not isinstance(data, dict):
            raise SerpApiTransportError(f"{engine} returned an unexpected body")

        if data.get("error"):
            raise SerpApiResponseError(f"{engine} error: {data['error']}")

        return data
