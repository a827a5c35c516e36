"""
Unit tests for place identifier resolution.
"""

from unittest.mock import MagicMock

import pytest

from review_radar.domain.errors import PlaceNotFound, UpstreamUnavailable
from review_radar.infrastructure.places import (
    PlaceResolver,
    SerpApiClient,
    SerpApiResponseError,
    SerpApiTransportError,
    extract_place_id,
)
from review_radar.infrastructure.places.resolver import (
    first_local_result_coordinates_id,
    first_local_result_id,
    place_results_id,
)


@pytest.fixture
def client():
    return MagicMock(spec=SerpApiClient)


def test_direct_place_result_wins():
    """Test that the single-result field takes priority over the list."""
    data = {
        "place_results": {"place_id": "direct", "title": "Direct"},
        "local_results": [{"place_id": "listed"}],
    }
    assert extract_place_id(data) == "direct"


def test_first_list_entry_used():
    data = {"local_results": [{"place_id": "first"}, {"place_id": "second"}]}
    assert extract_place_id(data) == "first"


def test_nested_coordinates_identifier_used_last():
    data = {"local_results": [{"gps_coordinates": {"latitude": 1.0, "longitude": 2.0, "place_id": "nested"}}]}
    assert extract_place_id(data) == "nested"


def test_list_entry_beats_nested_identifier():
    data = {"local_results": [{"place_id": "listed", "gps_coordinates": {"place_id": "nested"}}]}
    assert extract_place_id(data) == "listed"


def test_blank_values_skipped():
    data = {"place_results": {"place_id": "  "}, "local_results": [{"place_id": "listed"}]}
    assert extract_place_id(data) == "listed"


@pytest.mark.parametrize("data", [
    {},
    {"local_results": []},
    {"local_results": [{"title": "No id"}]},
    {"place_results": "unexpected", "local_results": "unexpected"},
])
def test_no_identifier(data):
    assert extract_place_id(data) is None


def test_extractors_are_independent():
    """Test each extractor on its own response shape."""
    assert place_results_id({"place_results": {"place_id": "a"}}) == "a"
    assert place_results_id({"local_results": [{"place_id": "b"}]}) is None
    assert first_local_result_id({"local_results": [{"place_id": "b"}]}) == "b"
    assert first_local_result_coordinates_id({"local_results": [{"place_id": "b"}]}) is None


def test_resolve_returns_place(client):
    client.search_places.return_value = {
        "local_results": [{"place_id": "ChIJ1", "title": "Cafe Luna"}]
    }

    place = PlaceResolver(client).resolve("cafe luna")

    assert place.place_id == "ChIJ1"
    assert place.name == "Cafe Luna"
    assert place.query == "cafe luna"
    client.search_places.assert_called_once_with("cafe luna")


def test_resolve_name_falls_back_to_query(client):
    client.search_places.return_value = {"place_results": {"place_id": "ChIJ1"}}

    assert PlaceResolver(client).resolve("cafe luna").name == "cafe luna"


def test_resolve_without_identifier(client):
    client.search_places.return_value = {"local_results": [{"title": "No id"}]}

    with pytest.raises(PlaceNotFound):
        PlaceResolver(client).resolve("cafe luna")


def test_resolve_rejected_search_is_not_found(client):
    client.search_places.side_effect = SerpApiResponseError("no results")

    with pytest.raises(PlaceNotFound):
        PlaceResolver(client).resolve("cafe luna")


def test_resolve_transport_failure(client):
    client.search_places.side_effect = SerpApiTransportError("timed out")

    with pytest.raises(UpstreamUnavailable):
        PlaceResolver(client).resolve("cafe luna")


def test_custom_extractor_order(client):
    """Test that the resolution policy is just the extractor sequence."""
    client.search_places.return_value = {
        "place_results": {"place_id": "direct"},
        "local_results": [{"place_id": "listed"}],
    }

    resolver = PlaceResolver(client, extractors=[first_local_result_id, place_results_id])

    assert resolver.resolve("q").place_id == "listed"
