"""
Unit tests for concurrent multi-sort review retrieval.
"""

import threading
from unittest.mock import MagicMock

import pytest

from review_radar.domain.models import SortOrder
from review_radar.infrastructure.places import (
    ReviewFetcher,
    SerpApiClient,
    SerpApiTransportError,
    parse_reviews,
)
from tests.fakes import reviews_body


@pytest.fixture
def client():
    return MagicMock(spec=SerpApiClient)


def test_one_call_per_sort_order(client):
    client.list_reviews.return_value = reviews_body("ok")

    ReviewFetcher(client).fetch("ChIJ1")

    sort_values = sorted(call.args[1] for call in client.list_reviews.call_args_list)
    assert sort_values == ["newestFirst", "ratingHigh", "ratingLow"]
    assert all(call.args[0] == "ChIJ1" for call in client.list_reviews.call_args_list)


def test_results_concatenated_in_sort_order(client):
    """Test that results keep the configured order regardless of completion order."""
    pages = {
        "newestFirst": reviews_body("n1", "n2"),
        "ratingLow": reviews_body("l1"),
        "ratingHigh": reviews_body("h1"),
    }
    client.list_reviews.side_effect = lambda place_id, sort_by: pages[sort_by]

    reviews = ReviewFetcher(client).fetch("ChIJ1")

    assert [r.text for r in reviews] == ["n1", "n2", "l1", "h1"]
    assert reviews[0].sort_order == SortOrder.NEWEST
    assert reviews[-1].sort_order == SortOrder.HIGHEST_RATING


def test_calls_run_concurrently(client):
    """Test that all sort orders are in flight at the same time."""
    barrier = threading.Barrier(3, timeout=5)

    def list_reviews(place_id, sort_by):
        barrier.wait()
        return reviews_body(sort_by)

    client.list_reviews.side_effect = list_reviews

    reviews = ReviewFetcher(client).fetch("ChIJ1")

    assert len(reviews) == 3


def test_single_failure_degrades_to_partial_results(client):
    """Test that one failing sort order does not fail the fetch."""
    def list_reviews(place_id, sort_by):
        if sort_by == "ratingLow":
            raise SerpApiTransportError("timed out")
        return reviews_body(f"{sort_by} review")

    client.list_reviews.side_effect = list_reviews

    reviews = ReviewFetcher(client).fetch("ChIJ1")

    assert [r.text for r in reviews] == ["newestFirst review", "ratingHigh review"]
    assert client.list_reviews.call_count == 3


def test_unexpected_error_absorbed(client):
    def list_reviews(place_id, sort_by):
        if sort_by == "newestFirst":
            raise RuntimeError("boom")
        return reviews_body("fine")

    client.list_reviews.side_effect = list_reviews

    assert len(ReviewFetcher(client).fetch("ChIJ1")) == 2


def test_all_failures_yield_empty(client):
    client.list_reviews.side_effect = SerpApiTransportError("down")

    assert ReviewFetcher(client).fetch("ChIJ1") == []


def test_custom_sort_orders(client):
    client.list_reviews.return_value = reviews_body("x")

    fetcher = ReviewFetcher(client, [SortOrder.HIGHEST_RATING])
    fetcher.fetch("ChIJ1")

    client.list_reviews.assert_called_once_with("ChIJ1", "ratingHigh")


def test_empty_sort_orders_rejected(client):
    with pytest.raises(ValueError):
        ReviewFetcher(client, [])


def test_parse_reviews_text_fallbacks():
    """Test snippet, extracted snippet and missing text."""
    data = {
        "reviews": [
            {"snippet": "  Plain  ", "rating": 5, "user": {"name": "Ana"}},
            {"extracted_snippet": {"original": "From extracted"}, "rating": 2},
            {"rating": 3},
            "not a review",
        ]
    }

    reviews = parse_reviews(data, SortOrder.NEWEST)

    assert [r.text for r in reviews] == ["Plain", "From extracted", ""]
    assert reviews[0].author == "Ana"
    assert reviews[0].rating == 5
    assert reviews[1].author == ""


def test_parse_reviews_missing_list():
    assert parse_reviews({}) == []
    assert parse_reviews({"reviews": None}) == []
