"""Shared fixtures: fake SerpAPI client, deterministic scorer, temp database."""

from unittest.mock import MagicMock

import pytest

from review_radar.infrastructure.persistence import AnalysisRepository
from review_radar.infrastructure.places import SerpApiClient
from tests.fakes import TableScorer, reviews_body, search_body


@pytest.fixture
def fake_client():
    """SerpApiClient double: one place, overlapping reviews per sort order."""
    client = MagicMock(spec=SerpApiClient)
    client.search_places.return_value = search_body()

    pages = {
        "newestFirst": reviews_body("Great coffee", "Rude staff"),
        "ratingLow": reviews_body("Rude staff", "Cold food, slow service"),
        "ratingHigh": reviews_body("Great coffee"),
    }
    client.list_reviews.side_effect = lambda place_id, sort_by: pages[sort_by]
    return client


@pytest.fixture
def scorer():
    return TableScorer({
        "Great coffee": 3,
        "Rude staff": -2,
        "Cold food, slow service": -3,
    })


@pytest.fixture
def repository(tmp_path):
    repo = AnalysisRepository(tmp_path / "analyses.db")
    repo.init()
    return repo
