"""
Tests for the HTTP surface.

The pipeline is a mock; these tests cover routing and error mapping only.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from review_radar.application import AnalysisOutcome, AnalysisPipeline
from review_radar.domain.errors import (
    InvalidInput,
    PersistenceFailure,
    PlaceNotFound,
    UnresolvableUrl,
    UpstreamUnavailable,
)
from review_radar.domain.models import AnalysisRecord, AnalysisSummary
from review_radar.web.app import create_app


RECORD = AnalysisRecord(
    id=1,
    input="Cafe Luna",
    place_name="Cafe Luna",
    place_id="ChIJ1",
    summary=AnalysisSummary(),
    created_at="2026-10-19T10:00:00.000000+00:00",
)


@pytest.fixture
def pipeline():
    return MagicMock(spec=AnalysisPipeline)


@pytest.fixture
def client(pipeline):
    return TestClient(create_app(pipeline))


def test_analyze_new_record(client, pipeline):
    pipeline.analyze.return_value = AnalysisOutcome(record=RECORD, cached=False)

    response = client.post("/analyze", json={"input": "Cafe Luna"})

    assert response.status_code == 201
    assert response.json() == RECORD.to_dict()
    pipeline.analyze.assert_called_once_with("Cafe Luna")


def test_analyze_cached_record(client, pipeline):
    pipeline.analyze.return_value = AnalysisOutcome(record=RECORD, cached=True)

    response = client.post("/analyze", json={"input": "Cafe Luna"})

    assert response.status_code == 200
    assert response.json()["summary"]["overall"] == "no_reviews"


def test_analyze_accepts_url_field(client, pipeline):
    pipeline.analyze.return_value = AnalysisOutcome(record=RECORD, cached=False)

    client.post("/analyze", json={"url": "https://www.google.com/maps/place/Cafe+Luna"})

    pipeline.analyze.assert_called_once_with("https://www.google.com/maps/place/Cafe+Luna")


@pytest.mark.parametrize("error,status,code", [
    (InvalidInput(), 400, "invalid_input"),
    (UnresolvableUrl(), 400, "unresolvable_url"),
    (PlaceNotFound(), 404, "place_not_found"),
    (UpstreamUnavailable(), 502, "upstream_unavailable"),
    (PersistenceFailure(), 500, "persistence_failure"),
])
def test_analysis_errors_mapped(client, pipeline, error, status, code):
    pipeline.analyze.side_effect = error

    response = client.post("/analyze", json={"input": "x"})

    assert response.status_code == status
    assert response.json() == {"error": code, "message": error.message}


@pytest.mark.parametrize("kwargs", [
    {"json": {"input": 42}},
    {"content": "not json", "headers": {"Content-Type": "application/json"}},
    {},
])
def test_malformed_analyze_body_is_invalid_input(client, pipeline, kwargs):
    """Test that bodies the request model rejects map to invalid_input, not 422."""
    response = client.post("/analyze", **kwargs)

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"
    pipeline.analyze.assert_not_called()



def test_list_analyses(client, pipeline):
    pipeline.list_analyses.return_value = [RECORD]

    response = client.get("/analyze", params={"limit": 5})

    assert response.status_code == 200
    assert response.json() == [RECORD.to_dict()]
    pipeline.list_analyses.assert_called_once_with(5)


def test_list_analyses_rejects_bad_limit(client):
    assert client.get("/analyze", params={"limit": 0}).status_code == 422


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
