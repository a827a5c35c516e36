"""
Analysis Errors
===============

Every stage of the analysis pipeline fails with one of these.
`code` and `message` are stable and safe to show to users;
`status_code` is the HTTP-equivalent used by the web layer.
"""

from typing import Optional


class AnalysisError(Exception):
    """Base exception for analysis failures."""

    code = "analysis_error"
    status_code = 500
    default_message = "The analysis could not be completed."

    def __init__(self, message: Optional[str] = None, detail: str = ""):
        self.message = message or self.default_message
        # Internal detail for logs only
        self.detail = detail
        super().__init__(self.message)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class InvalidInput(AnalysisError):
    code = "invalid_input"
    status_code = 400
    default_message = "A place name or map URL is required."


class UnresolvableUrl(AnalysisError):
    code = "unresolvable_url"
    status_code = 400
    default_message = "The URL does not contain a place name (expected a '/place/' segment)."


class PlaceNotFound(AnalysisError):
    code = "place_not_found"
    status_code = 404
    default_message = "No matching place was found."


class UpstreamUnavailable(AnalysisError):
    code = "upstream_unavailable"
    status_code = 502
    default_message = "The place search service is unavailable. Please try again later."


class PersistenceFailure(AnalysisError):
    code = "persistence_failure"
    status_code = 500
    default_message = "The analysis store is unavailable."
