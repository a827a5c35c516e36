"""Turns user input (place name or map URL) into a place search query."""

import logging
from typing import Optional
from urllib.parse import unquote, urlsplit

from ..domain.errors import InvalidInput, UnresolvableUrl

logger = logging.getLogger(__name__)

PLACE_MARKER = "/place/"


def _parse_url(text: str):
    """Return the split URL if text has a scheme and a host, else None."""
    try:
        parts = urlsplit(text)
    except ValueError:
        return None
    if parts.scheme and parts.netloc:
        return parts
    return None


def normalize_place_reference(raw: Optional[str]) -> str:
    """
    Build the search query for a place reference.

    - Free text is used verbatim (trimmed).
    - URLs must contain a ".../place/<Name+With+Pluses>/..." segment.

    Raises:
        InvalidInput: raw is missing or blank.
        UnresolvableUrl: raw is a URL without a place name segment.
    """
    if raw is None or not str(raw).strip():
        raise InvalidInput()

    text = str(raw).strip()
    parts = _parse_url(text)
    if parts is None:
        return text

    path = unquote(parts.path)
    _, marker, rest = path.partition(PLACE_MARKER)
    name = rest.split("/", 1)[0].replace("+", " ").strip() if marker else ""

    if not name:
        logger.info(f"No place segment in URL: {text[:100]}")
        raise UnresolvableUrl(detail=text)

    return name
