"""
Settings Module - Centralized Configuration Management
=======================================================

ARCHITECTURAL DECISION:
- All configuration is loaded from environment variables (no hardcoded secrets)
- Settings are immutable dataclasses
- Single source of truth for all configurable values

EXTENSIBILITY:
- To add another review source: add a provider-specific settings group
- To switch LLM provider: change api_url / model in LLMSettings
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

from ...domain.models import SortOrder

# Load .env file if present (development convenience)
load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "")
    try:
        return int(value) if value else default
    except ValueError:
        return default


def _sort_orders_from_env() -> Tuple[SortOrder, ...]:
    """Parse REVIEW_SORT_ORDERS (e.g. "newest,lowest_rating")."""
    raw = os.getenv("REVIEW_SORT_ORDERS", "")
    if not raw.strip():
        return tuple(SortOrder)

    orders = []
    for name in raw.split(","):
        name = name.strip().upper()
        if name in SortOrder.__members__ and SortOrder[name] not in orders:
            orders.append(SortOrder[name])
    return tuple(orders) or tuple(SortOrder)


@dataclass(frozen=True)
class SerpApiSettings:
    """Place search / review listing service (SerpAPI)."""

    api_key: str = field(default_factory=lambda: os.getenv("SERPAPI_API_KEY", ""))
    base_url: str = field(
        default_factory=lambda: os.getenv("SERPAPI_BASE_URL", "https://serpapi.com/search")
    )

    # Locale parameters sent with place searches
    locale: str = field(default_factory=lambda: os.getenv("SERPAPI_LOCALE", "en"))
    country: str = field(default_factory=lambda: os.getenv("SERPAPI_COUNTRY", "us"))

    # Per-call transport timeout
    timeout_seconds: int = field(default_factory=lambda: _env_int("SERPAPI_TIMEOUT_SECONDS", 20))


@dataclass(frozen=True)
class ReviewSettings:
    """Review retrieval settings."""

    sort_orders: Tuple[SortOrder, ...] = field(default_factory=_sort_orders_from_env)


@dataclass(frozen=True)
class LLMSettings:
    """OpenRouter LLM settings for sentiment scoring."""

    api_key: str = field(default_factory=lambda: os.getenv("OPENROUTER_API_KEY", ""))
    api_url: str = "https://openrouter.ai/api/v1/chat/completions"

    model: str = field(
        default_factory=lambda: os.getenv("OPENROUTER_MODEL", "meta-llama/llama-3.2-3b-instruct:free")
    )

    # Deterministic output
    temperature: float = 0.0
    timeout_seconds: int = 15


@dataclass(frozen=True)
class DatabaseSettings:
    """SQLite analysis store."""

    path: Path = field(
        default_factory=lambda: Path(os.getenv("DATABASE_FILE", "reviewradar.db"))
    )


@dataclass(frozen=True)
class Settings:
    """
    Root settings container - Single source of truth for all configuration.

    Usage:
        from review_radar.infrastructure.config import get_settings
        settings = get_settings()
        print(settings.serpapi.api_key)
    """

    serpapi: SerpApiSettings = field(default_factory=SerpApiSettings)
    reviews: ReviewSettings = field(default_factory=ReviewSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)
    database: DatabaseSettings = field(default_factory=DatabaseSettings)

    def validate(self) -> list[str]:
        """
        Validate settings and return list of warnings/errors.
        Returns empty list if all settings are valid.
        """
        issues = []

        if not self.serpapi.api_key:
            issues.append(
                "WARNING: SERPAPI_API_KEY not set. "
                "Place search and review retrieval will fail."
            )

        if not self.llm.api_key:
            issues.append(
                "WARNING: OPENROUTER_API_KEY not set. "
                "Sentiment scoring will use the word lexicon."
            )

        if self.serpapi.timeout_seconds <= 0:
            issues.append(
                f"WARNING: SERPAPI_TIMEOUT_SECONDS={self.serpapi.timeout_seconds} is not positive."
            )

        return issues


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get singleton Settings instance.
    Cached to ensure consistent settings throughout application lifecycle.
    """
    return Settings()
