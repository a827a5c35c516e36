from .settings import (
    DatabaseSettings,
    LLMSettings,
    ReviewSettings,
    SerpApiSettings,
    Settings,
    get_settings,
)

__all__ = [
    "DatabaseSettings",
    "LLMSettings",
    "ReviewSettings",
    "SerpApiSettings",
    "Settings",
    "get_settings",
]
