# Infrastructure Layer
# ====================
# Contains all external service integrations:
# - places/: SerpAPI place search, resolution and concurrent review retrieval
# - llm/: sentiment scoring (OpenRouter LLM with a word-lexicon fallback)
# - persistence/: SQLite analysis store
# - config/: Environment and settings management
#
# This layer can be replaced entirely without affecting domain/application layers.
