# Review Radar - Place Review Sentiment Analysis
# ==============================================
# Resolves a place name or map URL, pulls its public reviews across several
# sort orders at once, scores them and caches the result per place.
#
# ARCHITECTURE LAYERS:
# - Presentation:   web/ (FastAPI) and the CLI runner
# - Application:    normalization, dedup, aggregation, pipeline orchestration
# - Domain:         immutable records and the error taxonomy
# - Infrastructure: External services (SerpAPI, LLM, SQLite, settings)
#
# This design allows easy replacement of infrastructure components
# (e.g., swap SQLite for another store, or OpenRouter for another scorer).
