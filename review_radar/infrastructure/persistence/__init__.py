from .database import AnalysisRepository, init_database, utc_timestamp

__all__ = ["AnalysisRepository", "init_database", "utc_timestamp"]
