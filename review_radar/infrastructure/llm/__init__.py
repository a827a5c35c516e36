from .sentiment_service import (
    LexiconSentimentScorer,
    LLMSentimentScorer,
    SentimentScorer,
    create_sentiment_scorer,
)

__all__ = [
    "LexiconSentimentScorer",
    "LLMSentimentScorer",
    "SentimentScorer",
    "create_sentiment_scorer",
]
