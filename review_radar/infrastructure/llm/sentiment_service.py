"""
Sentiment Service - Integer Polarity Scoring
=============================================

ARCHITECTURAL DECISION:
- Scoring is a black box behind SentimentScorer: text -> integer score
- Positive score = positive text, negative = negative, 0 = neutral
- No aggregation or labelling policy here, just the number

IMPLEMENTATIONS:
- LexiconSentimentScorer: AFINN word list, always available
- LLMSentimentScorer: OpenRouter (Llama 3.2), falls back to the lexicon

EXTENSIBILITY:
- To use a different scoring library: subclass SentimentScorer
- To use OpenAI: change API URL and key in settings
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

import requests
from afinn import Afinn

from ..config import LLMSettings, Settings, get_settings

logger = logging.getLogger(__name__)


class SentimentScorer(ABC):
    """
    Scores text polarity.
    Implement this interface to plug in another classifier.
    """

    @abstractmethod
    def score(self, text: str) -> int:
        """Return an integer polarity score for text."""
        ...


class LexiconSentimentScorer(SentimentScorer):
    """
    AFINN word-list scorer (AFINN-165, about 3,300 weighted words and phrases).

    The score is the sum of the AFINN weights found in the text. A negator
    directly before a scored word flips that word's weight ("not good"
    scores -3), unless AFINN already lists the pair as a phrase.

    USAGE:
        scorer = LexiconSentimentScorer()
        scorer.score("Great coffee, terrible parking")  # 3 + -3 = 0
    """

    NEGATORS = frozenset({
        "not", "no", "never", "dont", "don't", "didnt", "didn't", "isnt", "isn't",
        "wasnt", "wasn't", "cant", "can't", "wont", "won't", "hardly",
    })

    TOKEN_PATTERN = re.compile(r"[a-z']+")

    def __init__(self, language: str = "en"):
        self._afinn = Afinn(language=language)

    def score(self, text: str) -> int:
        if not text:
            return 0

        total = self._afinn.score(text)

        tokens = self.TOKEN_PATTERN.findall(text.lower())
        for negator, token in zip(tokens, tokens[1:]):
            if negator not in self.NEGATORS or token in self.NEGATORS:
                continue
            weight = self._afinn.score(token)
            # skip pairs AFINN scores as a phrase of their own
            if weight and self._afinn.score(f"{negator} {token}") == weight:
                total -= 2 * weight

        return int(round(total))


class LLMSentimentScorer(SentimentScorer):
    """
    Sentiment scoring via LLM.

    FALLBACK BEHAVIOR:
    - If no API key: uses the lexicon scorer
    - If API fails: uses the lexicon scorer
    - If response is not an integer: uses the lexicon scorer
    """

    PROMPT_TEMPLATE = (
        "Rate the sentiment of the following customer review as a single "
        "integer from -5 (very negative) to 5 (very positive). Use 0 for "
        "neutral or unclear text. Reply with only the integer.\n\n"
        "Review: '''{review}'''"
    )

    MIN_SCORE = -5
    MAX_SCORE = 5

    def __init__(
        self,
        settings: Optional[LLMSettings] = None,
        fallback: Optional[SentimentScorer] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = settings or get_settings().llm
        self._api_key = settings.api_key
        self._api_url = settings.api_url
        self._model = settings.model
        self._temperature = settings.temperature
        self._timeout = settings.timeout_seconds
        self._fallback = fallback or LexiconSentimentScorer()
        self._session = session or requests.Session()

        if not self._api_key:
            logger.warning(
                "No OPENROUTER_API_KEY set. "
                "Sentiment scoring will use the word lexicon."
            )

    def score(self, text: str) -> int:
        if not text or len(text.strip()) < 3:
            return 0

        if self._api_key:
            result = self._score_with_llm(text)
            if result is not None:
                return result

        return self._fallback.score(text)

    def _score_with_llm(self, text: str) -> Optional[int]:
        """
        Score using OpenRouter LLM API.

        Returns:
            Score or None if API call fails.
        """
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": "https://github.com/reviewradar",  # Required by OpenRouter
        }

        payload = {
            "model": self._model,
            "messages": [
                {"role": "user", "content": self.PROMPT_TEMPLATE.format(review=text)}
            ],
            "temperature": self._temperature,
            "max_tokens": 5,
        }

        try:
            response = self._session.post(
                self._api_url,
                headers=headers,
                json=payload,
                timeout=self._timeout
            )
            response.raise_for_status()
            content = self._extract_response_content(response.json())
            return self._parse_score(content)

        except requests.Timeout:
            logger.warning("LLM API timeout, falling back to lexicon")
            return None

        except requests.RequestException as e:
            logger.warning(f"LLM API error: {e}, falling back to lexicon")
            return None

        except ValueError as e:
            logger.warning(f"LLM API returned invalid JSON: {e}, falling back to lexicon")
            return None

    def _extract_response_content(self, data: dict) -> str:
        """Extract text content from API response."""
        try:
            choices = data.get("choices", [])
            if choices:
                message = choices[0].get("message", {})
                return message.get("content", "").strip()
        except (AttributeError, IndexError, TypeError):
            pass
        return ""

    def _parse_score(self, content: str) -> Optional[int]:
        """Parse LLM reply into a clamped integer score."""
        match = re.search(r"[-+]?\d+", content or "")
        if not match:
            logger.warning(f"Unexpected LLM reply: {content!r}")
            return None

        value = int(match.group())
        return max(self.MIN_SCORE, min(self.MAX_SCORE, value))


def create_sentiment_scorer(settings: Optional[Settings] = None) -> SentimentScorer:
    """Pick the LLM scorer when an API key is configured, else the lexicon."""
    settings = settings or get_settings()
    if settings.llm.api_key:
        logger.info(f"Sentiment scoring via LLM ({settings.llm.model})")
        return LLMSentimentScorer(settings.llm)
    logger.info("Sentiment scoring via word lexicon")
    return LexiconSentimentScorer()
