"""Shared fixtures for NLP Gateway tests."""

import pytest

from nlp_gateway.config import Config, LoggingConfig, WatsonConfig
from nlp_gateway.core.language_service import LanguageService
from nlp_gateway.models import IdentifiedLanguage

TEST_STOPWORDS = frozenset(
    ["the", "a", "an", "and", "on", "was", "is", "of", "to", "in", "it", "here"]
)


class FakeLanguageService(LanguageService):
    """In-memory LanguageService with canned results."""

    def __init__(self, keywords=None, languages=None, sentiment=None, error=None):
        self.keywords = keywords if keywords is not None else []
        self.languages = languages if languages is not None else []
        self.sentiment = sentiment or {"sentiment": {"document": {"score": 0.5, "label": "positive"}}}
        self.error = error
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.error is not None:
            raise self.error

    async def analyze_sentiment(self, text):
        self._record("analyze_sentiment", text)
        return self.sentiment

    async def extract_keywords(self, text):
        self._record("extract_keywords", text)
        return list(self.keywords)

    async def detect_language(self, text):
        self._record("detect_language", text)
        return [IdentifiedLanguage(**item) for item in self.languages]

    async def translate_text(self, text, source, target):
        self._record("translate_text", text, source, target)
        return f"[{source}->{target}] {text}"


@pytest.fixture
def stopwords():
    """Small fixed stopword set, so tests do not need the NLTK corpus."""
    return TEST_STOPWORDS


@pytest.fixture
def fake_service():
    """Fake provider returning the keywords 'cat' and 'mat'."""
    return FakeLanguageService(
        keywords=["cat", "mat"],
        languages=[
            {"language": "fr", "confidence": 0.91},
            {"language": "it", "confidence": 0.05},
            {"language": "es", "confidence": 0.02},
        ],
    )


@pytest.fixture
def watson_config():
    """Watson configuration pointing at fake hosts."""
    return WatsonConfig(
        nlu_api_key="nlu-key",
        nlu_url="https://nlu.example.com/",
        translator_api_key="lt-key",
        translator_url="https://lt.example.com",
        iam_url="https://iam.example.com/identity/token",
        timeout_seconds=5,
    )


@pytest.fixture
def test_config(watson_config):
    """Application configuration without file logging."""
    return Config(
        watson=watson_config,
        logging=LoggingConfig(file_enabled=False),
    )
