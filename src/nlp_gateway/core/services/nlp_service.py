"""
Facade for provider-backed NLP operations.

Validates request text and delegates to a LanguageService.
"""

from typing import Optional

from nlp_gateway.config import Config, get_config
from nlp_gateway.core.language_service import LanguageService
from nlp_gateway.core.word_cloud import require_text
from nlp_gateway.logger import get_logger
from nlp_gateway.models import IdentifiedLanguage, Language


class NlpService:
    """Facade for sentiment, keyword, language detection and translation calls."""

    def __init__(self, language_service: LanguageService, default_target_language: str = "en"):
        """Initialize NLP service.

        Args:
            language_service: Provider adapter
            default_target_language: Target used when a request names none
        """
        self._language_service = language_service
        self.default_target_language = default_target_language
        self._logger = get_logger(__name__)

    async def analyze_sentiment(self, text: Optional[str]) -> dict:
        """Return the provider's document sentiment result for text."""
        return await self._language_service.analyze_sentiment(require_text(text))

    async def extract_keywords(self, text: Optional[str]) -> list[str]:
        """Return provider keywords for text."""
        return await self._language_service.extract_keywords(require_text(text))

    async def detect_language(self, text: Optional[str]) -> list[IdentifiedLanguage]:
        """Return the top language candidates for text."""
        return await self._language_service.detect_language(require_text(text))

    async def translate(self, text: Optional[str], target_lang: Optional[str] = None) -> Language:
        """Translate text into target_lang (or the default target).

        Raises:
            InvalidInput: If text is missing or blank
            NoSourceLanguageDetected: If the source language is unknown
            ProviderError: If a provider call fails
        """
        text = require_text(text)
        target = target_lang or self.default_target_language
        self._logger.debug(f"Translate request, target={target}")
        return await self._language_service.translate(text, target)


def create_nlp_service(
    config: Optional[Config] = None,
    language_service: Optional[LanguageService] = None,
) -> NlpService:
    """Create an NlpService instance.

    Args:
        config: Application configuration
        language_service: Provider adapter (built from config if omitted)

    Returns:
        Configured NlpService
    """
    from nlp_gateway.core.factories import create_language_service

    config = config or get_config()
    return NlpService(
        language_service or create_language_service(config),
        default_target_language=config.translation.default_target_language,
    )
