"""
Facade for word cloud generation.
"""

from typing import Iterable, Optional

from nlp_gateway.config import Config, get_config
from nlp_gateway.core.language_service import LanguageService
from nlp_gateway.core.word_cloud import WordCloudGenerator
from nlp_gateway.models import OccurrenceCount


class WordCloudService:
    """Facade for keyword frequency counting."""

    def __init__(self, generator: WordCloudGenerator):
        self._generator = generator

    async def generate(self, text: Optional[str]) -> list[OccurrenceCount]:
        """Count provider keywords in text.

        Args:
            text: Input text

        Returns:
            OccurrenceCount entries ordered by keyword
        """
        return await self._generator.generate(text)


def create_word_cloud_service(
    config: Optional[Config] = None,
    language_service: Optional[LanguageService] = None,
    stopwords: Optional[Iterable[str]] = None,
) -> WordCloudService:
    """Create a WordCloudService instance.

    Args:
        config: Application configuration
        language_service: Provider adapter (built from config if omitted)
        stopwords: Override the configured stopword set

    Returns:
        Configured WordCloudService
    """
    from nlp_gateway.core.factories import create_language_service, create_word_cloud_generator

    config = config or get_config()
    language_service = language_service or create_language_service(config)
    return WordCloudService(
        create_word_cloud_generator(language_service, config, stopwords=stopwords)
    )
