"""
Factory functions for creating core components with proper dependency injection.

Components are built from an explicit ``Config`` (falling back to the global
configuration) so that provider clients are created once at startup and
passed down, never held as module state.

Usage:
    from nlp_gateway.core.factories import (
        create_language_service,
        create_word_cloud_generator,
    )

    service = create_language_service(config)
    generator = create_word_cloud_generator(service, config)
"""

from typing import Iterable, Optional

import httpx

from nlp_gateway.config import Config, get_config
from nlp_gateway.core.language_service import LanguageService, WatsonLanguageService
from nlp_gateway.core.word_cloud import WordCloudGenerator, load_stopwords


def create_language_service(
    config: Optional[Config] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LanguageService:
    """Create the Watson-backed LanguageService.

    Args:
        config: Application configuration
        transport: Optional httpx transport (used by tests)

    Returns:
        Configured WatsonLanguageService instance
    """
    config = config or get_config()
    return WatsonLanguageService(config.watson, transport=transport)


def create_word_cloud_generator(
    language_service: LanguageService,
    config: Optional[Config] = None,
    stopwords: Optional[Iterable[str]] = None,
) -> WordCloudGenerator:
    """Create a configured WordCloudGenerator.

    Args:
        language_service: Service used for keyword extraction
        config: Application configuration
        stopwords: Override the configured stopword set

    Returns:
        Configured WordCloudGenerator instance
    """
    config = config or get_config()
    word_cloud_config = config.word_cloud

    if stopwords is None:
        stopwords = load_stopwords(word_cloud_config.stopwords_language) | set(
            word_cloud_config.extra_stopwords
        )

    return WordCloudGenerator(
        language_service,
        stopwords=stopwords,
        deduplicate=word_cloud_config.deduplicate,
        ignore_keyword_case=word_cloud_config.ignore_keyword_case,
    )
