"""Core business logic modules for NLP Gateway.

External code (web layer, scripts, etc.) should use the Service Facades:

    from nlp_gateway.core.services import NlpService, WordCloudService

Available Services:
    - NlpService: Sentiment, keywords, language detection, translation
    - WordCloudService: Keyword frequency counting
"""

from nlp_gateway.core.services import (
    NlpService,
    WordCloudService,
    create_nlp_service,
    create_word_cloud_service,
)

__all__ = [
    "NlpService",
    "WordCloudService",
    "create_nlp_service",
    "create_word_cloud_service",
]
