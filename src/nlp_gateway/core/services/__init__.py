"""
Facade services for core modules.

External code (web layer, scripts) should only interact with these services,
not with the adapter or counter classes directly.

Example:
    from nlp_gateway.core.services import create_nlp_service, create_word_cloud_service

    nlp = create_nlp_service()
    language = await nlp.translate("Bonjour", target_lang="en")
"""

from nlp_gateway.core.services.nlp_service import NlpService, create_nlp_service
from nlp_gateway.core.services.word_cloud_service import (
    WordCloudService,
    create_word_cloud_service,
)

__all__ = [
    # Services
    "NlpService",
    "WordCloudService",
    # Factory functions
    "create_nlp_service",
    "create_word_cloud_service",
]
