"""
NLP API blueprint.

This module contains the sentiment, keyword, language detection,
translation and word cloud endpoints.
"""

from flask import Blueprint, request
from pydantic import ValidationError

from nlp_gateway.core.services import NlpService, WordCloudService
from nlp_gateway.exceptions import InvalidInput
from nlp_gateway.models import TextRequest
from nlp_gateway.web.serializers import (
    api_response,
    identified_language_to_dict,
    language_to_dict,
    occurrence_to_dict,
)


class NlpBlueprint:
    """Blueprint for provider-backed NLP operations."""

    def __init__(self, nlp_service: NlpService, word_cloud_service: WordCloudService):
        """Initialize the NLP blueprint.

        Args:
            nlp_service: Facade for provider calls
            word_cloud_service: Facade for word cloud generation
        """
        self.nlp_service = nlp_service
        self.word_cloud_service = word_cloud_service
        self.blueprint = Blueprint(
            "nlp",
            __name__,
            url_prefix="/api/nlp"
        )
        self._register_routes()

    def _register_routes(self):
        """Register all NLP routes."""
        self.blueprint.add_url_rule("/sentiment", view_func=self._sentiment, methods=["POST"])
        self.blueprint.add_url_rule("/keywords", view_func=self._keywords, methods=["POST"])
        self.blueprint.add_url_rule("/language", view_func=self._language, methods=["POST"])
        self.blueprint.add_url_rule("/translate", view_func=self._translate, methods=["POST"])
        self.blueprint.add_url_rule("/word-cloud", view_func=self._word_cloud, methods=["POST"])

    def _parse_request(self) -> TextRequest:
        """Read the JSON body as a TextRequest.

        Raises:
            InvalidInput: If the body is not a JSON object or has wrong field types
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            raise InvalidInput("Request body must be a JSON object")
        try:
            return TextRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidInput(f"Invalid request: {e.errors()[0]['msg']}") from e

    async def _sentiment(self):
        """Analyze document sentiment."""
        req = self._parse_request()
        result = await self.nlp_service.analyze_sentiment(req.text)
        return api_response(success=True, data=result)

    async def _keywords(self):
        """Extract keywords."""
        req = self._parse_request()
        keywords = await self.nlp_service.extract_keywords(req.text)
        return api_response(success=True, data=keywords)

    async def _language(self):
        """Detect the top language candidates."""
        req = self._parse_request()
        candidates = await self.nlp_service.detect_language(req.text)
        return api_response(success=True, data=[identified_language_to_dict(c) for c in candidates])

    async def _translate(self):
        """Detect the source language and translate."""
        req = self._parse_request()
        language = await self.nlp_service.translate(req.text, target_lang=req.target_lang)
        return api_response(success=True, data=language_to_dict(language))

    async def _word_cloud(self):
        """Count keyword occurrences."""
        req = self._parse_request()
        occurrences = await self.word_cloud_service.generate(req.text)
        return api_response(success=True, data=[occurrence_to_dict(o) for o in occurrences])
