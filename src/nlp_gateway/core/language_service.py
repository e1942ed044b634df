"""
Language service adapter for the hosted NLP provider.

``LanguageService`` is the capability interface the rest of the package
depends on. ``WatsonLanguageService`` implements it against IBM Watson
Natural Language Understanding and Language Translator.

Every operation is a single network call (translation is two: identify,
then translate). There is no retry, backoff or result caching; provider
failures surface as ``ProviderError``.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from nlp_gateway.config import WatsonConfig
from nlp_gateway.core.auth import IamAuthenticator
from nlp_gateway.exceptions import NoSourceLanguageDetected, ProviderError
from nlp_gateway.logger import get_logger
from nlp_gateway.models import IdentifiedLanguage, Language

logger = get_logger(__name__)


class LanguageService(ABC):
    """Abstract interface to a hosted NLP provider.

    Subclasses implement the provider calls. ``translate`` is shared: it
    identifies the source language and delegates to ``translate_text``.
    """

    @abstractmethod
    async def analyze_sentiment(self, text: str) -> dict:
        """Score the document-level sentiment of text.

        Args:
            text: Text to analyze

        Returns:
            The provider's raw result
        """
        ...

    @abstractmethod
    async def extract_keywords(self, text: str) -> list[str]:
        """Extract salient keywords from text.

        Args:
            text: Text to analyze

        Returns:
            Keyword strings in provider order (may be empty)
        """
        ...

    @abstractmethod
    async def detect_language(self, text: str) -> list[IdentifiedLanguage]:
        """Identify the language of text.

        Args:
            text: Text to analyze

        Returns:
            Top candidates in the provider's ranking
        """
        ...

    @abstractmethod
    async def translate_text(self, text: str, source: str, target: str) -> str:
        """Translate text between two known languages.

        Args:
            text: Text to translate
            source: Source language code
            target: Target language code

        Returns:
            Translated text
        """
        ...

    async def translate(self, text: str, target_lang: str) -> Language:
        """Detect the source language of text and translate it.

        Args:
            text: Text to translate
            target_lang: Target language code

        Returns:
            Language with the translated text and target code

        Raises:
            NoSourceLanguageDetected: If identification returned no candidate
        """
        candidates = await self.detect_language(text)
        if not candidates:
            raise NoSourceLanguageDetected("Could not detect the language of the text")

        source = candidates[0].language
        logger.debug(f"Translating {source} -> {target_lang}")

        translated = await self.translate_text(text, source, target_lang)
        return Language(text=translated, lang=target_lang)


class WatsonLanguageService(LanguageService):
    """IBM Watson implementation of ``LanguageService``."""

    def __init__(
        self,
        config: WatsonConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the Watson adapter.

        Args:
            config: Watson credentials, service URLs and limits
            transport: Optional httpx transport shared by all calls (used by tests)
        """
        self.config = config
        self._transport = transport

        self._nlu_auth = IamAuthenticator(
            api_key=config.nlu_api_key,
            iam_url=config.iam_url,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )
        self._translator_auth = IamAuthenticator(
            api_key=config.translator_api_key,
            iam_url=config.iam_url,
            timeout_seconds=config.timeout_seconds,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Natural Language Understanding
    # ------------------------------------------------------------------

    async def analyze_sentiment(self, text: str) -> dict:
        return await self._analyze(text, {"sentiment": {"document": True}})

    async def extract_keywords(self, text: str) -> list[str]:
        result = await self._analyze(text, {"keywords": {"limit": self.config.keywords_limit}})

        keywords = result.get("keywords", [])
        if not isinstance(keywords, list):
            raise ProviderError("Malformed keywords in NLU response")

        try:
            return [keyword["text"] for keyword in keywords]
        except (KeyError, TypeError) as e:
            raise ProviderError("Malformed keywords in NLU response") from e

    async def _analyze(self, text: str, features: dict) -> dict:
        """Call the NLU analyze endpoint with the given features."""
        payload = await self._request(
            self._nlu_auth,
            f"{self.config.nlu_url}/v1/analyze",
            version=self.config.nlu_version,
            json={"text": text, "features": features},
        )
        if not isinstance(payload, dict):
            raise ProviderError("Malformed NLU response")
        return payload

    # ------------------------------------------------------------------
    # Language Translator
    # ------------------------------------------------------------------

    async def detect_language(self, text: str) -> list[IdentifiedLanguage]:
        payload = await self._request(
            self._translator_auth,
            f"{self.config.translator_url}/v3/identify",
            version=self.config.translator_version,
            content=text.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

        languages = payload.get("languages") if isinstance(payload, dict) else None
        if not isinstance(languages, list):
            raise ProviderError("Malformed identify response")

        try:
            candidates = [IdentifiedLanguage.model_validate(item) for item in languages]
        except ValidationError as e:
            raise ProviderError("Malformed identify response") from e

        return candidates[: self.config.max_detected_languages]

    async def translate_text(self, text: str, source: str, target: str) -> str:
        payload = await self._request(
            self._translator_auth,
            f"{self.config.translator_url}/v3/translate",
            version=self.config.translator_version,
            json={"text": [text], "source": source, "target": target},
        )

        try:
            return payload["translations"][0]["translation"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Malformed translate response") from e

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        auth: IamAuthenticator,
        url: str,
        version: str,
        json: Optional[dict] = None,
        content: Optional[bytes] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        """POST to a Watson endpoint and return the decoded JSON body.

        Raises:
            ProviderError: On transport failure, non-2xx status or invalid JSON
        """
        token = await auth.get_token()

        request_headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        logger.debug(f"POST {url}")

        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    params={"version": version},
                    json=json,
                    content=content,
                    headers=request_headers,
                )
        except httpx.HTTPError as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise ProviderError(f"Request to provider failed: {e}") from e

        if response.is_error:
            message = self._error_message(response)
            logger.warning(f"Provider returned {response.status_code} for {url}: {message}")
            if response.status_code == 401:
                auth.invalidate()
            raise ProviderError(message, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError("Provider response is not valid JSON", response.status_code) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract the error text Watson puts in its error bodies."""
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase

        if isinstance(body, dict):
            for key in ("error", "errorMessage", "message"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        return response.reason_phrase
