"""Unit tests for the Watson language service adapter."""

import asyncio
import json
import time
from urllib.parse import parse_qs

import httpx
import pytest

from nlp_gateway.core.auth import IAM_GRANT_TYPE, IamAuthenticator
from nlp_gateway.core.language_service import WatsonLanguageService
from nlp_gateway.exceptions import NoSourceLanguageDetected, ProviderError
from nlp_gateway.models import IdentifiedLanguage, Language


class FakeWatson:
    """httpx handler emulating IAM, NLU and Language Translator."""

    def __init__(self):
        self.requests = []
        self.nlu_response = httpx.Response(200, json={})
        self.identify_response = httpx.Response(200, json={"languages": []})
        self.translate_response = httpx.Response(200, json={"translations": []})
        self.token_requests = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.url.host == "iam.example.com":
            self.token_requests += 1
            form = parse_qs(request.content.decode())
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{form['apikey'][0]}",
                    "expires_in": 3600,
                    "expiration": int(time.time()) + 3600,
                },
            )
        if path == "/v1/analyze":
            return self.nlu_response
        if path == "/v3/identify":
            return self.identify_response
        if path == "/v3/translate":
            return self.translate_response
        return httpx.Response(404, json={"error": "Not Found", "code": 404})

    def api_requests(self):
        return [r for r in self.requests if r.url.host != "iam.example.com"]


@pytest.fixture
def watson():
    return FakeWatson()


@pytest.fixture
def service(watson_config, watson):
    return WatsonLanguageService(watson_config, transport=httpx.MockTransport(watson))


class TestAnalyzeSentiment:
    """Tests for sentiment analysis."""

    def test_returns_raw_result(self, service, watson):
        """Test the provider result is returned unchanged."""
        body = {
            "usage": {"features": 1},
            "sentiment": {"document": {"score": -0.4, "label": "negative"}},
            "language": "en",
        }
        watson.nlu_response = httpx.Response(200, json=body)

        assert asyncio.run(service.analyze_sentiment("I hate rain")) == body

    def test_request_shape(self, service, watson):
        """Test the analyze call carries text, features, version and token."""
        watson.nlu_response = httpx.Response(200, json={"sentiment": {}})
        asyncio.run(service.analyze_sentiment("I hate rain"))

        (request,) = watson.api_requests()
        assert request.method == "POST"
        assert str(request.url).startswith("https://nlu.example.com/v1/analyze")
        assert request.url.params["version"] == "2022-04-07"
        assert request.headers["Authorization"] == "Bearer token-nlu-key"
        assert json.loads(request.content) == {
            "text": "I hate rain",
            "features": {"sentiment": {"document": True}},
        }


class TestExtractKeywords:
    """Tests for keyword extraction."""

    def test_returns_keyword_texts(self, service, watson):
        """Test keyword objects are reduced to their text."""
        watson.nlu_response = httpx.Response(
            200,
            json={"keywords": [
                {"text": "cat", "relevance": 0.9, "count": 2},
                {"text": "mat", "relevance": 0.5, "count": 1},
            ]},
        )
        assert asyncio.run(service.extract_keywords("The cat sat on the mat")) == ["cat", "mat"]

        (request,) = watson.api_requests()
        assert json.loads(request.content)["features"] == {"keywords": {"limit": 50}}

    def test_empty_keywords(self, service, watson):
        """Test a response without keywords is an empty success."""
        watson.nlu_response = httpx.Response(200, json={"keywords": []})
        assert asyncio.run(service.extract_keywords("hmm")) == []

    def test_malformed_keywords(self, service, watson):
        """Test keyword entries without text are a provider error."""
        watson.nlu_response = httpx.Response(200, json={"keywords": [{"relevance": 1.0}]})
        with pytest.raises(ProviderError):
            asyncio.run(service.extract_keywords("hmm"))


class TestDetectLanguage:
    """Tests for language identification."""

    def test_returns_top_three(self, service, watson):
        """Test only the first three candidates are kept, in provider order."""
        watson.identify_response = httpx.Response(
            200,
            json={"languages": [
                {"language": "fr", "confidence": 0.9},
                {"language": "it", "confidence": 0.05},
                {"language": "es", "confidence": 0.03},
                {"language": "pt", "confidence": 0.01},
            ]},
        )
        result = asyncio.run(service.detect_language("Bonjour le monde"))

        assert result == [
            IdentifiedLanguage(language="fr", confidence=0.9),
            IdentifiedLanguage(language="it", confidence=0.05),
            IdentifiedLanguage(language="es", confidence=0.03),
        ]

    def test_sends_plain_text(self, service, watson):
        """Test identify posts the raw text with the translator key."""
        asyncio.run(service.detect_language("Bonjour"))

        (request,) = watson.api_requests()
        assert request.url.path == "/v3/identify"
        assert request.url.params["version"] == "2018-05-01"
        assert request.headers["Content-Type"].startswith("text/plain")
        assert request.headers["Authorization"] == "Bearer token-lt-key"
        assert request.content == "Bonjour".encode("utf-8")

    def test_malformed_response(self, service, watson):
        """Test a body without a languages list is a provider error."""
        watson.identify_response = httpx.Response(200, json={"unexpected": True})
        with pytest.raises(ProviderError):
            asyncio.run(service.detect_language("Bonjour"))


class TestTranslate:
    """Tests for translation."""

    def test_detects_then_translates(self, service, watson):
        """Test the top detected language is used as source."""
        watson.identify_response = httpx.Response(
            200,
            json={"languages": [
                {"language": "fr", "confidence": 0.9},
                {"language": "it", "confidence": 0.1},
            ]},
        )
        watson.translate_response = httpx.Response(
            200,
            json={"translations": [{"translation": "Hello world"}], "word_count": 3},
        )

        result = asyncio.run(service.translate("Bonjour le monde", "en"))

        assert result == Language(text="Hello world", lang="en")
        identify, translate = watson.api_requests()
        assert identify.url.path == "/v3/identify"
        assert translate.url.path == "/v3/translate"
        assert json.loads(translate.content) == {
            "text": ["Bonjour le monde"],
            "source": "fr",
            "target": "en",
        }

    def test_no_source_language(self, service, watson):
        """Test translation stops when nothing is detected."""
        watson.identify_response = httpx.Response(200, json={"languages": []})

        with pytest.raises(NoSourceLanguageDetected):
            asyncio.run(service.translate("???", "en"))

        assert [r.url.path for r in watson.api_requests()] == ["/v3/identify"]

    def test_malformed_translation(self, service, watson):
        """Test an empty translations list is a provider error."""
        watson.identify_response = httpx.Response(
            200, json={"languages": [{"language": "fr", "confidence": 0.9}]}
        )
        watson.translate_response = httpx.Response(200, json={"translations": []})

        with pytest.raises(ProviderError):
            asyncio.run(service.translate("Bonjour", "en"))


class TestProviderErrors:
    """Tests for provider failure handling."""

    def test_error_status_and_message(self, service, watson):
        """Test Watson error bodies become ProviderError."""
        watson.nlu_response = httpx.Response(
            422, json={"error": "not enough text for language id", "code": 422}
        )

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(service.analyze_sentiment("x"))

        assert exc_info.value.status_code == 422
        assert exc_info.value.message == "not enough text for language id"

    def test_non_json_error(self, service, watson):
        """Test plain-text error bodies are reported as-is."""
        watson.nlu_response = httpx.Response(503, text="Service Unavailable")

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(service.analyze_sentiment("x"))
        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "Service Unavailable"

    def test_transport_error(self, watson_config):
        """Test network failures are chained into ProviderError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = WatsonLanguageService(watson_config, transport=httpx.MockTransport(handler))

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(service.extract_keywords("x"))

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_invalid_json(self, service, watson):
        """Test a 200 with a non-JSON body is a provider error."""
        watson.nlu_response = httpx.Response(200, text="<html>")
        with pytest.raises(ProviderError):
            asyncio.run(service.analyze_sentiment("x"))

    def test_unauthorized_drops_token(self, service, watson):
        """Test a 401 forces a fresh token on the next call."""
        watson.nlu_response = httpx.Response(401, json={"error": "Unauthorized", "code": 401})
        with pytest.raises(ProviderError):
            asyncio.run(service.analyze_sentiment("x"))

        watson.nlu_response = httpx.Response(200, json={"sentiment": {}})
        asyncio.run(service.analyze_sentiment("x"))

        assert watson.token_requests == 2


class TestIamAuthenticator:
    """Tests for IAM token handling."""

    def test_token_request(self, watson):
        """Test the API key grant is posted as a form."""
        auth = IamAuthenticator(
            "secret", "https://iam.example.com/identity/token", transport=httpx.MockTransport(watson)
        )
        assert asyncio.run(auth.get_token()) == "token-secret"

        (request,) = watson.requests
        form = parse_qs(request.content.decode())
        assert form == {"grant_type": [IAM_GRANT_TYPE], "apikey": ["secret"]}

    def test_token_is_reused(self, service, watson):
        """Test one token serves several calls."""
        watson.nlu_response = httpx.Response(200, json={"keywords": []})

        async def run():
            await service.extract_keywords("a")
            await service.extract_keywords("b")

        asyncio.run(run())
        assert watson.token_requests == 1

    def test_expired_token_is_refreshed(self, watson):
        """Test a token inside the refresh margin is replaced."""
        auth = IamAuthenticator(
            "secret", "https://iam.example.com/identity/token", transport=httpx.MockTransport(watson)
        )
        asyncio.run(auth.get_token())
        auth._expires_at = time.time() + 10

        asyncio.run(auth.get_token())
        assert watson.token_requests == 2

    def test_missing_api_key(self):
        """Test an unconfigured key fails without a network call."""
        auth = IamAuthenticator("", "https://iam.example.com/identity/token")
        with pytest.raises(ProviderError, match="Missing"):
            asyncio.run(auth.get_token())

    def test_rejected_key(self):
        """Test IAM rejections carry the status code."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(400, json={"errorMessage": "Provided API key could not be found"})
        )
        auth = IamAuthenticator("bad", "https://iam.example.com/identity/token", transport=transport)

        with pytest.raises(ProviderError) as exc_info:
            asyncio.run(auth.get_token())
        assert exc_info.value.status_code == 400

    def test_response_without_token(self):
        """Test a token response missing access_token is rejected."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"expires_in": 3600}))
        auth = IamAuthenticator("key", "https://iam.example.com/identity/token", transport=transport)

        with pytest.raises(ProviderError):
            asyncio.run(auth.get_token())
