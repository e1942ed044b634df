"""
Flask application for the NLP Gateway API.
"""

from typing import Iterable, Optional

from flask import Flask

from nlp_gateway.config import Config, get_config
from nlp_gateway.core.language_service import LanguageService
from nlp_gateway.core.services import create_nlp_service, create_word_cloud_service
from nlp_gateway.exceptions import InvalidInput, NoSourceLanguageDetected, ProviderError
from nlp_gateway.logger import get_logger
from nlp_gateway.web.serializers import api_response

logger = get_logger(__name__)


def _provider_status(error: ProviderError) -> int:
    """Map a provider failure to an HTTP status for our own response."""
    code = error.status_code
    if isinstance(code, int) and 400 <= code <= 599:
        return code
    return 502


def create_app(
    config: Optional[Config] = None,
    language_service: Optional[LanguageService] = None,
    stopwords: Optional[Iterable[str]] = None,
) -> Flask:
    """Create and configure Flask application.

    The provider client is built here, once, and handed to the services.

    Args:
        config: Application configuration (global config if omitted)
        language_service: LanguageService to use instead of the Watson adapter
        stopwords: Override the configured stopword set

    Returns:
        Configured Flask application
    """
    config = config or get_config()

    app = Flask(__name__)
    app.config["DEBUG"] = config.debug or config.web.debug
    app.json.sort_keys = False

    if language_service is None:
        from nlp_gateway.core.factories import create_language_service

        language_service = create_language_service(config)

    nlp_service = create_nlp_service(config, language_service=language_service)
    word_cloud_service = create_word_cloud_service(
        config, language_service=language_service, stopwords=stopwords
    )

    # ========================================================================
    # Register API Blueprints
    # ========================================================================

    from nlp_gateway.web.blueprints import NlpBlueprint

    app.register_blueprint(NlpBlueprint(nlp_service, word_cloud_service).blueprint)

    @app.route("/api/health")
    def health():
        """Liveness check."""
        return api_response(success=True, data={"status": "ok", "version": config.version})

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.errorhandler(InvalidInput)
    def invalid_input(e):
        """Handle missing or malformed request text."""
        return api_response(success=False, error=str(e), status=400)

    @app.errorhandler(NoSourceLanguageDetected)
    def no_source_language(e):
        """Handle translation without a detectable source language."""
        return api_response(success=False, error=str(e), status=422)

    @app.errorhandler(ProviderError)
    def provider_error(e):
        """Handle failures of the hosted NLP provider."""
        logger.error(f"Provider error: {e}")
        return api_response(success=False, error=e.message, status=_provider_status(e))

    @app.errorhandler(404)
    def not_found(e):
        """Handle 404 errors."""
        return api_response(success=False, error="Not found", status=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        """Handle 405 errors."""
        return api_response(success=False, error="Method not allowed", status=405)

    @app.errorhandler(500)
    def server_error(e):
        """Handle 500 errors."""
        logger.error(f"Server error: {e}")
        return api_response(success=False, error="Internal server error", status=500)

    logger.info(f"Web app created ({config.app_name} {config.version})")

    return app
