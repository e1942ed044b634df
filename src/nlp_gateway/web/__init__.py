"""Web API module for NLP Gateway."""

from nlp_gateway.web.app import create_app

__all__ = ["create_app"]
