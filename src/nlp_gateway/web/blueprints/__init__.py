"""
API blueprints for NLP Gateway.

This package contains the API blueprints registered by ``create_app``.
"""

from nlp_gateway.web.blueprints.nlp import NlpBlueprint

__all__ = ["NlpBlueprint"]
