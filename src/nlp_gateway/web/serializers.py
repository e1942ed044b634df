"""
Serializer functions for converting results to dictionaries.

This module provides helper functions for converting Pydantic result models
to dictionaries for JSON serialization in API responses.
"""

from typing import Any, Optional

from flask import Response, jsonify

from nlp_gateway.models import IdentifiedLanguage, Language, OccurrenceCount


def occurrence_to_dict(occurrence: OccurrenceCount) -> dict:
    """Convert an OccurrenceCount to a dictionary."""
    return {"word": occurrence.word, "count": occurrence.count}


def identified_language_to_dict(candidate: IdentifiedLanguage) -> dict:
    """Convert an IdentifiedLanguage to a dictionary."""
    return {"language": candidate.language, "confidence": candidate.confidence}


def language_to_dict(language: Language) -> dict:
    """Convert a translation result to a dictionary."""
    return {"text": language.text, "lang": language.lang}


def api_response(
    success: bool = True,
    data: Any = None,
    message: Optional[str] = None,
    error: Optional[str] = None,
    status: int = 200,
) -> tuple[Response, int]:
    """Wrap a result in the ``{success, data, message, error}`` envelope.

    Args:
        success: Whether the request was successful
        data: Payload, already JSON-serializable
        message: Optional human-readable note
        error: Error text for failed requests
        status: HTTP status code
    """
    envelope = dict(success=success, data=data, message=message, error=error)
    return jsonify(envelope), status
