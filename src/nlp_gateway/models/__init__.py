"""Data models for NLP Gateway."""

from nlp_gateway.models.text import (
    IdentifiedLanguage,
    Language,
    OccurrenceCount,
    TextRequest,
)

__all__ = [
    "TextRequest",
    "OccurrenceCount",
    "IdentifiedLanguage",
    "Language",
]
