"""
Request and result schemas for the NLP endpoints.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TextRequest(BaseModel):
    """Schema for an incoming text payload.

    ``text`` is optional here so that a missing or empty value reaches the
    services, which reject it with ``InvalidInput``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: Optional[str] = Field(None, description="Text to analyze")
    target_lang: Optional[str] = Field(
        None, alias="targetLang", max_length=16, description="Translation target language code"
    )


class OccurrenceCount(BaseModel):
    """How many times a keyword token appears in the source text."""

    model_config = ConfigDict(frozen=True)

    word: str
    count: int = Field(..., ge=1)


class IdentifiedLanguage(BaseModel):
    """A language candidate returned by language identification."""

    model_config = ConfigDict(frozen=True)

    language: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class Language(BaseModel):
    """Translation result."""

    model_config = ConfigDict(frozen=True)

    text: str
    lang: str
