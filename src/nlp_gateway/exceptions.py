"""Exception hierarchy for NLP Gateway."""

from typing import Optional


class NlpGatewayError(Exception):
    """Base class for all gateway errors."""


class InvalidInput(NlpGatewayError):
    """Request text is missing, empty, or the request body is malformed."""


class ProviderError(NlpGatewayError):
    """A call to the hosted NLP provider failed.

    Covers authentication, network, quota and malformed-response failures.
    The original exception, when there is one, is chained as ``__cause__``.

    Attributes:
        status_code: HTTP status returned by the provider, or None when the
            request never produced a response
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


class NoSourceLanguageDetected(NlpGatewayError):
    """Language identification returned no candidate to translate from."""
