# -*- coding: utf-8 -*-
"""Exception hierarchy for loading, requesting and parsing an analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mushroom_classifier.models.transport import TransportOutcome


class ClassifierError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(ClassifierError):
    """Raised when the API credential or another setting is missing or invalid."""


class ImageReadError(ClassifierError, OSError):
    """Raised when an image file does not exist or cannot be read."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class EmptyFileError(ClassifierError):
    """Raised when an image file has zero bytes."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)


class InvalidRequestError(ClassifierError):
    """Raised before any network I/O when a required request field is empty."""

    def __init__(self, message: str, field: str) -> None:
        self.field = field
        super().__init__(message)


class TransportError(ClassifierError):
    """Raised when the HTTP exchange fails.

    ``reason`` is one of ``"timeout"``, ``"dns"``, ``"connection"`` or
    ``"http_status"``. For ``"http_status"`` the response is kept in
    ``outcome`` so the body can still be inspected for a structured API error.
    """

    def __init__(
        self,
        message: str,
        reason: str,
        outcome: TransportOutcome | None = None,
    ) -> None:
        self.reason = reason
        self.outcome = outcome
        super().__init__(message)


class APIError(ClassifierError):
    """Raised when the provider answers with an ``error`` object."""

    def __init__(self, message: str, error_type: str = "", code: str = "") -> None:
        self.error_type = error_type
        self.code = code
        super().__init__(message)


class ParseError(ClassifierError):
    """Raised when a response body is not a chat-completion document."""
