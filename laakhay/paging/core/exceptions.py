"""Custom exception hierarchy."""

from __future__ import annotations

from typing import Any


class PagingError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(PagingError):
    """No iterator configuration or delegate is available for an operation.

    Raised by iterator factories at construction or build time, never while
    iterating.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation


class TokenShapeError(PagingError):
    """Composite token definition and runtime token value do not line up."""

    def __init__(
        self,
        message: str = "iterator token definition and current token value are incompatible",
        expected: list[str] | None = None,
        token: Any = None,
    ) -> None:
        super().__init__(message)
        self.expected = expected or []
        self.token = token


class EmptyPageLimitError(PagingError):
    """Backend kept returning empty pages with a continuation token."""

    def __init__(self, message: str, operation: str | None = None, retries: int = 0) -> None:
        super().__init__(message)
        self.operation = operation
        self.retries = retries
