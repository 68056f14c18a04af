"""
Exception hierarchy shared by the money API models, requests and adapters.
"""

from __future__ import annotations

__all__ = [
    "ConsistencyError",
    "MoneyApiError",
    "ParseError",
    "ValidationError",
]


class MoneyApiError(Exception):
    """Base class for errors raised by the SDK itself."""


class ValidationError(MoneyApiError, ValueError):
    """Raised when a required field is missing, empty or of the wrong type."""


class ConsistencyError(ValidationError):
    """Raised when individually valid fields contradict each other."""


class ParseError(MoneyApiError, ValueError):
    """Raised when wire JSON is malformed or lacks a required field."""
