"""Custom exception hierarchy for lintelmark."""

from __future__ import annotations

from typing import Any


class LintelMarkError(Exception):
    """Base exception for all lintelmark-specific errors."""
    
    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(LintelMarkError):
    """Raised when configuration is invalid or missing."""
    pass


class InvalidConfiguration(ConfigurationError):
    """Raised when tolerances, weights or thresholds are out of range."""
    pass


class ValidationError(LintelMarkError):
    """Base class for input validation errors."""
    pass


class InvalidDimensions(ValidationError):
    """Raised when a measured item rounds to a non-positive dimension."""
    pass


__all__ = [
    "LintelMarkError",
    "ConfigurationError",
    "InvalidConfiguration",
    "ValidationError",
    "InvalidDimensions",
]
