"""Custom exception hierarchy for econdash.

The transformation core never raises on partial data: unmapped country codes,
missing years and null readings are all legitimate outcomes. The exceptions
below cover programming and configuration mistakes only.

Exception Hierarchy:
    EconDashError (base)
    ├── ConfigurationError
    ├── ValidationError
    │   └── InvalidNormalizationMethodError
    └── DataNotAvailableError
"""
from __future__ import annotations

from typing import Optional, Dict, Any


class EconDashError(Exception):
    """Base exception for all econdash errors.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for the presentation layer."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(EconDashError):
    """Raised when the dashboard settings cannot be loaded."""
    pass


class ValidationError(EconDashError):
    """Raised when a caller passes an argument outside its domain.

    Examples:
        - Unknown normalization method
        - Non-numeric year bounds
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, code, details)


class InvalidNormalizationMethodError(ValidationError):
    """Raised when normalization is requested with an unknown method."""

    def __init__(self, method: Any):
        self.method = method
        super().__init__(
            f"Unknown normalization method '{method}' (expected 'minmax' or 'zscore')",
            field="method",
            details={"method": str(method)},
        )


class DataNotAvailableError(EconDashError):
    """Raised when a view cannot be built because a required input is missing.

    Empty indicator batches are not an error; this covers inputs that are
    structurally unusable, such as a weather payload without a daily block.
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.source = source
        details = details or {}
        if source:
            details["source"] = source
        super().__init__(message, code, details)


def get_error_response(error: Exception) -> Dict[str, Any]:
    """Convert any exception to an error payload.

    Args:
        error: The exception to convert

    Returns:
        Dictionary suitable for the presentation layer's error state
    """
    if isinstance(error, EconDashError):
        return error.to_dict()

    return {
        "error": "InternalError",
        "message": str(error),
        "details": {},
    }
