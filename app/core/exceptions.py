"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error responses across the application
- Machine-readable error codes for client handling
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    └── ExternalServiceError - Collaborator/backing service failures

Usage:
    from core.exceptions import ExternalServiceError

    try:
        user = User.objects.filter(pk=user_id).first()
    except DatabaseError as e:
        raise ExternalServiceError(
            "User directory unavailable",
            error_code="DIRECTORY_UNAVAILABLE",
        ) from e

Note:
    Expected business failures are returned as core.services.ServiceResult.
    These exceptions are for failures the caller cannot fix by changing input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ExternalServiceError(BaseApplicationError):
    """
    Raised when a collaborator service call fails.

    Use for:
    - Directory/identity lookups that fail for transient reasons
    - Backing store outages
    - Unexpected collaborator responses

    Note:
        Log the original error for debugging but don't expose
        internal details to clients. Distinct from "not found",
        which collaborators report by returning None.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
