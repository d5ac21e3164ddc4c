"""
Custom exception classes for the application.

The analytics and merge engine never raises for bad inventory data; these
errors cover invalid requests and unavailable collaborators.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "INVALID_DIMENSION")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# BROWSE ERRORS
# ===================

class InvalidDimensionError(ValidationError):
    """Unknown browse-by dimension."""

    def __init__(self, dimension: str, valid: list[str]):
        super().__init__(
            code="INVALID_DIMENSION",
            message=f"Dimension must be one of: {', '.join(valid)}",
            details={"provided": dimension, "valid": valid}
        )


# ===================
# MAP ERRORS
# ===================

class InvalidViewportActionError(ValidationError):
    """Unknown map viewport action."""

    def __init__(self, action: str, valid: list[str]):
        super().__init__(
            code="INVALID_VIEWPORT_ACTION",
            message=f"Action must be one of: {', '.join(valid)}",
            details={"provided": action, "valid": valid}
        )


# ===================
# LOOKUP ERRORS
# ===================

class LookupNotConfiguredError(ExternalServiceError):
    """Auto-fill lookup has no API key."""

    def __init__(self):
        super().__init__(
            service="lookup",
            message="Cigar lookup is not configured. Set ANTHROPIC_API_KEY.",
        )
