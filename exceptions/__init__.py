"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    ExternalServiceError,

    # Browse
    InvalidDimensionError,

    # Map
    InvalidViewportActionError,

    # Lookup
    LookupNotConfiguredError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "ExternalServiceError",

    # Browse
    "InvalidDimensionError",

    # Map
    "InvalidViewportActionError",

    # Lookup
    "LookupNotConfiguredError",
]
