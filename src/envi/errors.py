"""Re-export from core.errors."""

from envi.core.errors import (
    ConfigurationError,
    EnviError,
    InvalidTypeError,
    MissingVariableError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "EnviError",
    "InvalidTypeError",
    "MissingVariableError",
    "ValidationError",
]
