"""Configuration loading exceptions."""

from __future__ import annotations


class EnviError(Exception):
    """Base for envi errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class ConfigurationError(EnviError):
    """Config class misuse (e.g. broken configure() chain)."""


class MissingVariableError(EnviError):
    """Required variable absent and no default on the instance."""


class InvalidTypeError(EnviError):
    """Variable present but its value does not match the declared type."""


class ValidationError(EnviError):
    """Raised by custom field validators."""
