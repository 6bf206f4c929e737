"""Test error types."""

from envi import errors
from envi.core.errors import (
    ConfigurationError,
    EnviError,
    InvalidTypeError,
    MissingVariableError,
    ValidationError,
)


class TestEnviError:
    def test_defaults(self):
        err = EnviError("boom")

        assert str(err) == "boom"
        assert err.code is None
        assert err.details == {}
        assert err.original_error is None

    def test_keyword_fields(self):
        # Arrange
        cause = ValueError("bad")

        # Act
        err = InvalidTypeError("wrapped", code="invalid_type", details={"index": 2}, original_error=cause)

        # Assert
        assert err.code == "invalid_type"
        assert err.details == {"index": 2}
        assert err.original_error is cause

    def test_hierarchy(self):
        for cls in (ConfigurationError, MissingVariableError, InvalidTypeError, ValidationError):
            assert issubclass(cls, EnviError)

    def test_reexports(self):
        assert errors.EnviError is EnviError
        assert errors.MissingVariableError is MissingVariableError
