"""envi: declarative environment-variable configuration."""

from envi.config import BaseConfig
from envi.core.errors import (
    ConfigurationError,
    EnviError,
    InvalidTypeError,
    MissingVariableError,
    ValidationError,
)
from envi.environment import load_env_file
from envi.fields import FieldOptions, FieldRegistry, envfield, registry
from envi.types import KnownType

__version__ = "0.1.0"

__all__ = [
    "BaseConfig",
    "ConfigurationError",
    "EnviError",
    "FieldOptions",
    "FieldRegistry",
    "InvalidTypeError",
    "KnownType",
    "MissingVariableError",
    "ValidationError",
    "__version__",
    "envfield",
    "load_env_file",
    "registry",
]
