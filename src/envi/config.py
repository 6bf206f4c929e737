"""BaseConfig: declarative config classes loaded from environment variables."""

from __future__ import annotations

import dataclasses
import json
import sys
from pathlib import Path
from typing import Any, TypeVar

from loguru import logger

from envi.core.errors import ConfigurationError, InvalidTypeError, MissingVariableError
from envi.environment import Environ, get_environ, load_env_file, lookup
from envi.fields import FieldOptions, registry
from envi.types import coerce_value, default_value, parse_json, validate_type

T = TypeVar("T", bound="BaseConfig")


def _dumps(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


class BaseConfig:
    """Base for config classes. Subclasses declare fields, load() fills them.

    Fields can be declared three ways:

    - class attribute markers: ``PORT = envfield.number(default=8080)``
    - env_fields(): return a mapping, merged with ``super().env_fields()``
    - configure(): call register_field(), then ``super().configure()``

    Attribute values already on the instance (class defaults or values set in
    __init__) are kept when the variable is absent.
    """

    _configure_called: bool = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name, value in list(vars(cls).items()):
            if not isinstance(value, FieldOptions):
                continue
            registry.declare(cls, name, value)
            if value.default is None:
                delattr(cls, name)
            else:
                setattr(cls, name, value.default)

    @classmethod
    def from_env(
        cls: type[T],
        *,
        prefix: str = "",
        path: str | Path | None = None,
        load_env: bool = True,
        disable_unset: bool = False,
        environ: Environ | None = None,
    ) -> T:
        """Create an instance and load it."""
        instance = cls()
        instance.load(
            prefix=prefix,
            path=path,
            load_env=load_env,
            disable_unset=disable_unset,
            environ=environ,
        )
        return instance

    def configure(self) -> None:
        """Setup hook. Overrides must call super().configure().

        Fields registered here belong to the class whose configure() made the
        call, so a subclass declaration of the same name still wins. Register
        after calling super().configure() to override an ancestor's
        registration from the same class chain.
        """
        self._configure_called = True

    def register_field(self, name: str, options: FieldOptions) -> None:
        """Declare a field from configure().

        The field is recorded against the class defining the calling
        configure(), or the instance's class when called from elsewhere.
        """
        caller = sys._getframe(1).f_code
        owner = next(
            (klass for klass in type(self).__mro__ if getattr(vars(klass).get("configure"), "__code__", None) is caller),
            type(self),
        )
        registry.declare(owner, name, options)

    def env_fields(self) -> dict[str, FieldOptions]:
        """Field mapping. Overrides should merge super().env_fields()."""
        return {}

    def fields(self) -> dict[str, FieldOptions]:
        """All declared fields, in load order.

        Merged along the MRO, least-derived first. Per class, markers and
        registrations apply first, then entries added by that class's own
        env_fields(), so the most-derived declaration wins.
        """
        result: dict[str, FieldOptions] = {}
        for klass in reversed(type(self).__mro__):
            result.update(registry.own(klass))
            if "env_fields" in vars(klass):
                result.update(self._own_env_fields(klass))
        return result

    def _own_env_fields(self, klass: type) -> dict[str, FieldOptions]:
        declared = vars(klass)["env_fields"](self)
        parent = getattr(super(klass, self), "env_fields", None)
        inherited = parent() if parent is not None else {}
        return {name: options for name, options in declared.items() if inherited.get(name) != options}

    def load(
        self,
        *,
        prefix: str = "",
        path: str | Path | None = None,
        load_env: bool = True,
        disable_unset: bool = False,
        environ: Environ | None = None,
    ) -> None:
        """Populate declared fields from the environment.

        Raises ConfigurationError if configure() did not reach BaseConfig,
        MissingVariableError for absent required variables and
        InvalidTypeError for values that do not match the declared type.
        Custom validator errors propagate unchanged. The first failure stops
        loading; fields assigned before it keep their values.
        """
        self._configure_called = False
        self.configure()
        if not self._configure_called:
            raise ConfigurationError(
                "configure() not called, did you forget to call super().configure()?",
                code="configure_not_called",
                details={"class": type(self).__name__},
            )

        environ = get_environ(environ)
        if load_env:
            load_env_file(path, environ)

        for name, options in self.fields().items():
            options = dataclasses.replace(options, prefix=prefix)
            value = self._load_field(name, options, getattr(self, name, None), environ, disable_unset)
            setattr(self, name, value)

    def _load_field(
        self,
        name: str,
        options: FieldOptions,
        current: Any,
        environ: Environ,
        disable_unset: bool,
    ) -> Any:
        env_name, raw = lookup(environ, options.env_name or name, options.prefix)

        if raw is not None and options.unset_after_read and not disable_unset:
            del environ[env_name]
            logger.debug("Unset {} after read", env_name)

        if raw is None:
            if current is not None:
                logger.debug("{} not set, keeping default for {}", env_name, name)
                return current
            if options.optional:
                logger.debug("{} not set, using {} default for {}", env_name, options.type.value, name)
                return default_value(options.type)
            raise MissingVariableError(
                f"Missing required env variable {env_name}",
                code="missing_variable",
                details={"field": name, "env_name": env_name},
            )

        if options.env_separator:
            value = [
                self._parse_item(name, env_name, index, part.strip(), options)
                for index, part in enumerate(raw.split(options.env_separator))
            ]
        else:
            value = self._parse_value(name, env_name, raw, options)

        if options.validator is not None:
            options.validator(value)

        logger.debug("Loaded {} from {}", name, env_name)
        return value

    def _parse_item(self, name: str, env_name: str, index: int, part: str, options: FieldOptions) -> Any:
        try:
            value = coerce_value(options.type, part)
        except ValueError as exc:
            raise InvalidTypeError(
                f"Invalid type for {env_name}[{index}] = {_dumps(part)}: {exc}",
                code="invalid_type",
                details={"field": name, "env_name": env_name, "index": index},
                original_error=exc,
            ) from exc
        try:
            validate_type(options.type, value)
        except TypeError as exc:
            raise InvalidTypeError(
                f"Invalid type for {env_name}[{index}] = {_dumps(value)}: {exc}",
                code="invalid_type",
                details={"field": name, "env_name": env_name, "index": index},
                original_error=exc,
            ) from exc
        return value

    def _parse_value(self, name: str, env_name: str, raw: str, options: FieldOptions) -> Any:
        try:
            value = parse_json(raw)
        except ValueError:
            value = raw
        try:
            validate_type(options.type, value)
        except TypeError as exc:
            raise InvalidTypeError(
                f"Invalid type for {env_name} = {_dumps(value)}: {exc}",
                code="invalid_type",
                details={"field": name, "env_name": env_name},
                original_error=exc,
            ) from exc
        return value
