"""Field declarations and the per-class field registry."""

from __future__ import annotations

import weakref
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from envi.types import KnownType

Validator = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldOptions:
    """Declared options for one config field."""

    type: KnownType = KnownType.STRING
    optional: bool = False
    unset: bool = False
    env_name: str | None = None
    env_separator: str | None = None
    validator: Validator | None = None
    # Injected by the loader, never declared
    prefix: str = ""
    # Class attribute value for marker declarations
    default: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", KnownType(self.type))

    @property
    def required(self) -> bool:
        return not self.optional

    @property
    def unset_after_read(self) -> bool:
        return self.unset or self.type is KnownType.SECRET


class FieldRegistry:
    """Per-class mapping of field name to FieldOptions.

    Declarations are stored against the class that made them. resolve() merges
    along the MRO so a subclass declaration shadows an ancestor's.
    """

    def __init__(self) -> None:
        self._fields: weakref.WeakKeyDictionary[type, dict[str, FieldOptions]] = weakref.WeakKeyDictionary()

    def declare(self, cls: type, name: str, options: FieldOptions) -> None:
        """Record options for name on cls, replacing an earlier declaration."""
        self._fields.setdefault(cls, {})[name] = options

    def own(self, cls: type) -> dict[str, FieldOptions]:
        """Declarations made by cls itself."""
        return dict(self._fields.get(cls, {}))

    def resolve(self, target: object) -> dict[str, FieldOptions]:
        """Merged declarations for a class or instance, most-derived wins."""
        cls = target if isinstance(target, type) else type(target)
        result: dict[str, FieldOptions] = {}
        for klass in reversed(cls.__mro__):
            result.update(self._fields.get(klass, {}))
        return result

    def clear(self, cls: type | None = None) -> None:
        """Drop declarations for cls, or all of them."""
        if cls is None:
            self._fields.clear()
        else:
            self._fields.pop(cls, None)


registry = FieldRegistry()


def _field(
    type_: KnownType,
    *,
    optional: bool = False,
    required: bool | None = None,
    unset: bool = False,
    env_name: str | None = None,
    env_separator: str | None = None,
    validator: Validator | None = None,
    default: Any = None,
) -> FieldOptions:
    if required is not None:
        optional = not required
    return FieldOptions(
        type=type_,
        optional=optional,
        unset=unset,
        env_name=env_name,
        env_separator=env_separator,
        validator=validator,
        default=default,
    )


class envfield:  # noqa: N801
    """Declaration helpers, one per kind.

    Use as class attribute markers::

        class AppConfig(BaseConfig):
            PORT = envfield.number(default=8080)
            API_TOKEN = envfield.secret()

    or return them from BaseConfig.env_fields().
    """

    @staticmethod
    def string(**kwargs: Any) -> FieldOptions:
        return _field(KnownType.STRING, **kwargs)

    @staticmethod
    def number(**kwargs: Any) -> FieldOptions:
        return _field(KnownType.NUMBER, **kwargs)

    @staticmethod
    def boolean(**kwargs: Any) -> FieldOptions:
        return _field(KnownType.BOOLEAN, **kwargs)

    @staticmethod
    def object(**kwargs: Any) -> FieldOptions:
        return _field(KnownType.OBJECT, **kwargs)

    @staticmethod
    def secret(**kwargs: Any) -> FieldOptions:
        return _field(KnownType.SECRET, **kwargs)
