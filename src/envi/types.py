"""Supported field kinds: defaults, validation and coercion per kind."""

from __future__ import annotations

import json
import math
from collections.abc import Callable
from enum import Enum
from typing import Any


class KnownType(str, Enum):
    """Field kinds. SECRET is a string that is always unset after read."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    SECRET = "secret"

    @classmethod
    def _missing_(cls, value: object) -> KnownType | None:
        # "hash" is the legacy name of secret
        if value == "hash":
            return cls.SECRET
        return None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant {name}")


def parse_json(raw: str) -> Any:
    """json.loads without the NaN and Infinity extensions."""
    return json.loads(raw, parse_constant=_reject_constant)


def kind_of(value: Any) -> str:
    """Name the runtime kind of a value using JSON vocabulary."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (dict, list)):
        return "object"
    return type(value).__name__


def _check_string(value: Any) -> None:
    if not isinstance(value, str):
        raise TypeError(f"Expected string but got {kind_of(value)}")


def _check_number(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected number but got {kind_of(value)}")
    if isinstance(value, float) and math.isnan(value):
        raise TypeError(f"Expected number but got {kind_of(value)}")


def _check_boolean(value: Any) -> None:
    if not isinstance(value, bool):
        raise TypeError(f"Expected boolean but got {kind_of(value)}")


def _check_object(value: Any) -> None:
    if not isinstance(value, (dict, list)):
        raise TypeError(f"Expected object but got {kind_of(value)}")


def _coerce_number(raw: str) -> int | str:
    try:
        return int(raw, 10)
    except ValueError:
        # Left as text; validation reports the mismatch
        return raw


# kind -> (default factory, validator, coercer)
_DISPATCH: dict[KnownType, tuple[Callable[[], Any], Callable[[Any], None], Callable[[str], Any]]] = {
    KnownType.STRING: (str, _check_string, str),
    KnownType.SECRET: (str, _check_string, str),
    KnownType.NUMBER: (int, _check_number, _coerce_number),
    KnownType.BOOLEAN: (bool, _check_boolean, lambda raw: raw.lower() == "true"),
    KnownType.OBJECT: (dict, _check_object, parse_json),
}


def _lookup(type_: KnownType | str) -> KnownType | None:
    try:
        return KnownType(type_)
    except ValueError:
        return None


def default_value(type_: KnownType | str) -> Any:
    """Canonical default for a kind: "", 0, False or {}. None for unknown kinds."""
    known = _lookup(type_)
    if known is None:
        return None
    return _DISPATCH[known][0]()


def validate_type(type_: KnownType | str, value: Any) -> None:
    """Raise TypeError if value does not match the kind."""
    known = _lookup(type_)
    if known is None:
        raise TypeError(f"Invalid type {type_}")
    _DISPATCH[known][1](value)


def coerce_value(type_: KnownType | str, raw: str) -> Any:
    """Convert one separator-split member to the kind.

    Numbers that do not parse are returned unchanged so validation can report
    them. Malformed object members raise ValueError (json.JSONDecodeError).
    """
    known = _lookup(type_)
    if known is None:
        return str(raw)
    return _DISPATCH[known][2](raw)
