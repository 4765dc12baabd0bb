"""Ad-hoc scalar parsing used for direct field access.

A small closed set of parse functions dispatched by target type. The class
map converters build on the same helpers.
"""

from __future__ import annotations

import re
import types
import typing
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Union
from uuid import UUID

from ..errors import ConversionError

_TRUE = frozenset({"true", "yes", "y", "1", "on"})
_FALSE = frozenset({"false", "no", "n", "0", "off"})

_INT_RE = re.compile(r"^[+-]?\d+$")
# Invariant number style: optional sign, optional ',' group separators, '.' decimal point.
_NUMBER_RE = re.compile(r"^[+-]?(?:\d{1,3}(?:,\d{3})+|\d+)?(?:\.\d*)?$")

ACCESS_LOG_TIME_FORMAT = "%d/%b/%Y:%H:%M:%S %z"


def unwrap_optional(tp: Any) -> Any:
    """Return X for Optional[X] / X | None; other annotations unchanged."""
    origin = typing.get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def parse_int(text: str) -> int:
    s = text.strip()
    if not _INT_RE.match(s):
        raise ValueError(f"invalid integer: {text!r}")
    return int(s)


def parse_float(text: str) -> float:
    return float(text.strip())


def parse_decimal(text: str) -> Decimal:
    """Parse an invariant-culture number into a finite Decimal."""
    s = text.strip()
    if not s or s in ("+", "-", ".") or not _NUMBER_RE.match(s):
        raise ValueError(f"invalid decimal: {text!r}")
    try:
        value = Decimal(s.replace(",", ""))
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal: {text!r}") from exc
    return value


def parse_bool(text: str) -> bool:
    s = text.strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def parse_datetime(text: str) -> datetime:
    """Parse ISO-8601 or the access-log form ``[10/Oct/2000:13:55:36 -0700]``."""
    s = text.strip()
    if s.startswith("[") and s.endswith("]"):
        s = s[1:-1]
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        pass
    return datetime.strptime(s, ACCESS_LOG_TIME_FORMAT)


def parse_date(text: str) -> date:
    return date.fromisoformat(text.strip())


def parse_time(text: str) -> time:
    return time.fromisoformat(text.strip().replace("Z", "+00:00"))


def parse_uuid(text: str) -> UUID:
    return UUID(text.strip())


def parse_enum(text: str, enum_type: type[Enum]) -> Enum:
    """Match a member by name (any case) or by value."""
    s = text.strip()
    for member in enum_type:
        if member.name.lower() == s.lower():
            return member
    for member in enum_type:
        if str(member.value) == s:
            return member
    raise ValueError(f"{text!r} is not a member of {enum_type.__name__}")


SCALAR_PARSERS: dict[type, Callable[[str], Any]] = {
    int: parse_int,
    float: parse_float,
    Decimal: parse_decimal,
    bool: parse_bool,
    datetime: parse_datetime,
    date: parse_date,
    time: parse_time,
    UUID: parse_uuid,
}


def is_plain_class(tp: Any) -> bool:
    """True for real classes; False for typing constructs such as list[int]."""
    return isinstance(tp, type) and typing.get_origin(tp) is None


def is_text_type(tp: Any) -> bool:
    return tp is None or tp is Any or tp is str or tp is object


def change_type(text: str, target: Any, *, label: str | None = None) -> Any:
    """Convert raw text to ``target`` or raise ConversionError."""
    target = unwrap_optional(target)
    if is_text_type(target):
        return text

    parse = SCALAR_PARSERS.get(target)
    try:
        if parse is not None:
            return parse(text)
        if is_plain_class(target) and issubclass(target, Enum):
            return parse_enum(text, target)
        if is_plain_class(target):
            return target(text)
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ConversionError(label=label, target_type=target, text=text) from exc

    raise ConversionError(label=label, target_type=target, text=text)
