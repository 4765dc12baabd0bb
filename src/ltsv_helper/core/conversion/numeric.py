"""Numeric converters."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from .base import FallbackConverter, format_value
from .scalar import parse_decimal, parse_float, parse_int

if TYPE_CHECKING:
    from ..configuration.class_map import PropertyMap


@dataclass(frozen=True, slots=True)
class IntConverter(FallbackConverter):
    def parse(self, text: str, member_map: PropertyMap) -> int:
        return parse_int(text)


@dataclass(frozen=True, slots=True)
class FloatConverter(FallbackConverter):
    def parse(self, text: str, member_map: PropertyMap) -> float:
        return parse_float(text)


@dataclass(frozen=True, slots=True)
class DecimalConverter(FallbackConverter):
    """Invariant-culture decimal parse (``1,234.50``); finite values only."""

    def parse(self, text: str, member_map: PropertyMap) -> Decimal:
        return parse_decimal(text)

    def convert_to_string(self, value: Any, member_map: PropertyMap) -> str | None:
        if isinstance(value, Decimal):
            return format(value, "f")
        return format_value(value)
