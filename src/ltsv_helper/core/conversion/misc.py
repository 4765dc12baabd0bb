"""Enum and UUID converters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from .base import FallbackConverter
from .scalar import is_plain_class, parse_enum, parse_uuid, unwrap_optional

if TYPE_CHECKING:
    from ..configuration.class_map import PropertyMap


@dataclass(frozen=True, slots=True)
class EnumConverter(FallbackConverter):
    """Match the property's enum members by name (any case) or value."""

    def parse(self, text: str, member_map: PropertyMap) -> Enum:
        enum_type = unwrap_optional(member_map.property_type)
        if not (is_plain_class(enum_type) and issubclass(enum_type, Enum)):
            raise ValueError(f"{member_map.name!r} is not an enum property")
        return parse_enum(text, enum_type)


@dataclass(frozen=True, slots=True)
class UuidConverter(FallbackConverter):
    def parse(self, text: str, member_map: PropertyMap) -> UUID:
        return parse_uuid(text)
