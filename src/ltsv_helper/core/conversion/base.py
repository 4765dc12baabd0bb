"""Type converter interface, the default converter and the fallback chain."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from .scalar import change_type

if TYPE_CHECKING:
    from ..configuration.class_map import PropertyMap
    from ..reader import LtsvReader

logger = logging.getLogger(__name__)


class TypeConverter(Protocol):
    """Converter interface between raw field text and a property value."""

    def convert_from_string(
        self, text: str | None, reader: LtsvReader | None, member_map: PropertyMap
    ) -> Any:
        """Convert raw text into a property value."""
        ...

    def convert_to_string(self, value: Any, member_map: PropertyMap) -> str | None:
        """Convert a property value into field text (None omits the field)."""
        ...


def format_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True, slots=True)
class DefaultTypeConverter:
    """Generic conversion based on the property's declared type.

    Text passes through for str/untyped properties; anything else goes
    through the scalar parsers and fails with ConversionError.
    """

    def convert_from_string(
        self, text: str | None, reader: LtsvReader | None, member_map: PropertyMap
    ) -> Any:
        if text is None:
            return None
        return change_type(text, member_map.property_type, label=member_map.label)

    def convert_to_string(self, value: Any, member_map: PropertyMap) -> str | None:
        return format_value(value)


@dataclass(frozen=True, slots=True)
class FallbackConverter(ABC):
    """Try a specialised parse first, otherwise defer to ``fallback``.

    None is handed straight to the fallback. Subclasses implement ``parse``
    and raise ValueError for text they do not recognize.
    """

    fallback: TypeConverter = field(default_factory=DefaultTypeConverter)

    @abstractmethod
    def parse(self, text: str, member_map: PropertyMap) -> Any:
        ...

    def convert_from_string(
        self, text: str | None, reader: LtsvReader | None, member_map: PropertyMap
    ) -> Any:
        if text is not None:
            try:
                return self.parse(text, member_map)
            except (ValueError, ArithmeticError):
                logger.debug(
                    "%s did not recognize %r for %r; using %s",
                    type(self).__name__,
                    text,
                    member_map.label,
                    type(self.fallback).__name__,
                )
        return self.fallback.convert_from_string(text, reader, member_map)

    def convert_to_string(self, value: Any, member_map: PropertyMap) -> str | None:
        return format_value(value)


@dataclass(frozen=True, slots=True)
class StringConverter(FallbackConverter):
    def parse(self, text: str, member_map: PropertyMap) -> str:
        return text
