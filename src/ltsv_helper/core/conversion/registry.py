"""Type -> converter registry."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from .base import DefaultTypeConverter, StringConverter, TypeConverter
from .boolean import BooleanConverter
from .misc import EnumConverter, UuidConverter
from .numeric import DecimalConverter, FloatConverter, IntConverter
from .scalar import is_plain_class, unwrap_optional
from .temporal import DateConverter, DateTimeConverter, TimeConverter


def default_converters() -> dict[type, TypeConverter]:
    """Built-in converters keyed by the value type they produce."""
    return {
        str: StringConverter(),
        int: IntConverter(),
        float: FloatConverter(),
        Decimal: DecimalConverter(),
        bool: BooleanConverter(),
        datetime: DateTimeConverter(),
        date: DateConverter(),
        time: TimeConverter(),
        UUID: UuidConverter(),
        Enum: EnumConverter(),
    }


class TypeConverterRegistry:
    """Resolve the converter for a declared property type.

    Lookup order: exact type, Enum subclasses, the type's MRO, then the
    default converter.
    """

    def __init__(
        self,
        converters: dict[type, TypeConverter] | None = None,
        *,
        default: TypeConverter | None = None,
    ) -> None:
        self._converters: dict[type, TypeConverter] = (
            dict(converters) if converters is not None else default_converters()
        )
        self._default = default or DefaultTypeConverter()

    @property
    def default(self) -> TypeConverter:
        return self._default

    def add(self, value_type: type, converter: TypeConverter) -> None:
        self._converters[value_type] = converter

    def remove(self, value_type: type) -> None:
        self._converters.pop(value_type, None)

    def __contains__(self, value_type: object) -> bool:
        return value_type in self._converters

    def get_converter(self, value_type: Any) -> TypeConverter:
        tp = unwrap_optional(value_type)
        if not is_plain_class(tp):
            return self._default

        found = self._converters.get(tp)
        if found is not None:
            return found

        if issubclass(tp, Enum) and Enum in self._converters:
            return self._converters[Enum]

        for base in tp.__mro__[1:]:
            if base is object:
                break
            found = self._converters.get(base)
            if found is not None:
                return found

        return self._default
