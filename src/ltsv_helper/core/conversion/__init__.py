"""Type converters between raw field text and typed values."""

from __future__ import annotations

from .base import DefaultTypeConverter, FallbackConverter, StringConverter, TypeConverter
from .boolean import BooleanConverter
from .misc import EnumConverter, UuidConverter
from .numeric import DecimalConverter, FloatConverter, IntConverter
from .registry import TypeConverterRegistry, default_converters
from .scalar import change_type
from .temporal import DateConverter, DateTimeConverter, TimeConverter

__all__ = [
    "BooleanConverter",
    "DateConverter",
    "DateTimeConverter",
    "DecimalConverter",
    "DefaultTypeConverter",
    "EnumConverter",
    "FallbackConverter",
    "FloatConverter",
    "IntConverter",
    "StringConverter",
    "TimeConverter",
    "TypeConverter",
    "TypeConverterRegistry",
    "UuidConverter",
    "change_type",
    "default_converters",
]
