"""Core LTSV parsing and mapping engine."""

from __future__ import annotations

from .configuration import ClassMap, LtsvConfiguration, PropertyMap
from .errors import ConfigurationError, ConversionError, LtsvError, ParseError, StateError
from .files import open_reader, open_reader_async
from .models import DuplicateLabelPolicy, EmptyLinePolicy, ParserOptions, Record
from .parser import LtsvParser, format_line, parse_line
from .reader import LtsvReader
from .writer import LtsvWriter

__all__ = [
    "ClassMap",
    "ConfigurationError",
    "ConversionError",
    "DuplicateLabelPolicy",
    "EmptyLinePolicy",
    "LtsvConfiguration",
    "LtsvError",
    "LtsvParser",
    "LtsvReader",
    "LtsvWriter",
    "ParseError",
    "ParserOptions",
    "PropertyMap",
    "Record",
    "StateError",
    "format_line",
    "open_reader",
    "open_reader_async",
    "parse_line",
]
