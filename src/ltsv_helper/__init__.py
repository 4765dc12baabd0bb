"""Read and write LTSV (Labeled Tab-Separated Values) and map records onto typed objects."""

from __future__ import annotations

from .core import (
    ClassMap,
    ConfigurationError,
    ConversionError,
    DuplicateLabelPolicy,
    EmptyLinePolicy,
    LtsvConfiguration,
    LtsvError,
    LtsvParser,
    LtsvReader,
    LtsvWriter,
    ParseError,
    ParserOptions,
    PropertyMap,
    Record,
    StateError,
    format_line,
    open_reader,
    open_reader_async,
    parse_line,
)

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
