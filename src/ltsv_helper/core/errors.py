"""Exception types raised by the LTSV reader, parser and mapper."""

from __future__ import annotations

from typing import Any


class LtsvError(Exception):
    """Base class for all errors raised by ltsv_helper."""


class StateError(LtsvError):
    """Reader data was accessed while the reader is not positioned on a record."""


class ParseError(LtsvError, ValueError):
    """A line could not be split into label/value fields."""

    def __init__(self, message: str, *, line_no: int, line: str) -> None:
        super().__init__(f"{message} (line {line_no}: {line!r})")
        self.line_no = line_no
        self.line = line


class ConversionError(LtsvError, ValueError):
    """A raw field could not be converted to the requested type."""

    def __init__(self, *, label: str | None, target_type: Any, text: str | None) -> None:
        type_name = getattr(target_type, "__name__", repr(target_type))
        where = f"field {label!r}" if label is not None else "field"
        super().__init__(f"Cannot convert {where} value {text!r} to {type_name}")
        self.label = label
        self.target_type = target_type
        self.text = text


class ConfigurationError(LtsvError, TypeError):
    """A target type cannot be mapped or a class map is misconfigured."""
