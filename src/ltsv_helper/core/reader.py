"""Record reader: a cursor over parsed records plus typed mapping."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from .configuration import LtsvConfiguration
from .conversion.scalar import change_type
from .errors import StateError
from .models import Record
from .parser import LtsvParser

T = TypeVar("T")


class LtsvReader:
    """Read LTSV records from a text stream.

    Call ``read()`` (or ``await read_async()``) to advance; field and record
    accessors then operate on the current record. Not safe for concurrent
    use: callers sharing a reader must serialize access.
    """

    def __init__(self, stream: Any, configuration: LtsvConfiguration | None = None) -> None:
        if stream is None:
            raise TypeError("stream must not be None")
        self._configuration = configuration or LtsvConfiguration()
        self._parser = LtsvParser(stream, self._configuration.options)
        self._current: Record | None = None
        self._has_been_read = False

    @property
    def configuration(self) -> LtsvConfiguration:
        return self._configuration

    @property
    def parser(self) -> LtsvParser:
        return self._parser

    @property
    def line_no(self) -> int:
        return self._parser.line_no

    @property
    def row(self) -> int:
        return self._parser.row

    def read(self) -> bool:
        """Advance to the next record; False once the stream is exhausted."""
        self._current = self._parser.read()
        self._has_been_read = True
        return self._current is not None

    async def read_async(self) -> bool:
        """Advance to the next record; False once the stream is exhausted."""
        self._current = await self._parser.read_async()
        self._has_been_read = True
        return self._current is not None

    def _current_record(self) -> Record:
        if self._parser.closed:
            raise StateError("The reader is closed.")
        if not self._has_been_read:
            raise StateError("You must call read on the reader before accessing its data.")
        if self._current is None:
            raise StateError("The reader has no current record; the stream is exhausted.")
        return self._current

    @property
    def record(self) -> Mapping[str, str]:
        """Read-only view of the current record."""
        return MappingProxyType(self._current_record())

    def get_field(self, label: str) -> str:
        """Return the raw value for ``label``; KeyError if absent."""
        if not label:
            raise ValueError("label must be a non-empty string")
        return self._current_record()[label]

    def get_field_as(self, label: str, value_type: type[T]) -> T:
        """Return the value for ``label`` converted to ``value_type``."""
        text = self.get_field(label)
        return change_type(text, value_type, label=label)

    def get_record(self, target: type[T]) -> T:
        """Map the current record onto a new ``target`` instance.

        Properties whose label is missing keep their default value.
        """
        record = self._current_record()
        class_map = self._configuration.get_class_map(target)
        obj = class_map.construct()
        for p in class_map.property_maps:
            if p.label in record:
                value = p.converter.convert_from_string(record[p.label], self, p)
                p.setter(obj, value)
        return obj

    def get_records(self, target: type[T]) -> Iterator[T]:
        """Lazily map every remaining record. Single pass."""
        while self.read():
            yield self.get_record(target)

    async def get_records_async(self, target: type[T]) -> AsyncIterator[T]:
        """Lazily map every remaining record. Single pass."""
        while await self.read_async():
            yield self.get_record(target)

    @property
    def closed(self) -> bool:
        return self._parser.closed

    def close(self) -> None:
        """Release the underlying stream. Idempotent."""
        self._parser.close()

    async def aclose(self) -> None:
        """Release the underlying stream. Idempotent."""
        await self._parser.aclose()

    def __enter__(self) -> LtsvReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> LtsvReader:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
