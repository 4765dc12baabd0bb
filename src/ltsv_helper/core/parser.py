"""LTSV tokenizer: turns a text stream into ordered label -> value records."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterator, Iterator, Mapping
from typing import Any

from aiofiles.threadpool import wrap

from .errors import ParseError, StateError
from .models import DuplicateLabelPolicy, EmptyLinePolicy, ParserOptions, Record

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"
LABEL_SEPARATOR = ":"
RECORD_SEPARATOR = "\n"


def parse_line(line: str, line_no: int, options: ParserOptions | None = None) -> Record | None:
    """Split one line (without terminator) into a record.

    Returns None when the line holds no fields at all.
    """
    options = options or ParserOptions()
    if not line.strip():
        return None

    record: Record = {}
    for field in line.split(FIELD_SEPARATOR):
        if not field:
            if options.skip_empty_fields:
                continue
            raise ParseError("Empty field", line_no=line_no, line=line)

        label, sep, value = field.partition(LABEL_SEPARATOR)
        if not sep:
            raise ParseError(f"Field {field!r} has no label separator", line_no=line_no, line=line)
        if not label:
            raise ParseError(f"Field {field!r} has an empty label", line_no=line_no, line=line)

        if label in record:
            if options.duplicate_labels is DuplicateLabelPolicy.FIRST:
                continue
            if options.duplicate_labels is DuplicateLabelPolicy.ERROR:
                raise ParseError(f"Duplicate label {label!r}", line_no=line_no, line=line)
            # Last write wins, but the label keeps its first position.
        record[label] = value

    if not record:
        return None
    return record


def format_line(record: Mapping[str, Any]) -> str:
    """Join a record back into one LTSV line (without terminator)."""
    fields: list[str] = []
    for label, value in record.items():
        if not label or any(c in label for c in (FIELD_SEPARATOR, LABEL_SEPARATOR, "\r", "\n")):
            raise ValueError(f"Invalid LTSV label: {label!r}")
        text = str(value)
        if any(c in text for c in (FIELD_SEPARATOR, "\r", "\n")):
            raise ValueError(f"Value for label {label!r} contains a tab or line break")
        fields.append(f"{label}{LABEL_SEPARATOR}{text}")
    return FIELD_SEPARATOR.join(fields)


class LtsvParser:
    """Read records from a blocking or an async text stream.

    Blocking streams support both ``read()`` and ``read_async()``; for the
    latter each ``readline`` runs in the default executor. Streams whose
    ``readline`` is a coroutine (``aiofiles`` handles) are async-only.
    """

    def __init__(self, stream: Any, options: ParserOptions | None = None) -> None:
        if stream is None:
            raise TypeError("stream must not be None")
        self._stream = stream
        self._options = options or ParserOptions()
        self._async_only = inspect.iscoroutinefunction(getattr(stream, "readline", None))
        self._async_view: Any = None
        self._line_no = 0
        self._row = 0
        self._eof = False
        self._closed = False

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def line_no(self) -> int:
        """Number of physical lines consumed so far."""
        return self._line_no

    @property
    def row(self) -> int:
        """Number of records produced so far."""
        return self._row

    @property
    def is_async_only(self) -> bool:
        return self._async_only

    def read(self) -> Record | None:
        """Return the next record, or None at end of stream."""
        if self._async_only:
            raise StateError("This stream only supports asynchronous reads; use read_async().")
        while not self._eof:
            raw = self._stream.readline()
            record = self._accept(raw)
            if record is not None:
                return record
        return None

    async def read_async(self) -> Record | None:
        """Return the next record, or None at end of stream."""
        while not self._eof:
            raw = await self._readline_async()
            record = self._accept(raw)
            if record is not None:
                return record
        return None

    async def _readline_async(self) -> str:
        if self._async_only:
            return await self._stream.readline()
        if self._async_view is None:
            try:
                self._async_view = wrap(self._stream)
            except TypeError:
                # Not an io type aiofiles knows; run readline on the executor directly.
                loop = asyncio.get_running_loop()
                return await loop.run_in_executor(None, self._stream.readline)
        return await self._async_view.readline()

    def _accept(self, raw: str) -> Record | None:
        if raw == "":
            logger.debug("End of stream after %d lines (%d records)", self._line_no, self._row)
            self._eof = True
            return None

        self._line_no += 1
        line = raw.rstrip("\r\n")
        record = parse_line(line, self._line_no, self._options)
        if record is None:
            if self._options.empty_lines is EmptyLinePolicy.STOP:
                logger.debug("Empty line %d treated as end of stream", self._line_no)
                self._eof = True
            else:
                logger.debug("Skipping empty line %d", self._line_no)
            return None

        self._row += 1
        return record

    def __iter__(self) -> Iterator[Record]:
        while (record := self.read()) is not None:
            yield record

    async def __aiter__(self) -> AsyncIterator[Record]:
        while (record := await self.read_async()) is not None:
            yield record

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the underlying stream. Safe to call more than once."""
        if self._closed:
            return
        if self._async_only:
            raise StateError("This stream is asynchronous; use aclose().")
        self._closed = True
        self._stream.close()

    async def aclose(self) -> None:
        """Release the underlying stream. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._async_only:
            await self._stream.close()
        else:
            self._stream.close()
