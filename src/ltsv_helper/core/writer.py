"""LTSV writer: records and mapped objects back to text."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .configuration import LtsvConfiguration
from .parser import RECORD_SEPARATOR, format_line


class LtsvWriter:
    """Write one LTSV line per record to a blocking text stream."""

    def __init__(self, stream: Any, configuration: LtsvConfiguration | None = None) -> None:
        if stream is None:
            raise TypeError("stream must not be None")
        self._stream = stream
        self._configuration = configuration or LtsvConfiguration()
        self._closed = False

    def write_record(self, record: Mapping[str, Any]) -> None:
        """Write label/value pairs; None values are left out."""
        fields = {label: value for label, value in record.items() if value is not None}
        self._stream.write(format_line(fields) + RECORD_SEPARATOR)

    def write_object(self, obj: Any) -> None:
        """Write an object using the class map of its type."""
        class_map = self._configuration.get_class_map(type(obj))
        fields: dict[str, str] = {}
        for p in class_map.property_maps:
            text = p.converter.convert_to_string(p.getter(obj), p)
            if text is not None:
                fields[p.label] = text
        self.write_record(fields)

    def write_objects(self, objs: Iterable[Any]) -> None:
        for obj in objs:
            self.write_object(obj)

    def flush(self) -> None:
        self._stream.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stream.close()

    def __enter__(self) -> LtsvWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
