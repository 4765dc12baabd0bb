from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest
from pydantic import BaseModel

from ltsv_helper.core import (
    ClassMap,
    ConversionError,
    LtsvConfiguration,
    LtsvReader,
    ParseError,
    PropertyMap,
    StateError,
)
from ltsv_helper.core.conversion import IntConverter


@dataclass
class Person:
    name: str = ""
    age: int = 0


@dataclass
class Contact:
    full_name: str = "unknown"
    age: int = -1
    tags: list[str] = field(default_factory=list)


class ContactMap(ClassMap):
    def __init__(self) -> None:
        super().__init__(Contact)
        self.map("full_name", label="name")
        self.map("age", converter=IntConverter())


@dataclass(frozen=True, slots=True)
class EndpointConverter:
    """Joins the field with the record's ``port`` field."""

    def convert_from_string(self, text: str | None, reader: Any, member_map: PropertyMap) -> Any:
        return f"{text}:{reader.get_field('port')}"

    def convert_to_string(self, value: Any, member_map: PropertyMap) -> str | None:
        return str(value).split(":")[0]


@dataclass
class Upstream:
    host: str = ""
    status: int = 0


class AccessEntry(BaseModel):
    host: str = ""
    user: str | None = None
    time: datetime | None = None
    status: int = 0
    size: Decimal | None = None


def test_get_record_end_to_end() -> None:
    reader = LtsvReader(io.StringIO("name:Alice\tage:30\n"))
    assert reader.read()
    assert reader.get_record(Person) == Person(name="Alice", age=30)
    assert not reader.read()


def test_get_records_yields_in_order_then_exhausts() -> None:
    reader = LtsvReader(io.StringIO("name:Alice\tage:30\nname:Bob\tage:41\n"))
    people = list(reader.get_records(Person))
    assert people == [Person("Alice", 30), Person("Bob", 41)]
    assert not reader.read()
    assert list(reader.get_records(Person)) == []


def test_get_records_is_lazy() -> None:
    reader = LtsvReader(io.StringIO("name:Alice\tage:30\nbroken\n"))
    records = reader.get_records(Person)
    assert next(records) == Person("Alice", 30)
    with pytest.raises(ParseError):
        next(records)


def test_get_field_returns_raw_value() -> None:
    reader = LtsvReader(io.StringIO("url:http://a:80/\tempty:\n"))
    assert reader.read()
    assert reader.get_field("url") == "http://a:80/"
    assert reader.get_field("empty") == ""
    assert dict(reader.record) == {"url": "http://a:80/", "empty": ""}
    assert reader.line_no == 1
    assert reader.row == 1


def test_get_field_before_read_raises() -> None:
    reader = LtsvReader(io.StringIO("a:1\n"))
    with pytest.raises(StateError, match="must call read"):
        reader.get_field("a")
    with pytest.raises(StateError):
        reader.get_record(Person)


def test_get_field_missing_label_raises_key_error() -> None:
    reader = LtsvReader(io.StringIO("a:1\n"))
    reader.read()
    with pytest.raises(KeyError):
        reader.get_field("b")


def test_get_field_after_exhaustion_raises() -> None:
    reader = LtsvReader(io.StringIO("a:1\n"))
    assert reader.read()
    assert not reader.read()
    with pytest.raises(StateError):
        reader.get_field("a")


def test_get_field_as() -> None:
    reader = LtsvReader(io.StringIO("n:42\tprice:9.99\tok:true\tbad:x\n"))
    reader.read()
    assert reader.get_field_as("n", int) == 42
    assert reader.get_field_as("price", Decimal) == Decimal("9.99")
    assert reader.get_field_as("ok", bool) is True
    with pytest.raises(ConversionError) as exc:
        reader.get_field_as("bad", int)
    assert exc.value.label == "bad"


def test_missing_label_keeps_default() -> None:
    reader = LtsvReader(io.StringIO("name:Alice\n"))
    reader.read()
    assert reader.get_record(Person) == Person(name="Alice", age=0)


def test_unknown_labels_are_ignored() -> None:
    reader = LtsvReader(io.StringIO("name:Alice\tage:30\textra:1\n"))
    reader.read()
    assert reader.get_record(Person) == Person(name="Alice", age=30)


def test_explicit_class_map_labels() -> None:
    configuration = LtsvConfiguration()
    configuration.register_class_map(ContactMap)
    reader = LtsvReader(io.StringIO("name:Alice\tage:30\nage:5\n"), configuration)
    contacts = list(reader.get_records(Contact))
    assert contacts == [Contact("Alice", 30), Contact("unknown", 5)]


def test_conversion_error_propagates() -> None:
    reader = LtsvReader(io.StringIO("name:Alice\tage:old\n"))
    reader.read()
    with pytest.raises(ConversionError, match="'age'"):
        reader.get_record(Person)


def test_converter_receives_reader_context() -> None:
    configuration = LtsvConfiguration()
    class_map = ClassMap(Upstream).auto_map().map("host", converter=EndpointConverter())
    configuration.register_class_map(class_map)
    reader = LtsvReader(io.StringIO("host:10.0.0.1\tport:8080\tstatus:502\n"), configuration)
    reader.read()
    assert reader.get_record(Upstream) == Upstream(host="10.0.0.1:8080", status=502)


def test_pydantic_model_target(access_lines: list[str]) -> None:
    reader = LtsvReader(io.StringIO("\n".join(access_lines) + "\n"))
    records = reader.get_records(AccessEntry)
    first = next(records)

    assert first.host == "127.0.0.1"
    assert first.user == "frank"
    assert first.status == 200
    assert first.size == Decimal("2326")
    assert first.time is not None and first.time.year == 2000

    # size:- is neither a decimal nor accepted by the default conversion.
    with pytest.raises(ConversionError, match="'size'"):
        next(records)


def test_dispose_is_idempotent(tracking_stream) -> None:
    stream = tracking_stream("a:1\n")
    with LtsvReader(stream) as reader:
        reader.read()
    reader.close()
    assert reader.closed
    assert stream.close_calls == 1


def test_reader_requires_stream() -> None:
    with pytest.raises(TypeError):
        LtsvReader(None)


def test_access_after_close_raises() -> None:
    reader = LtsvReader(io.StringIO("name:Alice\tage:30\n"))
    assert reader.read()
    reader.close()
    with pytest.raises(StateError, match="closed"):
        reader.get_field("name")
    with pytest.raises(StateError):
        reader.get_record(Person)
    with pytest.raises(StateError):
        _ = reader.record
