"""Date and time converters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import TYPE_CHECKING

from .base import FallbackConverter
from .scalar import parse_date, parse_datetime, parse_time

if TYPE_CHECKING:
    from ..configuration.class_map import PropertyMap


@dataclass(frozen=True, slots=True)
class DateTimeConverter(FallbackConverter):
    """ISO-8601 (``Z`` accepted) or access-log style ``[10/Oct/2000:13:55:36 -0700]``."""

    def parse(self, text: str, member_map: PropertyMap) -> datetime:
        return parse_datetime(text)


@dataclass(frozen=True, slots=True)
class DateConverter(FallbackConverter):
    def parse(self, text: str, member_map: PropertyMap) -> date:
        return parse_date(text)


@dataclass(frozen=True, slots=True)
class TimeConverter(FallbackConverter):
    def parse(self, text: str, member_map: PropertyMap) -> time:
        return parse_time(text)
