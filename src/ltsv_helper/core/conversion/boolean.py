"""Boolean converter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import FallbackConverter
from .scalar import parse_bool

if TYPE_CHECKING:
    from ..configuration.class_map import PropertyMap


@dataclass(frozen=True, slots=True)
class BooleanConverter(FallbackConverter):
    """Accept true/false, yes/no, y/n, on/off and 1/0 in any case."""

    def parse(self, text: str, member_map: PropertyMap) -> bool:
        return parse_bool(text)
