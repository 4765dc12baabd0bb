"""Class maps and the configuration registry."""

from __future__ import annotations

from .class_map import ClassMap, PropertyMap, discover_members
from .configuration import LtsvConfiguration

__all__ = ["ClassMap", "LtsvConfiguration", "PropertyMap", "discover_members"]
