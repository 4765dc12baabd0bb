"""Class maps: how the fields of a record populate a target type.

A class map lists the target's properties in order, each bound to a label,
a converter and attribute accessors. Maps are built either explicitly::

    class PersonMap(ClassMap):
        def __init__(self) -> None:
            super().__init__(Person)
            self.map("name", label="n")
            self.map("age", converter=IntConverter())

or by convention with ``ClassMap(Person).auto_map()``, where every property
maps to the label of the same name. Once published by a configuration the
map is immutable.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel

from ..conversion.base import TypeConverter
from ..conversion.registry import TypeConverterRegistry
from ..errors import ConfigurationError

_FORBIDDEN_LABEL_CHARS = ("\t", ":", "\r", "\n")


@dataclass(frozen=True, slots=True)
class PropertyMap:
    """One property binding within a class map."""

    name: str
    label: str
    property_type: Any
    converter: TypeConverter
    setter: Callable[[Any, Any], None]
    getter: Callable[[Any], Any]


def _make_setter(name: str) -> Callable[[Any, Any], None]:
    def _set(obj: Any, value: Any) -> None:
        setattr(obj, name, value)

    return _set


def _make_getter(name: str) -> Callable[[Any], Any]:
    def _get(obj: Any) -> Any:
        return getattr(obj, name, None)

    return _get


def discover_members(target: type) -> dict[str, Any]:
    """Return ``{property name: declared type}`` in declaration order."""
    if issubclass(target, BaseModel):
        return {name: info.annotation for name, info in target.model_fields.items()}

    try:
        hints = typing.get_type_hints(target)
    except (NameError, TypeError) as exc:
        raise ConfigurationError(f"Cannot resolve annotations of {target.__name__}: {exc}") from exc

    if dataclasses.is_dataclass(target):
        return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(target)}

    return {
        name: tp
        for name, tp in hints.items()
        if not name.startswith("_") and typing.get_origin(tp) is not ClassVar
    }


def _check_constructible(target: type) -> None:
    if inspect.isabstract(target):
        raise ConfigurationError(f"{target.__name__} is abstract and cannot be instantiated")

    if dataclasses.is_dataclass(target) and target.__dataclass_params__.frozen:
        raise ConfigurationError(f"{target.__name__} is a frozen dataclass; properties cannot be set")
    if issubclass(target, BaseModel) and target.model_config.get("frozen"):
        raise ConfigurationError(f"{target.__name__} is a frozen model; properties cannot be set")

    try:
        sig = inspect.signature(target)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); trust construct() to tell.
        return
    try:
        sig.bind()
    except TypeError as exc:
        raise ConfigurationError(
            f"{target.__name__} has no zero-argument constructor: {exc}"
        ) from exc


def _check_label(label: str, name: str) -> None:
    if not label or any(c in label for c in _FORBIDDEN_LABEL_CHARS):
        raise ConfigurationError(f"Invalid label {label!r} for property {name!r}")


class ClassMap:
    """Ordered property bindings for one target type."""

    def __init__(self, target: type) -> None:
        if not isinstance(target, type):
            raise ConfigurationError(f"Class map target must be a class, got {target!r}")
        _check_constructible(target)
        self._target = target
        self._members = discover_members(target)
        self._entries: dict[str, tuple[str | None, TypeConverter | None]] = {}
        self._ignored: set[str] = set()
        self._property_maps: tuple[PropertyMap, ...] | None = None

    @property
    def target(self) -> type:
        return self._target

    @property
    def members(self) -> dict[str, Any]:
        return dict(self._members)

    @property
    def is_published(self) -> bool:
        return self._property_maps is not None

    def _check_mutable(self) -> None:
        if self._property_maps is not None:
            raise ConfigurationError(
                f"Class map for {self._target.__name__} is already in use and cannot change"
            )

    def map(
        self,
        name: str,
        *,
        label: str | None = None,
        converter: TypeConverter | None = None,
    ) -> ClassMap:
        """Map a property, optionally overriding its label and converter."""
        self._check_mutable()
        if name not in self._members:
            raise ConfigurationError(f"{self._target.__name__} has no property {name!r}")
        if label is not None:
            _check_label(label, name)

        prev_label, prev_converter = self._entries.get(name, (None, None))
        self._entries[name] = (
            label if label is not None else prev_label,
            converter if converter is not None else prev_converter,
        )
        self._ignored.discard(name)
        return self

    def ignore(self, name: str) -> ClassMap:
        """Exclude a property from mapping."""
        self._check_mutable()
        if name not in self._members:
            raise ConfigurationError(f"{self._target.__name__} has no property {name!r}")
        self._entries.pop(name, None)
        self._ignored.add(name)
        return self

    def auto_map(self) -> ClassMap:
        """Map every property not yet mapped or ignored, by its own name."""
        self._check_mutable()
        for name in self._members:
            if name not in self._entries and name not in self._ignored:
                _check_label(name, name)
                self._entries[name] = (None, None)
        return self

    def publish(self, converters: TypeConverterRegistry) -> ClassMap:
        """Resolve converters and freeze the map."""
        if self._property_maps is not None:
            return self

        maps: list[PropertyMap] = []
        for name, (label, converter) in self._entries.items():
            property_type = self._members[name]
            maps.append(
                PropertyMap(
                    name=name,
                    label=label or name,
                    property_type=property_type,
                    converter=converter or converters.get_converter(property_type),
                    setter=_make_setter(name),
                    getter=_make_getter(name),
                )
            )
        self._property_maps = tuple(maps)
        return self

    @property
    def property_maps(self) -> tuple[PropertyMap, ...]:
        if self._property_maps is None:
            raise ConfigurationError(
                f"Class map for {self._target.__name__} has not been published to a configuration"
            )
        return self._property_maps

    def construct(self) -> Any:
        """Create an empty target instance."""
        return self._target()
