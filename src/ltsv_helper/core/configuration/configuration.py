"""Reader/writer configuration: parser options, converters and class maps."""

from __future__ import annotations

import logging
import threading
from typing import Any

from ..conversion.base import TypeConverter
from ..conversion.registry import TypeConverterRegistry
from ..errors import ConfigurationError
from ..models import ParserOptions, resolve_parser_options
from .class_map import ClassMap

logger = logging.getLogger(__name__)


class LtsvConfiguration:
    """Session-wide settings shared by readers and writers.

    Class maps are built on first use and cached; once published they are
    read-only, so a configuration may be shared between threads.
    """

    def __init__(
        self,
        options: ParserOptions | None = None,
        *,
        type_converters: TypeConverterRegistry | None = None,
        apply_env: bool = True,
    ) -> None:
        # apply_env=False keeps options exactly as given (already resolved by the caller).
        self.options = resolve_parser_options(options) if apply_env else (options or ParserOptions())
        self.type_converters = type_converters or TypeConverterRegistry()
        self._pending: dict[type, ClassMap] = {}
        self._maps: dict[type, ClassMap] = {}
        self._lock = threading.Lock()

    def register_class_map(self, class_map: ClassMap | type[ClassMap]) -> ClassMap:
        """Use an explicit class map for its target type."""
        if isinstance(class_map, type):
            if not issubclass(class_map, ClassMap):
                raise ConfigurationError(f"{class_map.__name__} is not a ClassMap")
            class_map = class_map()

        with self._lock:
            if class_map.target in self._maps:
                raise ConfigurationError(
                    f"A class map for {class_map.target.__name__} is already in use"
                )
            self._pending[class_map.target] = class_map
        return class_map

    def get_class_map(self, target: type) -> ClassMap:
        """Return the published class map for ``target``, building it once."""
        found = self._maps.get(target)
        if found is not None:
            return found

        with self._lock:
            found = self._maps.get(target)
            if found is None:
                pending = self._pending.pop(target, None)
                if pending is None:
                    pending = ClassMap(target).auto_map()
                found = pending.publish(self.type_converters)
                self._maps[target] = found
                logger.debug(
                    "Built class map for %s: %s",
                    target.__name__,
                    ", ".join(f"{p.name}<-{p.label}" for p in found.property_maps),
                )
        return found

    def get_converter(self, value_type: Any) -> TypeConverter:
        return self.type_converters.get_converter(value_type)
