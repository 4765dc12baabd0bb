"""Core data models and parser options."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from enum import Enum

Record = dict[str, str]
"""One parsed line: label -> raw value, in the order the fields appeared."""


class EmptyLinePolicy(str, Enum):
    """What the parser does with a line that holds no fields."""

    SKIP = "skip"
    STOP = "stop"


class DuplicateLabelPolicy(str, Enum):
    """How a label repeated within one line is resolved."""

    LAST = "last"
    FIRST = "first"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    empty_lines: EmptyLinePolicy = EmptyLinePolicy.SKIP
    duplicate_labels: DuplicateLabelPolicy = DuplicateLabelPolicy.LAST

    # A trailing tab leaves a zero-length field behind; ignore it unless strict.
    skip_empty_fields: bool = True


def _env_policy(name: str, enum_type: type[Enum]) -> Enum | None:
    env = os.getenv(name)
    if env is None or env == "":
        return None
    try:
        return enum_type(env.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(m.value for m in enum_type)
        raise ValueError(f"{name} must be one of: {allowed}") from exc


def resolve_parser_options(options: ParserOptions | None) -> ParserOptions:
    """Return options with optional env overrides applied."""
    if options is None:
        options = ParserOptions()

    empty_lines = _env_policy("LTSV_EMPTY_LINES", EmptyLinePolicy)
    if empty_lines is not None and empty_lines is not options.empty_lines:
        options = replace(options, empty_lines=empty_lines)

    duplicates = _env_policy("LTSV_DUPLICATE_LABELS", DuplicateLabelPolicy)
    if duplicates is not None and duplicates is not options.duplicate_labels:
        options = replace(options, duplicate_labels=duplicates)

    return options
