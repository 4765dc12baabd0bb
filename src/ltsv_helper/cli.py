"""Command line: dump an LTSV file as JSON lines."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from ltsv_helper.core import (
    DuplicateLabelPolicy,
    EmptyLinePolicy,
    LtsvConfiguration,
    LtsvError,
    open_reader_async,
)
from ltsv_helper.core.models import resolve_parser_options

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Log to stderr so stdout stays machine-readable."""
    level_name = os.getenv("LTSV_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_labels(s: str) -> list[str]:
    out = [part.strip() for part in s.split(",") if part.strip()]
    if not out:
        raise argparse.ArgumentTypeError("At least one label must be provided")
    return out


async def _dump(
    path: Path,
    *,
    configuration: LtsvConfiguration,
    labels: Sequence[str] | None,
    encoding: str,
) -> int:
    count = 0
    async with open_reader_async(path, configuration, encoding=encoding) as reader:
        while await reader.read_async():
            record = reader.record
            if labels is not None:
                out = {label: record[label] for label in labels if label in record}
            else:
                out = dict(record)
            print(json.dumps(out, ensure_ascii=False))
            count += 1
    LOGGER.debug("Wrote %d records from %s", count, path)
    return count


def main(argv: Sequence[str] | None = None) -> None:
    p = argparse.ArgumentParser(description="Print LTSV records as JSON lines.")
    p.add_argument("path")
    p.add_argument("--labels", type=_parse_labels, default=None, help="Comma-separated labels to keep")
    p.add_argument(
        "--empty-lines",
        choices=[m.value for m in EmptyLinePolicy],
        default=None,
        help="Skip empty lines or treat the first one as end of input (default: skip)",
    )
    p.add_argument(
        "--duplicate-labels",
        choices=[m.value for m in DuplicateLabelPolicy],
        default=None,
        help="Which value a repeated label keeps (default: last)",
    )
    p.add_argument("--encoding", default="utf-8")

    args = p.parse_args(argv)
    _configure_logging()

    try:
        # Environment first, explicit flags on top.
        options = resolve_parser_options(None)
        if args.empty_lines is not None:
            options = replace(options, empty_lines=EmptyLinePolicy(args.empty_lines))
        if args.duplicate_labels is not None:
            options = replace(options, duplicate_labels=DuplicateLabelPolicy(args.duplicate_labels))
        configuration = LtsvConfiguration(options, apply_env=False)
        asyncio.run(
            _dump(
                Path(args.path),
                configuration=configuration,
                labels=args.labels,
                encoding=args.encoding,
            )
        )
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (LtsvError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
