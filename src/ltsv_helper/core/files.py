"""Open LTSV files (plain or gzip) as readers."""

from __future__ import annotations

import gzip
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import aiofiles
from aiofiles.threadpool import wrap

from .configuration import LtsvConfiguration
from .reader import LtsvReader


def _check_file(path: Path) -> None:
    if not path.is_file():
        raise FileNotFoundError(f"LTSV file not found: {path}")


def open_reader(
    path: str | Path,
    configuration: LtsvConfiguration | None = None,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "strict",
) -> LtsvReader:
    """Open a file for blocking (and executor-backed async) reading."""
    p = Path(path)
    _check_file(p)
    f: Any
    if p.suffix.lower() == ".gz":
        f = gzip.open(p, mode="rt", encoding=encoding, errors=decode_errors)
    else:
        f = p.open(encoding=encoding, errors=decode_errors)
    return LtsvReader(f, configuration)


@asynccontextmanager
async def open_reader_async(
    path: str | Path,
    configuration: LtsvConfiguration | None = None,
    *,
    encoding: str = "utf-8",
    decode_errors: str = "strict",
) -> AsyncIterator[LtsvReader]:
    """Open a file for async reading; the file is closed on exit."""
    p = Path(path)
    _check_file(p)
    if p.suffix.lower() == ".gz":
        f = gzip.open(p, mode="rt", encoding=encoding, errors=decode_errors)
        reader = LtsvReader(wrap(f), configuration)
        try:
            yield reader
        finally:
            await reader.aclose()
    else:
        async with aiofiles.open(p, encoding=encoding, errors=decode_errors) as af:
            reader = LtsvReader(af, configuration)
            try:
                yield reader
            finally:
                await reader.aclose()
