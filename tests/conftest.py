from __future__ import annotations

import gzip
import io
from collections.abc import Callable
from pathlib import Path

import pytest

ACCESS_LINES = [
    "host:127.0.0.1\tident:-\tuser:frank\ttime:[10/Oct/2000:13:55:36 -0700]"
    "\treq:GET /apache_pb.gif HTTP/1.0\tstatus:200\tsize:2326",
    "host:127.0.0.2\tident:-\tuser:-\ttime:[10/Oct/2000:13:55:37 -0700]"
    "\treq:GET /missing HTTP/1.0\tstatus:404\tsize:-",
]


class TrackingStream(io.StringIO):
    """StringIO that counts close() calls."""

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1
        super().close()


@pytest.fixture
def tracking_stream() -> Callable[[str], TrackingStream]:
    return TrackingStream


@pytest.fixture
def write_ltsv() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        text = "".join(line + "\n" for line in lines)
        if path.suffix == ".gz":
            with gzip.open(path, "wt", encoding="utf-8") as f:
                f.write(text)
        else:
            path.write_text(text, encoding="utf-8")

    return _write


@pytest.fixture
def access_lines() -> list[str]:
    return list(ACCESS_LINES)
