from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

NOW = 1_700_000_000.0
DAY = 24 * 60 * 60

WriteFile = Callable[..., Path]


def _write(path: Path, content: bytes = b"x", accessed_days_ago: float = 0.0) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    ts = NOW - accessed_days_ago * DAY
    os.utime(path, (ts, ts))
    return path


@pytest.fixture
def write_file() -> WriteFile:
    """Create a file whose access time is *accessed_days_ago* before NOW."""
    return _write
