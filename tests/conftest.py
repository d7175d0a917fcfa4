from __future__ import annotations

import os
from pathlib import Path

import pytest

from minibundle.ui.console import Console


def write(path: Path, text: str = "", mtime_ns: int | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    if mtime_ns is not None:
        os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


@pytest.fixture
def console() -> Console:
    return Console()
