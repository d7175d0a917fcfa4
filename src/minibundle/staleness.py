# staleness.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .errors import ScanError


def latest_mtime_ns(files: Sequence[Path]) -> int:
    """Newest modification time across `files` (must not be empty)."""
    latest = None
    for f in files:
        try:
            mtime = f.stat().st_mtime_ns
        except OSError as e:
            raise ScanError("Unable to read modification time", path=f) from e
        if latest is None or mtime > latest:
            latest = mtime
    if latest is None:
        raise ValueError("latest_mtime_ns() needs at least one file")
    return latest


def needs_rebuild(input_files: Sequence[Path], output_file: Optional[Path]) -> bool:
    """
    Coarse mtime gate:
      - no inputs                      -> False (nothing to build)
      - no output / output missing     -> True
      - output older than any input    -> True
    """
    if not input_files:
        return False
    if output_file is None or not output_file.exists():
        return True
    return output_file.stat().st_mtime_ns < latest_mtime_ns(input_files)
