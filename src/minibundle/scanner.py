# scanner.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional

from .cleanup import remove_file
from .errors import ScanError, StaleArtifactError
from .model import ScanResult
from .ui.console import Console


def is_minified_name(name: str, suffix: str) -> bool:
    return name.lower().endswith((".min" + suffix).lower())


def is_source_name(name: str, suffix: str) -> bool:
    return name.lower().endswith(suffix.lower())


def scan(
    root: Path,
    excludes: Iterable[str],
    suffix: str,
    console: Optional[Console] = None,
) -> ScanResult:
    """
    Recursively scan `root`:
      - entries whose name is excluded are skipped (whole subtree for dirs)
      - symlinked directories are not followed
      - leftover "*.min<suffix>" files are deleted on the spot
      - "*<suffix>" files are collected in traversal order
      - every visited directory is recorded (root included)
    """
    excluded = frozenset(excludes)
    files: List[Path] = []
    dirs: List[Path] = []
    _walk(Path(root), excluded, suffix, files, dirs, console)
    return ScanResult(files=tuple(files), dirs=tuple(dirs))


def _walk(
    directory: Path,
    excluded: frozenset,
    suffix: str,
    files: List[Path],
    dirs: List[Path],
    console: Optional[Console],
) -> None:
    dirs.append(directory)
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        raise ScanError("Unable to list directory", path=directory) from e

    for entry in entries:
        if entry.name in excluded:
            continue

        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            _walk(path, excluded, suffix, files, dirs, console)
        elif entry.is_symlink() and entry.is_dir():
            if console is not None:
                console.print_debug(f"Not following symlinked directory: {path}")
        elif is_minified_name(entry.name, suffix):
            err = remove_file(path)
            if err is not None:
                raise StaleArtifactError("Unable to delete stale minified file", path=path) from err
            if console is not None:
                console.print_debug(f"Removed stale artifact: {path}")
        elif is_source_name(entry.name, suffix):
            files.append(path)
