# cleanup.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import CleanupError
from .ui.console import Console


# ----------------------------------------------------------------------
# Deletion primitives
# ----------------------------------------------------------------------
# These return the OSError instead of raising it so each caller decides
# whether a failure is fatal, and can still chain it as the cause.

def remove_file(path: Path) -> Optional[OSError]:
    try:
        path.unlink()
    except OSError as e:
        return e
    return None


def remove_dir(path: Path) -> Optional[OSError]:
    try:
        path.rmdir()
    except OSError as e:
        return e
    return None


def is_empty_dir(path: Path) -> bool:
    with os.scandir(path) as it:
        return next(it, None) is None


# ----------------------------------------------------------------------
# Cleanup steps
# ----------------------------------------------------------------------

def delete_inputs(files: Iterable[Path], console: Optional[Console] = None) -> None:
    """Delete every original source file. Stops at the first failure."""
    for f in files:
        err = remove_file(f)
        if err is not None:
            raise CleanupError("Unable to delete file", path=f) from err
        if console is not None:
            console.print_deleted(f)


def prune_order(dirs: Iterable[Path]) -> List[Path]:
    """Deepest directories first, then reverse path order."""
    absolute = [Path(os.path.abspath(d)) for d in dirs]
    return sorted(absolute, key=lambda d: (len(d.parts), str(d)), reverse=True)


def prune_empty_dirs(dirs: Iterable[Path], console: Optional[Console] = None) -> List[Path]:
    """
    Remove the directories that are empty, children before parents.

    Directories with remaining entries are left alone. Returns the removed ones.
    """
    removed: List[Path] = []
    for d in prune_order(dirs):
        if not d.is_dir():
            continue
        try:
            empty = is_empty_dir(d)
        except OSError as e:
            raise CleanupError("Unable to list dir", path=d) from e
        if not empty:
            continue
        err = remove_dir(d)
        if err is not None:
            raise CleanupError("Unable to delete dir", path=d) from err
        removed.append(d)
        if console is not None:
            console.print_deleted(d)
    return removed
