# merger.py
from __future__ import annotations

import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from .cleanup import remove_file
from .errors import MergeError
from .ui.console import Console


def merge_order(files: Sequence[Path]) -> List[Path]:
    """Sort by file name, ties by full path, so bundle order never depends on traversal."""
    return sorted(files, key=lambda p: (p.name, str(p)))


def merge(
    compressed_files: Sequence[Path],
    output_file: Optional[Path],
    console: Optional[Console] = None,
) -> Optional[Path]:
    """
    Concatenate the compressed files (raw bytes, sorted by name) into
    `output_file`, replacing it, then delete the compressed files.

    A failed copy leaves the partial output on disk.
    """
    if output_file is None:
        return None

    if output_file.exists():
        err = remove_file(output_file)
        if err is not None:
            raise MergeError("Unable to delete file", path=output_file) from err

    ordered = merge_order(compressed_files)
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "ab") as out:
            for f in ordered:
                with open(f, "rb") as src:
                    shutil.copyfileobj(src, out)
    except OSError as e:
        raise MergeError("An error occurred while merging files", path=output_file) from e

    if console is not None:
        console.print_merged(output_file)

    for f in ordered:
        err = remove_file(f)
        if err is not None:
            raise MergeError("Unable to delete file", path=f) from err
    return output_file
