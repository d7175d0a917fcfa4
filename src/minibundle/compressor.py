# compressor.py
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import TransformError
from .transformers.base import DiagnosticSink, Transformer
from .ui.console import Console


def minified_path(input_file: Path, suffix: str) -> Path:
    """`/abs/dir/a.JS` -> `/abs/dir/a.min.js` (case-insensitive suffix swap)."""
    absolute = os.path.abspath(input_file)
    pattern = "(?i)" + re.escape(suffix) + "$"
    return Path(re.sub(pattern, lambda _m: ".min" + suffix, absolute))


def compress_one(
    input_file: Path,
    transformer: Transformer,
    suffix: str,
    *,
    encoding: str = "utf-8",
    console: Optional[Console] = None,
) -> Path:
    """Minify one file into its sibling. Returns the sibling path."""
    output_file = minified_path(input_file, suffix)
    if output_file == Path(os.path.abspath(input_file)):
        raise TransformError(f"Expected a {suffix} file", path=input_file)
    sink = DiagnosticSink(console, source_name=str(input_file))

    try:
        with open(input_file, "r", encoding=encoding) as reader, \
                open(output_file, "w", encoding=encoding) as writer:
            writer.write(transformer.compress(reader.read(), sink))
    except (OSError, UnicodeError) as e:
        raise TransformError("An error occurred while compressing", path=input_file) from e

    if sink.has_errors:
        first = sink.errors[0]
        raise TransformError(
            "Syntax error while compressing",
            path=input_file,
            details={"errors": len(sink.errors), "first": first.format()},
        )

    if console is not None:
        console.print_compressed(output_file)
    return output_file


def compress_all(
    input_files: Sequence[Path],
    transformer: Transformer,
    suffix: str,
    *,
    encoding: str = "utf-8",
    console: Optional[Console] = None,
) -> List[Path]:
    """Compress every input in discovery order; the first failure aborts."""
    return [
        compress_one(f, transformer, suffix, encoding=encoding, console=console)
        for f in input_files
    ]
