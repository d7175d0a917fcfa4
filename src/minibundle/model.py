# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


SCRIPT = "js"
STYLESHEET = "css"

SUFFIXES = {
    SCRIPT: ".js",
    STYLESHEET: ".css",
}


@dataclass(frozen=True)
class AssetJob:
    """
    Configuration for one asset type (scripts or stylesheets).

    input_dir=None   -> no directory scan, only `files` are processed
    output_file=None -> minified siblings are produced but nothing is merged
    """
    kind: str
    input_dir: Optional[Path] = None
    output_file: Optional[Path] = None
    excludes: Tuple[str, ...] = ()
    suffix: str = ""
    files: Tuple[Path, ...] = ()
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if not self.suffix:
            if self.kind not in SUFFIXES:
                raise ValueError(f"Unknown asset kind: {self.kind!r}")
            object.__setattr__(self, "suffix", SUFFIXES[self.kind])

    @property
    def minified_suffix(self) -> str:
        return ".min" + self.suffix


@dataclass(frozen=True)
class ScanResult:
    """Files matched by a scan (discovery order) plus every directory visited."""
    files: Tuple[Path, ...] = ()
    dirs: Tuple[Path, ...] = ()


@dataclass(frozen=True)
class JobResult:
    kind: str
    status: str                         # "ok" | "skipped"
    output_file: Optional[Path] = None
    compressed: Tuple[Path, ...] = field(default_factory=tuple)

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"
