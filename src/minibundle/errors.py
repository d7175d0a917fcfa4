# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Optional


@dataclass
class AssetError(Exception):
    """
    Structured pipeline error with enough context for:
      - clean CLI output
      - debugging without full tracebacks

    The original exception (if any) is chained with `raise ... from`.
    """
    message: str
    path: Optional[Path] = None
    details: dict = field(default_factory=dict)

    kind: ClassVar[str] = "asset"

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        if self.path is not None:
            lines.append(f"path={self.path}")
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


@dataclass
class ScanError(AssetError):
    kind: ClassVar[str] = "scan"


@dataclass
class TransformError(AssetError):
    kind: ClassVar[str] = "transform"


@dataclass
class MergeError(AssetError):
    kind: ClassVar[str] = "merge"


@dataclass
class CleanupError(AssetError):
    kind: ClassVar[str] = "cleanup"


@dataclass
class StaleArtifactError(ScanError, CleanupError):
    """A leftover `*.min.<suffix>` file found during a scan could not be deleted."""
    kind: ClassVar[str] = "scan"


@dataclass
class ConfigError(AssetError):
    kind: ClassVar[str] = "config"
