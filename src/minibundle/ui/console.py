"""Console output formatting utilities for minibundle."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_job_start(self, kind: str, input_dir: Optional[Path], output_file: Optional[Path]) -> None:
        """Print asset job start information."""
        print(f"\nJOB STARTED: {kind}")
        print(f"Input: {input_dir if input_dir is not None else '-'}")
        print(f"Output: {output_file if output_file is not None else '-'}")

    def print_job_skipped(self, kind: str, reason: str) -> None:
        print(f"STATUS: skipped ({reason})")

    def print_compressed(self, path: Path) -> None:
        print(f"Compressed: {path}")

    def print_merged(self, path: Path) -> None:
        print(f"Merged: {path}")

    def print_deleted(self, path: Path) -> None:
        self.print_debug(f"Deleted: {path}")

    def print_diagnostic(self, severity: str, message: str) -> None:
        """
        Print a diagnostic reported by a transformer.

        Args:
            severity: "error" or "warning"
            message: Already formatted message (with location when known)
        """
        label = "ERROR" if severity == "error" else "WARNING"
        print(f"{label}: {message}", file=sys.stderr)

    def print_results(self, results: Iterable) -> None:
        """Print final results summary."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        for result in results:
            if result.skipped:
                print(f"  {result.kind}: SKIPPED")
            else:
                target = result.output_file if result.output_file is not None else "no output"
                print(f"  {result.kind}: SUCCESS ({len(result.compressed)} file(s) -> {target})")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)
