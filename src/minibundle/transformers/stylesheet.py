# transformers/stylesheet.py
from __future__ import annotations

from typing import Optional

import rcssmin

from .base import DiagnosticSink, Transformer, break_lines, check_brackets


class CssTransformer(Transformer):
    """CSS minification through rcssmin."""

    suffix = ".css"

    def __init__(self, keep_bang_comments: bool = True, line_break: Optional[int] = None):
        self.keep_bang_comments = keep_bang_comments
        self.line_break = line_break

    def compress(self, source: str, sink: DiagnosticSink) -> str:
        if not source.strip():
            sink.warning("empty stylesheet")
            return ""

        if not check_brackets(source, sink):
            return ""

        css = rcssmin.cssmin(source, keep_bang_comments=self.keep_bang_comments)
        if self.line_break is not None:
            css = break_lines(css, self.line_break)
        return css
