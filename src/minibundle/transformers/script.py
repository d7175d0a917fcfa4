# transformers/script.py
from __future__ import annotations

from typing import Optional

import rjsmin

from .base import DiagnosticSink, Transformer, break_lines, check_brackets, iter_code

SCRIPT_SYNTAX = dict(quotes=("'", '"', "`"), line_comments=True, regex_literals=True)


class ScriptTransformer(Transformer):
    """JavaScript minification through rjsmin."""

    suffix = ".js"

    def __init__(self, keep_bang_comments: bool = True, line_break: Optional[int] = None):
        # /*! ... */ comments carry licenses, keep them by default
        self.keep_bang_comments = keep_bang_comments
        self.line_break = line_break

    def compress(self, source: str, sink: DiagnosticSink) -> str:
        if not source.strip():
            sink.warning("empty script")
            return ""

        if not check_brackets(source, sink, **SCRIPT_SYNTAX):
            return ""

        js = rjsmin.jsmin(source, keep_bang_comments=self.keep_bang_comments)
        if self.line_break is not None:
            js = self._break_lines(js)
        return js

    def _break_lines(self, js: str) -> str:
        # only break after '}' or ';' that sit in code, never inside literals
        code = iter_code(js, DiagnosticSink(), **SCRIPT_SYNTAX)
        breakable = {i for i, ch in code if ch in "};"}
        return break_lines(js, self.line_break, breakable, chars="};")
