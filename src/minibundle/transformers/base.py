# transformers/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Container, Iterator, List, Optional, Tuple

from ..ui.console import Console


# ---------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A problem reported by a transformer. line < 0 means no location."""
    severity: str
    message: str
    line: int = -1
    column: int = -1

    def format(self) -> str:
        if self.line < 0:
            return self.message
        return f"{self.line}:{self.column}:{self.message}"


class DiagnosticSink:
    """
    Collects diagnostics for one source file and forwards them to the console.

    Warnings never stop anything; the compressor checks `has_errors`
    once the transformer returns.
    """

    def __init__(self, console: Optional[Console] = None, source_name: str | None = None):
        self.console = console
        self.source_name = source_name
        self.diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self.console is not None:
            text = diagnostic.format()
            if self.source_name:
                text = f"{self.source_name}: {text}"
            self.console.print_diagnostic(diagnostic.severity, text)

    def error(self, message: str, line: int = -1, column: int = -1) -> None:
        self.report(Diagnostic(ERROR, message, line, column))

    def warning(self, message: str, line: int = -1, column: int = -1) -> None:
        self.report(Diagnostic(WARNING, message, line, column))

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == ERROR]

    @property
    def has_errors(self) -> bool:
        return any(d.severity == ERROR for d in self.diagnostics)


# ---------------------------------------------------------------------
# Transformer capability
# ---------------------------------------------------------------------

class Transformer:
    """Text in, minified text out. Syntax problems go to the sink."""

    suffix: str = ""

    def compress(self, source: str, sink: DiagnosticSink) -> str:
        raise NotImplementedError


# ---------------------------------------------------------------------
# Code scanning (shared by the script and stylesheet adapters)
# ---------------------------------------------------------------------

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {")": "(", "]": "[", "}": "{"}

# a "/" after one of these tokens starts a regex literal, not a division
REGEX_PUNCTUATORS = set("(,=:[!&|?{};+-*%<>~^")
REGEX_KEYWORDS = frozenset({
    "return", "typeof", "instanceof", "in", "of", "new", "delete",
    "void", "throw", "case", "do", "else", "yield", "await",
})


def location(source: str, index: int) -> Tuple[int, int]:
    """1-based (line, column) of `index` in `source`."""
    line = source.count("\n", 0, index) + 1
    column = index - (source.rfind("\n", 0, index) + 1) + 1
    return line, column


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def regex_allowed(prev_token: str) -> bool:
    """Whether a "/" right after `prev_token` opens a regex literal."""
    if not prev_token or prev_token in REGEX_KEYWORDS:
        return True
    return len(prev_token) == 1 and prev_token in REGEX_PUNCTUATORS


def _skip_string(source: str, start: int) -> int:
    """Index just past the string literal opening at `start`, -1 if unterminated."""
    quote = source[start]
    i = start + 1
    n = len(source)
    while i < n:
        c = source[i]
        if c == "\\":
            i += 2
            continue
        if c == quote:
            return i + 1
        if c == "\n" and quote != "`":
            return -1
        i += 1
    return -1


def _skip_regex(source: str, start: int) -> int:
    """Index just past the regex literal opening at `start`, -1 if unterminated."""
    i = start + 1
    n = len(source)
    in_class = False
    while i < n:
        c = source[i]
        if c == "\\":
            i += 2
            continue
        if c == "\n":
            return -1
        if c == "[":
            in_class = True
        elif c == "]":
            in_class = False
        elif c == "/" and not in_class:
            return i + 1
        i += 1
    return -1


def iter_code(
    source: str,
    sink: DiagnosticSink,
    *,
    quotes: Tuple[str, ...] = ("'", '"'),
    line_comments: bool = False,
    regex_literals: bool = False,
) -> Iterator[Tuple[int, str]]:
    """
    Yield (index, char) for every character outside comments, string
    literals and (optionally) regex literals.

    An unterminated comment or literal is reported to `sink` and ends the
    iteration. With `regex_literals`, the previous token (punctuator or
    whole word) decides whether a "/" opens a regex or divides.
    """
    prev = ""
    i = 0
    n = len(source)

    while i < n:
        ch = source[i]

        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end < 0:
                sink.error("unterminated comment", *location(source, i))
                return
            i = end + 2
            continue

        if line_comments and source.startswith("//", i):
            end = source.find("\n", i)
            i = n if end < 0 else end
            continue

        if ch in quotes:
            j = _skip_string(source, i)
            if j < 0:
                sink.error("unterminated string literal", *location(source, i))
                return
            prev = ch
            i = j
            continue

        if regex_literals and ch == "/" and regex_allowed(prev):
            j = _skip_regex(source, i)
            if j < 0:
                sink.error("unterminated regular expression literal", *location(source, i))
                return
            prev = "/"
            i = j
            continue

        if regex_literals and _is_word_char(ch):
            j = i + 1
            while j < n and _is_word_char(source[j]):
                j += 1
            for k in range(i, j):
                yield k, source[k]
            prev = source[i:j]
            i = j
            continue

        yield i, ch
        if not ch.isspace():
            prev = ch
        i += 1


def check_brackets(
    source: str,
    sink: DiagnosticSink,
    *,
    quotes: Tuple[str, ...] = ("'", '"'),
    line_comments: bool = False,
    regex_literals: bool = False,
) -> bool:
    """
    Report unbalanced (), [] and {} outside strings and comments.

    Stops at the first problem. Returns True when the source is balanced.
    """
    stack: List[Tuple[str, int]] = []
    reported = len(sink.errors)

    code = iter_code(
        source, sink, quotes=quotes, line_comments=line_comments, regex_literals=regex_literals
    )
    for i, ch in code:
        if ch in OPENERS:
            stack.append((ch, i))
        elif ch in CLOSERS:
            if not stack:
                sink.error(f"unmatched '{ch}'", *location(source, i))
                return False
            opener, _pos = stack.pop()
            if OPENERS[opener] != ch:
                sink.error(f"expected '{OPENERS[opener]}' but found '{ch}'", *location(source, i))
                return False

    if len(sink.errors) > reported:
        return False
    if stack:
        opener, pos = stack[-1]
        sink.error(f"unclosed '{opener}'", *location(source, pos))
        return False
    return True


def break_lines(
    text: str,
    width: int,
    breakable: Optional[Container[int]] = None,
    chars: str = "}",
) -> str:
    """
    Insert a newline after each of `chars` that ends a line longer than
    `width`. When `breakable` is given, only those indices may break.
    """
    out = []
    line_len = 0
    for i, ch in enumerate(text):
        out.append(ch)
        line_len = 0 if ch == "\n" else line_len + 1
        if ch in chars and line_len > width and (breakable is None or i in breakable):
            out.append("\n")
            line_len = 0
    return "".join(out)
