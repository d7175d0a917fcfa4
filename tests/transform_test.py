from __future__ import annotations

import pytest
import rcssmin
import rjsmin

from minibundle.pipeline import transformer_for
from minibundle.transformers.base import Diagnostic, DiagnosticSink, break_lines, check_brackets, location
from minibundle.transformers.script import ScriptTransformer
from minibundle.transformers.stylesheet import CssTransformer


JS_CHECK = dict(quotes=("'", '"', "`"), line_comments=True, regex_literals=True)


def test_diagnostic_format():
    assert Diagnostic("error", "boom").format() == "boom"
    assert Diagnostic("warning", "odd", 3, 9).format() == "3:9:odd"


def test_regex_after_return_keeps_brackets_inside():
    src = "function f(s){ return /[(]/.test(s); }"
    sink = DiagnosticSink()
    assert ScriptTransformer().compress(src, sink) == rjsmin.jsmin(src, keep_bang_comments=True)
    assert sink.diagnostics == []


@pytest.mark.parametrize("src", [
    'function f(s){ return /"/.test(s); }',
    "var t = typeof /[{]/;",
    "switch (x) { case /]/.source: break; }",
    "void /'/;",
    "if (a) b(); else /[)]/.exec(c);",
    "async function g(){ await /`/; }",
    "var ok = x instanceof /[(]/.constructor;",
])
def test_regex_after_keyword(src):
    sink = DiagnosticSink()
    assert check_brackets(src, sink, **JS_CHECK) is True
    assert sink.diagnostics == []


def test_slash_after_identifier_or_number_divides():
    src = "var half = size / 2;\nvar q = 10 / 5, r = x.returned / y;\nvar z = f(a) / [b][0];\n"
    sink = DiagnosticSink()
    assert check_brackets(src, sink, **JS_CHECK) is True
    assert sink.diagnostics == []


def test_location_is_one_based():
    src = "ab\ncd"
    assert location(src, 0) == (1, 1)
    assert location(src, 4) == (2, 2)


def test_balanced_script_with_tricky_tokens():
    src = (
        "// a ( comment\n"
        "var s = 'a ) string', t = \"[\";\n"
        "/* block { comment */\n"
        "var re = /[(]+\\//g;\n"
        "var half = (4) / 2;\n"
        "var tpl = `x ${s} }`;\n"
        "function f(a) { return [a]; }\n"
    )
    sink = DiagnosticSink()
    assert check_brackets(src, sink, **JS_CHECK) is True
    assert sink.diagnostics == []


def test_unmatched_closer_has_location():
    sink = DiagnosticSink()
    assert check_brackets("a();\n)", sink, **JS_CHECK) is False
    assert sink.errors == [Diagnostic("error", "unmatched ')'", 2, 1)]


def test_mismatched_pair():
    sink = DiagnosticSink()
    check_brackets("foo(]", sink)
    assert sink.errors[0].message == "expected ')' but found ']'"


def test_unclosed_bracket_points_at_opener():
    sink = DiagnosticSink()
    check_brackets("function f() {\n  return 1;\n", sink, **JS_CHECK)
    assert sink.errors == [Diagnostic("error", "unclosed '{'", 1, 14)]


def test_unterminated_string_and_comment():
    sink = DiagnosticSink()
    check_brackets("var a = 'oops;\n", sink, **JS_CHECK)
    assert sink.errors[0].message == "unterminated string literal"

    sink = DiagnosticSink()
    check_brackets("a { color: red } /* never closed", sink)
    assert sink.errors[0].message == "unterminated comment"
    assert sink.errors[0].line == 1


def test_sink_forwards_to_console(console, capsys):
    sink = DiagnosticSink(console, source_name="x.js")
    sink.warning("no location")
    sink.error("bad", 2, 1)
    err = capsys.readouterr().err
    assert "WARNING: x.js: no location" in err
    assert "ERROR: x.js: 2:1:bad" in err
    assert sink.has_errors


def test_script_transformer_uses_rjsmin():
    src = "var x = 1;\n\nvar y = 2; // trailing\n"
    sink = DiagnosticSink()
    assert ScriptTransformer().compress(src, sink) == rjsmin.jsmin(src, keep_bang_comments=True)
    assert not sink.has_errors


def test_script_transformer_keeps_license_comments():
    out = ScriptTransformer().compress("/*! MIT */\nvar a = 1;\n", DiagnosticSink())
    assert "/*! MIT */" in out


def test_script_transformer_reports_syntax_errors():
    sink = DiagnosticSink()
    assert ScriptTransformer().compress("function (", sink) == ""
    assert sink.has_errors


def test_empty_sources_only_warn():
    sink = DiagnosticSink()
    assert ScriptTransformer().compress("  \n", sink) == ""
    assert CssTransformer().compress("", sink) == ""
    assert [d.severity for d in sink.diagnostics] == ["warning", "warning"]


def test_css_transformer_uses_rcssmin():
    src = "a {\n  color: red;\n}\n\n/* gone */\nb { margin: 0 }\n"
    sink = DiagnosticSink()
    assert CssTransformer().compress(src, sink) == rcssmin.cssmin(src, keep_bang_comments=True)


def test_css_transformer_reports_unbalanced_braces():
    sink = DiagnosticSink()
    CssTransformer().compress("a { color: red;\n", sink)
    assert sink.errors[0].message == "unclosed '{'"


def test_break_lines():
    assert break_lines("a{b:c}d{e:f}", 3) == "a{b:c}\nd{e:f}\n"
    assert break_lines("a{b:c}d{e:f}", 100) == "a{b:c}d{e:f}"


def test_css_line_break_option():
    out = CssTransformer(line_break=0).compress("a { color: red } b { color: blue }", DiagnosticSink())
    assert out.count("\n") == 2


def test_transformer_for():
    assert isinstance(transformer_for("js"), ScriptTransformer)
    assert isinstance(transformer_for("css"), CssTransformer)


def test_script_line_break_option():
    src = "function a(){ return 1; }\nfunction b(){ return '};'; }\n"
    out = ScriptTransformer(line_break=0).compress(src, DiagnosticSink())
    expected = rjsmin.jsmin(src, keep_bang_comments=True)
    assert out.replace("\n", "") == expected.replace("\n", "")
    assert "'};'" in out
    lines = [line for line in out.splitlines() if line]
    assert len(lines) > 2
    assert all(line[-1] in "};" for line in lines)


def test_script_without_line_break_is_plain_rjsmin():
    src = "function a(){return 1}function b(){return 2}"
    assert ScriptTransformer().compress(src, DiagnosticSink()) == rjsmin.jsmin(src, keep_bang_comments=True)


def test_break_lines_respects_breakable_positions():
    assert break_lines("a;b}c;", 0, breakable={3}, chars="};") == "a;b}\nc;"
