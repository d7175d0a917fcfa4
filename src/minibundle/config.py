# config.py
from __future__ import annotations

import runpy
import string
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .errors import ConfigError
from .model import SCRIPT, STYLESHEET, AssetJob

PathLike = Union[str, Path]
Excludes = Union[str, Iterable[str], None]

PROPERTY_PREFIX = "minibundle"


# ---------------------------------------------------------------------
# Job helpers
# ---------------------------------------------------------------------

def parse_excludes(value: Excludes) -> Tuple[str, ...]:
    """
    "a.js; vendor;"  -> ("a.js", "vendor")

    Accepts a ';'-separated string or an iterable of names. Blank entries
    are dropped, duplicates removed, order kept.
    """
    if value is None:
        return ()
    items = value.split(";") if isinstance(value, str) else list(value)
    out: List[str] = []
    for item in items:
        name = str(item).strip()
        if name and name not in out:
            out.append(name)
    return tuple(out)


def _path(value: Optional[PathLike], base_dir: Optional[Path] = None) -> Optional[Path]:
    if value is None or str(value).strip() == "":
        return None
    p = Path(str(value).strip()).expanduser()
    if base_dir is not None and not p.is_absolute():
        p = base_dir / p
    return p


def asset_job(
    kind: str,
    input_dir: Optional[PathLike] = None,
    output_file: Optional[PathLike] = None,
    excludes: Excludes = None,
    *,
    files: Iterable[PathLike] = (),
    encoding: str = "utf-8",
    base_dir: Optional[PathLike] = None,
) -> AssetJob:
    base = Path(base_dir) if base_dir is not None else None
    return AssetJob(
        kind=kind,
        input_dir=_path(input_dir, base),
        output_file=_path(output_file, base),
        excludes=parse_excludes(excludes),
        files=tuple(_path(f, base) for f in files),
        encoding=encoding,
    )


def js_job(input_dir=None, output_file=None, excludes: Excludes = None, **kwargs) -> AssetJob:
    return asset_job(SCRIPT, input_dir, output_file, excludes, **kwargs)


def css_job(input_dir=None, output_file=None, excludes: Excludes = None, **kwargs) -> AssetJob:
    return asset_job(STYLESHEET, input_dir, output_file, excludes, **kwargs)


# ----------------------------------------------------------------------
# Python config files
# ----------------------------------------------------------------------

def load_jobs(path: PathLike) -> List[AssetJob]:
    """
    Load jobs from a python file.

    The file must define either:
      - jobs() -> List[AssetJob]
      - JOBS = [AssetJob, ...]
    """
    cfg_path = Path(path).expanduser().resolve()
    if not cfg_path.exists():
        raise ConfigError("Config file not found", path=cfg_path)
    if cfg_path.suffix != ".py":
        raise ConfigError(f"Config must be a .py file, got: {cfg_path.name}", path=cfg_path)

    module_name = f"minibundle_config_{cfg_path.stem}"
    globals_dict = runpy.run_path(str(cfg_path), run_name=module_name)

    jobs = None
    if "jobs" in globals_dict and callable(globals_dict["jobs"]):
        jobs = globals_dict["jobs"]()
    elif "JOBS" in globals_dict:
        jobs = globals_dict["JOBS"]

    if not isinstance(jobs, list) or not all(isinstance(j, AssetJob) for j in jobs):
        raise ConfigError(
            "Config must return/define a List[AssetJob]. "
            "Define jobs() -> List[AssetJob] or JOBS = [AssetJob, ...].",
            path=cfg_path,
        )
    return jobs


# ----------------------------------------------------------------------
# Properties files
# ----------------------------------------------------------------------

_WHITESPACE = " \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _continues(line: str) -> bool:
    """An odd number of trailing backslashes joins the next line."""
    return (len(line) - len(line.rstrip("\\"))) % 2 == 1


def _logical_lines(text: str) -> Iterable[Tuple[int, str]]:
    lines = text.splitlines()
    i = 0
    while i < len(lines):
        lineno = i + 1
        line = lines[i].lstrip(_WHITESPACE)
        i += 1
        if not line or line[0] in "#!":
            continue
        while _continues(line):
            line = line[:-1]
            if i >= len(lines):
                break
            line += lines[i].lstrip(_WHITESPACE)
            i += 1
        yield lineno, line


def _unescape(value: str, lineno: int) -> str:
    out: List[str] = []
    i = 0
    n = len(value)
    while i < n:
        c = value[i]
        if c != "\\" or i + 1 >= n:
            out.append(c)
            i += 1
            continue
        c = value[i + 1]
        if c == "u":
            digits = value[i + 2:i + 6]
            if len(digits) != 4 or not all(d in string.hexdigits for d in digits):
                raise ConfigError(
                    f"Malformed \\uxxxx escape on line {lineno}",
                    details={"escape": value[i:i + 6]},
                )
            out.append(chr(int(digits, 16)))
            i += 6
            continue
        out.append(_ESCAPES.get(c, c))
        i += 2
    return "".join(out)


def _split_entry(line: str) -> Tuple[str, str]:
    """Key ends at the first unescaped '=', ':' or whitespace."""
    i = 0
    n = len(line)
    while i < n:
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in "=:" or c in _WHITESPACE:
            break
        i += 1
    key, rest = line[:i], line[i:].lstrip(_WHITESPACE)
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> Dict[str, str]:
    """
    java.util.Properties style reader:
      key=value, key: value and key value are all accepted,
      '#' and '!' start comment lines, blank lines are ignored,
      a trailing '\\' continues the entry on the next line,
      \\t \\n \\r \\f \\uXXXX and \\<char> escapes are decoded,
      later keys win.
    """
    props: Dict[str, str] = {}
    for lineno, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        if not raw_key:
            raise ConfigError(f"Missing key on line {lineno}", details={"line": line})
        props[_unescape(raw_key, lineno)] = _unescape(raw_value, lineno)
    return props


def load_properties(path: PathLike) -> Dict[str, str]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError("Unable to read properties file", path=p) from e
    try:
        return parse_properties(text)
    except ConfigError as e:
        e.path = p
        raise


def jobs_from_properties(
    props: Dict[str, str],
    base_dir: Optional[PathLike] = None,
) -> Tuple[AssetJob, AssetJob]:
    """(js_job, css_job) from `minibundle.<kind>.<field>` keys."""

    def get(kind: str, name: str) -> Optional[str]:
        return props.get(f"{PROPERTY_PREFIX}.{kind}.{name}")

    js = js_job(get(SCRIPT, "input_dir"), get(SCRIPT, "output_file"), get(SCRIPT, "excludes"), base_dir=base_dir)
    css = css_job(
        get(STYLESHEET, "input_dir"),
        get(STYLESHEET, "output_file"),
        get(STYLESHEET, "excludes"),
        base_dir=base_dir,
    )
    return js, css


def load_config(path: PathLike, base_dir: Optional[PathLike] = None) -> List[AssetJob]:
    """`.py` files go through load_jobs, anything else is read as properties."""
    p = Path(path)
    if p.suffix == ".py":
        return load_jobs(p)
    if base_dir is None:
        base_dir = p.resolve().parent
    return list(jobs_from_properties(load_properties(p), base_dir=base_dir))
