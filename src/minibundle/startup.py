# startup.py
from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Union

from .config import jobs_from_properties, load_properties
from .model import JobResult
from .pipeline import Bundler
from .ui.console import Console

ENABLED_ENV = "MINIBUNDLE_ENABLED"
DEFAULT_PROPERTIES = "minibundle.properties"

_TRUTHY = {"1", "true", "yes", "on"}


def _enabled_from_env() -> bool:
    return os.environ.get(ENABLED_ENV, "").strip().lower() in _TRUTHY


def compress_on_startup(
    app_root: Union[str, Path],
    *,
    enabled: Optional[bool] = None,
    properties: Union[str, Path] = DEFAULT_PROPERTIES,
    console: Optional[Console] = None,
) -> Optional[List[JobResult]]:
    """
    Bundle an application's assets while it boots.

    Reads `properties` (relative to `app_root` unless absolute), resolves every
    configured path against `app_root` and runs both asset jobs. Does nothing
    and returns None unless enabled (argument, or MINIBUNDLE_ENABLED when the
    argument is None).
    """
    if enabled is None:
        enabled = _enabled_from_env()
    if not enabled:
        return None

    root = Path(app_root).resolve()
    props_path = Path(properties)
    if not props_path.is_absolute():
        props_path = root / props_path

    js, css = jobs_from_properties(load_properties(props_path), base_dir=root)
    return Bundler(js, css, console=console).compress_all()
