# minibundle_config.py
# Bundles this repo's demo assets: `minibundle all --config minibundle_config.py`
from __future__ import annotations
from minibundle import js_job, css_job


def jobs():
    return [
        js_job("web/js", "web/dist/app.min.js", excludes="vendor; legacy.js"),
        css_job("web/css", "web/dist/app.min.css", excludes="vendor"),
    ]
