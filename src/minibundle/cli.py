# cli.py
from __future__ import annotations

import sys
from typing import List, Optional

import click

from minibundle.config import css_job, js_job, load_config
from minibundle.errors import AssetError
from minibundle.model import SCRIPT, STYLESHEET, AssetJob
from minibundle.pipeline import AssetPipeline
from minibundle.ui.console import Console


def asset_options(f):
    """Shared per-asset options for the all/js/css commands."""
    options = [
        click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
                     help="Config file (.py defining jobs()/JOBS, or a .properties file); excludes --js-*/--css-*"),
        click.option("--js-input-dir", default=None, help="Directory containing the JS files to compress and merge"),
        click.option("--js-output-file", default=None, help="File that will contain the merged JS"),
        click.option("--js-excludes", default=None, help="JS file or directory names to skip, separated by ';'"),
        click.option("--css-input-dir", default=None, help="Directory containing the CSS files to compress and merge"),
        click.option("--css-output-file", default=None, help="File that will contain the merged CSS"),
        click.option("--css-excludes", default=None, help="CSS file or directory names to skip, separated by ';'"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def build_jobs(
    config_path: Optional[str],
    js_input_dir: Optional[str],
    js_output_file: Optional[str],
    js_excludes: Optional[str],
    css_input_dir: Optional[str],
    css_output_file: Optional[str],
    css_excludes: Optional[str],
) -> List[AssetJob]:
    """
    Jobs from --config when given, otherwise from the per-asset options.
    The two sources are exclusive.
    Always returns one job per kind, script first.
    """
    asset_values = (js_input_dir, js_output_file, js_excludes, css_input_dir, css_output_file, css_excludes)
    if config_path:
        if any(v is not None for v in asset_values):
            raise click.UsageError("--config cannot be combined with --js-* or --css-* options")
        loaded = {j.kind: j for j in load_config(config_path)}
        return [loaded.get(SCRIPT, AssetJob(kind=SCRIPT)), loaded.get(STYLESHEET, AssetJob(kind=STYLESHEET))]
    return [
        js_job(js_input_dir, js_output_file, js_excludes),
        css_job(css_input_dir, css_output_file, css_excludes),
    ]


def _run(ctx, kinds: List[str], **options) -> None:
    console: Console = ctx.obj["console"]

    try:
        jobs = [j for j in build_jobs(**options) if j.kind in kinds]
        results = AssetPipeline(console=console).run_all(jobs)
        console.print_results(results)

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except AssetError as e:
        details = [f"path: {e.path}"] if e.path is not None else []
        details.extend(f"{k}: {v}" for k, v in e.details.items())
        if e.__cause__ is not None:
            details.append(f"cause: {e.__cause__}")
        console.print_error(f"{e.kind} failed", e.message, details=details)
        if console.debug:
            console.print_exception(e)
        sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """minibundle — minify and merge JS/CSS assets into one bundle per type."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["console"] = Console(debug=debug)


@cli.command(name="all")
@asset_options
@click.pass_context
def all_(ctx, **options):
    """Compress and merge both JS and CSS."""
    _run(ctx, [SCRIPT, STYLESHEET], **options)


@cli.command()
@asset_options
@click.pass_context
def js(ctx, **options):
    """Compress and merge JS only."""
    _run(ctx, [SCRIPT], **options)


@cli.command()
@asset_options
@click.pass_context
def css(ctx, **options):
    """Compress and merge CSS only."""
    _run(ctx, [STYLESHEET], **options)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
