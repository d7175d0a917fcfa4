# pipeline.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from .cleanup import delete_inputs, prune_empty_dirs
from .compressor import compress_all
from .merger import merge
from .model import SCRIPT, STYLESHEET, AssetJob, JobResult, ScanResult
from .scanner import scan
from .staleness import needs_rebuild
from .transformers.base import Transformer
from .transformers.script import ScriptTransformer
from .transformers.stylesheet import CssTransformer
from .ui.console import Console

# scan ---> staleness gate ---> compress (xN) ---> merge ---> cleanup


def transformer_for(kind: str) -> Transformer:
    if kind == SCRIPT:
        return ScriptTransformer()
    if kind == STYLESHEET:
        return CssTransformer()
    raise ValueError(f"No transformer for asset kind: {kind!r}")


class AssetPipeline:
    """
    Runs asset jobs one at a time.

    The console is injected; transformers default to the built-in
    script/stylesheet adapters and can be overridden per kind.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        transformers: Optional[Dict[str, Transformer]] = None,
    ):
        self.console = console or Console()
        self._transformers: Dict[str, Transformer] = dict(transformers or {})

    def transformer(self, kind: str) -> Transformer:
        if kind not in self._transformers:
            self._transformers[kind] = transformer_for(kind)
        return self._transformers[kind]

    def scan(self, job: AssetJob) -> ScanResult:
        """Explicit job.files first, then whatever the input dir yields."""
        if job.input_dir is None or not job.input_dir.exists():
            return ScanResult(files=tuple(job.files), dirs=())
        found = scan(job.input_dir, job.excludes, job.suffix, console=self.console)
        return ScanResult(files=tuple(job.files) + found.files, dirs=found.dirs)

    def run_job(self, job: AssetJob) -> JobResult:
        self.console.print_job_start(job.kind, job.input_dir, job.output_file)

        scanned = self.scan(job)
        if not needs_rebuild(scanned.files, job.output_file):
            reason = "no input files" if not scanned.files else "output is up to date"
            self.console.print_job_skipped(job.kind, reason)
            return JobResult(kind=job.kind, status="skipped", output_file=job.output_file)

        compressed = compress_all(
            scanned.files,
            self.transformer(job.kind),
            job.suffix,
            encoding=job.encoding,
            console=self.console,
        )
        merge(compressed, job.output_file, console=self.console)
        delete_inputs(scanned.files, console=self.console)
        prune_empty_dirs(scanned.dirs, console=self.console)

        return JobResult(
            kind=job.kind,
            status="ok",
            output_file=job.output_file,
            compressed=tuple(compressed),
        )

    def run_all(self, jobs: Iterable[AssetJob]) -> List[JobResult]:
        """Run jobs in order. The first failure propagates; later jobs don't run."""
        return [self.run_job(job) for job in jobs]


class Bundler:
    """One script job + one stylesheet job, with the three entry points."""

    def __init__(
        self,
        js: Optional[AssetJob] = None,
        css: Optional[AssetJob] = None,
        *,
        console: Optional[Console] = None,
        pipeline: Optional[AssetPipeline] = None,
    ):
        self.js = js if js is not None else AssetJob(kind=SCRIPT)
        self.css = css if css is not None else AssetJob(kind=STYLESHEET)
        self.pipeline = pipeline or AssetPipeline(console=console)

    def compress_all(self) -> List[JobResult]:
        return self.pipeline.run_all([self.js, self.css])

    def compress_js(self) -> JobResult:
        return self.pipeline.run_job(self.js)

    def compress_css(self) -> JobResult:
        return self.pipeline.run_job(self.css)


def run_job(job: AssetJob, console: Optional[Console] = None) -> JobResult:
    return AssetPipeline(console=console).run_job(job)


def run_all(jobs: Iterable[AssetJob], console: Optional[Console] = None) -> List[JobResult]:
    return AssetPipeline(console=console).run_all(jobs)
