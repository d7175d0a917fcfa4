from .config import js_job, css_job, asset_job, parse_excludes, load_jobs
from .model import AssetJob, JobResult, ScanResult
from .pipeline import AssetPipeline, Bundler, run_job, run_all
from .errors import AssetError, ScanError, TransformError, MergeError, CleanupError, ConfigError
from .startup import compress_on_startup

__all__ = [
    "js_job", "css_job", "asset_job", "parse_excludes", "load_jobs",
    "AssetJob", "JobResult", "ScanResult",
    "AssetPipeline", "Bundler", "run_job", "run_all",
    "AssetError", "ScanError", "TransformError", "MergeError", "CleanupError", "ConfigError",
    "compress_on_startup",
]
