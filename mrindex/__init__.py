"""In-process MapReduce inverted index."""
from .config import PipelineConfig
from .errors import (
    ConfigurationError,
    DocumentLoadError,
    DuplicateWordError,
    IndexerError,
    StageFailedError,
)
from .pipeline import IndexRun, RunStats, build_index, run_distributed, sweep, sweep_configs

__all__ = [
    "PipelineConfig",
    "ConfigurationError",
    "DocumentLoadError",
    "DuplicateWordError",
    "IndexerError",
    "StageFailedError",
    "IndexRun",
    "RunStats",
    "build_index",
    "run_distributed",
    "sweep",
    "sweep_configs",
]
