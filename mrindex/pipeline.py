"""
Distributed (in-process) MapReduce inverted index.

    chunk -> map (parallel) -> group -> batch -> reduce (parallel) -> aggregate

Each arrow is a full barrier: the next step starts only after every unit of
the previous one has finished, and a failed unit aborts the run.
"""
import time
import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from .aggregator import ResultTable
from .batcher import make_batches
from .chunker import chunk_documents
from .config import PipelineConfig
from .grouper import group_map_results
from .mapper import run_map_stage
from .reducer import run_reduce_stage

LOG = logging.getLogger("mrindex.pipeline")

DEFAULT_SWEEP_LINES = (1000, 2000, 5000, 10000)
DEFAULT_SWEEP_WORDS = (100, 200, 500, 1000)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


@dataclass
class RunStats:
    lines_per_chunk: int
    words_per_batch: int
    map_units: int = 0
    reduce_units: int = 0
    words: int = 0
    map_ms: float = 0.0
    group_ms: float = 0.0
    reduce_ms: float = 0.0
    total_ms: float = 0.0


@dataclass
class IndexRun:
    table: ResultTable
    stats: RunStats


def execute(documents: Mapping[str, str], config: PipelineConfig) -> IndexRun:
    """Build the inverted index of ``documents`` and time each phase.

    ``config`` must already be validated; run_distributed validates first.
    """
    stats = RunStats(config.lines_per_chunk, config.words_per_batch)
    started = time.perf_counter()

    phase = time.perf_counter()
    chunks = chunk_documents(documents, config.max_line_length, config.lines_per_chunk)
    mapped = run_map_stage(chunks, config.max_workers)
    stats.map_units = len(chunks)
    stats.map_ms = _elapsed_ms(phase)

    phase = time.perf_counter()
    groups = group_map_results(mapped)
    batches = make_batches(groups, config.words_per_batch)
    stats.reduce_units = len(batches)
    stats.group_ms = _elapsed_ms(phase)

    phase = time.perf_counter()
    table = run_reduce_stage(batches, config.max_workers)
    stats.reduce_ms = _elapsed_ms(phase)

    stats.words = len(table)
    stats.total_ms = _elapsed_ms(started)
    LOG.info("Indexed %d documents: %d words, %d map units, %d reduce units in %.1f ms",
             len(documents), stats.words, stats.map_units, stats.reduce_units, stats.total_ms)
    return IndexRun(table, stats)


def run_distributed(documents: Mapping[str, str], config: Optional[PipelineConfig] = None) -> IndexRun:
    return execute(documents, (config or PipelineConfig()).validate())


def build_index(documents: Mapping[str, str], config: Optional[PipelineConfig] = None) -> ResultTable:
    return run_distributed(documents, config).table


def sweep_configs(
    lines_per_chunk: Iterable[int] = DEFAULT_SWEEP_LINES,
    words_per_batch: Iterable[int] = DEFAULT_SWEEP_WORDS,
    base: Optional[PipelineConfig] = None,
) -> List[PipelineConfig]:
    """One validated config per (lines_per_chunk, words_per_batch) pair.

    Every pair is checked before any run starts.
    """
    base = base or PipelineConfig()
    words_per_batch = list(words_per_batch)
    return [
        base.with_overrides(lines_per_chunk=lines, words_per_batch=words).validate()
        for lines in lines_per_chunk
        for words in words_per_batch
    ]


def sweep(
    documents: Mapping[str, str],
    lines_per_chunk: Iterable[int] = DEFAULT_SWEEP_LINES,
    words_per_batch: Iterable[int] = DEFAULT_SWEEP_WORDS,
    base: Optional[PipelineConfig] = None,
) -> List[RunStats]:
    """Run the pipeline once per (lines_per_chunk, words_per_batch) pair."""
    return run_sweep(documents, sweep_configs(lines_per_chunk, words_per_batch, base))


def run_sweep(documents: Mapping[str, str], configs: Iterable[PipelineConfig]) -> List[RunStats]:
    """Run already validated configs in order."""
    stats = []
    for config in configs:
        LOG.info("--- %d lines per chunk, %d words per batch ---", config.lines_per_chunk, config.words_per_batch)
        stats.append(execute(documents, config).stats)
    return stats
