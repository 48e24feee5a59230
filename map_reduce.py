#!/usr/bin/env python3
import argparse
import logging
import sys
import time
from typing import List, Optional

from mrindex import IndexerError, PipelineConfig, run_distributed, sweep_configs
from mrindex.baselines import brute_force_index, naive_map_reduce
from mrindex.export import top_words, write_parquet
from mrindex.loader import load_documents
from mrindex.pipeline import DEFAULT_SWEEP_LINES, DEFAULT_SWEEP_WORDS, run_sweep

LOG = logging.getLogger("mrindex")


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Environment settings first, then any flag given on the command line.

    Validation happens once, where the config is run.
    """
    return PipelineConfig.from_env().with_overrides(
        max_line_length=args.max_line_length,
        lines_per_chunk=args.lines_per_chunk,
        words_per_batch=args.words_per_batch,
        max_workers=args.max_workers,
    )


def index(files: List[str], config: PipelineConfig, output: Optional[str] = None, top: int = 10):
    """Index the files with the distributed pipeline and print a summary."""
    documents = load_documents(files)
    print(f"Loaded {len(documents)} files for processing")
    run = run_distributed(documents, config)
    stats = run.stats
    print(f"Total words: {stats.words}")
    print(f"Map phase ({stats.map_units} threads): {stats.map_ms:.1f} ms")
    print(f"Group phase: {stats.group_ms:.1f} ms")
    print(f"Reduce phase ({stats.reduce_units} threads): {stats.reduce_ms:.1f} ms")
    print(f"Total execution: {stats.total_ms:.1f} ms")
    if top > 0 and run.table:
        print(f"\nTop {top} words:")
        print(top_words(run.table, top).to_string(index=False))
    if output:
        path = write_parquet(run.table, output)
        print(f"\nIndex written to {path}")
    return run.table


def compare(
    files: List[str],
    config: PipelineConfig,
    lines_per_chunk: Optional[int] = None,
    words_per_batch: Optional[int] = None,
):
    """Run the brute force and naive baselines, then the distributed sweep.

    A lines_per_chunk or words_per_batch given here replaces that axis of the
    default grid with the single value.
    """
    configs = sweep_configs(
        lines_per_chunk=[lines_per_chunk] if lines_per_chunk is not None else DEFAULT_SWEEP_LINES,
        words_per_batch=[words_per_batch] if words_per_batch is not None else DEFAULT_SWEEP_WORDS,
        base=config,
    )
    documents = load_documents(files)
    print(f"Loaded {len(documents)} files for processing")

    print("\n=== APPROACH #1: Brute Force ===")
    start = time.perf_counter()
    output = brute_force_index(documents)
    print(f"Total words: {len(output)}")
    print(f"Total execution: {(time.perf_counter() - start) * 1000:.1f} ms")

    print("\n=== APPROACH #2: MapReduce ===")
    start = time.perf_counter()
    output = naive_map_reduce(documents)
    print(f"Total words: {len(output)}")
    print(f"Total execution: {(time.perf_counter() - start) * 1000:.1f} ms")

    print("\n=== APPROACH #3: Distributed MapReduce ===")
    for stats in run_sweep(documents, configs):
        print(f"\n--- {stats.lines_per_chunk} lines per map thread, "
              f"{stats.words_per_batch} words per reduce thread ---")
        print(f"Total words: {stats.words}")
        print(f"Map phase ({stats.map_units} threads): {stats.map_ms:.1f} ms")
        print(f"Group phase: {stats.group_ms:.1f} ms")
        print(f"Reduce phase ({stats.reduce_units} threads): {stats.reduce_ms:.1f} ms")
        print(f"Total execution: {stats.total_ms:.1f} ms")


usage_msg = """
map_reduce.py – Build an inverted index of text files with an in-process MapReduce.

Commands:
  index <files>                   Index the files with the distributed pipeline.
         [--max-line-length N]    Wrap lines longer than N characters (default: 80).
         [--lines-per-chunk N]    Lines per map unit (default: 1000).
         [--words-per-batch N]    Words per reduce unit (default: 100).
         [--max-workers N]        Cap the thread pool (default: one thread per unit).
         [--output PATH]          Write the index to a parquet file.
         [--top N]                Print the N most frequent words (default: 10).
  compare <files>                 Time brute force, naive MapReduce and a sweep of
                                  distributed settings on the same files.
         [--lines-per-chunk N]    Sweep only this chunk size (default grid: 1000-10000).
         [--words-per-batch N]    Sweep only this batch size (default grid: 100-1000).
  help                            Show this help message.

Settings can also come from MRINDEX_MAX_LINE_LENGTH, MRINDEX_LINES_PER_CHUNK,
MRINDEX_WORDS_PER_BATCH and MRINDEX_MAX_WORKERS; flags win.

Examples:
  python3 map_reduce.py index data/*.txt --lines-per-chunk 2000 --output index.parquet
  python3 map_reduce.py compare data/file1.txt data/file2.txt
"""


def add_pipeline_args(p: argparse.ArgumentParser):
    p.add_argument("files", nargs="+", help="Text files to index")
    p.add_argument("--max-line-length", type=int, default=None, help="Line wrap bound (default: 80)")
    p.add_argument("--lines-per-chunk", type=int, default=None, help="Lines per map unit (default: 1000)")
    p.add_argument("--words-per-batch", type=int, default=None, help="Words per reduce unit (default: 100)")
    p.add_argument("--max-workers", type=int, default=None, help="Thread pool cap (default: one per unit)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging", default=False)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="map_reduce",
        description="Build an inverted index of text files.",
        usage=usage_msg,
        add_help=True
    )
    subparsers = parser.add_subparsers(dest="command")

    # Index
    p_index = subparsers.add_parser("index", help="Index files with the distributed pipeline.")
    add_pipeline_args(p_index)
    p_index.add_argument("--output", default=None, help="Parquet file to write the index to")
    p_index.add_argument("--top", type=int, default=10, help="Number of top words to print (default: 10)")

    # Compare
    p_compare = subparsers.add_parser("compare", help="Compare baselines with the distributed pipeline.")
    add_pipeline_args(p_compare)

    # Help fallback
    subparsers.add_parser("help", help="Show help")

    argv = sys.argv[1:] if argv is None else argv
    # No args -> show help
    if not argv:
        parser.print_help()
        sys.exit(0)

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    command = args.command

    if command == "help" or command is None:
        print(usage_msg)
        return 0

    setup_logging(args.verbose)
    try:
        config = build_config(args)
        if command == "index":
            index(args.files, config, output=args.output, top=args.top)
        elif command == "compare":
            compare(args.files, config,
                    lines_per_chunk=args.lines_per_chunk,
                    words_per_batch=args.words_per_batch)
    except IndexerError as e:
        LOG.error("%s failed: %s", command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
