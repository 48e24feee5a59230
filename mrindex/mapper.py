import logging
from typing import Dict, List, NamedTuple, Optional, Sequence

from .chunker import LineChunk
from .executor import run_units
from .tokenizer import tokenize

LOG = logging.getLogger("mrindex.mapper")


class MappedItem(NamedTuple):
    word: str
    document: str


def map_chunk(chunk: LineChunk) -> List[MappedItem]:
    """Emit one (word, document) pair per word occurrence in the chunk."""
    document = chunk.document
    items = []
    for line in chunk.lines:
        for word in tokenize(line):
            items.append(MappedItem(word, document))
    return items


def run_map_stage(chunks: Sequence[LineChunk], max_workers: Optional[int] = None) -> Dict[str, List[MappedItem]]:
    """Map every chunk in parallel; results are keyed by ``chunk-<id>``."""
    results = run_units("map", map_chunk, chunks, key=lambda chunk: chunk.key, max_workers=max_workers)
    LOG.info("Map stage emitted %d items from %d chunks",
             sum(len(items) for items in results.values()), len(chunks))
    return results
