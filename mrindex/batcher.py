import logging
from typing import List, NamedTuple, Tuple

from .errors import ConfigurationError
from .grouper import WordGroup

LOG = logging.getLogger("mrindex.batcher")


class ReduceBatch(NamedTuple):
    batch_id: int
    words: Tuple[str, ...]
    groups: WordGroup

    @property
    def key(self) -> str:
        return f"batch-{self.batch_id}"


def make_batches(groups: WordGroup, words_per_batch: int) -> List[ReduceBatch]:
    """Partition the words of ``groups`` into batches of ``words_per_batch``.

    Words are taken in the mapping's iteration order; the last batch may be
    smaller. Every word lands in exactly one batch.
    """
    if words_per_batch <= 0:
        raise ConfigurationError(f"words_per_batch must be positive, got {words_per_batch}")
    batches = []
    current = []
    for word in groups:
        current.append(word)
        if len(current) >= words_per_batch:
            batches.append(ReduceBatch(len(batches), tuple(current), groups))
            current = []
    if current:
        batches.append(ReduceBatch(len(batches), tuple(current), groups))
    LOG.info("Split %d words into %d batches (%d words per batch)",
             len(groups), len(batches), words_per_batch)
    return batches
