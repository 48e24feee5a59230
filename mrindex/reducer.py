import logging
from collections import Counter
from typing import Dict, Optional, Sequence

from .aggregator import ResultAggregator, ResultTable
from .batcher import ReduceBatch
from .executor import run_units

LOG = logging.getLogger("mrindex.reducer")


def count_documents(documents) -> Dict[str, int]:
    return dict(Counter(documents))


def reduce_batch(batch: ReduceBatch) -> ResultTable:
    """Count occurrences per document for every word of the batch."""
    groups = batch.groups
    return {word: count_documents(groups[word]) for word in batch.words}


def run_reduce_stage(batches: Sequence[ReduceBatch], max_workers: Optional[int] = None) -> ResultTable:
    """Reduce every batch in parallel, then merge the partial tables in batch order after the join."""
    partials = run_units("reduce", reduce_batch, batches, key=lambda batch: batch.key, max_workers=max_workers)
    aggregator = ResultAggregator()
    for batch in batches:
        aggregator.merge(batch.batch_id, partials[batch.key])
    LOG.info("Reduce stage produced %d words from %d batches", len(aggregator), len(batches))
    return aggregator.result()
