import threading
from typing import Dict

from .errors import DuplicateWordError

ResultTable = Dict[str, Dict[str, int]]


class ResultAggregator:
    """Shared result table filled by disjoint-key merges.

    Batches partition the word set, so a merge never combines entries for the
    same word; a repeated word means the partition was broken and is an error.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._table: ResultTable = {}

    def merge(self, batch_id: int, partial: ResultTable) -> None:
        with self._lock:
            for word in partial:
                if word in self._table:
                    raise DuplicateWordError(word, batch_id)
            self._table.update(partial)

    def __len__(self):
        with self._lock:
            return len(self._table)

    def result(self) -> ResultTable:
        with self._lock:
            return {word: dict(counts) for word, counts in self._table.items()}
