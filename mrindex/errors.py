from typing import Dict, Optional


class IndexerError(Exception):
    """Base class for every error raised by the indexer."""


class ConfigurationError(IndexerError, ValueError):
    """Raised before any stage starts when the pipeline settings are invalid."""


class DocumentLoadError(IndexerError):
    """An input file could not be read or decoded."""


class DuplicateWordError(IndexerError):
    """A word reached the aggregator from two reduce units."""

    def __init__(self, word: str, batch_id: int):
        super().__init__(f"word {word!r} merged twice (second time from batch {batch_id})")
        self.word = word
        self.batch_id = batch_id


class StageFailedError(IndexerError):
    """One or more units of a stage failed.

    Raised only after every unit of the stage has finished, so no unit is
    left running. ``failures`` maps unit id -> exception.
    """

    def __init__(self, stage: str, failures: Dict[str, BaseException], total: Optional[int] = None):
        self.stage = stage
        self.failures = dict(failures)
        self.total = total
        first_id = next(iter(self.failures), None)
        detail = f"{first_id}: {self.failures[first_id]}" if first_id is not None else "unknown"
        of_total = f"/{total}" if total is not None else ""
        super().__init__(
            f"{stage} stage failed ({len(self.failures)}{of_total} units); first failure {detail}"
        )
