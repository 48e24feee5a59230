import os
import logging
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import ConfigurationError

LOG = logging.getLogger("mrindex.config")

DEFAULT_MAX_LINE_LENGTH = 80
DEFAULT_LINES_PER_CHUNK = 1000
DEFAULT_WORDS_PER_BATCH = 100

# Recommended ranges; values outside them are accepted with a warning.
MIN_LINES_PER_CHUNK = 1000
MAX_LINES_PER_CHUNK = 10000
MIN_WORDS_PER_BATCH = 100
MAX_WORDS_PER_BATCH = 1000

ENV_PREFIX = "MRINDEX_"


@dataclass(frozen=True)
class PipelineConfig:
    """Settings for one distributed indexing run.

    max_workers=None runs one thread per chunk (map) or per batch (reduce).
    Any positive value caps the pool instead.
    """
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    lines_per_chunk: int = DEFAULT_LINES_PER_CHUNK
    words_per_batch: int = DEFAULT_WORDS_PER_BATCH
    max_workers: Optional[int] = None

    def validate(self) -> "PipelineConfig":
        for name in ("max_line_length", "lines_per_chunk", "words_per_batch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if self.max_workers is not None:
            if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int) or self.max_workers <= 0:
                raise ConfigurationError(f"max_workers must be a positive integer or None, got {self.max_workers!r}")

        if not MIN_LINES_PER_CHUNK <= self.lines_per_chunk <= MAX_LINES_PER_CHUNK:
            LOG.warning("lines_per_chunk=%d is outside the recommended range %d-%d",
                        self.lines_per_chunk, MIN_LINES_PER_CHUNK, MAX_LINES_PER_CHUNK)
        if not MIN_WORDS_PER_BATCH <= self.words_per_batch <= MAX_WORDS_PER_BATCH:
            LOG.warning("words_per_batch=%d is outside the recommended range %d-%d",
                        self.words_per_batch, MIN_WORDS_PER_BATCH, MAX_WORDS_PER_BATCH)
        return self

    def with_overrides(self, **overrides) -> "PipelineConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PipelineConfig":
        """Build a config from MRINDEX_* environment variables, falling back to defaults."""
        if environ is None:
            environ = os.environ
        values = {}
        for name in ("max_line_length", "lines_per_chunk", "words_per_batch", "max_workers"):
            key = ENV_PREFIX + name.upper()
            raw = environ.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[name] = int(raw)
            except ValueError:
                raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None
        return cls(**values)
