"""
Chunker: turns documents into bounded line chunks for the map stage.

Lines longer than ``max_line_length`` are split at the first whitespace at or
after that position; the tail is stripped and wrapped again by the same rule.
A line with no whitespace past the bound is kept whole, so words are never
broken.
"""
import re
import logging
from typing import Iterable, List, Mapping, NamedTuple, Tuple

LOG = logging.getLogger("mrindex.chunker")

_NEWLINE = re.compile(r"\r?\n")


class LineChunk(NamedTuple):
    chunk_id: int
    document: str
    lines: Tuple[str, ...]

    @property
    def key(self) -> str:
        return f"chunk-{self.chunk_id}"


def split_lines(content: str) -> List[str]:
    """Split on \\n or \\r\\n, dropping trailing empty lines."""
    lines = _NEWLINE.split(content)
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def _next_whitespace(line: str, start: int) -> int:
    pos = start
    while pos < len(line) and not line[pos].isspace():
        pos += 1
    return pos


def wrap_line(line: str, max_line_length: int) -> List[str]:
    wrapped = []
    while len(line) > max_line_length:
        pos = _next_whitespace(line, max_line_length)
        if pos >= len(line):
            break
        wrapped.append(line[:pos])
        line = line[pos:].strip()
    if line or not wrapped:
        wrapped.append(line)
    return wrapped


def wrap_lines(lines: Iterable[str], max_line_length: int) -> List[str]:
    result = []
    for line in lines:
        result.extend(wrap_line(line, max_line_length))
    return result


def chunk_documents(
    documents: Mapping[str, str],
    max_line_length: int,
    lines_per_chunk: int,
) -> List[LineChunk]:
    """Cut every document into chunks of at most ``lines_per_chunk`` wrapped lines.

    Chunk ids increase across the whole run in document iteration order and a
    chunk never holds lines from two documents.
    """
    chunks = []
    chunk_id = 0
    for document, content in documents.items():
        lines = wrap_lines(split_lines(content), max_line_length)
        for start in range(0, len(lines), lines_per_chunk):
            chunks.append(LineChunk(chunk_id, document, tuple(lines[start:start + lines_per_chunk])))
            chunk_id += 1
        LOG.debug("document %s: %d lines", document, len(lines))
    LOG.info("Chunked %d documents into %d chunks (%d lines per chunk)",
             len(documents), len(chunks), lines_per_chunk)
    return chunks
