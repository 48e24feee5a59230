"""
Inverted Index MapReduce Job (counting variant)

Interface:
    map_function(input_key, input_value) -> list[(word, doc_id)]
    reduce_function(word, [doc_ids]) -> (word, {doc_id: count})

The job builds word -> {document: occurrences}. It backs the naive
(unchunked, sequential) baseline.
"""
import re
from typing import Dict, List, Tuple

WORD_PATTERN = re.compile(r"\b([a-zA-Z]+)\b")


def first_word(token: str):
    """Return the first alphabetic word of a whitespace token, lowercased, or None."""
    match = WORD_PATTERN.search(token)
    return match.group(1).lower() if match else None


def map_function(input_key: str, input_value: str) -> List[Tuple[str, str]]:
    """
    Map phase: emit (word, document_id) for every whitespace token that
    contains a word.

    Args:
        input_key: Document identifier (usually the file path).
        input_value: The full text content of the document.

    Returns:
        List of (word, doc_id) tuples, one per occurrence.
    """
    pairs = []
    for token in input_value.split():
        word = first_word(token)
        if word is not None:
            pairs.append((word, input_key))
    return pairs


def reduce_function(key: str, values: List[str]) -> Tuple[str, Dict[str, int]]:
    """
    Reduce phase: count how many times each document appears.

    Args:
        key: The word.
        values: List of document IDs, one per occurrence.

    Returns:
        (word, {doc_id: count})
    """
    counts: Dict[str, int] = {}
    for doc_id in values:
        counts[doc_id] = counts.get(doc_id, 0) + 1
    return key, counts
