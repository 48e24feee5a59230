"""Reference baselines the distributed pipeline is compared against.

Both split documents on whitespace and keep the first alphabetic run of each
token, so "don't" counts once as "don". The distributed tokenizer counts every
alphabetic run; the two agree only on text without such tokens.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Mapping

from .aggregator import ResultTable
from .jobs import inverted_index

LOG = logging.getLogger("mrindex.baselines")


def brute_force_index(documents: Mapping[str, str]) -> ResultTable:
    """Single pass over every token of every document."""
    output: ResultTable = {}
    for document, contents in documents.items():
        for token in contents.split():
            word = inverted_index.first_word(token)
            if word is None:
                continue
            files = output.setdefault(word, {})
            files[document] = files.get(document, 0) + 1
    LOG.info("Brute force indexed %d words", len(output))
    return output


def naive_map_reduce(documents: Mapping[str, str], job=inverted_index) -> ResultTable:
    """Sequential map, group, reduce over whole documents using a job module."""
    mapped = []
    for document, contents in documents.items():
        mapped.extend(job.map_function(document, contents))

    grouped: Dict[str, List[str]] = defaultdict(list)
    for word, document in mapped:
        grouped[word].append(document)

    output: ResultTable = {}
    for word, values in grouped.items():
        key, counts = job.reduce_function(word, values)
        output[key] = counts
    LOG.info("Naive MapReduce indexed %d words from %d pairs", len(output), len(mapped))
    return output
