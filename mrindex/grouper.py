import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from .mapper import MappedItem

LOG = logging.getLogger("mrindex.grouper")

WordGroup = Mapping[str, Tuple[str, ...]]


def group_items(mapped: Iterable[Iterable[MappedItem]]) -> WordGroup:
    """Merge map results into word -> documents, one entry per occurrence.

    ``mapped`` is consumed in order, so callers pass map results sorted by
    chunk id. Documents keep their first-seen order and duplicates are kept.
    The returned mapping is read-only so it can be shared by reduce units.
    """
    grouped: Dict[str, List[str]] = {}
    total = 0
    for items in mapped:
        for word, document in items:
            grouped.setdefault(word, []).append(document)
            total += 1
    LOG.info("Grouped %d items into %d words", total, len(grouped))
    return MappingProxyType({word: tuple(documents) for word, documents in grouped.items()})


def group_map_results(results: Mapping[str, List[MappedItem]]) -> WordGroup:
    """Group map stage output keyed by ``chunk-<id>``, in chunk id order."""
    ordered = sorted(results.items(), key=lambda kv: int(kv[0].rsplit("-", 1)[1]))
    return group_items(items for _, items in ordered)
