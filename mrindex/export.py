"""Tabular views of a result table.

The index is flattened to one row per (word, document) with its count, the
same key/value column layout workers use for their partitions.
"""
import logging
from pathlib import Path
from typing import Union

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from .aggregator import ResultTable

LOG = logging.getLogger("mrindex.export")

SCHEMA = pa.schema([
    ("word", pa.string()),
    ("document", pa.string()),
    ("count", pa.int64()),
])


def to_arrow(table: ResultTable) -> pa.Table:
    columns = {"word": [], "document": [], "count": []}
    for word in sorted(table):
        for document, count in sorted(table[word].items()):
            columns["word"].append(word)
            columns["document"].append(document)
            columns["count"].append(count)
    return pa.table(columns, schema=SCHEMA)


def to_frame(table: ResultTable) -> pd.DataFrame:
    """Long-format DataFrame with columns word, document, count."""
    return to_arrow(table).to_pandas()


def from_frame(df: pd.DataFrame) -> ResultTable:
    table: ResultTable = {}
    if df.empty:
        return table
    for (word, document), count in df.groupby(["word", "document"], sort=False)["count"].sum().items():
        table.setdefault(word, {})[document] = int(count)
    return table


def write_parquet(table: ResultTable, path: Union[str, Path]) -> Path:
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    arrow_table = to_arrow(table)
    pq.write_table(arrow_table, str(path))
    LOG.info("Wrote %d rows (%d words) to %s", arrow_table.num_rows, len(table), path)
    return path


def read_parquet(path: Union[str, Path]) -> ResultTable:
    return from_frame(pq.read_table(str(path)).to_pandas())


def top_words(table: ResultTable, n: int = 10) -> pd.DataFrame:
    """The n most frequent words with their total count and document count."""
    df = to_frame(table)
    if df.empty:
        return pd.DataFrame(columns=["word", "total", "documents"])
    summary = (
        df.groupby("word")
        .agg(total=("count", "sum"), documents=("document", "nunique"))
        .reset_index()
        .sort_values(["total", "word"], ascending=[False, True])
    )
    return summary.head(n).reset_index(drop=True)
