import logging
from pathlib import Path
from typing import Dict, Iterable, Union

from .errors import DocumentLoadError

LOG = logging.getLogger("mrindex.loader")


def read_document(path: Union[str, Path], encoding: str = "utf-8") -> str:
    try:
        return Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(f"Failed to read {path}: {e}") from e


def load_documents(paths: Iterable[Union[str, Path]], encoding: str = "utf-8") -> Dict[str, str]:
    """Read every file into {path: contents}, keyed by the path as given."""
    documents = {}
    for path in paths:
        documents[str(path)] = read_document(path, encoding)
    LOG.info("Loaded %d files for processing", len(documents))
    return documents
