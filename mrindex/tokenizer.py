import re
from typing import Iterator

# Maximal runs of ASCII letters; digits, punctuation and symbols separate words.
WORD_PATTERN = re.compile(r"[A-Za-z]+")


class WordSequence:
    """Lowercase words of a single line.

    Iterating is lazy and can be repeated; each pass rescans the line.
    """
    __slots__ = ("line",)

    def __init__(self, line: str):
        self.line = line or ""

    def __iter__(self) -> Iterator[str]:
        for match in WORD_PATTERN.finditer(self.line):
            yield match.group(0).lower()

    def __repr__(self):
        return f"WordSequence({self.line!r})"


def tokenize(line: str) -> WordSequence:
    return WordSequence(line)
