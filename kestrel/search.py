"""Literal search and the ring of matches it produces."""

from dataclasses import dataclass
from typing import List, Optional

from .document import Document
from .state import Position


@dataclass
class SearchMatch:
    """A match in document coordinates (``y`` is the 1-based line number).

    ``end`` points just past the last matched grapheme.
    """
    start: Position
    end: Position


def find_matches(document: Document, pattern: str) -> List[SearchMatch]:
    """First occurrence of ``pattern`` in every row, in document order."""
    matches = []
    if not pattern:
        return matches
    for row_index, row in enumerate(document):
        start = row.find(pattern)
        if start is None:
            continue
        line_number = row_index + 1
        matches.append(SearchMatch(
            start=Position(start, line_number),
            end=Position(start + len(pattern), line_number),
        ))
    return matches


class MatchRing:
    """Search matches with a current index that wraps around both ways."""

    def __init__(self):
        self.matches: List[SearchMatch] = []
        self.index = 0

    def __len__(self) -> int:
        return len(self.matches)

    def __bool__(self) -> bool:
        return bool(self.matches)

    def replace(self, matches: List[SearchMatch]) -> None:
        """Install fresh results; the next advance lands on the first one."""
        self.matches = list(matches)
        self.index = max(len(self.matches) - 1, 0)

    def clear(self) -> None:
        self.matches = []
        self.index = 0

    def advance(self) -> Optional[SearchMatch]:
        if not self.matches:
            return None
        self.index = (self.index + 1) % len(self.matches)
        return self.matches[self.index]

    def retreat(self) -> Optional[SearchMatch]:
        if not self.matches:
            return None
        self.index = (self.index - 1) % len(self.matches)
        return self.matches[self.index]

    def describe(self) -> str:
        return f"Match {self.index + 1}/{len(self.matches)}"
