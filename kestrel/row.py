"""A single line of text, indexed by grapheme cluster."""

from typing import Iterator, List, Optional

import grapheme
from wcwidth import wcswidth

from .constants import EditorConstants


class Row:
    """One line of a document.

    Every index taken or returned by a Row counts grapheme clusters (what
    the user sees as one character), not code points. Out of range indices
    never raise: inserts append and deletes do nothing.
    """

    def __init__(self, text: str = ""):
        self._text = ""
        self._graphemes: List[str] = []
        self.text = text

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value
        self._graphemes = list(grapheme.graphemes(value))

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Row({self._text!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, Row):
            return self._text == other._text
        return NotImplemented

    def __len__(self) -> int:
        return len(self._graphemes)

    def __iter__(self) -> Iterator[str]:
        return iter(self._graphemes)

    def as_bytes(self) -> bytes:
        return self._text.encode("utf-8")

    def is_empty(self) -> bool:
        return not self._graphemes

    def is_blank(self) -> bool:
        return not self._text.strip()

    def num_words(self) -> int:
        return len(self._text.split())

    def nth_grapheme(self, index: int) -> str:
        """Return the grapheme at ``index``, or an empty string."""
        if 0 <= index < len(self._graphemes):
            return self._graphemes[index]
        return ""

    def trim_end(self) -> None:
        """Remove trailing whitespace in place."""
        self.text = self._text.rstrip()

    def insert(self, index: int, char: str) -> None:
        """Insert ``char`` before the grapheme at ``index`` (appends past the end)."""
        index = max(index, 0)
        if index >= len(self._graphemes):
            self.text = self._text + char
        else:
            self.text = "".join(self._graphemes[:index]) + char + "".join(self._graphemes[index:])

    def delete(self, index: int) -> None:
        if 0 <= index < len(self._graphemes):
            del self._graphemes[index]
            self._text = "".join(self._graphemes)

    def append(self, other: "Row") -> None:
        self.text = self._text + other.text

    def split(self, index: int) -> "Row":
        """Truncate this row at ``index`` and return the remainder as a new row."""
        index = min(max(index, 0), len(self._graphemes))
        remainder = "".join(self._graphemes[index:])
        self.text = "".join(self._graphemes[:index])
        return Row(remainder)

    def contains(self, pattern: str) -> bool:
        return pattern in self._text

    def find(self, pattern: str) -> Optional[int]:
        """Grapheme index of the first literal occurrence of ``pattern``."""
        offset = self._text.find(pattern)
        if offset < 0:
            return None
        return grapheme.length(self._text[:offset])

    def _rendered_graphemes(self) -> List[str]:
        tab = " " * EditorConstants.SPACES_PER_TAB
        return [tab if g == "\t" else g for g in self._graphemes]

    def cell_width(self, index: int) -> int:
        """Cells taken by the grapheme at ``index``; at least 1, also past the end."""
        rendered = self._rendered_graphemes()
        if 0 <= index < len(rendered):
            return max(_cells(rendered[index]), 1)
        return 1

    def display_column(self, start: int, index: int) -> int:
        """Cells taken by the rendered graphemes in ``[start, index)``."""
        return _cells("".join(self._rendered_graphemes()[start:index]))

    def fit(self, start: int, cells: int) -> int:
        """End index of the longest slice from ``start`` that fits in ``cells``."""
        end = max(start, 0)
        used = 0
        for g in self._rendered_graphemes()[end:]:
            used += _cells(g)
            if used > cells:
                break
            end += 1
        return end

    def render(self, start: int, end: int, line_number: int = 0, prefix_length: int = 0) -> str:
        """Render the visible slice ``[start, end)`` of this row.

        Tabs are expanded to spaces first. When ``prefix_length`` is set the
        slice is preceded by the zero-filled line number and a space.
        """
        start = max(start, 0)
        end = max(end, start)
        visible = "".join(self._rendered_graphemes()[start:end])
        if prefix_length > 0:
            return f"{str(line_number).zfill(prefix_length)} {visible}"
        return visible


def _cells(text: str) -> int:
    width = wcswidth(text)
    if width < 0:
        # Control characters have no defined width
        return grapheme.length(text)
    return width
