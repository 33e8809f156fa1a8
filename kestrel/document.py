"""The in-memory text buffer: an ordered list of rows bound to a file."""

from __future__ import annotations

import hashlib
import logging
import os
from typing import Iterable, Iterator, List, Optional

from .autosave import atomic_write, delete_swap_file, read_swap_file, swap_file_exists, write_swap_file
from .row import Row

logger = logging.getLogger(__name__)


def split_lines(content: str) -> List[str]:
    """Split file content into lines.

    A trailing newline does not produce an extra empty line and carriage
    returns of CRLF line endings are dropped.
    """
    lines = content.split("\n")
    if lines and lines[-1] == "" and len(lines) > 1:
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Document:
    """An ordered sequence of rows plus the path they are saved to.

    A document always holds at least one row. Structural edits addressed
    outside of the document are silently ignored.
    """

    def __init__(self, rows: Optional[Iterable[Row]] = None, path: Optional[str] = None):
        self.rows: List[Row] = list(rows) if rows is not None else []
        if not self.rows:
            self.rows = [Row()]
        self.path = path
        # True when the content was recovered from a swap file
        self.recovered = False

    @classmethod
    def new_empty(cls, path: Optional[str] = None) -> "Document":
        return cls([Row()], path)

    @classmethod
    def from_text(cls, content: str, path: Optional[str] = None) -> "Document":
        return cls([Row(line) for line in split_lines(content)], path)

    @classmethod
    def open(cls, path: str) -> "Document":
        """Load ``path``, preferring its swap file when one exists.

        A path that does not name a regular file yields an empty document
        bound to it, whether or not a swap file is lying around.

        Raises:
            OSError: if the file exists but cannot be read.
            UnicodeDecodeError: if the file is not valid UTF-8.
        """
        if not os.path.isfile(path):
            return cls.new_empty(path)

        content = None
        recovered = False
        if swap_file_exists(path):
            content = read_swap_file(path)
            recovered = content is not None
        if content is None:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                content = f.read()

        document = cls.from_text(content, path)
        document.recovered = recovered
        if recovered:
            logger.info(f"Loaded {path} from its swap file")
        return document

    def __repr__(self) -> str:
        return f"Document(path={self.path!r}, rows={len(self.rows)})"

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def content(self) -> str:
        """Serialized form: every row terminated by a newline."""
        return "".join(row.text + "\n" for row in self.rows)

    # Persistence

    def save(self) -> None:
        """Write the document to its bound path and drop the swap file.

        Does nothing when the document has no path.

        Raises:
            OSError: if the file cannot be written.
        """
        if not self.path:
            return
        atomic_write(self.path, self.content())
        delete_swap_file(self.path)

    def save_as(self, name: str) -> None:
        """Write the document to ``name`` without changing the bound path."""
        atomic_write(name, self.content())

    def save_to_swap_file(self) -> bool:
        if not self.path:
            return False
        return write_swap_file(self.path, self.content())

    def trim_trailing_spaces(self) -> None:
        for row in self.rows:
            row.trim_end()

    # Queries

    def get_row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def row_for_line_number(self, line_number: int) -> Optional[Row]:
        """Row for a 1-based line number."""
        return self.get_row(max(line_number - 1, 0))

    def num_rows(self) -> int:
        return len(self.rows)

    def last_line_number(self) -> int:
        return len(self.rows)

    def num_words(self) -> int:
        return sum(row.num_words() for row in self.rows)

    def hashed(self) -> str:
        """Digest of the row contents, used for dirty tracking."""
        digest = hashlib.sha1()
        for row in self.rows:
            digest.update(row.as_bytes())
            digest.update(b"\n")
        return digest.hexdigest()

    # Structural edits

    def insert(self, char: str, x: int, y: int) -> None:
        if y >= len(self.rows):
            self.rows.append(Row(char))
        else:
            self.rows[y].insert(x, char)

    def delete(self, x: int, from_x: int, y: int) -> None:
        """Delete the grapheme at ``x`` on row ``y``.

        Deleting from the very start of a line (``x == from_x == 0``) joins
        that line onto the previous one instead, as backspace does.
        """
        if y < 0 or y >= len(self.rows):
            return
        if x == 0 and from_x == 0 and y > 0:
            current = self.rows.pop(y)
            self.rows[y - 1].append(current)
        else:
            self.rows[y].delete(x)

    def insert_newline(self, x: int, y: int) -> None:
        if y < 0 or y >= len(self.rows):
            return
        current = self.rows[y]
        if x < len(current) - 1:
            self.rows.insert(y + 1, current.split(x))
        else:
            self.rows.insert(y + 1, Row())

    def insert_empty_row(self, y: int) -> None:
        """Insert an empty row so that it ends up at index ``y``."""
        y = min(max(y, 0), len(self.rows))
        self.rows.insert(y, Row())

    def delete_row(self, y: int) -> None:
        if y < 0 or y >= len(self.rows):
            return
        if len(self.rows) == 1:
            self.rows[0].text = ""
        else:
            del self.rows[y]

    def join_row_with_previous_one(self, y: int, separator: Optional[str] = None) -> Optional[int]:
        """Merge row ``y`` into row ``y - 1``.

        With a ``separator`` the leading whitespace of the joined row is
        dropped and the separator goes between the two halves (unless one of
        them is empty).

        Returns:
            The column of the join point in the merged row, or None if
            nothing was joined.
        """
        if y <= 0 or y >= len(self.rows):
            return None
        current = self.rows.pop(y)
        previous = self.rows[y - 1]
        join_at = len(previous)
        if separator is not None:
            current = Row(current.text.lstrip())
            if not previous.is_empty() and not current.is_empty():
                previous.append(Row(separator))
        previous.append(current)
        return join_at
