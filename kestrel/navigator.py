"""Position finding over documents and rows.

Everything here is a pure function of its arguments: nothing is mutated and
nothing is remembered between calls.
"""

from typing import Optional

from .document import Document
from .row import Row
from .state import Boundary, Position, ViewportOffset

OPENING_SYMBOLS = {
    '"': '"',
    "'": "'",
    "{": "}",
    "<": ">",
    "(": ")",
    "[": "]",
}
CLOSING_SYMBOLS = {
    "}": "{",
    ">": "<",
    ")": "(",
    "]": "[",
}

_WHITESPACE, _WORD, _PUNCTUATION = range(3)


def _char_class(g: str) -> int:
    if g.isspace():
        return _WHITESPACE
    if g.isalnum() or g == "_":
        return _WORD
    return _PUNCTUATION


def find_line_number_of_start_or_end_of_paragraph(
    document: Document, line_number: int, boundary: Boundary
) -> int:
    """Line number of the next (END) or previous (START) blank line.

    Falls back to the last or first line of the document when there is no
    blank line left in that direction.
    """
    if boundary is Boundary.END:
        for number in range(line_number + 1, document.last_line_number() + 1):
            if document.row_for_line_number(number).is_blank():
                return number
        return document.last_line_number()
    for number in range(line_number - 1, 0, -1):
        if document.row_for_line_number(number).is_blank():
            return number
    return 1


def find_index_of_next_or_previous_word(row: Row, x: int, boundary: Boundary) -> int:
    """Index of the start of the next (END) or previous (START) word in ``row``."""
    graphemes = list(row)
    length = len(graphemes)
    if length == 0:
        return 0
    x = min(max(x, 0), length - 1)

    if boundary is Boundary.END:
        pos = x
        current = _char_class(graphemes[pos])
        if current != _WHITESPACE:
            while pos < length and _char_class(graphemes[pos]) == current:
                pos += 1
        while pos < length and _char_class(graphemes[pos]) == _WHITESPACE:
            pos += 1
        return min(pos, length - 1)

    pos = x - 1
    while pos > 0 and _char_class(graphemes[pos]) == _WHITESPACE:
        pos -= 1
    if pos <= 0:
        return 0
    current = _char_class(graphemes[pos])
    while pos > 0 and _char_class(graphemes[pos - 1]) == current:
        pos -= 1
    return pos


def find_index_of_first_non_whitespace(row: Row) -> Optional[int]:
    for index, g in enumerate(row):
        if not g.isspace():
            return index
    return None


def find_matching_closing_symbol(
    document: Document, cursor: Position, offset: ViewportOffset
) -> Optional[Position]:
    """Document position of the symbol closing the one under the cursor.

    Nested pairs of the same kind are skipped. Returns None when the
    cursor is not on an opening symbol or the pair is unbalanced.
    """
    x = cursor.x + offset.columns
    y = cursor.y + offset.rows
    row = document.get_row(y)
    if row is None:
        return None
    opening = row.nth_grapheme(x)
    closing = OPENING_SYMBOLS.get(opening)
    if closing is None:
        return None

    depth = 1
    start = x + 1
    for row_index in range(y, document.num_rows()):
        graphemes = list(document.get_row(row_index))
        for index in range(start, len(graphemes)):
            g = graphemes[index]
            if g == closing:
                depth -= 1
                if depth == 0:
                    return Position(index, row_index)
            elif g == opening:
                depth += 1
        start = 0
    return None


def find_matching_opening_symbol(
    document: Document, cursor: Position, offset: ViewportOffset
) -> Optional[Position]:
    """Document position of the symbol opening the one under the cursor."""
    x = cursor.x + offset.columns
    y = cursor.y + offset.rows
    row = document.get_row(y)
    if row is None:
        return None
    closing = row.nth_grapheme(x)
    opening = CLOSING_SYMBOLS.get(closing)
    if opening is None:
        return None

    depth = 1
    end = x - 1
    for row_index in range(y, -1, -1):
        graphemes = list(document.get_row(row_index))
        if end is None:
            end = len(graphemes) - 1
        for index in range(end, -1, -1):
            g = graphemes[index]
            if g == opening:
                depth -= 1
                if depth == 0:
                    return Position(index, row_index)
            elif g == closing:
                depth += 1
        end = None
    return None
