"""Tests for the pure position-finding functions."""

from kestrel.document import Document
from kestrel.navigator import (
    find_index_of_first_non_whitespace,
    find_index_of_next_or_previous_word,
    find_line_number_of_start_or_end_of_paragraph,
    find_matching_closing_symbol,
    find_matching_opening_symbol,
)
from kestrel.row import Row
from kestrel.state import Boundary, Position, ViewportOffset


class TestParagraphs:
    document = Document.from_text("a\nb\n\nc\nd\n\ne\n")

    def test_next_blank_line(self):
        assert find_line_number_of_start_or_end_of_paragraph(self.document, 1, Boundary.END) == 3
        assert find_line_number_of_start_or_end_of_paragraph(self.document, 3, Boundary.END) == 6

    def test_no_blank_line_below_goes_to_last_line(self):
        assert find_line_number_of_start_or_end_of_paragraph(self.document, 6, Boundary.END) == 7

    def test_previous_blank_line(self):
        assert find_line_number_of_start_or_end_of_paragraph(self.document, 7, Boundary.START) == 6
        assert find_line_number_of_start_or_end_of_paragraph(self.document, 5, Boundary.START) == 3

    def test_no_blank_line_above_goes_to_first_line(self):
        assert find_line_number_of_start_or_end_of_paragraph(self.document, 2, Boundary.START) == 1


class TestWords:
    row = Row("foo bar, baz")

    def test_next_word(self):
        assert find_index_of_next_or_previous_word(self.row, 0, Boundary.END) == 4
        assert find_index_of_next_or_previous_word(self.row, 4, Boundary.END) == 7

    def test_next_word_at_end_of_row_stays_on_last_grapheme(self):
        assert find_index_of_next_or_previous_word(self.row, 10, Boundary.END) == 11

    def test_previous_word(self):
        assert find_index_of_next_or_previous_word(self.row, 9, Boundary.START) == 7
        assert find_index_of_next_or_previous_word(self.row, 4, Boundary.START) == 0

    def test_empty_row(self):
        assert find_index_of_next_or_previous_word(Row(), 0, Boundary.END) == 0


def test_first_non_whitespace():
    assert find_index_of_first_non_whitespace(Row("   x")) == 3
    assert find_index_of_first_non_whitespace(Row("    ")) is None


class TestMatchingSymbols:
    """Bracket matching on (a(b)c) in both directions."""

    document = Document.from_text("(a(b)c)\n")

    def test_outer_opening_finds_outer_closing(self):
        position = find_matching_closing_symbol(self.document, Position(0, 0), ViewportOffset())
        assert position == Position(6, 0)

    def test_outer_closing_finds_outer_opening(self):
        position = find_matching_opening_symbol(self.document, Position(6, 0), ViewportOffset())
        assert position == Position(0, 0)

    def test_inner_pair(self):
        assert find_matching_closing_symbol(self.document, Position(2, 0), ViewportOffset()) == Position(4, 0)
        assert find_matching_opening_symbol(self.document, Position(4, 0), ViewportOffset()) == Position(2, 0)

    def test_across_lines(self):
        document = Document.from_text("f {\n  x\n}\n")
        assert find_matching_closing_symbol(document, Position(2, 0), ViewportOffset()) == Position(0, 2)
        assert find_matching_opening_symbol(document, Position(0, 2), ViewportOffset()) == Position(2, 0)

    def test_viewport_offset_is_added(self):
        document = Document.from_text("x\n(a)\n")
        position = find_matching_closing_symbol(document, Position(0, 0), ViewportOffset(rows=1))
        assert position == Position(2, 1)

    def test_unbalanced_returns_none(self):
        document = Document.from_text("(a\n")
        assert find_matching_closing_symbol(document, Position(0, 0), ViewportOffset()) is None

    def test_not_on_a_symbol(self):
        assert find_matching_closing_symbol(self.document, Position(1, 0), ViewportOffset()) is None
