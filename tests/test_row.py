"""Tests for Row, the grapheme-indexed line of text."""

from kestrel.row import Row


class TestRowIndexing:
    """Indices count grapheme clusters, not code points."""

    def test_length_counts_graphemes(self):
        """Combining sequences count as one character."""
        row = Row("e\u0301te")
        assert len(row) == 3
        assert row.nth_grapheme(0) == "e\u0301"

    def test_nth_grapheme_out_of_range(self):
        """Out of range lookups return an empty string."""
        row = Row("abc")
        assert row.nth_grapheme(3) == ""
        assert row.nth_grapheme(-1) == ""

    def test_find_returns_grapheme_index(self):
        """find() reports the grapheme index of the first occurrence."""
        row = Row("é foo foo")
        assert row.find("foo") == 2
        assert row.find("bar") is None
        assert row.contains("foo")


class TestRowEditing:
    def test_insert_in_the_middle(self):
        row = Row("hllo")
        row.insert(1, "e")
        assert row.text == "hello"

    def test_insert_past_end_appends(self):
        """Inserting past the end appends instead of raising."""
        row = Row("ab")
        row.insert(10, "c")
        assert row.text == "abc"

    def test_delete_out_of_range_is_noop(self):
        row = Row("ab")
        row.delete(5)
        row.delete(-1)
        assert row.text == "ab"

    def test_delete_removes_whole_grapheme(self):
        row = Row("ae\u0301b")
        row.delete(1)
        assert row.text == "ab"

    def test_split_returns_remainder(self):
        row = Row("hello world")
        rest = row.split(5)
        assert row.text == "hello"
        assert rest.text == " world"

    def test_append_and_trim(self):
        row = Row("foo  ")
        row.trim_end()
        row.append(Row("bar"))
        assert row.text == "foobar"


class TestRowQueries:
    def test_blank_and_empty(self):
        assert Row().is_empty()
        assert Row("   ").is_blank()
        assert not Row("   ").is_empty()
        assert not Row(" x ").is_blank()

    def test_num_words(self):
        assert Row("one two  three").num_words() == 3
        assert Row("").num_words() == 0

    def test_equality(self):
        assert Row("a") == Row("a")
        assert Row("a") != Row("b")


class TestRowRendering:
    def test_render_slice(self):
        """Only the visible slice is rendered."""
        assert Row("hello world").render(6, 11) == "world"

    def test_render_expands_tabs(self):
        """Tabs become four spaces."""
        assert Row("\tx").render(0, 10) == "    x"

    def test_render_with_line_number_prefix(self):
        """The zero-filled line number and a space precede the text."""
        assert Row("abc").render(0, 10, line_number=7, prefix_length=4) == "0007 abc"

    def test_render_past_end_is_empty(self):
        assert Row("abc").render(5, 10) == ""

    def test_display_column_of_wide_characters(self):
        """Wide characters take two terminal cells."""
        row = Row("中文x")
        assert row.display_column(0, 2) == 4

    def test_cell_width(self):
        row = Row("中文\tx")
        assert row.cell_width(0) == 2
        assert row.cell_width(2) == 4
        assert row.cell_width(3) == 1
        assert row.cell_width(9) == 1

    def test_fit_stops_before_a_grapheme_that_would_overflow(self):
        """Tabs count as four cells when fitting a slice."""
        assert Row("\t\tab").fit(0, 9) == 3
        assert Row("\t\tab").fit(0, 7) == 1
        assert Row("\t\tab").fit(1, 80) == 4
        assert Row("abc").fit(5, 10) == 5

    def test_display_column_with_tab(self):
        assert Row("\tab").display_column(0, 2) == 5
