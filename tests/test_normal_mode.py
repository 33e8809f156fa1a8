"""Tests for normal mode commands."""

from conftest import document_lines, make_editor, press, search, type_text
from kestrel.state import Mode


class TestEdits:
    def test_d_deletes_current_line(self):
        editor = make_editor(["one", "two", "three"])
        type_text(editor, "jd")
        assert document_lines(editor) == ["one", "three"]
        assert editor.current_row_index() == 1

    def test_d_on_last_line_moves_up(self):
        editor = make_editor(["one", "two"])
        type_text(editor, "jd")
        assert document_lines(editor) == ["one"]
        assert editor.current_row_index() == 0

    def test_d_on_only_line_leaves_empty_line(self):
        editor = make_editor(["only"])
        type_text(editor, "d")
        assert document_lines(editor) == [""]

    def test_x_deletes_character_under_cursor(self):
        editor = make_editor(["abc"])
        type_text(editor, "x")
        assert document_lines(editor) == ["bc"]

    def test_x_at_line_start_does_not_join_lines(self):
        editor = make_editor(["ab", "cd"])
        type_text(editor, "jx")
        assert document_lines(editor) == ["ab", "d"]

    def test_x_on_last_character_clamps_cursor(self):
        editor = make_editor(["abc"])
        type_text(editor, "$x")
        assert document_lines(editor) == ["ab"]
        assert editor.current_x_position() == 1

    def test_o_opens_line_below(self):
        editor = make_editor(["one", "two"])
        type_text(editor, "onew")
        assert document_lines(editor) == ["one", "new", "two"]
        assert editor.mode is Mode.INSERT

    def test_O_opens_line_above(self):
        editor = make_editor(["one", "two"])
        type_text(editor, "jOnew")
        assert document_lines(editor) == ["one", "new", "two"]

    def test_A_appends_at_end_of_line(self):
        editor = make_editor(["abc"])
        type_text(editor, "A!")
        assert document_lines(editor) == ["abc!"]

    def test_A_on_empty_line(self):
        editor = make_editor([""])
        type_text(editor, "Ax")
        assert document_lines(editor) == ["x"]

    def test_J_joins_with_next_line(self):
        editor = make_editor(["foo", "   bar", "baz"])
        type_text(editor, "J")
        assert document_lines(editor) == ["foo bar", "baz"]
        assert editor.current_x_position() == 3

    def test_J_on_last_line_does_nothing(self):
        editor = make_editor(["foo"])
        type_text(editor, "J")
        assert document_lines(editor) == ["foo"]


class TestJumps:
    def test_g_and_G(self):
        editor = make_editor([str(n) for n in range(50)])
        type_text(editor, "G")
        assert editor.current_row_index() == 49
        type_text(editor, "g")
        assert editor.current_row_index() == 0

    def test_line_start_end_and_first_non_blank(self):
        editor = make_editor(["   indented text"])
        type_text(editor, "$")
        assert editor.current_x_position() == 15
        type_text(editor, "0")
        assert editor.current_x_position() == 0
        type_text(editor, "^")
        assert editor.current_x_position() == 3

    def test_H_M_L(self):
        editor = make_editor([str(n) for n in range(100)], height=10)
        type_text(editor, "L")
        assert editor.current_row_index() == 9
        type_text(editor, "M")
        assert editor.current_row_index() == 4
        type_text(editor, "H")
        assert editor.current_row_index() == 0

    def test_M_on_short_document(self):
        editor = make_editor(["a", "b", "c", "d", "e"], height=20)
        type_text(editor, "M")
        assert editor.current_row_index() == 2

    def test_word_motions(self):
        editor = make_editor(["foo bar baz"])
        type_text(editor, "w")
        assert editor.current_x_position() == 4
        type_text(editor, "w")
        assert editor.current_x_position() == 8
        type_text(editor, "b")
        assert editor.current_x_position() == 4

    def test_paragraph_motions(self):
        editor = make_editor(["a", "b", "", "c", "", "d"])
        type_text(editor, "}")
        assert editor.current_row_index() == 2
        type_text(editor, "}")
        assert editor.current_row_index() == 4
        type_text(editor, "{")
        assert editor.current_row_index() == 2

    def test_matching_symbol(self):
        """'m' jumps between (a(b)c) pairs both ways."""
        editor = make_editor(["(a(b)c)"])
        type_text(editor, "m")
        assert editor.current_x_position() == 6
        type_text(editor, "m")
        assert editor.current_x_position() == 0

    def test_matching_symbol_across_lines(self):
        editor = make_editor(["if {", "  x", "}"])
        type_text(editor, "$m")
        assert (editor.current_row_index(), editor.current_x_position()) == (2, 0)

    def test_matching_symbol_off_symbol_does_nothing(self):
        editor = make_editor(["abc"])
        type_text(editor, "lm")
        assert editor.current_x_position() == 1


class TestMessagesAndScreens:
    def test_escape_clears_message_and_search(self):
        editor = make_editor(["foo", "foo"])
        search(editor, "foo")
        assert editor.message
        press(editor, 'escape')
        assert editor.message == ""
        assert len(editor.search_matches) == 0

    def test_q_dismisses_help(self, editor):
        editor.show_help()
        assert editor.help_visible
        type_text(editor, "q")
        assert not editor.help_visible
        assert editor.message == ""

    def test_unmapped_keys_are_ignored(self):
        editor = make_editor(["abc"])
        type_text(editor, "zZ")
        assert document_lines(editor) == ["abc"]
        assert editor.mode is Mode.NORMAL
