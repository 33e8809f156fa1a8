"""Tests for character motions and scrolling at the screen edges."""

from conftest import make_editor, press, type_text


def numbered(count):
    return [f"line {n}" for n in range(count)]


class TestVerticalMotion:
    def test_moving_past_bottom_edge_scrolls(self):
        editor = make_editor(numbered(20), height=5)
        type_text(editor, "10j")
        assert editor.cursor_position.y == 4
        assert editor.offset.rows == 6
        assert editor.current_row_index() == 10

    def test_moving_past_top_edge_scrolls_back(self):
        editor = make_editor(numbered(20), height=5)
        type_text(editor, "10j")
        type_text(editor, "6k")
        assert editor.cursor_position.y == 0
        assert editor.offset.rows == 4
        type_text(editor, "5k")
        assert editor.offset.rows == 0
        assert editor.current_row_index() == 0

    def test_down_stops_at_last_line(self):
        editor = make_editor(numbered(3))
        type_text(editor, "jjjj")
        assert editor.current_row_index() == 2

    def test_up_stops_at_first_line(self):
        editor = make_editor(numbered(3))
        type_text(editor, "k")
        assert editor.current_row_index() == 0
        assert editor.offset.rows == 0

    def test_arrow_keys_in_normal_mode(self):
        editor = make_editor(numbered(3))
        press(editor, 'down', 'down', 'up')
        assert editor.current_row_index() == 1

    def test_moving_to_shorter_line_clamps_column(self):
        editor = make_editor(["hello world", "hi"])
        type_text(editor, "$j")
        assert editor.current_x_position() == 1

    def test_moving_onto_empty_line(self):
        editor = make_editor(["hello", ""])
        type_text(editor, "$j")
        assert editor.current_x_position() == 0


class TestHorizontalMotion:
    def test_moving_past_right_edge_scrolls(self):
        editor = make_editor(["x" * 30], width=10)
        type_text(editor, "15l")
        assert editor.cursor_position.x == 9
        assert editor.offset.columns == 6
        assert editor.current_x_position() == 15

    def test_right_stops_on_last_character_in_normal_mode(self):
        editor = make_editor(["x" * 30], width=10)
        type_text(editor, "100l")
        assert editor.current_x_position() == 29

    def test_left_scrolls_back_symmetrically(self):
        editor = make_editor(["x" * 30], width=10)
        type_text(editor, "15l")
        type_text(editor, "12h")
        assert editor.cursor_position.x == 0
        assert editor.offset.columns == 3
        type_text(editor, "9h")
        assert editor.offset.columns == 0
        assert editor.current_x_position() == 0

    def test_dollar_on_long_line_scrolls_horizontally(self):
        editor = make_editor(["x" * 30], width=10)
        type_text(editor, "$")
        assert editor.offset.columns == 20
        assert editor.cursor_position.x == 9
        type_text(editor, "0")
        assert editor.offset.columns == 0


class TestLineJumps:
    def test_goto_line_recentres(self):
        editor = make_editor(numbered(100), height=10)
        editor.execute_command_line("50")
        assert editor.current_row_index() == 49
        assert editor.offset.rows == 44
        assert editor.cursor_position.y == 5

    def test_goto_line_near_end_pins_bottom(self):
        editor = make_editor(numbered(100), height=10)
        editor.execute_command_line("99")
        assert editor.offset.rows == 90
        assert editor.current_row_index() == 98

    def test_goto_line_beyond_document_goes_to_last_line(self):
        editor = make_editor(numbered(10))
        editor.execute_command_line("500")
        assert editor.current_row_index() == 9

    def test_goto_visible_line_keeps_view(self):
        editor = make_editor(numbered(100), height=10)
        editor.execute_command_line("50")
        editor.execute_command_line("47")
        assert editor.offset.rows == 44
        assert editor.cursor_position.y == 2
