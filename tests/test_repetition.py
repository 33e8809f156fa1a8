"""Tests for count prefixes on normal mode motions."""

from conftest import make_editor, press, type_text


def numbered(count):
    return [f"line {n}" for n in range(count)]


def test_count_moves_down_and_empties_buffer():
    """Typing 1, 2, j moves twelve lines down."""
    editor = make_editor(numbered(100))
    type_text(editor, "12j")
    assert editor.current_row_index() == 12
    assert editor.repetition_buffer == ""


def test_digits_accumulate():
    editor = make_editor(numbered(100))
    type_text(editor, "12")
    assert editor.repetition_buffer == "12"


def test_zero_extends_pending_count():
    editor = make_editor(numbered(100))
    type_text(editor, "10j")
    assert editor.current_row_index() == 10


def test_zero_without_count_goes_to_line_start():
    editor = make_editor(["abcdef"])
    type_text(editor, "$0")
    assert editor.current_x_position() == 0
    assert editor.repetition_buffer == ""


def test_count_on_horizontal_motion():
    editor = make_editor(["abcdefgh"])
    type_text(editor, "3l")
    assert editor.current_x_position() == 3
    type_text(editor, "2h")
    assert editor.current_x_position() == 1


def test_count_on_word_motion():
    editor = make_editor(["one two three four"])
    type_text(editor, "3w")
    assert editor.current_x_position() == 14


def test_count_on_paragraph_motion():
    editor = make_editor(["a", "", "b", "", "c"])
    type_text(editor, "2}")
    assert editor.current_row_index() == 3


def test_count_larger_than_document_stops_at_last_line():
    editor = make_editor(numbered(5))
    type_text(editor, "99j")
    assert editor.current_row_index() == 4


def test_percentage_of_document():
    """N% goes to that share of the document."""
    editor = make_editor(numbered(100))
    type_text(editor, "50%")
    assert editor.current_row_index() == 49


def test_percentage_is_capped_at_100():
    editor = make_editor(numbered(10))
    type_text(editor, "250%")
    assert editor.current_row_index() == 9


def test_unmapped_key_consumes_count():
    editor = make_editor(numbered(100))
    type_text(editor, "5z")
    assert editor.repetition_buffer == ""
    type_text(editor, "j")
    assert editor.current_row_index() == 1


def test_escape_clears_count(editor):
    type_text(editor, "7")
    press(editor, 'escape')
    assert editor.repetition_buffer == ""
