"""Shared fixtures: a fake terminal and key helpers."""

import pytest

from kestrel.editor import Editor
from kestrel.keyboard import KeyEvent, KeyType


class FakeTerminal:
    """Stands in for TerminalInterface with a fixed size.

    ``height`` is the number of text rows, as on the real terminal.
    """

    def __init__(self, width=80, height=20):
        self.width = width
        self.height = height
        self.cursor_styles = []
        self.frames = []
        self.help_frames = []

    def set_cursor_style(self, mode):
        self.cursor_styles.append(mode)

    def draw_frame(self, lines, status_left, status_right, message, message_is_error,
                   cursor_y, cursor_x, prompt_active=False):
        self.frames.append({
            "lines": lines,
            "status_left": status_left,
            "status_right": status_right,
            "message": message,
            "message_is_error": message_is_error,
            "cursor": (cursor_y, cursor_x),
            "prompt_active": prompt_active,
        })

    def draw_help(self, help_lines, status_left, status_right, message):
        self.help_frames.append({"lines": help_lines, "message": message})

    def clear_screen(self):
        pass


SPECIAL_KEYS = {'escape', 'enter', 'backspace', 'left', 'right', 'up', 'down'}


def key(value):
    """KeyEvent for a single character or a special key name."""
    if value in SPECIAL_KEYS:
        return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=value)
    return KeyEvent(key_type=KeyType.REGULAR, value=value, raw=value)


def type_text(editor, text):
    """Feed every character of ``text`` as a regular key."""
    for char in text:
        editor.handle_event(key(char))


def press(editor, *names):
    for name in names:
        editor.handle_event(key(name))


def run_command(editor, command):
    """Type ``:command`` and Enter."""
    type_text(editor, ":" + command)
    press(editor, 'enter')


def search(editor, pattern):
    type_text(editor, "/" + pattern)
    press(editor, 'enter')


def document_lines(editor):
    return [row.text for row in editor.document]


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def editor(terminal):
    return Editor(terminal=terminal)


def make_editor(lines, width=80, height=20, path=None):
    """Editor showing ``lines`` on a terminal of the given size."""
    from kestrel.document import Document

    editor = Editor(terminal=FakeTerminal(width, height))
    editor.set_document(Document.from_text("\n".join(lines) + "\n", path))
    return editor
