"""Terminal interface using Blessed for display and Curtsies for input."""

import sys
from typing import List, Optional

import blessed

from .constants import EditorConstants
from .keyboard import InputEvent, KeyboardHandler
from .state import Mode


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self.keyboard = KeyboardHandler(self)

    def setup(self):
        """Enter fullscreen mode, enable mouse reporting and raw input."""
        self._write(self.term.enter_fullscreen + self.term.clear + EditorConstants.MOUSE_ON)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            self._write(
                EditorConstants.MOUSE_OFF
                + EditorConstants.CURSOR_STEADY_BLOCK
                + self.term.normal_cursor
                + self.term.exit_fullscreen
            )
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None

    def _write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def clear_screen(self):
        """Clear the entire screen."""
        self._write(self.term.home + self.term.clear)

    def set_cursor_style(self, mode: Mode) -> None:
        """Steady bar while inserting, steady block otherwise."""
        if mode is Mode.INSERT:
            self._write(EditorConstants.CURSOR_STEADY_BAR)
        else:
            self._write(EditorConstants.CURSOR_STEADY_BLOCK)

    def _status_bar(self, left: str, right: str) -> str:
        width = self.term.width
        spaces = " " * max(width - len(left) - len(right), 0)
        text = (left + spaces + right)[:width]
        fg = self.term.color_rgb(*EditorConstants.STATUS_FG_COLOR)
        bg = self.term.on_color_rgb(*EditorConstants.STATUS_BG_COLOR)
        return fg + bg + text + self.term.normal

    def draw_frame(
        self,
        lines: List[str],
        status_left: str,
        status_right: str,
        message: str,
        message_is_error: bool,
        cursor_y: int,
        cursor_x: int,
        prompt_active: bool = False,
    ) -> None:
        """Draw the text area, the status bar and the message line.

        Args:
            lines: Rendered screen rows, one per text-area row
            status_left: Left-aligned part of the status bar
            status_right: Right-aligned part of the status bar
            message: Message line contents (or the command line)
            message_is_error: Draw the message in red
            cursor_y: Cursor row in the text area
            cursor_x: Cursor column, gutter included
            prompt_active: Put the cursor on the message line instead
        """
        out = [self.term.hide_cursor, self.term.home]
        for y, line in enumerate(lines):
            out.append(self.term.move(y, 0) + line[:self.term.width] + self.term.clear_eol)

        status_y = len(lines)
        out.append(self.term.move(status_y, 0) + self._status_bar(status_left, status_right))

        text = message[:self.term.width]
        if message_is_error:
            text = self.term.red(text)
        out.append(self.term.move(status_y + 1, 0) + text + self.term.clear_eol)

        if prompt_active:
            out.append(self.term.move(status_y + 1, min(len(message), self.term.width - 1)))
        else:
            out.append(self.term.move(cursor_y, cursor_x))
        out.append(self.term.normal_cursor)
        self._write(''.join(out))

    def draw_help(self, help_lines: List[str], status_left: str, status_right: str, message: str) -> None:
        """Draw the help screen centred in the text area."""
        out = [self.term.hide_cursor, self.term.home + self.term.clear]
        height = self.height
        top = max((height - len(help_lines)) // 2, 0)
        max_line_length = max((len(line) for line in help_lines), default=0)
        left = max((self.term.width - max_line_length) // 2, 0)
        for i, line in enumerate(help_lines[:height]):
            out.append(self.term.move(top + i, left) + line)
        out.append(self.term.move(height, 0) + self._status_bar(status_left, status_right))
        out.append(self.term.move(height + 1, 0) + message[:self.term.width])
        out.append(self.term.move(0, 0) + self.term.normal_cursor)
        self._write(''.join(out))

    def get_key(self, timeout=None):
        """Get a single key token from curtsies.

        Args:
            timeout: Timeout in seconds (None blocks until a key arrives)

        Returns:
            The key token as a string, or None if nothing was read.
        """
        if self._curtsies_input is None:
            return None
        evt = self._curtsies_input.send(timeout)
        return None if evt is None else str(evt)

    def read_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Next key or mouse event, or None once ``timeout`` expires."""
        return self.keyboard.get_event(timeout=timeout)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Rows available for text (excluding status and message lines)."""
        return max(self.term.height - EditorConstants.RESERVED_ROWS, 1)
