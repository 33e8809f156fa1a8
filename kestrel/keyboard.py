"""Keyboard and mouse input handling using curtsies-style tokens."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .state import Position


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from the input layer
    is_ctrl: bool = False
    is_sequence: bool = False

    @property
    def is_printable(self) -> bool:
        return self.key_type == KeyType.REGULAR and self.value.isprintable()


class MouseAction(Enum):
    PRESS = "press"
    RELEASE = "release"


@dataclass
class MouseEvent:
    """A mouse button event at 1-based terminal coordinates."""
    action: MouseAction
    button: int
    column: int
    row: int

    def text_position(self, gutter_width: int) -> Position:
        """Convert to a 0-based position in the text area left of the gutter."""
        return Position(
            x=max(self.column - 1 - gutter_width, 0),
            y=max(self.row - 1, 0),
        )


InputEvent = Union[KeyEvent, MouseEvent]

LEFT_BUTTON = 0

# SGR extended mouse report: ESC [ < button ; column ; row (M|m)
_SGR_MOUSE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")
_MOUSE_PREFIX = "\x1b[<"

_SPECIALS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace', 'delete',
    'page_up', 'page_down', 'insert',
}


def parse_mouse_sequence(seq: str) -> Optional[MouseEvent]:
    """Parse a complete SGR mouse report, or return None."""
    match = _SGR_MOUSE.match(seq)
    if not match:
        return None
    button, column, row, final = match.groups()
    action = MouseAction.PRESS if final == "M" else MouseAction.RELEASE
    return MouseEvent(action=action, button=int(button), column=int(column), row=int(row))


class KeyboardHandler:
    """Turns terminal input tokens into key and mouse events."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface
        # Mouse reports may arrive split over several tokens
        self._pending_mouse = ""

    def get_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Get the next key or mouse event, or None if there was no input."""
        while True:
            key = self.terminal.get_key(timeout)
            if not key:
                return None
            event = self.feed(str(key))
            if event is not None:
                return event

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next key event, skipping mouse events."""
        while True:
            event = self.get_event(timeout)
            if event is None or isinstance(event, KeyEvent):
                return event

    def feed(self, key_str: str) -> Optional[InputEvent]:
        """Consume one token; return an event once one is complete."""
        if self._pending_mouse or key_str.startswith(_MOUSE_PREFIX):
            self._pending_mouse += key_str
            if self._pending_mouse[-1] not in "Mm":
                return None
            seq, self._pending_mouse = self._pending_mouse, ""
            mouse = parse_mouse_sequence(seq)
            if mouse is not None:
                return mouse
            # Not a mouse report after all
            return self.parse_key(seq)
        return self.parse_key(key_str)

    def parse_key(self, key) -> KeyEvent:
        """Parse a key token into a KeyEvent.

        Args:
            key: curtsies key name (e.g. '<UP>', '<Ctrl-j>') or raw string

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-') if '-' in name else [name]
            base = parts[-1]
            mods = set(parts[:-1])
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab' and not mods:
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            if base in ('esc', 'escape') and not mods:
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
            if 'ctrl' in mods and len(base) == 1:
                # Terminals send Ctrl-J/Ctrl-M for Enter and Ctrl-H for Backspace
                if base in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
                if base == 'h':
                    return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str, is_sequence=True)
                return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
            if base in _SPECIALS and not mods:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
            return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=key_str, is_sequence=True)

        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
        if key_str in ('\r', '\n'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
        if key_str in ('\x7f', '\x08'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
        if key_str == '\t':
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=key_str)

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1 and 1 <= ord(key_str) <= 26:
            ch = chr(ord('a') + ord(key_str) - 1)
            return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)
