"""Small value types shared by the editor components."""

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """Editing modes."""
    NORMAL = "NORMAL"
    INSERT = "INSERT"

    def __str__(self) -> str:
        return self.value


class Boundary(Enum):
    """Which end of a word, paragraph, line or document a motion targets."""
    START = "start"
    END = "end"


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Position:
    """An (x, y) pair.

    Cursor positions are relative to the viewport; search matches and
    symbol-matching results carry document coordinates instead.
    """
    x: int = 0
    y: int = 0

    @classmethod
    def top_left(cls) -> "Position":
        return cls(0, 0)


@dataclass
class ViewportOffset:
    """Scroll amount subtracted from document coordinates to get screen ones."""
    rows: int = 0
    columns: int = 0
