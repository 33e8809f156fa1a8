"""Kestrel - A modal terminal text editor."""

from .document import Document
from .row import Row
from .state import Mode, Position, ViewportOffset

__all__ = [
    'Document',
    'Mode',
    'Position',
    'Row',
    'ViewportOffset',
]
