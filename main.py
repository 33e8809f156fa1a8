#!/usr/bin/env python3
"""Kestrel - A modal terminal text editor.

Usage:
    python main.py [filename]

Controls:
    i: Insert mode, Esc: back to normal mode
    h j k l / arrow keys: Move the cursor
    :w  Save, :q  Quit, :q!  Quit without saving
    :help  Show all commands
"""

from kestrel.__main__ import main


if __name__ == "__main__":
    main()
