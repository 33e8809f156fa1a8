"""Kestrel CLI entry point.

Allows running via `python -m kestrel` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Print parsed key and mouse events using the editor's input stack.

    Quit with ESC.
    """
    from .terminal import TerminalInterface
    from .keyboard import KeyEvent, KeyType

    print("Keyboard test mode: press keys or click to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()
    try:
        while True:
            ev = term.read_event()
            if ev is None:
                continue
            if not isinstance(ev, KeyEvent):
                print(f"mouse action={ev.action.value} button={ev.button} column={ev.column} row={ev.row}\r")
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.\r")
                break
            raw = _escape_bytes(ev.raw)
            parts = [f"type={ev.key_type.value}", f"value={_escape_bytes(ev.value)}", f"raw='{raw}'"]
            flags = []
            if ev.is_ctrl:
                flags.append('ctrl')
            if ev.is_sequence:
                flags.append('seq')
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts) + "\r")
    finally:
        term.cleanup()


def main() -> None:
    # Very small arg parsing to support keyboard test mode, version, and optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .config import ConfigStore
    from .diagnostics import configure_logging, debug_sink
    from .editor import Editor

    configure_logging()
    store = ConfigStore()
    editor = Editor(config=store.load(), config_store=store, debug_sink=debug_sink())
    if args:
        editor.load_file(args[0])
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
