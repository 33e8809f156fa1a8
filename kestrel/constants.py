"""Constants and configuration for the kestrel editor."""


class EditorConstants:
    """Central configuration constants for the editor."""

    # Command line prefixes
    COMMAND_PREFIX = ":"
    SEARCH_PREFIX = "/"

    # Editing
    SPACES_PER_TAB = 4
    SWAP_SAVE_EVERY = 100  # Write the swap file every N unsaved edits

    # Line number gutter: digits, followed by one separating space
    LINE_NUMBER_WIDTH = 4

    # Swap files (vim style: /path/.name.swp)
    AUTOSAVE_SWAP_PREFIX = "."
    AUTOSAVE_SWAP_SUFFIX = ".swp"
    ATOMIC_SAVE_SUFFIX = ".tmp"

    # Terminal rows reserved below the text area (status bar + message line)
    RESERVED_ROWS = 2

    # Seconds between screen size checks while waiting for input
    RESIZE_POLL_INTERVAL = 0.5

    # Cursor shapes (DECSCUSR)
    CURSOR_STEADY_BLOCK = "\x1b[2 q"
    CURSOR_STEADY_BAR = "\x1b[6 q"

    # xterm mouse reporting: button events + SGR extended coordinates
    MOUSE_ON = "\x1b[?1000h\x1b[?1006h"
    MOUSE_OFF = "\x1b[?1006l\x1b[?1000l"

    # Status bar colours (RGB)
    STATUS_FG_COLOR = (63, 63, 63)
    STATUS_BG_COLOR = (239, 239, 239)

    # Status messages
    NO_FILE_NAME_MESSAGE = "No file name"
    WRITE_ERROR_MESSAGE = "Error writing to file!"
    UNSAVED_CHANGES_MESSAGE = "Unsaved changes! Run :q! to override"
    SAVED_MESSAGE = "File successfully saved"
    RECOVERED_MESSAGE = "Recovered unsaved changes from {}"
    HELP_DISMISS_MESSAGE = "Press q to quit"


class Commands:
    """Vocabulary of the ``:`` command line."""

    FORCE_QUIT = "q!"
    QUIT = "q"
    LINE_NUMBERS = "ln"
    STATS = "stats"
    HELP = "help"
    SAVE = "w"
    SAVE_AND_QUIT = "wq"
    DEBUG = "debug"
    OPEN = "open"
    OPEN_SHORT = "o"
    NEW = "new"
