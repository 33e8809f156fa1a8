"""Main editor controller: modes, cursor, viewport and the command line."""

import json
import logging
import os
from dataclasses import asdict
from typing import Callable, List, Optional, Tuple

from . import autosave
from .command_line import (
    GotoLine, MissingArgument, NewFile, NoOp, OpenFile, Overlay, PromptKind, SaveFile,
    SimpleCommand, UnknownCommand, parse_command_line,
)
from .commands import CommandRegistry
from .config import Config, ConfigStore
from .constants import Commands, EditorConstants
from .document import Document
from .help import help_lines
from .keyboard import LEFT_BUTTON, InputEvent, KeyEvent, KeyType, MouseAction, MouseEvent
from .navigator import (
    CLOSING_SYMBOLS, OPENING_SYMBOLS, find_index_of_first_non_whitespace,
    find_index_of_next_or_previous_word, find_line_number_of_start_or_end_of_paragraph,
    find_matching_closing_symbol, find_matching_opening_symbol,
)
from .row import Row
from .search import MatchRing, find_matches
from .state import Boundary, Direction, Mode, Position, ViewportOffset
from .terminal import TerminalInterface
from .version import get_version_string
from .viewport import scroll_to_column, scroll_to_line

logger = logging.getLogger(__name__)


class Editor:
    """Modal text editor application controller."""

    def __init__(
        self,
        terminal: Optional[TerminalInterface] = None,
        config: Optional[Config] = None,
        config_store: Optional[ConfigStore] = None,
        debug_sink: Optional[Callable[[str], None]] = None,
    ):
        """Initialize the editor components.

        Args:
            terminal: Anything with ``width``, ``height`` and the drawing
                methods of TerminalInterface
            config: Display options (defaults when omitted)
            config_store: Where toggled options are persisted, if anywhere
            debug_sink: Receives ``:debug`` state dumps
        """
        self.terminal = terminal if terminal is not None else TerminalInterface()
        self.config = config if config is not None else Config()
        self.config_store = config_store
        self.debug_sink = debug_sink
        self.command_registry = CommandRegistry()

        self.document = Document()
        self.cursor_position = Position.top_left()
        self.offset = ViewportOffset()
        self.mode = Mode.NORMAL
        self.overlay: Optional[Overlay] = None
        self.repetition_buffer = ""
        self.mouse_event_buffer: List[Position] = []
        self.search_matches = MatchRing()

        self.message = ""
        self.message_is_error = False
        self.help_visible = False
        self.should_quit = False
        self.running = False

        self.unsaved_edits = 0
        self.last_saved_hash = self.document.hashed()
        self.row_prefix_length = EditorConstants.LINE_NUMBER_WIDTH if self.config.display_line_numbers else 0

        self._simple_commands = {
            Commands.FORCE_QUIT: lambda: self.quit(force=True),
            Commands.QUIT: lambda: self.quit(force=False),
            Commands.LINE_NUMBERS: self.toggle_line_numbers,
            Commands.STATS: self.toggle_stats,
            Commands.HELP: self.show_help,
            Commands.SAVE_AND_QUIT: self.save_and_quit,
            Commands.DEBUG: self.log_debug_information,
        }

    # Geometry

    @property
    def screen_height(self) -> int:
        return max(self.terminal.height, 1)

    @property
    def gutter_width(self) -> int:
        """Columns taken by the line number prefix and its separator."""
        return self.row_prefix_length + 1 if self.row_prefix_length else 0

    @property
    def text_width(self) -> int:
        return max(self.terminal.width - self.gutter_width, 1)

    # Documents

    def load_file(self, path: str):
        """Open ``path`` at startup.

        Unreadable files leave an empty unnamed document and an error
        message; nothing is raised.
        """
        path = os.path.expanduser(path)
        try:
            document = Document.open(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not open {path}: {e}")
            self.set_document(Document())
            self.display_error(f"Could not open {path}")
            return
        self.set_document(document)

    def set_document(self, document: Document):
        """Make ``document`` current and put the view back at the top."""
        self.document = document
        self.cursor_position = Position.top_left()
        self.offset = ViewportOffset()
        self.search_matches.clear()
        self.mouse_event_buffer = []
        self.repetition_buffer = ""
        self.unsaved_edits = 0
        self.last_saved_hash = document.hashed()
        self.reset_message()
        if document.recovered:
            self.display_message(EditorConstants.RECOVERED_MESSAGE.format(document.path))

    def is_dirty(self) -> bool:
        """True when the content differs from the last save."""
        return self.document.hashed() != self.last_saved_hash

    def record_edit(self):
        """Count an edit and flush to the swap file every so often."""
        self.unsaved_edits += 1
        if self.unsaved_edits >= EditorConstants.SWAP_SAVE_EVERY:
            self.save_to_swap_file()

    def save_to_swap_file(self):
        if self.document.save_to_swap_file():
            self.unsaved_edits = 0

    def save(self, new_name: str = "") -> bool:
        """Save to the bound path, or to ``new_name`` and rebind to it.

        Trailing whitespace is trimmed first. Failures are reported on the
        message line.

        Returns:
            True if the document was written
        """
        self.document.trim_trailing_spaces()
        self._clamp_cursor_to_row()

        if not new_name:
            if not self.document.path:
                self.display_error(EditorConstants.NO_FILE_NAME_MESSAGE)
                return False
            try:
                self.document.save()
            except OSError as e:
                logger.warning(f"Could not save {self.document.path}: {e}")
                self.display_error(EditorConstants.WRITE_ERROR_MESSAGE)
                return False
            self.display_message(EditorConstants.SAVED_MESSAGE)
        else:
            new_name = os.path.expanduser(new_name)
            initial_name = self.document.path
            try:
                self.document.save_as(new_name)
            except OSError as e:
                logger.warning(f"Could not save {new_name}: {e}")
                self.display_error(EditorConstants.WRITE_ERROR_MESSAGE)
                return False
            # A stale swap file would shadow the fresh save on the next open
            autosave.delete_swap_file(new_name)
            if initial_name:
                self.display_message(f"{initial_name} successfully renamed to {new_name}")
            else:
                self.display_message(f"Buffer saved to {new_name}")
            self.document.path = new_name

        self.unsaved_edits = 0
        self.last_saved_hash = self.document.hashed()
        return True

    def quit(self, force: bool = False):
        if self.is_dirty() and not force:
            self.display_error(EditorConstants.UNSAVED_CHANGES_MESSAGE)
            return
        self.should_quit = True

    def save_and_quit(self):
        self.save()
        self.quit(force=False)

    # Messages

    def display_message(self, message: str):
        self.message = message
        self.message_is_error = False

    def display_error(self, message: str):
        self.message = message
        self.message_is_error = True

    def reset_message(self):
        self.message = ""
        self.message_is_error = False

    # Modes and screens

    def enter_insert_mode(self):
        self.mode = Mode.INSERT
        self.terminal.set_cursor_style(self.mode)

    def enter_normal_mode(self):
        self.mode = Mode.NORMAL
        self.terminal.set_cursor_style(self.mode)
        self._clamp_cursor_to_row()

    def show_help(self):
        self.help_visible = True
        self.display_message(EditorConstants.HELP_DISMISS_MESSAGE)

    def revert_to_main_screen(self):
        self.help_visible = False
        self.reset_message()

    def toggle_line_numbers(self):
        enabled = self.config.toggle("display_line_numbers")
        self.row_prefix_length = EditorConstants.LINE_NUMBER_WIDTH if enabled else 0
        # The text area width changed; keep the cursor column visible
        self.move_cursor_to_position_x(self.current_x_position())
        self._persist_config()

    def toggle_stats(self):
        self.config.toggle("display_stats")
        self._persist_config()

    def _persist_config(self):
        if self.config_store is not None:
            self.config_store.save(self.config)

    # Event dispatch

    def handle_event(self, event: InputEvent):
        """Route a key or mouse event to the right handler."""
        if isinstance(event, MouseEvent):
            self.process_mouse_event(event)
        elif self.overlay is not None:
            self.process_overlay_key(event)
        else:
            self.command_registry.execute(self, event)

    def process_overlay_key(self, key_event: KeyEvent):
        """Edit or submit the command line."""
        if key_event.key_type == KeyType.SPECIAL:
            if key_event.value == 'escape':
                self.stop_receiving_command()
            elif key_event.value == 'enter':
                overlay = self.overlay
                self.stop_receiving_command()
                self.process_received_command(overlay)
            elif key_event.value == 'backspace':
                if not self.overlay.pop():
                    self.stop_receiving_command()
        elif key_event.is_printable:
            self.overlay.push(key_event.value)

    def start_receiving_command(self, kind: PromptKind):
        self.overlay = Overlay(kind)

    def stop_receiving_command(self):
        self.overlay = None

    def process_received_command(self, overlay: Overlay):
        if overlay.kind is PromptKind.SEARCH:
            self.process_search_command(overlay.text)
        else:
            self.execute_command_line(overlay.text)

    def execute_command_line(self, text: str):
        """Run the text typed after ``:``."""
        command = parse_command_line(text)
        if isinstance(command, NoOp):
            return
        if isinstance(command, GotoLine):
            self.goto_line(command.line_number, 0)
        elif isinstance(command, OpenFile):
            self.open_file(command.path)
        elif isinstance(command, NewFile):
            self.set_document(Document.new_empty(os.path.expanduser(command.path)))
            self.enter_insert_mode()
        elif isinstance(command, SaveFile):
            self.save(command.name)
        elif isinstance(command, SimpleCommand):
            self._simple_commands[command.name]()
        elif isinstance(command, MissingArgument):
            self.display_error(EditorConstants.NO_FILE_NAME_MESSAGE)
        elif isinstance(command, UnknownCommand):
            self.display_error(f"Unknown command '{command.token}'")

    def open_file(self, path: str):
        path = os.path.expanduser(path)
        try:
            document = Document.open(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not open {path}: {e}")
            self.display_error(f"Could not open {path}")
            return
        self.set_document(document)

    def log_debug_information(self):
        if self.debug_sink is None:
            self.display_error("Debug logging is disabled")
            return
        self.debug_sink(json.dumps(self.dump_state(), indent=2))
        self.display_message("Editor state written to the log")

    def dump_state(self) -> dict:
        """Snapshot of the editor state for debugging."""
        return {
            "path": self.document.path,
            "mode": str(self.mode),
            "cursor": asdict(self.cursor_position),
            "offset": asdict(self.offset),
            "num_rows": self.document.num_rows(),
            "screen": {"width": self.terminal.width, "height": self.screen_height},
            "dirty": self.is_dirty(),
            "unsaved_edits": self.unsaved_edits,
            "repetition_buffer": self.repetition_buffer,
            "search_matches": len(self.search_matches),
            "config": asdict(self.config),
        }

    # Search

    def process_search_command(self, pattern: str):
        if not pattern:
            return
        self.search_matches.replace(find_matches(self.document, pattern))
        self.display_message(f"{len(self.search_matches)} matches")
        self.goto_next_search_match()

    def reset_search(self):
        self.search_matches.clear()

    def goto_next_search_match(self):
        self._goto_search_match(self.search_matches.advance())

    def goto_previous_search_match(self):
        self._goto_search_match(self.search_matches.retreat())

    def _goto_search_match(self, match):
        if match is None:
            return
        self.display_message(self.search_matches.describe())
        self.goto_line(match.start.y, match.start.x)

    # Cursor queries

    def current_row_index(self) -> int:
        return self.cursor_position.y + self.offset.rows

    def current_line_number(self) -> int:
        return self.current_row_index() + 1

    def current_x_position(self) -> int:
        return self.cursor_position.x + self.offset.columns

    def current_row(self) -> Row:
        row = self.document.get_row(self.current_row_index())
        return row if row is not None else Row()

    def current_grapheme(self) -> str:
        return self.current_row().nth_grapheme(self.current_x_position())

    def pop_normal_command_repetitions(self) -> int:
        """Consume the pending count, defaulting to 1."""
        times = int(self.repetition_buffer) if self.repetition_buffer else 1
        self.repetition_buffer = ""
        return times

    # Cursor movement

    def move_cursor(self, direction: Direction, times: int):
        """Step the cursor, scrolling by one at the screen edges."""
        x, y = self.cursor_position.x, self.cursor_position.y
        offset_x, offset_y = self.offset.columns, self.offset.rows
        last_row_index = self.document.num_rows() - 1
        row_length = len(self.current_row())
        height = self.screen_height
        width = self.text_width

        for _ in range(times):
            before = (x, y, offset_x, offset_y)
            if direction is Direction.UP:
                if y == 0:
                    offset_y = max(offset_y - 1, 0)
                else:
                    y -= 1
            elif direction is Direction.DOWN:
                if y + offset_y < last_row_index:
                    if y < height - 1:
                        y += 1
                    else:
                        offset_y += 1
            elif direction is Direction.LEFT:
                if x == 0:
                    offset_x = max(offset_x - 1, 0)
                else:
                    x -= 1
            elif direction is Direction.RIGHT:
                if x + offset_x < row_length:
                    if x < width - 1:
                        x += 1
                    else:
                        offset_x += 1
            if (x, y, offset_x, offset_y) == before:
                break

        self.cursor_position = Position(x, y)
        self.offset = ViewportOffset(rows=offset_y, columns=offset_x)
        if self.mode is Mode.NORMAL:
            self._clamp_cursor_to_row()
        self._keep_cursor_visible()

    def _clamp_cursor_to_row(self):
        """Keep the cursor on the row: its last grapheme in normal mode, one past it when inserting."""
        row_length = len(self.current_row())
        limit = max(row_length - 1, 0) if self.mode is Mode.NORMAL else row_length
        if self.current_x_position() > limit:
            self.move_cursor_to_position_x(limit)

    def move_cursor_to_position_x(self, x: int):
        self.offset.columns, self.cursor_position.x = scroll_to_column(
            x, self.offset.columns, self.text_width)
        self._keep_cursor_visible()

    def _keep_cursor_visible(self):
        """Scroll right until the cursor cell fits; tabs and wide graphemes take more than one."""
        row = self.current_row()
        x = self.current_x_position()
        width = self.text_width
        while self.offset.columns < x and row.display_column(self.offset.columns, x) + row.cell_width(x) > width:
            self.offset.columns += 1
        self.cursor_position.x = x - self.offset.columns

    def move_cursor_to_position_y(self, y: int):
        self.offset.rows, self.cursor_position.y = scroll_to_line(
            y, self.offset.rows, self.screen_height, self.document.num_rows())

    def goto_x_y(self, x: int, y: int):
        """Jump to document row ``y`` and column ``x``."""
        self.move_cursor_to_position_y(y)
        self.move_cursor_to_position_x(x)

    def goto_line(self, line_number: int, x: int = 0):
        """Jump to a 1-based line number."""
        self.goto_x_y(x, max(line_number - 1, 0))

    def goto_start_or_end_of_line(self, boundary: Boundary):
        if boundary is Boundary.START:
            self.move_cursor_to_position_x(0)
        else:
            self.move_cursor_to_position_x(max(len(self.current_row()) - 1, 0))

    def goto_first_non_whitespace(self):
        index = find_index_of_first_non_whitespace(self.current_row())
        if index is not None:
            self.move_cursor_to_position_x(index)

    def goto_start_or_end_of_document(self, boundary: Boundary):
        if boundary is Boundary.START:
            self.goto_line(1, 0)
        else:
            self.goto_line(self.document.last_line_number(), 0)

    def goto_start_or_end_of_word(self, boundary: Boundary, times: int = 1):
        for _ in range(times):
            x = self.current_x_position()
            target = find_index_of_next_or_previous_word(self.current_row(), x, boundary)
            if target == x:
                break
            self.move_cursor_to_position_x(target)

    def goto_start_or_end_of_paragraph(self, boundary: Boundary, times: int = 1):
        for _ in range(times):
            line_number = self.current_line_number()
            target = find_line_number_of_start_or_end_of_paragraph(self.document, line_number, boundary)
            if target == line_number:
                break
            self.goto_line(target, 0)

    def goto_percentage_in_document(self, percent: int):
        percent = min(percent, 100)
        line_number = self.document.num_rows() * percent // 100
        self.goto_line(line_number, 0)

    def _visible_rows(self) -> int:
        return max(min(self.screen_height, self.document.num_rows() - self.offset.rows), 1)

    def goto_first_line_of_terminal(self):
        self.goto_line(self.offset.rows + 1, 0)

    def goto_middle_of_terminal(self):
        self.goto_line(self.offset.rows + (self._visible_rows() - 1) // 2 + 1, 0)

    def goto_last_line_of_terminal(self):
        self.goto_line(self.offset.rows + self._visible_rows(), 0)

    def goto_matching_symbol(self):
        symbol = self.current_grapheme()
        if symbol in OPENING_SYMBOLS:
            position = find_matching_closing_symbol(self.document, self.cursor_position, self.offset)
        elif symbol in CLOSING_SYMBOLS:
            position = find_matching_opening_symbol(self.document, self.cursor_position, self.offset)
        else:
            return
        if position is not None:
            self.goto_x_y(position.x, position.y)

    # Editing

    def insert_char(self, char: str):
        self.document.insert(char, self.current_x_position(), self.current_row_index())
        self.move_cursor(Direction.RIGHT, 1)

    def insert_tab(self):
        x, y = self.current_x_position(), self.current_row_index()
        for _ in range(EditorConstants.SPACES_PER_TAB):
            self.document.insert(' ', x, y)
        self.move_cursor(Direction.RIGHT, EditorConstants.SPACES_PER_TAB)

    def insert_newline(self):
        y = self.current_row_index()
        self.document.insert_newline(self.current_x_position(), y)
        self.goto_x_y(0, y + 1)

    def backspace(self):
        """Delete the grapheme left of the cursor, joining lines at column 0."""
        x, y = self.current_x_position(), self.current_row_index()
        if x == 0:
            if y == 0:
                return
            previous_length = len(self.document.get_row(y - 1))
            self.document.delete(0, 0, y)
            self.goto_x_y(previous_length, y - 1)
        else:
            self.document.delete(x - 1, x, y)
            self.move_cursor(Direction.LEFT, 1)

    def delete_current_line(self):
        y = self.current_row_index()
        self.document.delete_row(y)
        self.goto_x_y(0, min(y, self.document.num_rows() - 1))

    def delete_current_grapheme(self):
        x = self.current_x_position()
        self.document.delete(x, x + 1, self.current_row_index())
        self._clamp_cursor_to_row()

    def insert_newline_after_current_line(self):
        y = self.current_row_index()
        self.document.insert_newline(len(self.current_row()), y)
        self.goto_x_y(0, y + 1)
        self.enter_insert_mode()

    def insert_newline_before_current_line(self):
        y = self.current_row_index()
        self.document.insert_empty_row(y)
        self.goto_x_y(0, y)
        self.enter_insert_mode()

    def append_to_line(self):
        self.enter_insert_mode()
        self.goto_start_or_end_of_line(Boundary.END)
        self.move_cursor(Direction.RIGHT, 1)

    def join_current_line_with_next_one(self):
        join_at = self.document.join_row_with_previous_one(self.current_row_index() + 1, ' ')
        if join_at is not None:
            self.move_cursor_to_position_x(join_at)

    # Mouse

    def process_mouse_event(self, event: MouseEvent):
        """Move the cursor where a left click was released."""
        if event.action is MouseAction.PRESS:
            if event.button == LEFT_BUTTON:
                self.mouse_event_buffer.append(event.text_position(self.gutter_width))
            return
        if not self.mouse_event_buffer:
            return
        position = self.mouse_event_buffer.pop()
        if position.y >= self.screen_height or position.x >= self.text_width:
            return
        row = self.document.get_row(position.y + self.offset.rows)
        if row is None or position.x + self.offset.columns > len(row):
            return
        self.cursor_position = position
        if self.mode is Mode.NORMAL:
            self._clamp_cursor_to_row()

    # Rendering

    def generate_status(self) -> Tuple[str, str]:
        name = self.document.path or "No Name"
        dirty = " +" if self.is_dirty() else ""
        left = f"[{name}]{dirty} {self.mode}"
        position = f"Ln {self.current_line_number()}, Col {self.current_x_position() + 1}"
        if self.config.display_stats:
            stats = f"[{self.document.num_rows()}L/{self.document.num_words()}W]"
            return left, f"{stats} {position}"
        return left, position

    def _shows_welcome_message(self) -> bool:
        return (
            self.document.path is None
            and self.document.num_rows() == 1
            and self.document.rows[0].is_empty()
        )

    def welcome_message(self) -> str:
        message = get_version_string()
        width = self.terminal.width
        padding = " " * (max(width - len(message) - 2, 0) // 2)
        return f"~ {padding}{message}"[:width]

    def draw_rows(self) -> List[str]:
        """Rendered text area, one string per screen row."""
        lines = []
        middle = self.screen_height // 2
        start = self.offset.columns
        for screen_row in range(self.screen_height):
            index = self.offset.rows + screen_row
            row = self.document.get_row(index)
            if row is not None:
                end = row.fit(start, self.text_width)
                lines.append(row.render(start, end, index + 1, self.row_prefix_length))
            elif screen_row == middle and self._shows_welcome_message():
                lines.append(self.welcome_message())
            else:
                lines.append("~")
        return lines

    def refresh_screen(self):
        status_left, status_right = self.generate_status()
        if self.help_visible:
            self.terminal.draw_help(help_lines(), status_left, status_right, self.message)
            return
        if self.overlay is not None:
            message, is_error = self.overlay.display(), False
        else:
            message, is_error = self.message, self.message_is_error
        cursor_x = self.gutter_width + self.current_row().display_column(
            self.offset.columns, self.current_x_position())
        self.terminal.draw_frame(
            self.draw_rows(),
            status_left,
            status_right,
            message,
            is_error,
            self.cursor_position.y,
            cursor_x,
            prompt_active=self.overlay is not None,
        )

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.terminal.set_cursor_style(self.mode)
        self.running = True
        try:
            size = None
            need_draw = True
            while self.running:
                current_size = (self.terminal.width, self.terminal.height)
                if need_draw or current_size != size:
                    size = current_size
                    self.refresh_screen()
                    need_draw = False

                event = self.terminal.read_event(timeout=EditorConstants.RESIZE_POLL_INTERVAL)
                if event is not None:
                    self.handle_event(event)
                    need_draw = True
                if self.should_quit:
                    self.running = False
        except KeyboardInterrupt:
            # Keep the edits somewhere before going away
            if self.is_dirty():
                self.save_to_swap_file()
        except OSError:
            logger.exception("Terminal I/O failed")
            try:
                self.terminal.clear_screen()
            except OSError:
                pass
            raise
        finally:
            self.terminal.cleanup()
