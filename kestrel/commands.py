"""Command pattern implementation for keystroke handling.

Every keystroke that reaches the registry is looked up by ``(mode, key
type, key)``. Normal-mode keys without an entry are repeatable motions: the
pending count is consumed and the motion runs that many times.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .command_line import PromptKind
from .keyboard import KeyType
from .state import Boundary, Direction, Mode

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Movement commands don't modify the document."""
        self._move(editor)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""
        pass


class EditCommand(EditorCommand):
    """Base class for editing commands.

    Each edit counts towards the next swap file write.
    """

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._edit(editor, key_event)
        editor.record_edit()
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class SystemCommand(EditorCommand):
    """Base class for commands that change editor state, not the document."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        pass


class RepeatableMotion(ABC):
    """A motion that honours a count prefix (``12j``)."""

    @abstractmethod
    def repeat(self, editor: 'Editor', times: int):
        pass


# Normal mode: mode switches and prompts

class EnterInsertModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_insert_mode()


class StartCommandLineCommand(SystemCommand):
    def __init__(self, kind: PromptKind):
        self.kind = kind

    def _execute_system(self, editor, key_event):
        editor.start_receiving_command(self.kind)


class CountDigitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.repetition_buffer += key_event.value


class ZeroCommand(SystemCommand):
    """``0`` extends a pending count, otherwise goes to the start of the line."""

    def _execute_system(self, editor, key_event):
        if editor.repetition_buffer:
            editor.repetition_buffer += key_event.value
        else:
            editor.goto_start_or_end_of_line(Boundary.START)


class ClearCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.reset_message()
        editor.reset_search()
        editor.repetition_buffer = ""


class DismissHelpCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.revert_to_main_screen()


class NextMatchCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.goto_next_search_match()


class PreviousMatchCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.goto_previous_search_match()


# Normal mode: jumps

class DocumentBoundaryCommand(MovementCommand):
    def __init__(self, boundary: Boundary):
        self.boundary = boundary

    def _move(self, editor):
        editor.goto_start_or_end_of_document(self.boundary)


class LineBoundaryCommand(MovementCommand):
    def __init__(self, boundary: Boundary):
        self.boundary = boundary

    def _move(self, editor):
        editor.goto_start_or_end_of_line(self.boundary)


class FirstNonWhitespaceCommand(MovementCommand):
    def _move(self, editor):
        editor.goto_first_non_whitespace()


class ScreenTopCommand(MovementCommand):
    def _move(self, editor):
        editor.goto_first_line_of_terminal()


class ScreenMiddleCommand(MovementCommand):
    def _move(self, editor):
        editor.goto_middle_of_terminal()


class ScreenBottomCommand(MovementCommand):
    def _move(self, editor):
        editor.goto_last_line_of_terminal()


class MatchingSymbolCommand(MovementCommand):
    def _move(self, editor):
        editor.goto_matching_symbol()


# Normal mode: edits

class DeleteLineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.delete_current_line()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.delete_current_grapheme()


class OpenLineBelowCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_newline_after_current_line()


class OpenLineAboveCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_newline_before_current_line()


class AppendCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.append_to_line()


class JoinLinesCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.join_current_line_with_next_one()


# Normal mode: repeatable motions

class CharMotion(RepeatableMotion):
    def __init__(self, direction: Direction):
        self.direction = direction

    def repeat(self, editor, times):
        editor.move_cursor(self.direction, times)


class WordMotion(RepeatableMotion):
    def __init__(self, boundary: Boundary):
        self.boundary = boundary

    def repeat(self, editor, times):
        editor.goto_start_or_end_of_word(self.boundary, times)


class ParagraphMotion(RepeatableMotion):
    def __init__(self, boundary: Boundary):
        self.boundary = boundary

    def repeat(self, editor, times):
        editor.goto_start_or_end_of_paragraph(self.boundary, times)


class PercentageMotion(RepeatableMotion):
    def repeat(self, editor, times):
        editor.goto_percentage_in_document(times)


# Insert mode

class ExitInsertModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.enter_normal_mode()


class InsertMoveCommand(MovementCommand):
    def __init__(self, direction: Direction):
        self.direction = direction

    def _move(self, editor):
        editor.move_cursor(self.direction, 1)


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.backspace()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_newline()


class InsertTabCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_tab()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert_char(key_event.value)


_ARROWS = {
    'left': Direction.LEFT,
    'down': Direction.DOWN,
    'up': Direction.UP,
    'right': Direction.RIGHT,
}

RegistryKey = Tuple[Mode, KeyType, str]


class CommandRegistry:
    """Registry for mapping (mode, key) pairs to commands."""

    def __init__(self):
        self._commands: Dict[RegistryKey, EditorCommand] = {}
        self._motions: Dict[Tuple[KeyType, str], RepeatableMotion] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        normal = Mode.NORMAL
        regular = KeyType.REGULAR

        # Normal mode single-key commands
        self.register((normal, regular, 'i'), EnterInsertModeCommand())
        self.register((normal, regular, ':'), StartCommandLineCommand(PromptKind.COMMAND))
        self.register((normal, regular, '/'), StartCommandLineCommand(PromptKind.SEARCH))
        self.register((normal, regular, 'g'), DocumentBoundaryCommand(Boundary.START))
        self.register((normal, regular, 'G'), DocumentBoundaryCommand(Boundary.END))
        self.register((normal, regular, '$'), LineBoundaryCommand(Boundary.END))
        self.register((normal, regular, '^'), FirstNonWhitespaceCommand())
        self.register((normal, regular, 'H'), ScreenTopCommand())
        self.register((normal, regular, 'M'), ScreenMiddleCommand())
        self.register((normal, regular, 'L'), ScreenBottomCommand())
        self.register((normal, regular, 'm'), MatchingSymbolCommand())
        self.register((normal, regular, 'n'), NextMatchCommand())
        self.register((normal, regular, 'N'), PreviousMatchCommand())
        self.register((normal, regular, 'q'), DismissHelpCommand())
        self.register((normal, regular, 'd'), DeleteLineCommand())
        self.register((normal, regular, 'x'), DeleteCharCommand())
        self.register((normal, regular, 'o'), OpenLineBelowCommand())
        self.register((normal, regular, 'O'), OpenLineAboveCommand())
        self.register((normal, regular, 'A'), AppendCommand())
        self.register((normal, regular, 'J'), JoinLinesCommand())
        self.register((normal, KeyType.SPECIAL, 'escape'), ClearCommand())

        # Count prefix
        self.register((normal, regular, '0'), ZeroCommand())
        for digit in '123456789':
            self.register((normal, regular, digit), CountDigitCommand())

        # Repeatable motions
        self.register_motion((regular, 'h'), CharMotion(Direction.LEFT))
        self.register_motion((regular, 'j'), CharMotion(Direction.DOWN))
        self.register_motion((regular, 'k'), CharMotion(Direction.UP))
        self.register_motion((regular, 'l'), CharMotion(Direction.RIGHT))
        for name, direction in _ARROWS.items():
            self.register_motion((KeyType.SPECIAL, name), CharMotion(direction))
        self.register_motion((regular, 'w'), WordMotion(Boundary.END))
        self.register_motion((regular, 'b'), WordMotion(Boundary.START))
        self.register_motion((regular, '}'), ParagraphMotion(Boundary.END))
        self.register_motion((regular, '{'), ParagraphMotion(Boundary.START))
        self.register_motion((regular, '%'), PercentageMotion())

        # Insert mode
        insert = Mode.INSERT
        self.register((insert, KeyType.SPECIAL, 'escape'), ExitInsertModeCommand())
        self.register((insert, KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((insert, KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((insert, regular, '\t'), InsertTabCommand())
        for name, direction in _ARROWS.items():
            self.register((insert, KeyType.SPECIAL, name), InsertMoveCommand(direction))

    def register(self, key: RegistryKey, command: EditorCommand):
        """Register a command for a (mode, key type, key) combination."""
        self._commands[key] = command

    def register_motion(self, key: Tuple[KeyType, str], motion: RepeatableMotion):
        """Register a normal-mode motion that takes a count."""
        self._motions[key] = motion

    def get_command(self, mode: Mode, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((mode, key_type, value))

    def get_motion(self, key_type: KeyType, value: str) -> Optional[RepeatableMotion]:
        return self._motions.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(editor.mode, key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        if editor.mode is Mode.INSERT:
            if key_event.is_printable:
                return InsertTextCommand().execute(editor, key_event)
            return False

        # Any other normal-mode key consumes the pending count
        times = editor.pop_normal_command_repetitions()
        motion = self.get_motion(key_event.key_type, key_event.value)
        if motion:
            motion.repeat(editor, times)
        return False
