"""Command line overlay state and parsing of submitted ``:`` commands."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .constants import Commands, EditorConstants


class PromptKind(Enum):
    """What the overlay is collecting, keyed by its prefix character."""
    COMMAND = EditorConstants.COMMAND_PREFIX
    SEARCH = EditorConstants.SEARCH_PREFIX


@dataclass
class Overlay:
    """An active command line: its kind and the text typed so far."""
    kind: PromptKind
    text: str = ""

    def display(self) -> str:
        return self.kind.value + self.text

    def push(self, char: str) -> None:
        self.text += char

    def pop(self) -> bool:
        """Remove the last character. Returns False if there was none."""
        if not self.text:
            return False
        self.text = self.text[:-1]
        return True


# Parsed commands

@dataclass
class NoOp:
    pass


@dataclass
class GotoLine:
    line_number: int


@dataclass
class OpenFile:
    path: str


@dataclass
class NewFile:
    path: str


@dataclass
class SaveFile:
    """Save, optionally under a new name."""
    name: str = ""


@dataclass
class SimpleCommand:
    """A single-word command from the fixed vocabulary."""
    name: str


@dataclass
class MissingArgument:
    command: str


@dataclass
class UnknownCommand:
    token: str


ParsedCommand = Union[
    NoOp, GotoLine, OpenFile, NewFile, SaveFile, SimpleCommand, MissingArgument, UnknownCommand
]

SIMPLE_COMMANDS = frozenset({
    Commands.FORCE_QUIT,
    Commands.QUIT,
    Commands.LINE_NUMBERS,
    Commands.STATS,
    Commands.HELP,
    Commands.SAVE_AND_QUIT,
    Commands.DEBUG,
})


def parse_command_line(command: str) -> ParsedCommand:
    """Turn the text typed after ``:`` into a command.

    >>> parse_command_line("12")
    GotoLine(line_number=12)
    >>> parse_command_line("w notes.txt")
    SaveFile(name='notes.txt')
    """
    if not command:
        return NoOp()
    if command.isascii() and command.isdigit():
        return GotoLine(int(command))
    if " " in command:
        tokens = command.split(" ")
        name, arguments = tokens[0], tokens[1:]
        argument = " ".join(arguments).strip()
        if name in (Commands.OPEN, Commands.OPEN_SHORT, Commands.NEW, Commands.SAVE):
            if not argument:
                if name == Commands.SAVE:
                    return SaveFile()
                return MissingArgument(name)
            if name == Commands.NEW:
                return NewFile(argument)
            if name == Commands.SAVE:
                return SaveFile(argument)
            return OpenFile(argument)
        return UnknownCommand(name)
    if command == Commands.SAVE:
        return SaveFile()
    if command in SIMPLE_COMMANDS:
        return SimpleCommand(command)
    return UnknownCommand(command)
