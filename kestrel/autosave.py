"""Swap file management and atomic file writes.

Unsaved edits are periodically written to a vim-style swap file next to the
document so that they survive a crash. When a document is opened and its
swap file exists, the swap file wins.
"""

import logging
import os
import tempfile
from typing import Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


def get_swap_path(filename: str) -> str:
    """Where the swap copy of ``filename`` lives.

    Kestrel keeps it beside the document as a hidden ``.<name>.swp``, so
    ``notes/todo.txt`` maps to ``notes/.todo.txt.swp``. A bare name is
    resolved against the current directory (``./.todo.txt.swp``).
    """
    dir_name = os.path.dirname(filename) or '.'
    base_name = os.path.basename(filename)
    swap_name = (
        EditorConstants.AUTOSAVE_SWAP_PREFIX
        + base_name
        + EditorConstants.AUTOSAVE_SWAP_SUFFIX
    )
    return os.path.join(dir_name, swap_name)


def atomic_write(path: str, content: str) -> None:
    """Write ``content`` to ``path`` so that readers never see a partial file.

    The data goes to a temporary file in the target directory, is synced to
    disk and then renamed over the target. The temporary file is removed if
    anything fails.

    Raises:
        OSError: if the file cannot be created, written or renamed.
    """
    dir_name = os.path.dirname(path) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            dir=dir_name,
            prefix=EditorConstants.AUTOSAVE_SWAP_PREFIX,
            suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
            delete=False
        ) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(temp_filename, path)
    except OSError:
        if temp_filename is not None:
            try:
                os.remove(temp_filename)
            except OSError:
                pass
        raise


def write_swap_file(filename: str, content: str) -> bool:
    """Write content to the swap file of ``filename``.

    Returns:
        True if write succeeded, False otherwise.
    """
    swap_path = get_swap_path(filename)
    try:
        atomic_write(swap_path, content)
    except OSError as e:
        logger.warning(f"Could not write swap file {swap_path}: {e}")
        return False
    return True


def delete_swap_file(filename: str) -> None:
    """Delete the swap file of ``filename`` if it exists."""
    swap_path = get_swap_path(filename)
    try:
        os.remove(swap_path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not delete swap file {swap_path}: {e}")


def swap_file_exists(filename: str) -> bool:
    return os.path.isfile(get_swap_path(filename))


def read_swap_file(filename: str) -> Optional[str]:
    """Read swap file content.

    Returns:
        Content of the swap file, or None if it doesn't exist.
    """
    swap_path = get_swap_path(filename)
    try:
        with open(swap_path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except FileNotFoundError:
        return None
