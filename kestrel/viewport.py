"""Scrolling rules for direct jumps.

The functions take the current offset and the screen geometry and return
the new ``(offset, screen coordinate)`` pair for a target line or column.
"""

from typing import Tuple


def scroll_to_line(target: int, offset_rows: int, screen_height: int, num_rows: int) -> Tuple[int, int]:
    """Place document row ``target`` on screen.

    Targets in the first half screen of the document pin the view to the
    top, targets in the last half screen pin it to the bottom. A target
    that is already visible leaves the view alone. Anything else is
    centred.

    Returns:
        ``(offset_rows, screen_y)``
    """
    screen_height = max(screen_height, 1)
    target = min(max(target, 0), max(num_rows - 1, 0))
    middle = screen_height // 2

    if target < middle:
        return 0, target
    if target > num_rows - middle:
        offset = max(num_rows - screen_height, 0)
        return offset, target - offset
    if offset_rows <= target < offset_rows + screen_height:
        return offset_rows, target - offset_rows
    return target - middle, middle


def scroll_to_column(target: int, offset_columns: int, screen_width: int) -> Tuple[int, int]:
    """Place document column ``target`` on screen.

    Returns:
        ``(offset_columns, screen_x)``
    """
    screen_width = max(screen_width, 1)
    target = max(target, 0)

    if offset_columns <= target < offset_columns + screen_width:
        return offset_columns, target - offset_columns
    if target < screen_width:
        return 0, target
    return target - screen_width + 1, screen_width - 1
