"""
Utilities module for the arena.

Console output goes through one shared rich console: narration, sheets and
the interactive menus all print with rich markup.
"""

from collections.abc import Iterable
from typing import Any

from rich.console import Console
from rich.rule import Rule

from arena.core.constants import WOUND_DIVISOR

_console = Console(markup=True, width=120, force_jupyter=False)

# Drawn between the wound steps of a condition monitor.
MONITOR_GROUP_SEPARATOR = "┊"


def cprint(*args: Any, **kwargs: Any) -> None:
    """Prints rich markup on the shared console."""
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """Prints a horizontal rule; arguments go to rich's Rule."""
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any) -> str:
    """
    Renders a rich renderable to a string, ANSI codes included.

    Used to build prompt_toolkit prompts out of rich tables.

    Args:
        content (Any): A string with markup or a rich renderable.

    Returns:
        str: The rendered text.

    """
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


def monitor_boxes(filled: int, boxes: int, color: str = "white") -> str:
    """
    Draws a condition monitor, one box per point of damage.

    Boxes are grouped by the number of boxes that make up one point of wound
    modifier.

    Args:
        filled (int): Boxes of damage taken.
        boxes (int): Size of the monitor.
        color (str): Markup color of the filled boxes.

    Returns:
        str: The monitor with rich markup, or "" for an empty monitor.

    """
    if boxes <= 0:
        return ""
    filled = max(0, min(filled, boxes))
    groups = []
    for start in range(0, boxes, WOUND_DIVISOR):
        end = min(start + WOUND_DIVISOR, boxes)
        marked = max(0, min(filled, end) - start)
        group = ""
        if marked:
            group += f"[{color}]" + "■" * marked + "[/]"
        if end - start - marked:
            group += "[dim white]" + "□" * (end - start - marked) + "[/]"
        groups.append(group)
    return MONITOR_GROUP_SEPARATOR.join(groups)


def format_rolls(rolls: Iterable[int]) -> str:
    """Returns the dice as a comma separated list, or "-" when there are none."""
    text = ", ".join(str(roll) for roll in rolls)
    return text or "-"
