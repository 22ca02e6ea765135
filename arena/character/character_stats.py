"""
Character stats module for the arena.

Derived statistics of a character: limits, condition monitor sizes and
movement allowances. All functions are pure and take the attributes they need
explicitly.
"""

import math

from arena.core.constants import CONDITION_TRACK_BASE, WALK_MULTIPLIER


def physical_limit(strength: int, body: int, reaction: int) -> int:
    """
    Returns the Physical Limit, the cap on hits of physical tests.

    Args:
        strength (int): The strength attribute.
        body (int): The body attribute.
        reaction (int): The reaction attribute.

    Returns:
        int: ceil((2 x strength + body + reaction) / 3).

    """
    return math.ceil((2 * strength + body + reaction) / 3)


def mental_limit(logic: int, intuition: int, willpower: int) -> int:
    """
    Returns the Mental Limit, the cap on hits of mental tests.

    Args:
        logic (int): The logic attribute.
        intuition (int): The intuition attribute.
        willpower (int): The willpower attribute.

    Returns:
        int: ceil((2 x logic + intuition + willpower) / 3).

    """
    return math.ceil((2 * logic + intuition + willpower) / 3)


def max_physical(body: int) -> int:
    """Returns the number of boxes of the physical condition monitor."""
    return CONDITION_TRACK_BASE + math.ceil(body / 2)


def max_stun(willpower: int) -> int:
    """Returns the number of boxes of the stun condition monitor."""
    return CONDITION_TRACK_BASE + math.ceil(willpower / 2)


def movement_allowance(agility: int, is_running: bool = False) -> int:
    """
    Returns how many metres a character may move during one round.

    Args:
        agility (int): The agility attribute.
        is_running (bool): Whether the character is running this round.

    Returns:
        int: agility x 2, doubled when running.

    """
    allowance = agility * WALK_MULTIPLIER
    return allowance * 2 if is_running else allowance
