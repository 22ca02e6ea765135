"""
Initiative module for the arena.

The scheduler of a match: initiative rolls, the decrement after each action,
the choice of the next actor and the reset that starts a new round.
"""

from collections.abc import Iterable, Sequence

from catchery import log_debug

from arena.character.character_stats import movement_allowance
from arena.character.combatant import Combatant
from arena.combat.damage import wound_modifier
from arena.core.constants import INITIATIVE_STEP
from arena.core.dice import DiceRoller


def roll_initiative(
    combatant: Combatant, roller: DiceRoller | None = None
) -> tuple[int, list[int]]:
    """
    Rolls the initiative of a combatant for the whole match.

    Args:
        combatant (Combatant): The combatant; both its original and current
            initiative are set to the result.
        roller (DiceRoller | None): The random source.

    Returns:
        tuple[int, list[int]]: The total and the individual dice.

    """
    roller = roller or DiceRoller()
    rolls = roller.roll_pool(combatant.initiative_dice)
    total = combatant.attributes.reaction + combatant.attributes.intuition + sum(rolls)
    combatant.original_initiative = total
    combatant.current_initiative = total
    return total, rolls


def decrement_initiative(combatant: Combatant) -> int:
    """
    Spends one initiative pass after a completed action.

    Args:
        combatant (Combatant): The combatant that acted.

    Returns:
        int: The initiative left.

    """
    combatant.current_initiative -= INITIATIVE_STEP
    return combatant.current_initiative


def next_actor(combatants: Sequence[Combatant]) -> Combatant | None:
    """
    Picks the combatant that acts next.

    Args:
        combatants (Sequence[Combatant]): Every combatant of the match. Ties
            go to the one listed first.

    Returns:
        Combatant | None: The conscious combatant with the highest positive
        initiative, or None if nobody can act in this round.

    """
    best: Combatant | None = None
    for combatant in combatants:
        if not combatant.is_active() or combatant.current_initiative <= 0:
            continue
        if best is None or combatant.current_initiative > best.current_initiative:
            best = combatant
    return best


def needs_reset(combatants: Iterable[Combatant]) -> bool:
    """Returns True when no conscious combatant has initiative left."""
    return not any(c.is_active() and c.current_initiative >= 1 for c in combatants)


def reset_round(combatants: Iterable[Combatant]) -> None:
    """
    Starts a new round: restores initiative and movement of everybody.

    Args:
        combatants (Iterable[Combatant]): Every combatant of the match.

    """
    for combatant in combatants:
        combatant.current_initiative = combatant.original_initiative
        combatant.movement_remaining = movement_allowance(
            combatant.attributes.agility, combatant.is_running
        )
        combatant.is_sprinting = False
    log_debug("Initiative reset for a new round", {})


def display_initiative(combatant: Combatant) -> int:
    """
    Returns the initiative shown to the players.

    The wound modifier is subtracted for display only, the scheduler always
    works with the rolled value.
    """
    return combatant.original_initiative - wound_modifier(combatant)


def sort_by_initiative(combatants: Iterable[Combatant]) -> list[Combatant]:
    """Returns the combatants ordered by descending current initiative."""
    return sorted(combatants, key=lambda c: c.current_initiative, reverse=True)
