"""
Damage module for the arena.

Handles damage application to the two condition monitors, the
consciousness and death rules that follow from it, and the detection of the
end of a match.
"""

from collections import Counter
from collections.abc import Iterable

from catchery import log_debug

from arena.character.combatant import Combatant
from arena.core.constants import DRAW, WOUND_DIVISOR, DamageType, Faction
from arena.core.error_handling import InvalidInput


def wound_modifier(combatant: Combatant) -> int:
    """
    Returns the dice pool penalty caused by accumulated damage.

    Args:
        combatant (Combatant): The wounded combatant.

    Returns:
        int: floor(physical / 3) + floor(stun / 3), as a positive number.

    """
    return (
        combatant.physical_damage // WOUND_DIVISOR
        + combatant.stun_damage // WOUND_DIVISOR
    )


def apply_damage(combatant: Combatant, amount: int, damage_type: DamageType) -> None:
    """
    Applies damage to a combatant and updates its status flags.

    Stun damage beyond the stun monitor overflows into physical damage.
    Physical damage beyond the physical monitor kills.

    Args:
        combatant (Combatant): The combatant taking damage.
        amount (int): Boxes of damage. Zero leaves the combatant untouched.
        damage_type (DamageType): The monitor receiving the damage.

    Raises:
        InvalidInput: If the amount is negative.

    """
    if amount < 0:
        raise InvalidInput(
            f"Damage cannot be negative: {amount}",
            {"combatant": combatant.name, "amount": amount},
        )
    if amount == 0:
        return

    if damage_type == DamageType.PHYSICAL:
        combatant.physical_damage += amount
    else:
        combatant.stun_damage += amount

    # Stun overflow turns into physical damage.
    if combatant.stun_damage > combatant.max_stun:
        overflow = combatant.stun_damage - combatant.max_stun
        combatant.stun_damage = combatant.max_stun
        combatant.physical_damage += overflow
        log_debug(
            f"{combatant.name}: {overflow} stun overflows into physical damage",
            {"combatant": combatant.name, "overflow": overflow},
        )

    if combatant.physical_damage > combatant.max_physical:
        combatant.is_alive = False
    if not combatant.is_alive:
        combatant.is_conscious = False
    else:
        combatant.is_conscious = combatant.stun_damage < combatant.max_stun


def check_status(combatant: Combatant) -> list[str]:
    """
    Reports what changed for a combatant since the previous report.

    Args:
        combatant (Combatant): The combatant to inspect.

    Returns:
        list[str]: Human-readable notices, possibly empty.

    """
    changes: list[str] = []
    physical_taken = combatant.physical_damage - combatant.reported_physical_damage
    stun_taken = combatant.stun_damage - combatant.reported_stun_damage
    if physical_taken > 0:
        changes.append(f"{combatant.name} took {physical_taken} physical damage.")
    if stun_taken > 0:
        changes.append(f"{combatant.name} took {stun_taken} stun damage.")

    current_wound = wound_modifier(combatant)
    if current_wound != combatant.reported_wound_modifier:
        changes.append(f"{combatant.name}'s wound modifier is now -{current_wound}.")

    if not combatant.is_alive:
        if physical_taken > 0 or stun_taken > 0:
            changes.append(f"{combatant.name} has died!")
    elif not combatant.is_conscious and stun_taken > 0:
        changes.append(f"{combatant.name} has been knocked unconscious!")

    combatant.reported_physical_damage = combatant.physical_damage
    combatant.reported_stun_damage = combatant.stun_damage
    combatant.reported_wound_modifier = current_wound
    return changes


def active_factions(combatants: Iterable[Combatant]) -> set[Faction]:
    """Returns the factions with at least one alive and conscious member."""
    return {c.faction for c in combatants if c.is_active()}


def check_combat_end(combatants: Iterable[Combatant]) -> bool:
    """
    Checks whether the match is over.

    Args:
        combatants (Iterable[Combatant]): Every combatant of the match.

    Returns:
        bool: True when at most one faction can still fight. This covers both
        a victory and mutual incapacitation.

    """
    return len(active_factions(combatants)) <= 1


def conscious_counts(combatants: Iterable[Combatant]) -> Counter[Faction]:
    """Returns the number of members still able to fight, per faction."""
    return Counter(c.faction for c in combatants if c.is_active())


def determine_winner(combatants: Iterable[Combatant]) -> str:
    """
    Declares the winner from the current state of the combatants.

    Args:
        combatants (Iterable[Combatant]): Every combatant of the match.

    Returns:
        str: The value of the faction with more members able to fight, or
        "draw" when both sides have the same number.

    """
    counts = conscious_counts(combatants)
    first = counts.get(Faction.FACTION1, 0)
    second = counts.get(Faction.FACTION2, 0)
    if first > second:
        return Faction.FACTION1.value
    if second > first:
        return Faction.FACTION2.value
    return DRAW
