"""
Decision module for the arena.

The deterministic choices a combatant makes on its turn: whom to attack,
with which weapon, and how far to move before a melee attack.
"""

from collections.abc import Sequence

from catchery import log_debug

from arena.character.combatant import Combatant
from arena.combat.ranges import get_range_modifier
from arena.core.constants import MELEE_RANGE, is_oponent
from arena.core.error_handling import InvalidInput
from arena.items.weapon import MeleeWeapon, RangedWeapon


def get_active_opponents(
    source: Combatant, combatants: Sequence[Combatant]
) -> list[Combatant]:
    """
    Returns the opponents of a combatant that can still fight.

    Args:
        source (Combatant): The combatant looking for enemies.
        combatants (Sequence[Combatant]): Every combatant of the match.

    Returns:
        list[Combatant]: The alive and conscious opponents, in match order.

    """
    return [
        c for c in combatants if is_oponent(source.faction, c.faction) and c.is_active()
    ]


def select_target(
    source: Combatant, combatants: Sequence[Combatant]
) -> Combatant | None:
    """
    Choose the target of an attack.

    The rule is deterministic: the first opponent in match order that can
    still fight, regardless of distance or wounds.

    Args:
        source (Combatant):
            The combatant about to act.
        combatants (Sequence[Combatant]):
            Every combatant of the match.

    Returns:
        Combatant | None:
            The target, or None if no opponent can fight.

    """
    opponents = get_active_opponents(source, combatants)
    return opponents[0] if opponents else None


def select_best_weapon(
    source: Combatant,
    distance: int,
    melee_range: int = MELEE_RANGE,
) -> MeleeWeapon | RangedWeapon:
    """
    Choose the weapon for an attack at a given distance.

    A melee weapon is preferred when the target is within melee range.
    Otherwise the ranged weapon with the least negative range modifier wins,
    the first listed on ties. Without ranged weapons, any melee weapon is
    used and the combatant will have to close in.

    Args:
        source (Combatant):
            The combatant about to act.
        distance (int):
            Distance to the target, in metres.
        melee_range (int):
            Distance within which melee attacks are possible.

    Returns:
        MeleeWeapon | RangedWeapon:
            The chosen weapon, taken from the combatant's own list.

    Raises:
        InvalidInput:
            If the combatant carries no weapon at all.

    """
    if not source.weapons:
        raise InvalidInput(
            f"{source.name} has no weapon to attack with",
            {"combatant": source.name},
        )

    melee_weapons = source.melee_weapons
    if melee_weapons and distance <= melee_range:
        return melee_weapons[0]

    best_weapon: RangedWeapon | None = None
    best_modifier = 0
    for weapon in source.ranged_weapons:
        modifier = get_range_modifier(
            weapon.weapon_type, distance, source.attributes.strength
        )
        if best_weapon is None or modifier > best_modifier:
            best_weapon = weapon
            best_modifier = modifier
    if best_weapon is not None:
        log_debug(
            f"{source.name} picks {best_weapon.name}",
            {"combatant": source.name, "distance": distance, "modifier": best_modifier},
        )
        return best_weapon

    if melee_weapons:
        return melee_weapons[0]
    return source.weapons[0]


def approach_distance(
    source: Combatant,
    distance: int,
    melee_range: int = MELEE_RANGE,
) -> int:
    """
    Returns how far a combatant should move to close in for a melee attack.

    Args:
        source (Combatant): The combatant about to act.
        distance (int): Distance to the target, in metres.
        melee_range (int): Distance within which melee attacks are possible.

    Returns:
        int: The metres to move, never more than the movement left.

    """
    if distance <= melee_range:
        return 0
    return max(0, min(source.movement_remaining, distance - melee_range))
