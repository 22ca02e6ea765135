"""
Range and modifier tables for the arena.

Static rule data: the four range brackets of every weapon type, the fire mode
modifiers and the recoil computation.
"""

from catchery import log_debug

from arena.character.combatant import Combatant
from arena.core.constants import (
    RANGE_BRACKET_MODIFIERS,
    FireMode,
    WeaponType,
)
from arena.core.error_handling import ConfigurationError, InvalidInput

# Upper bounds, in metres, of the Short, Medium, Long and Extreme brackets.
FIXED_RANGES: dict[WeaponType, tuple[int, int, int, int]] = {
    WeaponType.TASER: (5, 10, 15, 20),
    WeaponType.HOLDOUT_PISTOL: (5, 15, 30, 50),
    WeaponType.LIGHT_PISTOL: (5, 15, 30, 50),
    WeaponType.HEAVY_PISTOL: (5, 20, 40, 60),
    WeaponType.MACHINE_PISTOL: (5, 15, 30, 50),
    WeaponType.SMG: (10, 40, 80, 150),
    WeaponType.ASSAULT_RIFLE: (25, 150, 350, 550),
    WeaponType.SHOTGUN_FLECHETTE: (15, 30, 45, 60),
    WeaponType.SHOTGUN_SLUG: (10, 40, 80, 150),
    WeaponType.SNIPER_RIFLE: (50, 350, 800, 1500),
    WeaponType.LIGHT_MACHINEGUN: (25, 200, 400, 800),
    WeaponType.MEDIUM_HEAVY_MACHINEGUN: (40, 250, 750, 1200),
    WeaponType.ASSAULT_CANNON: (50, 300, 750, 1500),
    WeaponType.GRENADE_LAUNCHER: (50, 100, 150, 500),
    WeaponType.MISSILE_LAUNCHER: (70, 150, 450, 1500),
    WeaponType.LIGHT_CROSSBOW: (6, 24, 60, 120),
    WeaponType.MEDIUM_CROSSBOW: (9, 36, 90, 150),
    WeaponType.HEAVY_CROSSBOW: (15, 45, 120, 180),
}

# Bracket bounds expressed as multiples of the wielder's strength.
STRENGTH_RANGES: dict[WeaponType, tuple[float, float, float, float]] = {
    WeaponType.BOW: (1, 10, 30, 60),
    WeaponType.THROWING_KNIFE: (1, 2, 3, 5),
    WeaponType.STANDARD_GRENADE: (2, 4, 6, 10),
    WeaponType.AERODYNAMIC_GRENADE: (2, 4, 8, 15),
}


def is_strength_scaled(weapon_type: WeaponType) -> bool:
    """Returns True if the brackets of a weapon type depend on strength."""
    return weapon_type in STRENGTH_RANGES


def get_range_brackets(
    weapon_type: WeaponType,
    strength: int | None = None,
) -> tuple[int, int, int, int]:
    """
    Returns the bracket bounds of a weapon type, in metres.

    Args:
        weapon_type (WeaponType): The weapon type.
        strength (int | None): The wielder's strength. Mandatory for bows,
            thrown weapons and grenades.

    Returns:
        tuple[int, int, int, int]: Short, Medium, Long and Extreme bounds.

    Raises:
        InvalidInput: If the type is strength-scaled and strength is missing.
        ConfigurationError: If the type has no table entry.

    """
    if is_strength_scaled(weapon_type):
        if strength is None:
            raise InvalidInput(
                f"Strength is required to compute the range of a {weapon_type.value}",
                {"weapon_type": weapon_type.value},
            )
        multipliers = STRENGTH_RANGES[weapon_type]
        return (
            int(multipliers[0] * strength),
            int(multipliers[1] * strength),
            int(multipliers[2] * strength),
            int(multipliers[3] * strength),
        )
    if weapon_type in FIXED_RANGES:
        return FIXED_RANGES[weapon_type]
    raise ConfigurationError(
        f"No range table entry for weapon type '{weapon_type}'",
        {"weapon_type": str(weapon_type)},
    )


def get_range_modifier(
    weapon_type: WeaponType,
    distance: int,
    strength: int | None = None,
) -> int:
    """
    Returns the dice pool modifier for firing at a given distance.

    Args:
        weapon_type (WeaponType): The weapon type.
        distance (int): Distance to the target, in metres.
        strength (int | None): The wielder's strength.

    Returns:
        int: 0, -1, -3 or -6. Distances past the Extreme bracket clamp to -6.

    """
    brackets = get_range_brackets(weapon_type, strength)
    for bound, modifier in zip(brackets, RANGE_BRACKET_MODIFIERS):
        if distance <= bound:
            return modifier
    log_debug(
        "Target beyond extreme range, clamping modifier",
        {"weapon_type": weapon_type.value, "distance": distance},
    )
    return RANGE_BRACKET_MODIFIERS[-1]


def get_max_range(weapon_type: WeaponType, strength: int | None = None) -> int:
    """Returns the upper bound of the Extreme bracket."""
    return get_range_brackets(weapon_type, strength)[-1]


def get_ideal_range(weapon_type: WeaponType, strength: int | None = None) -> int:
    """Returns the middle of the Short bracket."""
    return get_range_brackets(weapon_type, strength)[0] // 2


def calculate_recoil_penalty(
    cumulative_recoil: int,
    fire_mode: FireMode,
    recoil_compensation: int,
) -> int:
    """
    Returns the recoil penalty of firing one action, as a positive number.

    Args:
        cumulative_recoil (int): Rounds fired beyond the first so far.
        fire_mode (FireMode): The mode of this action.
        recoil_compensation (int): The weapon's recoil compensation.

    Returns:
        int: max(0, cumulative + shots - 1 - compensation).

    """
    return max(0, cumulative_recoil + fire_mode.shots - 1 - recoil_compensation)


def calculate_recoil(
    attacker: Combatant,
    recoil_compensation: int,
    fire_mode: FireMode,
) -> int:
    """
    Computes the recoil penalty of an action and accumulates the recoil.

    The counter grows by the rounds fired beyond the first even when the
    penalty itself is fully compensated.

    Args:
        attacker (Combatant): The shooter; its cumulative_recoil is updated.
        recoil_compensation (int): The weapon's recoil compensation.
        fire_mode (FireMode): The mode of this action.

    Returns:
        int: The penalty, as a positive number to subtract from the pool.

    """
    penalty = calculate_recoil_penalty(
        attacker.cumulative_recoil, fire_mode, recoil_compensation
    )
    attacker.cumulative_recoil += fire_mode.shots - 1
    return penalty
