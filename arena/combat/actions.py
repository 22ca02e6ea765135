"""
Actions module for the arena.

The free and simple actions a combatant can take besides attacking: taking
cover, running and sprinting, switching fire modes, reloading and moving.
"""

from catchery import log_debug, log_warning

from arena.character.combatant import Combatant
from arena.core.constants import FireMode
from arena.core.dice import DiceRoller, roll_and_evaluate
from arena.core.error_handling import InvalidInput
from arena.items.weapon import MeleeWeapon, RangedWeapon
from arena.tactical.game_map import GameMap, GridVector
from arena.tactical.pathfinding import OpenGroundPathfinder, Pathfinder


def take_cover(combatant: Combatant, game_map: GameMap) -> str:
    """
    Puts a combatant behind the cover cells around it.

    Args:
        combatant (Combatant): The combatant taking cover.
        game_map (GameMap): The battle map.

    Returns:
        str: A narration line.

    """
    cells = game_map.adjacent_cover(combatant.position)
    if not cells:
        return f"{combatant.name} finds no cover at {combatant.position}."
    combatant.is_taking_cover = True
    combatant.cover_cells = cells
    combatant.moved_since_cover = False
    return f"{combatant.name} takes cover behind {len(cells)} cell(s)."


def start_running(combatant: Combatant) -> str:
    """
    Makes a combatant run, doubling the movement left this round.

    Args:
        combatant (Combatant): The combatant starting to run.

    Returns:
        str: A narration line.

    Raises:
        InvalidInput: If the combatant is already running.

    """
    if combatant.is_running:
        raise InvalidInput(
            f"{combatant.name} is already running",
            {"combatant": combatant.name},
        )
    combatant.is_running = True
    combatant.movement_remaining *= 2
    return f"{combatant.name} starts running ({combatant.movement_remaining} m left)."


def sprint(combatant: Combatant, roller: DiceRoller | None = None) -> tuple[int, str]:
    """
    Rolls a sprint test and adds the extra metres to the movement left.

    Args:
        combatant (Combatant): The sprinting combatant.
        roller (DiceRoller | None): The random source.

    Returns:
        tuple[int, str]: The extra metres and a narration line.

    """
    roller = roller or DiceRoller()
    pool = combatant.skills.running + combatant.attributes.strength
    result = roll_and_evaluate(pool, roller)
    extra = result.hits * combatant.metatype.sprint_metres_per_hit
    combatant.movement_remaining += extra
    combatant.is_sprinting = True
    return extra, (
        f"{combatant.name} sprints: {result.hits} hits, +{extra} m "
        f"({combatant.movement_remaining} m left)."
    )


def change_fire_mode(weapon: MeleeWeapon | RangedWeapon, fire_mode: FireMode) -> str:
    """
    Selects another fire mode on a ranged weapon.

    Args:
        weapon (MeleeWeapon | RangedWeapon): The weapon to switch.
        fire_mode (FireMode): The new mode.

    Returns:
        str: A narration line.

    Raises:
        InvalidInput: If the weapon is melee or does not offer the mode.

    """
    if not isinstance(weapon, RangedWeapon):
        raise InvalidInput(
            f"{weapon.name} has no fire modes",
            {"weapon": weapon.name},
        )
    if fire_mode not in weapon.fire_modes:
        raise InvalidInput(
            f"{weapon.name} cannot fire in {fire_mode.display_name} mode",
            {"weapon": weapon.name, "fire_mode": fire_mode.value},
        )
    weapon.current_fire_mode = fire_mode
    return f"{weapon.name} switched to {fire_mode.display_name}."


def reload_weapon(weapon: RangedWeapon) -> str:
    """
    Refills a ranged weapon to its capacity.

    Args:
        weapon (RangedWeapon): The weapon to reload.

    Returns:
        str: A narration line.

    """
    if weapon.ammo_capacity is None:
        return f"{weapon.name} does not use tracked ammunition."
    weapon.ammo = weapon.ammo_capacity
    return f"{weapon.name} reloaded ({weapon.ammo} rounds)."


def move_toward(
    combatant: Combatant,
    destination: GridVector,
    max_distance: int,
    game_map: GameMap | None = None,
    pathfinder: Pathfinder | None = None,
) -> int:
    """
    Moves a combatant along the straight line toward a destination.

    The combatant stops at the farthest cell of the line that the
    path-finder can reach within the allowance. Moving breaks cover.

    Args:
        combatant (Combatant): The moving combatant.
        destination (GridVector): Where the combatant is heading.
        max_distance (int): The metres the combatant may move now.
        game_map (GameMap | None): The battle map, for blocked cells.
        pathfinder (Pathfinder | None): The path-finder answering legality
            queries. Open ground is assumed when None.

    Returns:
        int: The metres actually moved.

    """
    pathfinder = pathfinder or OpenGroundPathfinder()
    blocked = game_map.blocked_cells() if game_map is not None else set()
    budget = min(max_distance, combatant.movement_remaining)
    line = combatant.position.line_to(destination)
    start = combatant.position

    # Walk back from the farthest cell the allowance could reach.
    for cell in reversed(line[1 : budget + 1]):
        if game_map is not None and not game_map.in_bounds(cell):
            continue
        length = pathfinder.shortest_path_length(start, cell, blocked)
        if length is None or length > budget:
            continue
        combatant.position = cell
        combatant.movement_remaining -= length
        if combatant.is_taking_cover:
            combatant.moved_since_cover = True
        log_debug(
            f"{combatant.name} moves {length} m to {cell}",
            {"combatant": combatant.name, "from": str(start), "to": str(cell)},
        )
        return length

    if budget > 0 and len(line) > 1:
        log_warning(
            f"{combatant.name} cannot move toward {destination}",
            {"combatant": combatant.name, "position": str(start), "budget": budget},
        )
    return 0
