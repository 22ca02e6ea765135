"""
Combat manager module for the arena.

Runs a match as an explicit state machine: start_match builds the
combatants and rolls initiative, each resolve_next_action call lets exactly
one combatant act, and run_match loops until a side is left standing or the
round cap is reached.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from catchery import log_debug, log_warning

from arena.character.combatant import Combatant
from arena.character.main import Character
from arena.combat.actions import change_fire_mode, move_toward, reload_weapon
from arena.combat.attack import resolve_attack
from arena.combat.damage import check_combat_end, determine_winner
from arena.combat.initiative import (
    decrement_initiative,
    next_actor,
    reset_round,
    roll_initiative,
    sort_by_initiative,
)
from arena.combat.npc_ai import approach_distance, select_best_weapon, select_target
from arena.combat.results import MatchResult, RoundResult
from arena.core.config import SimulationConfig
from arena.core.constants import DRAW, Faction
from arena.core.dice import DiceRoller
from arena.core.error_handling import InvalidInput
from arena.core.utils import format_rolls
from arena.items.weapon import MeleeWeapon, RangedWeapon
from arena.tactical.game_map import GameMap, GridVector
from arena.tactical.pathfinding import OpenGroundPathfinder, Pathfinder

INITIATIVE_RESET_MESSAGE = (
    "Initiative reset: All characters' initiatives have been reset to their "
    "initial values."
)


@dataclass
class MatchState:
    """Everything a match needs between two actions."""

    combatants: list[Combatant]
    roller: DiceRoller
    config: SimulationConfig
    game_map: GameMap | None = None
    pathfinder: Pathfinder = field(default_factory=OpenGroundPathfinder)
    round_number: int = 1
    opening_log: list[str] = field(default_factory=list)
    round_results: list[RoundResult] = field(default_factory=list)
    is_over: bool = False
    winner: str | None = None

    def to_result(self) -> MatchResult:
        """
        Builds the record of the match.

        Returns:
            MatchResult: The winner, the rounds played and every action.

        """
        winner = self.winner or determine_winner(self.combatants)
        if winner == DRAW:
            outcome = "The match is a draw."
        else:
            outcome = f"{Faction(winner).display_name} wins."
        return MatchResult(
            winner=winner,
            rounds=self.round_number,
            round_results=tuple(self.round_results),
            details=f"Combat ended after {self.round_number} rounds. {outcome}",
        )


def _build_combatants(
    roster: Mapping[str, Character] | Sequence[Character],
    factions: Sequence[Sequence[str]],
    modifiers: Mapping[str, int],
    initial_distance: int,
) -> list[Combatant]:
    """Creates the combatants of both factions, validating every id first."""
    if isinstance(roster, Mapping):
        by_id = dict(roster)
    else:
        by_id = {character.id: character for character in roster}

    if len(factions) != 2:
        raise InvalidInput(
            f"A match needs exactly two factions, got {len(factions)}",
            {"factions": len(factions)},
        )
    if initial_distance < 0:
        raise InvalidInput(
            f"Initial distance cannot be negative: {initial_distance}",
            {"initial_distance": initial_distance},
        )
    for faction, members in zip(Faction, factions):
        if not members:
            raise InvalidInput(
                f"{faction.display_name} has no members",
                {"faction": faction.value},
            )
        for character_id in members:
            if character_id not in by_id:
                raise InvalidInput(
                    f"Unknown character id '{character_id}' in {faction.display_name}",
                    {"faction": faction.value, "character_id": character_id},
                )
            if not by_id[character_id].weapons:
                raise InvalidInput(
                    f"{by_id[character_id].name} has no weapon to fight with",
                    {"faction": faction.value, "character_id": character_id},
                )

    origins = {
        Faction.FACTION1: GridVector(x=0, y=0),
        Faction.FACTION2: GridVector(x=initial_distance, y=0),
    }
    return [
        Combatant(
            by_id[character_id],
            faction,
            position=origins[faction],
            situational_modifier=modifiers.get(character_id, 0),
        )
        for faction, members in zip(Faction, factions)
        for character_id in members
    ]


def start_match(
    roster: Mapping[str, Character] | Sequence[Character],
    factions: Sequence[Sequence[str]],
    modifiers: Mapping[str, int] | None = None,
    initial_distance: int | None = None,
    roller: DiceRoller | None = None,
    game_map: GameMap | None = None,
    pathfinder: Pathfinder | None = None,
    config: SimulationConfig | None = None,
) -> MatchState:
    """
    Sets up a match: builds the combatants and rolls their initiative.

    Args:
        roster (Mapping[str, Character] | Sequence[Character]):
            The available characters. They are copied, never modified.
        factions (Sequence[Sequence[str]]):
            The character ids of faction 1 and faction 2.
        modifiers (Mapping[str, int] | None):
            Situational modifier per character id. Missing ids get 0.
        initial_distance (int | None):
            Metres between the two factions. Defaults to the configuration.
        roller (DiceRoller | None):
            The random source of the whole match.
        game_map (GameMap | None):
            The battle map, if any.
        pathfinder (Pathfinder | None):
            Movement legality oracle. Open ground is assumed when None.
        config (SimulationConfig | None):
            Round cap and melee range.

    Returns:
        MatchState: The match, ready for its first action.

    Raises:
        InvalidInput:
            If a faction is empty, an id is unknown, a member carries no
            weapon or the distance is negative.

    """
    config = config or SimulationConfig()
    if initial_distance is None:
        initial_distance = config.initial_distance
    combatants = _build_combatants(roster, factions, modifiers or {}, initial_distance)
    roller = roller or DiceRoller()

    opening_log = ["Initial Initiative Rolls:"]
    for combatant in combatants:
        total, rolls = roll_initiative(combatant, roller)
        opening_log.append(f"{combatant.name}: {total} (Dice: {format_rolls(rolls)})")

    state = MatchState(
        combatants=sort_by_initiative(combatants),
        roller=roller,
        config=config,
        game_map=game_map,
        pathfinder=pathfinder or OpenGroundPathfinder(),
        opening_log=opening_log,
    )
    log_debug(
        "Match started",
        {"combatants": [c.name for c in state.combatants], "distance": initial_distance},
    )
    return state


def _end_match(state: MatchState) -> None:
    state.is_over = True
    state.winner = determine_winner(state.combatants)
    log_debug(
        "Match over",
        {"winner": state.winner, "rounds": state.round_number},
    )


def _prepare_ranged_weapon(
    actor: Combatant, weapon: RangedWeapon, messages: list[str]
) -> bool:
    """
    Makes sure a ranged weapon can fire this action.

    Returns:
        bool: True if the weapon can fire, False if the action was spent
        reloading.

    """
    if weapon.has_ammo_for(weapon.fire_mode):
        return True
    if weapon.ammo:
        # Drop to a mode the remaining rounds can still feed.
        for mode in weapon.fire_modes:
            if weapon.has_ammo_for(mode):
                messages.append(change_fire_mode(weapon, mode))
                return True
    log_warning(
        f"{actor.name}'s {weapon.name} is out of ammo",
        {"combatant": actor.name, "weapon": weapon.name, "ammo": weapon.ammo},
    )
    messages.append(f"{actor.name}'s {weapon.name} is out of ammo!")
    messages.append(f"{actor.name}: {reload_weapon(weapon)}")
    return False


def resolve_next_action(state: MatchState) -> tuple[MatchState, RoundResult, bool]:
    """
    Lets the next combatant in initiative order take one action.

    Starts a new round when nobody has initiative left, and ends the match
    when the round cap is reached.

    Args:
        state (MatchState): The running match. It is updated in place.

    Returns:
        tuple[MatchState, RoundResult, bool]: The match, the record of the
        action and whether the match is over.

    Raises:
        InvalidInput: If the match is already over.

    """
    if state.is_over:
        raise InvalidInput(
            "The match is already over",
            {"winner": state.winner, "rounds": state.round_number},
        )

    messages: list[str] = []

    # --- Pick the actor ---

    actor = next_actor(state.combatants)
    if actor is None:
        if state.round_number >= state.config.max_rounds:
            _end_match(state)
            result = RoundResult(
                messages=(f"Round limit of {state.config.max_rounds} reached.",)
            )
            state.round_results.append(result)
            return state, result, True
        reset_round(state.combatants)
        state.round_number += 1
        messages.append(INITIATIVE_RESET_MESSAGE)
        actor = next_actor(state.combatants)
        if actor is None:
            _end_match(state)
            result = RoundResult(messages=tuple(messages))
            state.round_results.append(result)
            return state, result, True

    target = select_target(actor, state.combatants)
    if target is None:
        _end_match(state)
        result = RoundResult(acting_character=actor.name, messages=tuple(messages))
        state.round_results.append(result)
        return state, result, True

    # --- Pick the weapon and close in ---

    melee_range = state.config.melee_range
    distance = actor.position.distance_to(target.position)
    weapon = select_best_weapon(actor, distance, melee_range)

    if isinstance(weapon, MeleeWeapon) and distance > melee_range:
        moved = move_toward(
            actor,
            target.position,
            approach_distance(actor, distance, melee_range),
            state.game_map,
            state.pathfinder,
        )
        distance = actor.position.distance_to(target.position)
        if moved:
            messages.append(
                f"{actor.name} moved {moved} meters towards {target.name}. "
                f"New distance: {distance} meters."
            )

    # --- Act ---

    if isinstance(weapon, MeleeWeapon) and distance > melee_range:
        messages.append(
            f"{actor.name} couldn't reach {target.name} for attack. "
            f"Distance: {distance} meters, Max weapon range: {melee_range} meters."
        )
        result = RoundResult(
            acting_character=actor.name,
            target=target.name,
            weapon=weapon.name,
            initiative_phase=actor.current_initiative,
            messages=tuple(messages),
        )
    elif isinstance(weapon, RangedWeapon) and not _prepare_ranged_weapon(
        actor, weapon, messages
    ):
        result = RoundResult(
            acting_character=actor.name,
            weapon=weapon.name,
            initiative_phase=actor.current_initiative,
            messages=tuple(messages),
        )
    else:
        fire_mode = weapon.fire_mode if isinstance(weapon, RangedWeapon) else None
        attack = resolve_attack(
            actor,
            target,
            weapon,
            fire_mode=fire_mode,
            distance=distance,
            game_map=state.game_map,
            roller=state.roller,
        )
        if isinstance(weapon, RangedWeapon) and fire_mode is not None:
            weapon.expend_ammo(fire_mode)
        result = attack.model_copy(
            update={"messages": tuple(messages) + attack.messages}
        )

    decrement_initiative(actor)
    state.round_results.append(result)

    if check_combat_end(state.combatants):
        _end_match(state)
    return state, result, state.is_over


def run_match(
    roster: Mapping[str, Character] | Sequence[Character],
    factions: Sequence[Sequence[str]],
    modifiers: Mapping[str, int] | None = None,
    initial_distance: int | None = None,
    roller: DiceRoller | None = None,
    game_map: GameMap | None = None,
    pathfinder: Pathfinder | None = None,
    config: SimulationConfig | None = None,
) -> MatchResult:
    """
    Plays a whole match.

    Takes the same arguments as start_match.

    Returns:
        MatchResult: The record of the match.

    """
    state = start_match(
        roster,
        factions,
        modifiers,
        initial_distance,
        roller=roller,
        game_map=game_map,
        pathfinder=pathfinder,
        config=config,
    )
    ended = check_combat_end(state.combatants)
    while not ended:
        state, _, ended = resolve_next_action(state)
    return state.to_result()
