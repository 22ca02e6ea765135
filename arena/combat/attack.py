"""
Attack resolution module for the arena.

Resolves one attack as an opposed test in five stages: pool assembly, attack
roll against the Physical Limit, defense roll, damage assembly, and the
damage resistance test. Every intermediate quantity is narrated in the
returned RoundResult.
"""

from catchery import log_debug

from arena.character.combatant import Combatant
from arena.combat.damage import apply_damage, check_status, wound_modifier
from arena.combat.ranges import calculate_recoil, get_range_modifier
from arena.combat.results import RoundResult
from arena.core.constants import RUNNING_DEFENSE_PENALTY, DamageType, FireMode
from arena.core.dice import DiceRoller, PoolResult, roll_and_evaluate
from arena.core.error_handling import InvalidInput, validate_required
from arena.core.utils import format_rolls
from arena.items.weapon import MeleeWeapon, RangedWeapon
from arena.tactical.game_map import GameMap


def _describe_pool(label: str, parts: list[tuple[str, int]], total: int) -> str:
    """
    Formats a pool breakdown for narration.

    Args:
        label (str): The name of the test.
        parts (list[tuple[str, int]]): The signed components of the pool.
        total (int): The pool after flooring.

    Returns:
        str: A line like "Attack pool: agility 5, firearms 4, range -1 = 8 dice".

    """
    first, *rest = parts
    items = [f"{first[0]} {first[1]}"]
    items.extend(f"{name} {value:+d}" for name, value in rest if value != 0)
    return f"{label} pool: {', '.join(items)} = {total} dice"


def _describe_roll(label: str, result: PoolResult) -> str:
    return f"{label} rolls: {format_rolls(result.rolls)} ({result.hits} hits)"


def _validate_attack(
    attacker: Combatant | None,
    defender: Combatant | None,
    weapon: MeleeWeapon | RangedWeapon | None,
    fire_mode: FireMode | None,
) -> None:
    """Checks the inputs of an attack before any state is touched."""
    validate_required(attacker, "attacker", {"action": "attack"})
    validate_required(defender, "defender", {"action": "attack"})
    validate_required(weapon, "weapon", {"action": "attack"})
    if isinstance(weapon, RangedWeapon):
        if fire_mode is not None and fire_mode not in weapon.fire_modes:
            raise InvalidInput(
                f"{weapon.name} cannot fire in {fire_mode.display_name} mode",
                {"weapon": weapon.name, "fire_mode": fire_mode.value},
            )
    elif fire_mode is not None:
        raise InvalidInput(
            f"{weapon.name} is a melee weapon and has no fire modes",
            {"weapon": weapon.name, "fire_mode": fire_mode.value},
        )


def resolve_attack(
    attacker: Combatant,
    defender: Combatant,
    weapon: MeleeWeapon | RangedWeapon,
    fire_mode: FireMode | None = None,
    distance: int = 0,
    game_map: GameMap | None = None,
    roller: DiceRoller | None = None,
) -> RoundResult:
    """
    Resolves one attack of an attacker against a defender.

    Args:
        attacker (Combatant): The combatant making the attack.
        defender (Combatant): The combatant being attacked.
        weapon (MeleeWeapon | RangedWeapon): The weapon used. It is copied,
            the caller's instance is never modified.
        fire_mode (FireMode | None): The fire mode of a ranged attack.
            Defaults to the weapon's selected mode.
        distance (int): Distance between the two combatants, in metres.
        game_map (GameMap | None): The map, used for the cover bonus.
        roller (DiceRoller | None): The random source.

    Returns:
        RoundResult: The record of the attack.

    Raises:
        InvalidInput: If a participant or the weapon is missing, or the fire
            mode is not offered by the weapon.
        ConfigurationError: If the weapon type has no range table entry.

    """
    _validate_attack(attacker, defender, weapon, fire_mode)
    roller = roller or DiceRoller()
    weapon = weapon.model_copy(deep=True)
    is_ranged = isinstance(weapon, RangedWeapon)

    messages: list[str] = []
    record: dict = {
        "acting_character": attacker.name,
        "target": defender.name,
        "weapon": weapon.name,
        "initiative_phase": attacker.current_initiative,
    }

    running_penalty = RUNNING_DEFENSE_PENALTY if defender.is_running else 0

    # --- Stage 1: attack pool ---

    if isinstance(weapon, RangedWeapon):
        mode = fire_mode or weapon.fire_mode
        # The range lookup comes first: it is the only step that can fail.
        range_modifier = get_range_modifier(
            weapon.weapon_type, distance, attacker.attributes.strength
        )
        recoil_penalty = calculate_recoil(attacker, weapon.recoil_compensation, mode)
        parts = [
            ("agility", attacker.attributes.agility),
            ("firearms", attacker.skills.firearms),
            ("range", range_modifier),
            ("recoil", -recoil_penalty),
        ]
        messages.append(
            f"{attacker.name} fires {weapon.name} ({mode.display_name}) at "
            f"{defender.name} from {distance} m."
        )
    else:
        mode = None
        reach = weapon.reach - defender.best_reach
        parts = [
            ("agility", attacker.attributes.agility),
            ("close combat", attacker.skills.close_combat),
            ("reach", reach),
        ]
        messages.append(f"{attacker.name} attacks {defender.name} with {weapon.name}.")

    parts += [
        ("wounds", -wound_modifier(attacker)),
        ("situational", attacker.situational_modifier),
        ("target running", -running_penalty),
    ]
    attack_pool = max(1, sum(value for _, value in parts))
    messages.append(_describe_pool("Attack", parts, attack_pool))
    log_debug(
        f"{attacker.name} attacks {defender.name}",
        {
            "attacker": attacker.name,
            "defender": defender.name,
            "weapon": weapon.name,
            "pool": attack_pool,
        },
    )

    # --- Stage 2: attack roll and limit ---

    attack = roll_and_evaluate(attack_pool, roller)
    messages.append(_describe_roll("Attack", attack))
    record.update(
        attack_rolls=attack.rolls,
        glitch=attack.is_glitch,
        critical_glitch=attack.is_critical_glitch,
    )

    if attack.is_critical_glitch:
        backlash = roller.d6()
        messages.append(
            f"Critical glitch! {attacker.name} suffers {backlash} stun damage."
        )
        apply_damage(attacker, backlash, DamageType.STUN)
        return RoundResult(
            **record,
            messages=tuple(messages),
            status_changes=tuple(check_status(attacker)),
        )
    if attack.is_glitch:
        messages.append(f"Glitch! {attacker.name}'s attack fails.")
        return RoundResult(**record, messages=tuple(messages))

    limit = attacker.physical_limit
    attacker_hits = min(attack.hits, limit)
    if attacker_hits < attack.hits:
        messages.append(
            f"Hits limited from {attack.hits} to {attacker_hits} by Physical Limit {limit}."
        )
    record["attacker_hits"] = attacker_hits

    # --- Stage 3: defense roll ---

    cover_bonus = 0
    if (
        game_map is not None
        and defender.is_taking_cover
        and not defender.moved_since_cover
    ):
        cover_bonus = game_map.cover_bonus_between(
            attacker.position, defender.position, defender.cover_cells
        )
    defense_parts = [
        ("reaction + intuition", defender.attributes.reaction + defender.attributes.intuition),
        ("fire mode", mode.defense_modifier if mode is not None else 0),
        ("wounds", -wound_modifier(defender)),
        ("situational", defender.situational_modifier),
        ("cover", cover_bonus),
    ]
    defense_pool = max(1, sum(value for _, value in defense_parts))
    messages.append(_describe_pool("Defense", defense_parts, defense_pool))

    defense = roll_and_evaluate(defense_pool, roller)
    messages.append(_describe_roll("Defense", defense))
    record.update(defense_rolls=defense.rolls, defender_hits=defense.hits)

    net_hits = attacker_hits - defense.hits
    if net_hits <= 0:
        messages.append(f"{defender.name} avoids the attack.")
        return RoundResult(**record, messages=tuple(messages))
    messages.append(f"Net hits: {net_hits}.")

    # --- Stage 4: damage ---

    raw_damage = weapon.damage + net_hits
    modified_armor = defender.skills.armor + weapon.ap
    messages.append(
        f"Damage: {weapon.damage}{weapon.damage_type.value} + {net_hits} net hits "
        f"= {raw_damage}{weapon.damage_type.value}."
    )
    messages.append(
        f"Armor: {defender.skills.armor} {weapon.ap:+d} AP = {modified_armor}."
    )

    # --- Stage 5: resistance and application ---

    resistance_parts = [
        ("body", defender.attributes.body),
        ("armor", max(modified_armor, 0)),
        ("situational", defender.situational_modifier),
    ]
    # Only the ranged path penalises resistance with the defender's wounds.
    if is_ranged:
        resistance_parts.append(("wounds", -wound_modifier(defender)))
    resistance_pool = max(1, sum(value for _, value in resistance_parts))
    messages.append(_describe_pool("Resistance", resistance_parts, resistance_pool))

    resistance = roll_and_evaluate(resistance_pool, roller)
    messages.append(_describe_roll("Resistance", resistance))

    applied = max(raw_damage - resistance.hits, 0)
    apply_damage(defender, applied, weapon.damage_type)
    attacker.total_damage_dealt += applied
    if applied > 0:
        messages.append(
            f"{defender.name} takes {applied}{weapon.damage_type.value} damage."
        )
    else:
        messages.append("No damage penetrated armor.")

    return RoundResult(
        **record,
        resistance_rolls=resistance.rolls,
        resistance_hits=resistance.hits,
        damage_dealt=applied,
        messages=tuple(messages),
        status_changes=tuple(check_status(defender)),
    )
