"""
Tests for the match state machine.
"""

import pytest
from arena.character.main import Attributes, Character, Skills
from arena.combat.combat_manager import (
    INITIATIVE_RESET_MESSAGE,
    resolve_next_action,
    run_match,
    start_match,
)
from arena.core.config import SimulationConfig
from arena.core.dice import DiceRoller
from arena.core.error_handling import InvalidInput
from arena.items.weapon import MeleeWeapon, RangedWeapon
from arena.tactical.game_map import GridVector


def knife():
    return MeleeWeapon(name="Knife", damage=3)


def pistol(**kwargs):
    return RangedWeapon(
        name="Pistol",
        weapon_type="Heavy Pistol",
        damage=8,
        fire_modes=kwargs.pop("fire_modes", ["SA"]),
        **kwargs,
    )


def make_character(character_id, weapons=None, **attributes):
    return Character(
        id=character_id,
        name=character_id.capitalize(),
        attributes=Attributes(**attributes),
        skills=Skills(firearms=4, close_combat=4, armor=6),
        weapons=weapons if weapons is not None else [pistol()],
    )


@pytest.fixture
def roster():
    return {
        "alice": make_character("alice"),
        "bob": make_character("bob"),
        "carol": make_character("carol"),
        "dave": make_character("dave", []),
    }


@pytest.fixture
def even_roller(mocker):
    """A roller whose every pool comes up as a single six."""
    roller = DiceRoller(seed=0)
    mocker.patch.object(roller, "roll_pool", return_value=[6])
    return roller


def test_start_match_places_factions(roster):
    """Test the starting positions and modifiers of the combatants."""
    state = start_match(
        roster,
        (["alice", "bob"], ["carol"]),
        {"carol": -2},
        initial_distance=15,
        roller=DiceRoller(seed=3),
    )
    positions = {c.id: c.position for c in state.combatants}
    assert positions["alice"] == GridVector(x=0, y=0)
    assert positions["bob"] == GridVector(x=0, y=0)
    assert positions["carol"] == GridVector(x=15, y=0)
    modifiers = {c.id: c.situational_modifier for c in state.combatants}
    assert modifiers == {"alice": 0, "bob": 0, "carol": -2}
    assert state.round_number == 1
    assert not state.is_over


def test_start_match_rolls_and_sorts_initiative(roster, mocker):
    """Test the opening log and the initiative order."""
    roller = DiceRoller(seed=0)
    mocker.patch.object(roller, "roll_pool", side_effect=[[1], [6]])
    state = start_match(roster, (["alice"], ["bob"]), roller=roller)
    assert state.opening_log == [
        "Initial Initiative Rolls:",
        "Alice: 7 (Dice: 1)",
        "Bob: 12 (Dice: 6)",
    ]
    assert [c.name for c in state.combatants] == ["Bob", "Alice"]


def test_start_match_uses_configured_distance(roster):
    """Test that the distance defaults to the configuration."""
    config = SimulationConfig(initial_distance=4)
    state = start_match(roster, (["alice"], ["bob"]), config=config)
    bob = next(c for c in state.combatants if c.id == "bob")
    assert bob.position == GridVector(x=4, y=0)


@pytest.mark.parametrize(
    "factions, distance",
    [
        ((["alice"], []), 10),
        (([], ["bob"]), 10),
        ((["alice"], ["nobody"]), 10),
        ((["alice"], ["bob"]), -1),
        ((["alice"], ["bob"], ["carol"]), 10),
        ((["alice"], ["dave"]), 10),
    ],
)
def test_start_match_rejects_bad_setups(roster, factions, distance):
    """Test that invalid matches are refused before they start."""
    with pytest.raises(InvalidInput):
        start_match(roster, factions, initial_distance=distance)


def test_roster_is_not_modified(roster):
    """Test that a match works on copies of the roster characters."""
    before = {key: c.model_dump() for key, c in roster.items()}
    run_match(roster, (["alice"], ["bob"]), roller=DiceRoller(seed=7))
    assert {key: c.model_dump() for key, c in roster.items()} == before


def test_melee_fighter_closes_in(even_roller):
    """Test that a melee fighter out of range moves instead of attacking."""
    roster = {
        "alice": make_character("alice", [knife()]),
        "bob": make_character("bob", [knife()]),
    }
    state = start_match(
        roster, (["alice"], ["bob"]), initial_distance=10, roller=even_roller
    )
    alice = state.combatants[0]
    assert alice.name == "Alice"

    _, result, ended = resolve_next_action(state)

    assert not ended
    assert alice.position == GridVector(x=6, y=0)
    assert alice.current_initiative == 2
    assert result.acting_character == "Alice"
    assert result.damage_dealt == 0
    assert result.messages == (
        "Alice moved 6 meters towards Bob. New distance: 4 meters.",
        "Alice couldn't reach Bob for attack. "
        "Distance: 4 meters, Max weapon range: 2 meters.",
    )


def test_round_cap_ends_in_a_draw(even_roller):
    """Test that a match nobody can finish stops at the round cap."""
    roster = {
        "alice": make_character("alice", [knife()]),
        "bob": make_character("bob", [knife()]),
    }
    config = SimulationConfig(max_rounds=2)
    state = start_match(
        roster,
        (["alice"], ["bob"]),
        initial_distance=100,
        roller=even_roller,
        config=config,
    )
    ended = False
    results = []
    while not ended:
        state, result, ended = resolve_next_action(state)
        results.append(result)

    assert state.round_number == 2
    assert state.winner == "draw"
    assert results[-1].messages == ("Round limit of 2 reached.",)
    assert any(INITIATIVE_RESET_MESSAGE in r.messages for r in results)
    match = state.to_result()
    assert match.winner == "draw"
    assert match.details == "Combat ended after 2 rounds. The match is a draw."


def test_new_round_restores_initiative(even_roller):
    """Test that the initiative is restored once everybody has acted."""
    roster = {
        "alice": make_character("alice", [knife()]),
        "bob": make_character("bob", [knife()]),
    }
    state = start_match(
        roster, (["alice"], ["bob"]), initial_distance=100, roller=even_roller
    )
    # 12 initiative: two actions each before the round ends.
    for _ in range(4):
        resolve_next_action(state)
    assert all(c.current_initiative < 0 for c in state.combatants)

    _, result, _ = resolve_next_action(state)

    assert state.round_number == 2
    assert result.messages[0] == INITIATIVE_RESET_MESSAGE
    assert state.combatants[0].current_initiative == 2


def test_empty_weapon_is_reloaded(even_roller):
    """Test that an empty weapon costs the action to reload."""
    roster = {
        "alice": make_character("alice", [pistol(ammo=0, ammo_capacity=15)]),
        "bob": make_character("bob"),
    }
    state = start_match(roster, (["alice"], ["bob"]), roller=even_roller)

    _, result, _ = resolve_next_action(state)

    alice = state.combatants[0]
    assert alice.weapons[0].ammo == 15
    assert result.target == ""
    assert result.messages == (
        "Alice's Pistol is out of ammo!",
        "Alice: Pistol reloaded (15 rounds).",
    )
    assert alice.current_initiative == 2
    assert roster["alice"].weapons[0].ammo == 0


def test_short_magazine_drops_fire_mode(mocker):
    """Test that a burst with too few rounds falls back to semi-auto."""
    roller = DiceRoller(seed=0)
    mocker.patch.object(roller, "roll_pool", return_value=[2])
    smg = RangedWeapon(
        name="SMG",
        weapon_type="SMG",
        damage=6,
        fire_modes=["SA", "BF"],
        current_fire_mode="BF",
        ammo=2,
    )
    roster = {
        "alice": make_character("alice", [smg], reaction=5),
        "bob": make_character("bob"),
    }
    state = start_match(roster, (["alice"], ["bob"]), roller=roller)

    _, result, _ = resolve_next_action(state)

    weapon = state.combatants[0].weapons[0]
    assert weapon.fire_mode.value == "SA"
    assert weapon.ammo == 1
    assert result.messages[0] == "SMG switched to Semi-Auto."
    assert result.target == "Bob"


def test_match_ends_when_no_opponent_stands(roster):
    """Test that the match ends once a faction cannot fight."""
    state = start_match(roster, (["alice"], ["bob"]), roller=DiceRoller(seed=1))
    bob = next(c for c in state.combatants if c.id == "bob")
    bob.is_conscious = False

    _, _, ended = resolve_next_action(state)

    assert ended
    assert state.winner == "faction1"
    assert state.to_result().details.endswith("Faction 1 wins.")


def test_resolve_after_the_end_raises(roster):
    """Test that a finished match cannot be played on."""
    state = start_match(roster, (["alice"], ["bob"]), roller=DiceRoller(seed=1))
    state.is_over = True
    with pytest.raises(InvalidInput):
        resolve_next_action(state)


def test_run_match_is_reproducible(roster):
    """Test that the same seed replays the same match."""
    first = run_match(roster, (["alice"], ["bob", "carol"]), roller=DiceRoller(11))
    second = run_match(roster, (["alice"], ["bob", "carol"]), roller=DiceRoller(11))
    assert first.model_dump() == second.model_dump()
    assert first.winner in ("faction1", "faction2", "draw")
    assert 1 <= first.rounds <= 20
    assert first.details.startswith(f"Combat ended after {first.rounds} rounds.")
    assert len(first.round_results) > 0
