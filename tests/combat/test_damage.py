"""
Tests for damage application, status changes and the end of a match.
"""

import pytest
from arena.character.combatant import Combatant
from arena.character.main import Attributes, Character
from arena.combat.damage import (
    apply_damage,
    check_combat_end,
    check_status,
    conscious_counts,
    determine_winner,
    wound_modifier,
)
from arena.core.constants import DamageType, Faction
from arena.core.error_handling import InvalidInput


def make_combatant(name="Runner", faction=Faction.FACTION1, body=4, willpower=4):
    character = Character(
        id=name.lower(),
        name=name,
        attributes=Attributes(body=body, willpower=willpower),
    )
    return Combatant(character, faction)


@pytest.fixture
def runner():
    return make_combatant()


def test_zero_damage_changes_nothing(runner):
    """Test that applying no damage leaves every flag untouched."""
    apply_damage(runner, 0, DamageType.PHYSICAL)
    apply_damage(runner, 0, DamageType.STUN)
    assert runner.physical_damage == 0
    assert runner.stun_damage == 0
    assert runner.is_alive and runner.is_conscious


def test_zero_damage_does_not_revive(runner):
    """Test that a no-op call never brings an unconscious combatant back."""
    apply_damage(runner, runner.max_stun, DamageType.STUN)
    assert not runner.is_conscious
    apply_damage(runner, 0, DamageType.PHYSICAL)
    assert not runner.is_conscious


def test_negative_damage_raises(runner):
    """Test that negative damage is rejected before any change."""
    with pytest.raises(InvalidInput):
        apply_damage(runner, -1, DamageType.PHYSICAL)
    assert runner.physical_damage == 0


def test_stun_overflow_becomes_physical():
    """Test that stun beyond the monitor overflows into physical damage."""
    runner = make_combatant(willpower=4)
    assert runner.max_stun == 10
    apply_damage(runner, 12, DamageType.STUN)
    assert runner.stun_damage == 10
    assert runner.physical_damage == 2
    assert runner.is_alive
    assert not runner.is_conscious


def test_full_stun_monitor_knocks_out(runner):
    """Test that a full stun monitor means unconscious but alive."""
    apply_damage(runner, runner.max_stun, DamageType.STUN)
    assert runner.is_alive
    assert not runner.is_conscious


def test_full_physical_monitor_is_not_death(runner):
    """Test that death needs physical damage beyond the monitor."""
    apply_damage(runner, runner.max_physical, DamageType.PHYSICAL)
    assert runner.is_alive
    apply_damage(runner, 1, DamageType.PHYSICAL)
    assert not runner.is_alive
    assert not runner.is_conscious


@pytest.mark.parametrize("stun", [0, 4, 9, 10])
def test_physical_damage_is_monotonic(stun):
    """Test that more physical damage never improves the status flags."""
    runner = make_combatant()
    apply_damage(runner, stun, DamageType.STUN)
    previous = (runner.is_alive, runner.is_conscious)
    for _ in range(runner.max_physical + 3):
        apply_damage(runner, 1, DamageType.PHYSICAL)
        current = (runner.is_alive, runner.is_conscious)
        assert current[0] <= previous[0]
        assert current[1] <= previous[1]
        previous = current
    assert runner.stun_damage == stun


def test_wound_modifier():
    """Test the wound modifier of both monitors."""
    runner = make_combatant(body=8, willpower=8)
    runner.physical_damage = 7
    runner.stun_damage = 5
    assert wound_modifier(runner) == 3


def test_check_status_reports_changes_once(runner):
    """Test that status notices describe only what changed since last time."""
    apply_damage(runner, 4, DamageType.PHYSICAL)
    changes = check_status(runner)
    assert "Runner took 4 physical damage." in changes
    assert "Runner's wound modifier is now -1." in changes
    assert check_status(runner) == []


def test_check_status_reports_knockout_and_death(runner):
    """Test the unconscious and death notices."""
    apply_damage(runner, runner.max_stun, DamageType.STUN)
    assert "Runner has been knocked unconscious!" in check_status(runner)
    apply_damage(runner, runner.max_physical + 1, DamageType.PHYSICAL)
    assert "Runner has died!" in check_status(runner)


def test_combat_end_one_side_standing():
    """Test that a match ends when only one faction can fight."""
    a1 = make_combatant("A1", Faction.FACTION1)
    b1 = make_combatant("B1", Faction.FACTION2)
    b2 = make_combatant("B2", Faction.FACTION2)
    b1.is_conscious = False
    b2.is_alive = b2.is_conscious = False
    combatants = [a1, b1, b2]
    assert check_combat_end(combatants)
    assert determine_winner(combatants) == "faction1"


def test_combat_end_nobody_standing():
    """Test that mutual incapacitation ends the match in a draw."""
    a1 = make_combatant("A1", Faction.FACTION1)
    b1 = make_combatant("B1", Faction.FACTION2)
    a1.is_conscious = b1.is_conscious = False
    assert check_combat_end([a1, b1])
    assert determine_winner([a1, b1]) == "draw"


def test_combat_continues_while_both_sides_fight():
    """Test that the match goes on with both factions standing."""
    combatants = [
        make_combatant("A1", Faction.FACTION1),
        make_combatant("B1", Faction.FACTION2),
    ]
    assert not check_combat_end(combatants)
    assert determine_winner(combatants) == "draw"


def test_winner_by_numbers():
    """Test that the side with more members standing wins a called match."""
    combatants = [
        make_combatant("A1", Faction.FACTION1),
        make_combatant("B1", Faction.FACTION2),
        make_combatant("B2", Faction.FACTION2),
    ]
    assert conscious_counts(combatants) == {Faction.FACTION1: 1, Faction.FACTION2: 2}
    assert determine_winner(combatants) == "faction2"
