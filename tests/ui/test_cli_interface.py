"""
Tests for the interactive match stepper.
"""

import pytest
from arena.character.main import Character, Skills
from arena.combat.combat_manager import start_match
from arena.core.constants import FireMode
from arena.core.dice import DiceRoller
from arena.items.weapon import RangedWeapon
from arena.ui.cli_interface import MatchStepper


@pytest.fixture
def state():
    def make(character_id):
        return Character(
            id=character_id,
            name=character_id.capitalize(),
            skills=Skills(firearms=5, armor=4),
            weapons=[
                RangedWeapon(
                    name="SMG",
                    weapon_type="SMG",
                    damage=6,
                    fire_modes=["SA", "BF"],
                )
            ],
        )

    roster = {"alice": make("alice"), "bob": make("bob")}
    return start_match(roster, (["alice"], ["bob"]), roller=DiceRoller(seed=5))


def test_get_digit_choice():
    """Test the parsing of single digit answers."""
    assert MatchStepper.get_digit_choice("3") == 3
    assert MatchStepper.get_digit_choice("12") == -1
    assert MatchStepper.get_digit_choice("x") == -1
    assert MatchStepper.get_digit_choice(None) == -1


def test_quit_leaves_the_match_running(state, mocker):
    """Test that quitting stops the stepper without ending the match."""
    session = mocker.Mock()
    session.prompt.return_value = "q"
    MatchStepper(state, session=session).run()
    assert not state.is_over
    assert state.round_results == []


def test_next_plays_one_action(state, mocker):
    """Test that the next command resolves exactly one action."""
    session = mocker.Mock()
    session.prompt.side_effect = ["n", "q"]
    MatchStepper(state, session=session).run()
    assert len(state.round_results) == 1


def test_run_to_the_end(state, mocker):
    """Test that the end command plays the match out."""
    session = mocker.Mock()
    session.prompt.side_effect = ["e"]
    MatchStepper(state, session=session).run()
    assert state.is_over
    assert state.winner in ("faction1", "faction2", "draw")


def test_change_fire_mode_command(state, mocker):
    """Test switching the fire mode of the next combatant."""
    session = mocker.Mock()
    session.prompt.side_effect = ["f", "2", "q"]
    stepper = MatchStepper(state, session=session)
    actor = state.combatants[0]
    stepper.run()
    assert actor.weapons[0].fire_mode == FireMode.BF
    assert state.round_results == []


def test_unknown_commands_are_asked_again(state, mocker):
    """Test that only listed commands are accepted."""
    session = mocker.Mock()
    session.prompt.side_effect = ["x", "", "r", "q"]
    MatchStepper(state, session=session).run()
    assert state.combatants[0].is_running
    assert session.prompt.call_count == 4


def test_cover_without_map(state, mocker, capsys):
    """Test that cover cannot be taken without a map."""
    session = mocker.Mock()
    session.prompt.side_effect = ["c", "q"]
    MatchStepper(state, session=session).run()
    assert "no map" in capsys.readouterr().out
    assert not state.combatants[0].is_taking_cover
