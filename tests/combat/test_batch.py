"""
Tests for batches of matches.
"""

import pytest
from arena.character.main import Character, Skills
from arena.combat import batch as batch_module
from arena.combat.batch import (
    BatchResult,
    calculate_round_wins,
    match_seeds,
    run_batch,
)
from arena.combat.results import MatchResult
from arena.core.config import SimulationConfig
from arena.core.error_handling import ConfigurationError, InvalidInput
from arena.items.weapon import MeleeWeapon, RangedWeapon

FACTIONS = (["alice"], ["bob"])


@pytest.fixture
def roster():
    def make(character_id):
        return Character(
            id=character_id,
            name=character_id.capitalize(),
            skills=Skills(firearms=4, close_combat=3, armor=6),
            weapons=[
                RangedWeapon(
                    name="Pistol",
                    weapon_type="Light Pistol",
                    damage=6,
                    fire_modes=["SA"],
                ),
                MeleeWeapon(name="Knife", damage=3),
            ],
        )

    return {"alice": make("alice"), "bob": make("bob")}


def make_result(winner):
    return MatchResult(winner=winner, rounds=3, details="")


def test_calculate_round_wins():
    """Test that winners are counted per faction, with draws."""
    results = [make_result(w) for w in ("faction1", "faction2", "faction1", "draw")]
    assert calculate_round_wins(results) == {"faction1": 2, "faction2": 1, "draw": 1}
    assert calculate_round_wins([]) == {"faction1": 0, "faction2": 0, "draw": 0}


def test_match_seeds_are_reproducible():
    """Test that the master seed fixes every match seed."""
    assert match_seeds(5, 4) == match_seeds(5, 4)
    assert match_seeds(5, 4) != match_seeds(6, 4)
    assert len(set(match_seeds(5, 50))) == 50


def test_win_rate():
    """Test the share of each outcome among completed matches."""
    result = BatchResult(
        win_counts={"faction1": 3, "faction2": 1, "draw": 0},
        match_results=tuple(make_result("faction1") for _ in range(4)),
    )
    assert result.completed == 4
    assert result.win_rate("faction1") == 0.75
    assert result.win_rate("draw") == 0.0
    assert BatchResult(win_counts={}).win_rate("faction1") == 0.0


def test_batch_counts_every_match(roster):
    """Test that the win counts add up to the completed matches."""
    result = run_batch(roster, FACTIONS, match_count=10, seed=123)
    assert result.completed == 10
    assert sum(result.win_counts.values()) == 10
    assert result.failed_matches == ()
    assert len(result.seeds) == 10


def test_same_seed_same_batch(roster):
    """Test that a batch is replayed exactly by its master seed."""
    first = run_batch(roster, FACTIONS, match_count=5, seed=99)
    second = run_batch(roster, FACTIONS, match_count=5, seed=99)
    assert first.model_dump() == second.model_dump()


def test_workers_do_not_change_results(roster):
    """Test that a threaded batch matches a sequential one."""
    sequential = run_batch(roster, FACTIONS, match_count=8, seed=4, workers=1)
    threaded = run_batch(roster, FACTIONS, match_count=8, seed=4, workers=4)
    assert threaded.model_dump() == sequential.model_dump()


def test_defaults_come_from_the_config(roster):
    """Test that the configuration fills in the missing arguments."""
    config = SimulationConfig(match_count=3, seed=8)
    result = run_batch(roster, FACTIONS, config=config)
    assert result.completed == 3
    assert result.seeds == tuple(match_seeds(8, 3))


def test_failed_match_is_isolated(roster, mocker):
    """Test that a match with invalid input does not stop the batch."""
    real_run_match = batch_module.run_match
    calls = []

    def flaky(*args, **kwargs):
        calls.append(kwargs["roller"])
        if len(calls) == 2:
            raise InvalidInput("broken match", {"reason": "test"})
        return real_run_match(*args, **kwargs)

    mocker.patch.object(batch_module, "run_match", side_effect=flaky)
    result = run_batch(roster, FACTIONS, match_count=4, seed=1)

    assert result.failed_matches == (1,)
    assert result.completed == 3
    assert sum(result.win_counts.values()) == 3


def test_unknown_ids_fail_every_match(roster):
    """Test that an invalid roster is reported per match."""
    result = run_batch(roster, (["alice"], ["nobody"]), match_count=3, seed=1)
    assert result.completed == 0
    assert result.failed_matches == (0, 1, 2)
    assert result.win_rate("faction1") == 0.0


def test_configuration_error_propagates(roster, mocker):
    """Test that a broken rule table aborts the batch."""
    mocker.patch.object(
        batch_module,
        "run_match",
        side_effect=ConfigurationError("missing table", {}),
    )
    with pytest.raises(ConfigurationError):
        run_batch(roster, FACTIONS, match_count=2, seed=1)


def test_negative_match_count_raises(roster):
    """Test that a batch cannot have a negative size."""
    with pytest.raises(InvalidInput):
        run_batch(roster, FACTIONS, match_count=-1)
