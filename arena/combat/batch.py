"""
Batch module for the arena.

Plays the same match many times, each with its own seeded dice roller, and
tabulates the outcomes. Matches are independent, so they can be spread over
a thread pool.
"""

import random
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor

from catchery import log_debug
from pydantic import BaseModel, ConfigDict, Field

from arena.character.main import Character
from arena.combat.combat_manager import run_match
from arena.combat.results import MatchResult
from arena.core.config import SimulationConfig
from arena.core.constants import DRAW, Faction
from arena.core.dice import DiceRoller
from arena.core.error_handling import ErrorHandler, ErrorSeverity, InvalidInput
from arena.tactical.game_map import GameMap
from arena.tactical.pathfinding import Pathfinder


class BatchResult(BaseModel):
    """Aggregate outcome of a batch of matches."""

    model_config = ConfigDict(frozen=True)

    win_counts: dict[str, int] = Field(
        description="Number of matches won by each faction, and draws",
    )
    match_results: tuple[MatchResult, ...] = Field(
        default=(),
        description="Records of the matches that completed, in match order",
    )
    failed_matches: tuple[int, ...] = Field(
        default=(),
        description="Indices of the matches that could not be played",
    )
    seeds: tuple[int, ...] = Field(
        default=(),
        description="The seed of every match, in match order",
    )

    @property
    def completed(self) -> int:
        return len(self.match_results)

    def win_rate(self, outcome: str) -> float:
        """
        Returns the share of completed matches with a given outcome.

        Args:
            outcome (str): "faction1", "faction2" or "draw".

        Returns:
            float: A value in [0, 1]; 0 when no match completed.

        """
        if not self.match_results:
            return 0.0
        return self.win_counts.get(outcome, 0) / len(self.match_results)


def calculate_round_wins(results: Iterable[MatchResult]) -> dict[str, int]:
    """
    Counts the winners of a sequence of matches.

    Args:
        results (Iterable[MatchResult]): The match records.

    Returns:
        dict[str, int]: Wins per faction and the number of draws.

    """
    counts = {Faction.FACTION1.value: 0, Faction.FACTION2.value: 0, DRAW: 0}
    for result in results:
        counts[result.winner] = counts.get(result.winner, 0) + 1
    return counts


def match_seeds(seed: int | None, match_count: int) -> list[int]:
    """
    Draws the per-match seeds of a batch from a master generator.

    Args:
        seed (int | None): The master seed. None draws from system entropy.
        match_count (int): The number of matches.

    Returns:
        list[int]: One seed per match.

    """
    master = random.Random(seed)
    return [master.getrandbits(64) for _ in range(match_count)]


def run_batch(
    roster: Mapping[str, Character] | Sequence[Character],
    factions: Sequence[Sequence[str]],
    modifiers: Mapping[str, int] | None = None,
    initial_distance: int | None = None,
    match_count: int | None = None,
    seed: int | None = None,
    workers: int | None = None,
    game_map: GameMap | None = None,
    pathfinder: Pathfinder | None = None,
    config: SimulationConfig | None = None,
) -> BatchResult:
    """
    Plays a batch of independent matches.

    Args:
        roster (Mapping[str, Character] | Sequence[Character]):
            The available characters.
        factions (Sequence[Sequence[str]]):
            The character ids of faction 1 and faction 2.
        modifiers (Mapping[str, int] | None):
            Situational modifier per character id.
        initial_distance (int | None):
            Metres between the factions. Defaults to the configuration.
        match_count (int | None):
            Matches to play. Defaults to the configuration.
        seed (int | None):
            Master seed. The same seed replays the same batch.
        workers (int | None):
            Threads to spread the matches over. Defaults to the configuration.
        game_map (GameMap | None):
            The battle map shared, read-only, by every match.
        pathfinder (Pathfinder | None):
            Movement legality oracle.
        config (SimulationConfig | None):
            Round cap, melee range and defaults.

    Returns:
        BatchResult: Win counts and the record of every completed match.

    Raises:
        ConfigurationError: If a rule table is missing an entry. A match with
            invalid input is recorded as failed instead.

    """
    config = config or SimulationConfig()
    match_count = config.match_count if match_count is None else match_count
    workers = config.workers if workers is None else workers
    seed = config.seed if seed is None else seed
    if match_count < 0:
        raise InvalidInput(
            f"Match count cannot be negative: {match_count}",
            {"match_count": match_count},
        )

    seeds = match_seeds(seed, match_count)
    error_handler = ErrorHandler()

    def play(index: int) -> MatchResult | None:
        try:
            return run_match(
                roster,
                factions,
                modifiers,
                initial_distance,
                roller=DiceRoller(seeds[index]),
                game_map=game_map,
                pathfinder=pathfinder,
                config=config,
            )
        except InvalidInput as e:
            error_handler.handle(
                f"Match {index + 1} could not be played: {e.message}",
                ErrorSeverity.MEDIUM,
                {"match": index, "seed": seeds[index], **e.context},
                e,
            )
            return None

    if workers > 1 and match_count > 1:
        with ThreadPoolExecutor(max_workers=min(workers, match_count)) as pool:
            outcomes = list(pool.map(play, range(match_count)))
    else:
        outcomes = [play(index) for index in range(match_count)]

    completed = [result for result in outcomes if result is not None]
    failed = [index for index, result in enumerate(outcomes) if result is None]
    log_debug(
        f"Batch of {match_count} matches done",
        {"completed": len(completed), "failed": len(failed), "workers": workers},
    )
    return BatchResult(
        win_counts=calculate_round_wins(completed),
        match_results=tuple(completed),
        failed_matches=tuple(failed),
        seeds=tuple(seeds),
    )
