"""
Dice module for the arena.

Provides the d6 pool primitives of the ruleset: rolling a pool through an
injectable random source and counting hits, ones and glitches.
"""

import random
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from arena.core.constants import DIE_SIDES, HIT_THRESHOLD
from arena.core.error_handling import InvalidInput


class PoolResult(BaseModel):
    """Outcome of a rolled dice pool."""

    model_config = ConfigDict(frozen=True)

    rolls: tuple[int, ...] = Field(
        default=(),
        description="The individual dice, in the order they were rolled",
    )
    hits: int = Field(
        default=0,
        description="Number of dice showing 5 or 6",
    )
    ones: int = Field(
        default=0,
        description="Number of dice showing 1",
    )
    is_glitch: bool = Field(
        default=False,
        description="More than half the pool rolled a 1",
    )
    is_critical_glitch: bool = Field(
        default=False,
        description="A glitch with zero hits",
    )

    @property
    def misses(self) -> int:
        """Returns the number of dice that are not hits."""
        return len(self.rolls) - self.hits


class DiceRoller:
    """Injectable source of d6 rolls.

    Every random outcome of a match flows through one roller, so seeding the
    roller makes the whole match reproducible.
    """

    def __init__(self, seed: Any = None, rng: random.Random | None = None) -> None:
        """
        Initialize the roller.

        Args:
            seed (Any): Seed for a private generator. Ignored if rng is given.
            rng (random.Random | None): An existing generator to draw from.

        """
        self.rng: random.Random = rng if rng is not None else random.Random(seed)

    def d6(self) -> int:
        """
        Rolls a single six-sided die.

        Returns:
            int: A value in [1, 6].

        """
        return self.rng.randint(1, DIE_SIDES)

    def roll_pool(self, n: int) -> list[int]:
        """
        Rolls a pool of six-sided dice.

        Args:
            n (int): The number of dice to roll.

        Returns:
            list[int]: n independent values in [1, 6].

        Raises:
            InvalidInput: If n is negative.

        """
        if n < 0:
            raise InvalidInput(
                f"Cannot roll a negative dice pool: {n}",
                {"pool": n},
            )
        return [self.d6() for _ in range(n)]


def roll_pool(n: int, roller: DiceRoller | None = None) -> list[int]:
    """
    Rolls a pool of n six-sided dice.

    Args:
        n (int): The number of dice to roll.
        roller (DiceRoller | None): The random source. A fresh unseeded
            roller is used if none is given.

    Returns:
        list[int]: The rolled dice.

    """
    return (roller or DiceRoller()).roll_pool(n)


def evaluate_pool(rolls: Sequence[int]) -> PoolResult:
    """
    Counts hits and ones of a rolled pool and checks for glitches.

    Args:
        rolls (Sequence[int]): The dice values.

    Returns:
        PoolResult: The evaluated pool.

    """
    hits = sum(1 for roll in rolls if roll >= HIT_THRESHOLD)
    ones = sum(1 for roll in rolls if roll == 1)
    is_glitch = len(rolls) > 0 and ones > len(rolls) / 2
    return PoolResult(
        rolls=tuple(rolls),
        hits=hits,
        ones=ones,
        is_glitch=is_glitch,
        is_critical_glitch=is_glitch and hits == 0,
    )


def roll_and_evaluate(n: int, roller: DiceRoller) -> PoolResult:
    """
    Rolls a pool and evaluates it in one step.

    Args:
        n (int): The number of dice to roll.
        roller (DiceRoller): The random source.

    Returns:
        PoolResult: The evaluated pool.

    """
    return evaluate_pool(roller.roll_pool(n))
