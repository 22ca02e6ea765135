"""
Main entry point for the arena.

Loads a roster file, then either plays a batch of headless matches and
prints the win rates, or steps through a single match interactively.

The arena supports:
- Loading characters, factions, modifiers and an optional map from JSON
- Headless batches, optionally spread over several threads
- Reproducible runs through a master seed
- An interactive stepper with free actions (cover, running, fire modes)
"""

import argparse
import random
from pathlib import Path

from arena.combat.batch import run_batch
from arena.combat.combat_manager import run_match, start_match
from arena.core.config import load_config
from arena.core.content import load_roster
from arena.core.dice import DiceRoller
from arena.core.error_handling import InvalidInput
from arena.core.logging import level_for_verbosity, setup_logging
from arena.core.sheets import (
    print_batch_summary,
    print_character_sheet,
    print_match_result,
)
from arena.core.utils import cprint, crule
from arena.tactical.game_map import generate_map
from arena.ui.cli_interface import MatchStepper

# Get the path to the data folder.
data_dir = Path(__file__).parent.parent / "data"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arena",
        description="Dice-pool combat simulator for two factions of runners",
    )
    parser.add_argument(
        "--roster",
        type=Path,
        default=data_dir / "roster.json",
        help="JSON file with the characters, factions and modifiers",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with simulation settings",
    )
    parser.add_argument("--matches", type=int, default=None, help="Matches to play")
    parser.add_argument("--seed", type=int, default=None, help="Master seed")
    parser.add_argument("--workers", type=int, default=None, help="Batch threads")
    parser.add_argument(
        "--distance",
        type=int,
        default=None,
        help="Starting distance between the factions, in metres",
    )
    parser.add_argument(
        "--map",
        type=str,
        default=None,
        metavar="WxH",
        help="Generate a random map of the given size",
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Step through a single match",
    )
    parser.add_argument(
        "--show-roster",
        action="store_true",
        help="Print the character sheets before playing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=None,
        help="Print more detail (repeat for dice and debug logs)",
    )
    return parser


def _parse_map_size(value: str) -> tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError as e:
        raise InvalidInput(
            f"Map size must look like 20x10, got '{value}'", {"map": value}
        ) from e
    return width, height


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(
        args.config,
        match_count=args.matches,
        seed=args.seed,
        workers=args.workers,
        initial_distance=args.distance,
        verbose_level=min(args.verbose, 2) if args.verbose is not None else None,
    )
    setup_logging(level_for_verbosity(config.verbose_level))

    crule("Shadowrun Arena", style="bold green")
    try:
        roster = load_roster(args.roster)
        game_map = roster.game_map
        if args.map:
            width, height = _parse_map_size(args.map)
            game_map = generate_map(width, height, 0.1, 0.05, random.Random(config.seed))

        if args.show_roster:
            for character in roster.characters.values():
                crule(character.name, style="bold blue", characters="-")
                print_character_sheet(character)

        if args.interactive:
            state = start_match(
                roster.characters,
                roster.factions,
                roster.modifiers,
                roller=DiceRoller(config.seed),
                game_map=game_map,
                config=config,
            )
            MatchStepper(state, max(config.verbose_level, 1)).run()
        elif config.match_count == 1:
            result = run_match(
                roster.characters,
                roster.factions,
                roster.modifiers,
                roller=DiceRoller(config.seed),
                game_map=game_map,
                config=config,
            )
            print_match_result(result, config.verbose_level)
        else:
            batch = run_batch(
                roster.characters,
                roster.factions,
                roster.modifiers,
                game_map=game_map,
                config=config,
            )
            print_batch_summary(batch)
    except InvalidInput as e:
        cprint(f"[bold red]{e.message}[/]")
        return 1
    except KeyboardInterrupt:
        cprint("")
        crule("Simulation Interrupted", style="bold red")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
