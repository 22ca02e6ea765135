"""
Content module for the arena.

Loads a roster file: the available characters, the two faction lists, the
per-character situational modifiers and, optionally, a battle map.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field, ValidationError

from arena.character.main import Character, character_from_dict
from arena.core.constants import Faction
from arena.core.error_handling import InvalidInput
from arena.core.utils import cprint
from arena.tactical.game_map import GameMap


class Roster(BaseModel):
    """Everything needed to set up a match."""

    characters: dict[str, Character] = Field(
        default_factory=dict,
        description="The available characters, keyed by id, in file order",
    )
    faction1: list[str] = Field(default_factory=list)
    faction2: list[str] = Field(default_factory=list)
    modifiers: dict[str, int] = Field(
        default_factory=dict,
        description="Situational modifier per character id",
    )
    game_map: GameMap | None = Field(default=None)

    @property
    def factions(self) -> tuple[list[str], list[str]]:
        return (self.faction1, self.faction2)


def _load_json_file(filepath: Path) -> dict[str, Any]:
    """Helper to load a JSON object from disk"""
    if not filepath.exists():
        raise InvalidInput(f"File not found: {filepath}", {"path": str(filepath)})
    if not filepath.is_file():
        raise InvalidInput(f"Not a file: {filepath}", {"path": str(filepath)})
    try:
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidInput(
            f"File {filepath} is not valid JSON: {e}", {"path": str(filepath)}
        ) from e
    if not isinstance(data, dict):
        raise InvalidInput(
            f"Expected an object in {filepath}, got {type(data).__name__}",
            {"path": str(filepath)},
        )
    return data


def roster_from_dict(data: dict[str, Any]) -> Roster:
    """
    Builds a roster from its JSON representation.

    Args:
        data (dict[str, Any]):
            An object with "characters" (list), "factions" (object with
            "faction1" and "faction2" id lists), and optional "modifiers"
            and "map" entries.

    Returns:
        Roster: The validated roster.

    Raises:
        InvalidInput: If a character, the map or a faction list is invalid.

    """
    entries = data.get("characters", [])
    if not isinstance(entries, list):
        raise InvalidInput(
            "Roster 'characters' must be a list",
            {"characters": type(entries).__name__},
        )
    characters: dict[str, Character] = {}
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise InvalidInput(
                f"Character entry {index} must be an object",
                {"index": index, "entry": type(entry).__name__},
            )
        try:
            character = character_from_dict(entry)
        except ValidationError as e:
            raise InvalidInput(
                f"Invalid character '{entry.get('name', '?')}': {e}",
                {"character": entry.get("id")},
            ) from e
        if character.id in characters:
            log_warning(
                f"Duplicate character id '{character.id}', keeping the last one",
                {"character_id": character.id},
            )
        characters[character.id] = character

    factions = data.get("factions", {})
    modifiers = data.get("modifiers", {})
    for key, value in (("factions", factions), ("modifiers", modifiers)):
        if not isinstance(value, dict):
            raise InvalidInput(
                f"Roster '{key}' must be an object",
                {key: type(value).__name__},
            )
    for character_id in modifiers:
        if character_id not in characters:
            log_warning(
                f"Modifier given for unknown character '{character_id}'",
                {"character_id": character_id},
            )

    try:
        return Roster(
            characters=characters,
            faction1=factions.get(Faction.FACTION1.value, []),
            faction2=factions.get(Faction.FACTION2.value, []),
            modifiers=modifiers,
            game_map=data.get("map"),
        )
    except ValidationError as e:
        raise InvalidInput(f"Invalid roster: {e}", {}) from e


def load_roster(filepath: Path) -> Roster:
    """
    Loads a roster file.

    Args:
        filepath (Path): The JSON file to read.

    Returns:
        Roster: The loaded roster.

    Raises:
        InvalidInput: If the file is missing or its content invalid.

    """
    cprint(f"  Loading roster from {filepath}...", style="bold green")
    return roster_from_dict(_load_json_file(filepath))
