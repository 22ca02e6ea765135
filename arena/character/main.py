"""
Character management module for the arena.

Defines the Character roster record, the immutable description of a runner
that matches are built from, and the functions loading characters from JSON.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from arena.character.character_stats import mental_limit, physical_limit
from arena.core.constants import Metatype
from arena.items.weapon import Weapon


class Attributes(BaseModel):
    """The eight attribute scores of a character."""

    body: int = Field(default=3, ge=1)
    agility: int = Field(default=3, ge=1)
    reaction: int = Field(default=3, ge=1)
    strength: int = Field(default=3, ge=1)
    willpower: int = Field(default=3, ge=1)
    logic: int = Field(default=3, ge=1)
    intuition: int = Field(default=3, ge=1)
    charisma: int = Field(default=3, ge=1)


class Skills(BaseModel):
    """The combat skill ratings of a character."""

    model_config = ConfigDict(populate_by_name=True)

    firearms: int = Field(default=0, ge=0)
    close_combat: int = Field(default=0, ge=0, alias="close combat")
    running: int = Field(default=0, ge=0)
    armor: int = Field(default=0, ge=0)


class Character(BaseModel):
    """
    Represents a character of the roster, including attributes, skills and
    weapons. Characters are never mutated by a match: every match works on
    its own Combatant copies.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(
        min_length=1,
        description="Unique identifier of the character",
    )
    name: str = Field(
        min_length=1,
        description="The name of the character",
    )
    metatype: Metatype = Field(
        default=Metatype.HUMAN,
        description="The ancestry of the character",
    )
    attributes: Attributes = Field(
        default_factory=Attributes,
        description="The attribute scores",
    )
    skills: Skills = Field(
        default_factory=Skills,
        description="The skill ratings",
    )
    weapons: list[Weapon] = Field(
        default_factory=list,
        description="Owned weapons, in order of preference",
    )
    initiative_dice: int = Field(
        default=1,
        ge=1,
        le=5,
        alias="initiativeDice",
        description="Number of d6 added to the initiative score",
    )

    @property
    def physical_limit(self) -> int:
        """Returns the Physical Limit of the character."""
        return physical_limit(
            self.attributes.strength,
            self.attributes.body,
            self.attributes.reaction,
        )

    @property
    def mental_limit(self) -> int:
        """Returns the Mental Limit of the character."""
        return mental_limit(
            self.attributes.logic,
            self.attributes.intuition,
            self.attributes.willpower,
        )


def character_from_dict(data: dict[str, Any]) -> Character:
    """
    Creates a Character instance from a dictionary of data.

    Args:
        data (dict[str, Any]):
            The dictionary containing character data.

    Returns:
        Character:
            The created Character instance.

    Raises:
        pydantic.ValidationError:
            If the data does not describe a valid character.

    """
    return Character.model_validate(data)


def load_characters(file_path: Path) -> dict[str, Character]:
    """
    Loads a list of characters from a JSON file.

    Args:
        file_path (Path): The file to read; it must contain a JSON list.

    Returns:
        dict[str, Character]: The characters, keyed by id, in file order.

    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    characters: dict[str, Character] = {}
    for entry in data:
        character = character_from_dict(entry)
        characters[character.id] = character
    return characters
