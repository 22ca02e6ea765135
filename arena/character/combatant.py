"""
Combatant module for the arena.

A Combatant is the mutable, per-match projection of a Character: it carries
the damage tracks, recoil, initiative and movement state of one runner for
the duration of a single match.
"""

from arena.character.character_stats import (
    max_physical,
    max_stun,
    mental_limit,
    movement_allowance,
    physical_limit,
)
from arena.character.main import Attributes, Character, Skills
from arena.core.constants import Faction, Metatype
from arena.items.weapon import MeleeWeapon, RangedWeapon
from arena.tactical.game_map import GridVector


class Combatant:
    """
    Represents a character taking part in a match.

    Attributes:
        id (str):
            Identifier of the roster character.
        name (str):
            Display name.
        faction (Faction):
            The side the combatant fights for.
        position (GridVector):
            Current cell on the grid.
        original_initiative (int):
            The initiative rolled at the start of the match.
        current_initiative (int):
            The initiative left in the current round. Only the scheduler
            changes it.
        cumulative_recoil (int):
            Rounds fired beyond the first during the match.
        situational_modifier (int):
            External dice pool modifier, set once per match.
        physical_damage (int), stun_damage (int):
            Boxes filled on the two condition monitors. Never negative.
        is_conscious (bool), is_alive (bool):
            Status flags. A dead combatant is never conscious.

    """

    def __init__(
        self,
        character: Character,
        faction: Faction,
        position: GridVector | None = None,
        situational_modifier: int = 0,
    ) -> None:
        # Work on copies: the roster record must survive the match unchanged.
        source = character.model_copy(deep=True)

        # Identity and static data.
        self.id: str = source.id
        self.name: str = source.name
        self.metatype: Metatype = source.metatype
        self.attributes: Attributes = source.attributes
        self.skills: Skills = source.skills
        self.weapons: list[MeleeWeapon | RangedWeapon] = list(source.weapons)
        self.initiative_dice: int = source.initiative_dice

        # Match data.
        self.faction: Faction = faction
        self.position: GridVector = position or GridVector()
        self.original_initiative: int = 0
        self.current_initiative: int = 0
        self.cumulative_recoil: int = 0
        self.situational_modifier: int = situational_modifier

        # Condition monitors.
        self.physical_damage: int = 0
        self.stun_damage: int = 0
        self.is_conscious: bool = True
        self.is_alive: bool = True
        self.total_damage_dealt: int = 0

        # Movement and cover.
        self.is_running: bool = False
        self.is_sprinting: bool = False
        self.movement_remaining: int = movement_allowance(self.attributes.agility)
        self.is_taking_cover: bool = False
        self.cover_cells: set[tuple[int, int]] = set()
        self.moved_since_cover: bool = False

        # Snapshot used to report status changes.
        self.reported_physical_damage: int = 0
        self.reported_stun_damage: int = 0
        self.reported_wound_modifier: int = 0

    # ============================================================================
    # DERIVED STATS
    # ============================================================================

    @property
    def max_physical(self) -> int:
        """Returns the size of the physical condition monitor."""
        return max_physical(self.attributes.body)

    @property
    def max_stun(self) -> int:
        """Returns the size of the stun condition monitor."""
        return max_stun(self.attributes.willpower)

    @property
    def physical_limit(self) -> int:
        """Returns the Physical Limit."""
        return physical_limit(
            self.attributes.strength,
            self.attributes.body,
            self.attributes.reaction,
        )

    @property
    def mental_limit(self) -> int:
        """Returns the Mental Limit."""
        return mental_limit(
            self.attributes.logic,
            self.attributes.intuition,
            self.attributes.willpower,
        )

    @property
    def colored_name(self) -> str:
        """Returns the name colored by faction."""
        return self.faction.colorize(self.name)

    @property
    def melee_weapons(self) -> list[MeleeWeapon]:
        return [w for w in self.weapons if isinstance(w, MeleeWeapon)]

    @property
    def ranged_weapons(self) -> list[RangedWeapon]:
        return [w for w in self.weapons if isinstance(w, RangedWeapon)]

    @property
    def best_reach(self) -> int:
        """Returns the longest reach among the melee weapons carried."""
        return max((w.reach for w in self.melee_weapons), default=0)

    def is_active(self) -> bool:
        """Returns True if the combatant is alive and conscious."""
        return self.is_alive and self.is_conscious

    def __repr__(self) -> str:
        return (
            f"Combatant({self.name!r}, {self.faction}, "
            f"P{self.physical_damage}/{self.max_physical} "
            f"S{self.stun_damage}/{self.max_stun}, "
            f"ini {self.current_initiative}/{self.original_initiative})"
        )
