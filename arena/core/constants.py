"""
Constants and enumerations for the arena.

Defines the rule constants of the dice-pool ruleset and the enumerations for
metatypes, weapon categories, damage types, fire modes and map cells used
throughout the engine.
"""

from enum import Enum

# Global verbose level for combat output:
# 0 - Minimal (e.g., only final results)
# 1 - Moderate (e.g., show dice rolls)
# 2 - Full detail (e.g., pool breakdowns, initiative resets, status notices)
GLOBAL_VERBOSE_LEVEL = 0

# Dice.
HIT_THRESHOLD = 5
DIE_SIDES = 6

# Condition monitors.
CONDITION_TRACK_BASE = 8
WOUND_DIVISOR = 3

# Initiative.
INITIATIVE_STEP = 10

# Movement and ranges, in metres (one grid cell is one metre).
MELEE_RANGE = 2
WALK_MULTIPLIER = 2
RUNNING_DEFENSE_PENALTY = 2

# Matches.
MAX_ROUNDS = 20

# Cover bonuses to the defense pool.
PARTIAL_COVER_BONUS = 2
HARD_COVER_BONUS = 4

# Range bracket modifiers: Short, Medium, Long, Extreme.
RANGE_BRACKET_MODIFIERS = (0, -1, -3, -6)


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class Metatype(NiceEnum):
    """Defines the ancestry of a character."""

    HUMAN = "Human"
    ELF = "Elf"
    ORK = "Ork"
    DWARF = "Dwarf"
    TROLL = "Troll"

    @property
    def sprint_metres_per_hit(self) -> int:
        """Returns the extra metres gained per sprint hit."""
        if self in (Metatype.DWARF, Metatype.TROLL):
            return 1
        return 2


class WeaponCategory(NiceEnum):
    """Defines the broad category of a weapon."""

    MELEE = "Melee"
    RANGED = "Ranged"


class DamageType(NiceEnum):
    """Defines the condition monitor a weapon damages."""

    PHYSICAL = "P"
    STUN = "S"

    @property
    def color(self) -> str:
        """Returns the color string associated with this damage type."""
        return {
            DamageType.PHYSICAL: "bold red",
            DamageType.STUN: "bold cyan",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies damage type color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class FireMode(NiceEnum):
    """Defines the fire modes of a ranged weapon."""

    SS = "SS"
    SA = "SA"
    BF = "BF"
    FA = "FA"

    @property
    def display_name(self) -> str:
        return {
            FireMode.SS: "Single Shot",
            FireMode.SA: "Semi-Auto",
            FireMode.BF: "Burst Fire",
            FireMode.FA: "Full Auto",
        }[self]

    @property
    def shots(self) -> int:
        """Returns the number of rounds fired by a single action."""
        return {
            FireMode.SS: 1,
            FireMode.SA: 1,
            FireMode.BF: 3,
            FireMode.FA: 6,
        }[self]

    @property
    def defense_modifier(self) -> int:
        """Returns the modifier applied to the defender's pool."""
        return {
            FireMode.SS: 0,
            FireMode.SA: 0,
            FireMode.BF: -2,
            FireMode.FA: -5,
        }[self]


class CellType(NiceEnum):
    """Defines the content of a map cell."""

    EMPTY = 0
    PARTIAL_COVER = 1
    HARD_COVER = 2

    @property
    def cover_bonus(self) -> int:
        """Returns the defense bonus granted by this cell."""
        return {
            CellType.EMPTY: 0,
            CellType.PARTIAL_COVER: PARTIAL_COVER_BONUS,
            CellType.HARD_COVER: HARD_COVER_BONUS,
        }[self]


class Faction(NiceEnum):
    """Defines the two sides of a match."""

    FACTION1 = "faction1"
    FACTION2 = "faction2"

    @property
    def color(self) -> str:
        """Returns the color string associated with this faction."""
        return {
            Faction.FACTION1: "bold blue",
            Faction.FACTION2: "bold red",
        }.get(self, "dim white")

    @property
    def display_name(self) -> str:
        return f"Faction {self.value[-1]}"

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies faction color formatting to a message."""
        return f"[{self.color}]{message}[/]"

    @property
    def opponent(self) -> "Faction":
        """Returns the opposing faction."""
        if self == Faction.FACTION1:
            return Faction.FACTION2
        return Faction.FACTION1


DRAW = "draw"


def is_oponent(faction1: Faction, faction2: Faction) -> bool:
    """Determines if faction2 is an opponent of faction1.

    Args:
        faction1 (Faction): The first faction.
        faction2 (Faction): The second faction.

    Returns:
        bool: True if the two factions are opposed, False otherwise.

    """
    return faction1 != faction2


class WeaponType(NiceEnum):
    """Defines the weapon types that drive the range bracket lookup."""

    TASER = "Taser"
    HOLDOUT_PISTOL = "Hold-Out Pistol"
    LIGHT_PISTOL = "Light Pistol"
    HEAVY_PISTOL = "Heavy Pistol"
    MACHINE_PISTOL = "Machine Pistol"
    SMG = "SMG"
    ASSAULT_RIFLE = "Assault Rifle"
    SHOTGUN_FLECHETTE = "Shotgun (flechette)"
    SHOTGUN_SLUG = "Shotgun (slug)"
    SNIPER_RIFLE = "Sniper Rifle"
    LIGHT_MACHINEGUN = "Light Machinegun"
    MEDIUM_HEAVY_MACHINEGUN = "Medium/Heavy Machinegun"
    ASSAULT_CANNON = "Assault Cannon"
    GRENADE_LAUNCHER = "Grenade Launcher"
    MISSILE_LAUNCHER = "Missile Launcher"
    LIGHT_CROSSBOW = "Light Crossbow"
    MEDIUM_CROSSBOW = "Medium Crossbow"
    HEAVY_CROSSBOW = "Heavy Crossbow"
    BOW = "Bow"
    THROWING_KNIFE = "Throwing Knife"
    STANDARD_GRENADE = "Standard Grenade"
    AERODYNAMIC_GRENADE = "Aerodynamic Grenade"
