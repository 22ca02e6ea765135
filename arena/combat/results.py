"""
Result records for the arena.

A RoundResult describes one resolved action; a MatchResult aggregates the
actions of a whole match. Both are immutable once returned and are what
presentation and logging collaborators consume.
"""

from pydantic import BaseModel, ConfigDict, Field


class RoundResult(BaseModel):
    """Record of one resolved action."""

    model_config = ConfigDict(frozen=True)

    acting_character: str = Field(
        default="",
        description="Name of the combatant who acted",
    )
    target: str = Field(
        default="",
        description="Name of the combatant who was attacked, if any",
    )
    weapon: str = Field(
        default="",
        description="Name of the weapon used, if any",
    )
    initiative_phase: int = Field(
        default=0,
        description="Initiative score at which the action took place",
    )
    attack_rolls: tuple[int, ...] = Field(default=())
    defense_rolls: tuple[int, ...] = Field(default=())
    resistance_rolls: tuple[int, ...] = Field(default=())
    attacker_hits: int = Field(
        default=0,
        description="Attack hits after the limit was applied",
    )
    defender_hits: int = Field(default=0)
    resistance_hits: int = Field(default=0)
    glitch: bool = Field(default=False)
    critical_glitch: bool = Field(default=False)
    damage_dealt: int = Field(
        default=0,
        description="Boxes of damage applied to the target",
    )
    messages: tuple[str, ...] = Field(
        default=(),
        description="Narration of every intermediate quantity",
    )
    status_changes: tuple[str, ...] = Field(
        default=(),
        description="Status notices produced by the action",
    )

    @property
    def summary(self) -> str:
        """Returns a one-line description of the action."""
        if not self.target:
            return f"{self.acting_character} acted."
        line = f"{self.acting_character} attacked {self.target}"
        if self.weapon:
            line += f" with {self.weapon}"
        if self.critical_glitch:
            return line + " and suffered a critical glitch!"
        if self.glitch:
            return line + " but glitched!"
        if self.damage_dealt > 0:
            return line + f" and dealt {self.damage_dealt} damage."
        return line + " but caused no damage."


class MatchResult(BaseModel):
    """Record of a complete match."""

    model_config = ConfigDict(frozen=True)

    winner: str = Field(
        description="faction1, faction2 or draw",
    )
    rounds: int = Field(
        description="Number of initiative passes played",
    )
    round_results: tuple[RoundResult, ...] = Field(default=())
    details: str = Field(default="")
