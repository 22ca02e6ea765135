"""
Weapon module for the arena.

Weapons are a tagged union over their category: melee weapons carry a reach
and nothing else, ranged weapons carry their range table entry, fire modes,
recoil compensation and ammunition.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from arena.core.constants import DamageType, FireMode, WeaponCategory, WeaponType


class BaseWeapon(BaseModel):
    """
    Represents the statistics shared by every weapon.
    """

    name: str = Field(
        min_length=1,
        description="The name of the weapon.",
    )
    damage: int = Field(
        ge=0,
        description="The base damage value of the weapon.",
    )
    damage_type: DamageType = Field(
        default=DamageType.PHYSICAL,
        description="The condition monitor the weapon damages.",
    )
    ap: int = Field(
        default=0,
        description="Armor penetration, usually zero or negative.",
    )
    accuracy: int = Field(
        default=0,
        ge=0,
        description="The accuracy rating of the weapon.",
    )

    @property
    def weapon_category(self) -> WeaponCategory:
        """Returns the category of the weapon."""
        return WeaponCategory(getattr(self, "category"))

    @property
    def is_melee(self) -> bool:
        """Returns True for melee weapons."""
        return self.weapon_category == WeaponCategory.MELEE


class MeleeWeapon(BaseWeapon):
    """A close combat weapon."""

    category: Literal["Melee"] = "Melee"
    reach: int = Field(
        default=0,
        ge=0,
        description="Reach of the weapon, added to the attack pool.",
    )


class RangedWeapon(BaseWeapon):
    """A firearm, launcher, bow or thrown weapon."""

    category: Literal["Ranged"] = "Ranged"
    weapon_type: WeaponType = Field(
        description="The range table entry of the weapon.",
    )
    recoil_compensation: int = Field(
        default=0,
        ge=0,
        description="Recoil absorbed before the shooter is penalised.",
    )
    fire_modes: list[FireMode] = Field(
        min_length=1,
        description="The fire modes the weapon supports.",
    )
    current_fire_mode: FireMode | None = Field(
        default=None,
        description="The selected fire mode. Defaults to the first supported mode.",
    )
    ammo: int | None = Field(
        default=None,
        ge=0,
        description="Rounds currently loaded. None means ammunition is not tracked.",
    )
    ammo_capacity: int | None = Field(
        default=None,
        ge=0,
        description="Rounds loaded by a reload. Defaults to the starting ammo.",
    )

    @model_validator(mode="after")
    def _check_fire_mode(self) -> "RangedWeapon":
        """Validates the selected fire mode against the supported ones."""
        if self.current_fire_mode is None:
            self.current_fire_mode = self.fire_modes[0]
        if self.current_fire_mode not in self.fire_modes:
            raise ValueError(
                f"{self.name}: fire mode {self.current_fire_mode} is not one "
                f"of {[str(mode) for mode in self.fire_modes]}"
            )
        if self.ammo_capacity is None:
            self.ammo_capacity = self.ammo
        if self.ammo_capacity is not None and self.ammo_capacity < 1:
            raise ValueError(
                f"{self.name}: a weapon with tracked ammo needs a capacity "
                f"of at least 1 round, got {self.ammo_capacity}"
            )
        return self

    @property
    def fire_mode(self) -> FireMode:
        """Returns the selected fire mode, or the first one if none is set."""
        return self.current_fire_mode or self.fire_modes[0]

    def has_ammo_for(self, fire_mode: FireMode) -> bool:
        """
        Checks whether enough rounds are loaded for one action.

        Args:
            fire_mode (FireMode): The mode the weapon will fire in.

        Returns:
            bool: True if the action can be fired.

        """
        return self.ammo is None or self.ammo >= fire_mode.shots

    def expend_ammo(self, fire_mode: FireMode) -> None:
        """
        Removes the rounds fired by one action.

        Args:
            fire_mode (FireMode): The mode the weapon was fired in.

        """
        if self.ammo is not None:
            self.ammo = max(self.ammo - fire_mode.shots, 0)


Weapon = Annotated[Union[MeleeWeapon, RangedWeapon], Field(discriminator="category")]

_WEAPON_ADAPTER: TypeAdapter[Any] = TypeAdapter(Weapon)


def deserialize_weapon(data: dict[str, Any]) -> MeleeWeapon | RangedWeapon:
    """
    Deserialize a weapon from a dictionary.

    Args:
        data (dict[str, Any]):
            The dictionary containing weapon data. The "category" key selects
            between "Melee" and "Ranged".

    Raises:
        pydantic.ValidationError:
            If the category is unknown or if required fields are missing.

    Returns:
        MeleeWeapon | RangedWeapon:
            The deserialized weapon instance.
    """
    return _WEAPON_ADAPTER.validate_python(data)
