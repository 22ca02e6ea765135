"""
Items module for the arena: the weapons carried by characters.
"""

from .weapon import MeleeWeapon, RangedWeapon, Weapon, deserialize_weapon

__all__ = [
    "MeleeWeapon",
    "RangedWeapon",
    "Weapon",
    "deserialize_weapon",
]
