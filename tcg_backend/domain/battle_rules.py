"""Battle rules that are independent from HTTP and DB.

Each type has exactly one weakness. An attack whose type matches the
defender's weakness deals double damage, everything else deals normal damage.
There is no resisted or immune case.

Rule of thumb:
- OK: lookups, multipliers, pure arithmetic.
- Not OK: touching DB sessions, FastAPI, logging of game events.
"""

import math
from enum import Enum
from types import MappingProxyType
from typing import Mapping

SUPER_EFFECTIVE_MULTIPLIER = 2.0
NORMAL_MULTIPLIER = 1.0
MINIMUM_DAMAGE = 1


class PokemonType(str, Enum):
    Normal = "Normal"
    Fire = "Fire"
    Water = "Water"
    Electric = "Electric"
    Grass = "Grass"
    Ice = "Ice"
    Fighting = "Fighting"
    Poison = "Poison"
    Ground = "Ground"
    Flying = "Flying"
    Psychic = "Psychic"
    Bug = "Bug"
    Rock = "Rock"
    Ghost = "Ghost"
    Dragon = "Dragon"
    Dark = "Dark"
    Steel = "Steel"
    Fairy = "Fairy"


# defender type -> the attacking type that is super effective against it
WEAKNESS_TABLE: Mapping[PokemonType, PokemonType] = MappingProxyType(
    {
        PokemonType.Normal: PokemonType.Fighting,
        PokemonType.Fire: PokemonType.Water,
        PokemonType.Water: PokemonType.Electric,
        PokemonType.Electric: PokemonType.Ground,
        PokemonType.Grass: PokemonType.Fire,
        PokemonType.Ice: PokemonType.Fire,
        PokemonType.Fighting: PokemonType.Psychic,
        PokemonType.Poison: PokemonType.Psychic,
        PokemonType.Ground: PokemonType.Water,
        PokemonType.Flying: PokemonType.Electric,
        PokemonType.Psychic: PokemonType.Dark,
        PokemonType.Bug: PokemonType.Fire,
        PokemonType.Rock: PokemonType.Water,
        PokemonType.Ghost: PokemonType.Dark,
        PokemonType.Dragon: PokemonType.Ice,
        PokemonType.Dark: PokemonType.Fighting,
        PokemonType.Steel: PokemonType.Fire,
        PokemonType.Fairy: PokemonType.Poison,
    }
)


def _as_type(value) -> PokemonType | None:
    if isinstance(value, PokemonType):
        return value
    try:
        return PokemonType(value)
    except ValueError:
        return None


def get_weakness(defender_type: PokemonType) -> PokemonType | None:
    """Return the type that is super effective against ``defender_type``.

    Plain string values ("Grass") are accepted as well. Anything that is not
    one of the 18 types yields None instead of raising.
    """
    defender = _as_type(defender_type)
    if defender is None:
        return None
    return WEAKNESS_TABLE.get(defender)


def get_damage_multiplier(
    attacker_type: PokemonType, defender_type: PokemonType
) -> float:
    """Return 2.0 when the attacker hits the defender's weakness, else 1.0."""
    weakness = get_weakness(defender_type)
    if weakness is not None and weakness == _as_type(attacker_type):
        return SUPER_EFFECTIVE_MULTIPLIER
    return NORMAL_MULTIPLIER


def calculate_damage(
    attacker_attack: float,
    attacker_type: PokemonType,
    defender_type: PokemonType,
) -> int:
    """Calculate the damage dealt by one attack.

    Args:
        attacker_attack (float): Attack stat of the attacking card
        attacker_type (PokemonType): Type of the attacking card
        defender_type (PokemonType): Type of the defending card

    Returns:
        int: floor(attack * multiplier), never less than 1.
            Non-finite stats (inf, nan) deal MINIMUM_DAMAGE.
    """
    multiplier = get_damage_multiplier(attacker_type, defender_type)
    raw = attacker_attack * multiplier
    if not math.isfinite(raw):
        return MINIMUM_DAMAGE
    return max(MINIMUM_DAMAGE, math.floor(raw))
