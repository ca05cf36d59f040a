from typing import Any, Optional

from pydantic import BaseModel, Field

from tcg_backend.domain.battle_rules import PokemonType


class SignUpModel(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class SignInModel(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class DeckCreateModel(BaseModel):
    name: Optional[str] = None
    # Checked by deck_rules so that a wrong shape gets a readable message
    cards: Any = None


class DeckUpdateModel(BaseModel):
    name: Optional[str] = None
    cards: Any = None


class PokemonCardModel(BaseModel):
    """One entry of the card list JSON used by the seeder."""
    name: str
    hp: int
    attack: int
    type: PokemonType
    pokedex_number: int = Field(alias="pokedexNumber")


class TokenPayloadModel(BaseModel):
    userId: int
    email: str
