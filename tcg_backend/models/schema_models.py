from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from tcg_backend.domain.battle_rules import PokemonType


class CamelSchema(BaseModel):
    """Read from ORM rows by attribute name, serialized with camelCase keys."""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class CardSchema(CamelSchema):
    id: int
    name: str
    hp: int
    attack: int
    type: PokemonType
    pokedex_number: int
    img_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeckCardSchema(CamelSchema):
    id: int
    deck_id: int
    card_id: int
    count: int
    card: Optional[CardSchema] = None


class DeckSchema(CamelSchema):
    id: int
    name: str
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    cards: List[DeckCardSchema] = []


class UserSchema(CamelSchema):
    """Public view of a user. ``name`` carries the username."""
    id: int
    name: str
    email: str


class AuthResponseSchema(CamelSchema):
    message: str
    token: str
    user: UserSchema


class MessageSchema(CamelSchema):
    message: str


class AuthInfoSchema(CamelSchema):
    message: str
    info: str


class HealthSchema(CamelSchema):
    status: str
    message: str
