import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tcg_backend.crud import CreateData, DeleteData, ReadData, UpdateData
from tcg_backend.domain.deck_rules import UNKNOWN_CARDS, all_cards_found
from tcg_backend.models.schema_models import CardSchema, DeckSchema
from tcg_backend.models.schemas import Card, Deck
from tcg_backend.services.errors import (
    DeckForbiddenError,
    DeckNotFoundError,
    InvalidCardsError,
)


async def _load_deck_cards(pokedex_numbers: List[int], session: AsyncSession) -> List[Card]:
    cards = await ReadData.read_cards_by_pokedex_numbers(pokedex_numbers, session)
    if not all_cards_found(pokedex_numbers, len(cards)):
        raise InvalidCardsError(UNKNOWN_CARDS)
    return cards


async def _owned_deck(deck_id: int, user_id: int, session: AsyncSession) -> Deck:
    deck = await ReadData.read_deck(deck_id, session)
    if deck is None:
        raise DeckNotFoundError(deck_id)
    if deck.user_id != user_id:
        raise DeckForbiddenError(deck_id, user_id)
    return deck


async def list_cards(session: AsyncSession) -> List[CardSchema]:
    async with session.begin():
        cards = await ReadData.read_all_cards(session)
        return [CardSchema.model_validate(card) for card in cards]


async def create_deck(
    session: AsyncSession, user_id: int, name: str, pokedex_numbers: List[int]
) -> DeckSchema:
    """Create a deck from pokedex numbers whose shape was already checked.

    Raises:
        InvalidCardsError: Some numbers do not match a card, or are repeated
    """
    async with session.begin():
        cards = await _load_deck_cards(pokedex_numbers, session)
        deck = await CreateData.create_deck(name, user_id, cards, session)
        deck = await ReadData.read_deck(deck.id, session)
        response = DeckSchema.model_validate(deck)

    logging.info(f"User {user_id} created deck {response.id}")
    return response


async def read_user_decks(session: AsyncSession, user_id: int) -> List[DeckSchema]:
    async with session.begin():
        decks = await ReadData.read_user_decks(user_id, session)
        return [DeckSchema.model_validate(deck) for deck in decks]


async def read_user_deck(session: AsyncSession, deck_id: int, user_id: int) -> DeckSchema:
    """A deck owned by someone else is reported as missing."""
    async with session.begin():
        deck = await ReadData.read_user_deck(deck_id, user_id, session)
        if deck is None:
            raise DeckNotFoundError(deck_id)
        return DeckSchema.model_validate(deck)


async def update_deck(
    session: AsyncSession,
    deck_id: int,
    user_id: int,
    name: Optional[str] = None,
    pokedex_numbers: Optional[List[int]] = None,
) -> DeckSchema:
    """Rename the deck and/or replace its cards in one transaction.

    Raises:
        DeckNotFoundError: No deck with this id
        DeckForbiddenError: The deck belongs to another user
        InvalidCardsError: Some numbers do not match a card, or are repeated
    """
    async with session.begin():
        deck = await _owned_deck(deck_id, user_id, session)

        if pokedex_numbers is not None:
            cards = await _load_deck_cards(pokedex_numbers, session)
            await UpdateData.replace_deck_cards(deck, cards, session)

        if name:
            await UpdateData.update_deck_name(deck, name, session)

        deck = await ReadData.read_deck(deck_id, session)
        response = DeckSchema.model_validate(deck)

    logging.info(f"User {user_id} updated deck {deck_id}")
    return response


async def delete_deck(session: AsyncSession, deck_id: int, user_id: int) -> None:
    """
    Raises:
        DeckNotFoundError: No deck with this id
        DeckForbiddenError: The deck belongs to another user
    """
    async with session.begin():
        await _owned_deck(deck_id, user_id, session)
        await DeleteData.delete_deck(deck_id, session)

    logging.info(f"User {user_id} deleted deck {deck_id}")
