from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from tcg_backend.authentication.jwt_authentication import jwt_auth
from tcg_backend.db import get_session
from tcg_backend.domain.deck_rules import MAX_ID, MISSING_NAME, check_card_list
from tcg_backend.models.dc_models import DeckCreateModel, DeckUpdateModel, TokenPayloadModel
from tcg_backend.models.schema_models import CardSchema, DeckSchema, MessageSchema
from tcg_backend.services import deck_service
from tcg_backend.services.errors import (
    DeckForbiddenError,
    DeckNotFoundError,
    InvalidCardsError,
)

DECK_NOT_FOUND = "Deck not found"
DECK_FORBIDDEN = "Forbidden: this deck does not belong to you"

decks_router = APIRouter(prefix="/api/decks", tags=["decks"])

# Out-of-range ids are rejected as 400 before they reach the driver
DeckId = Annotated[int, Path(ge=-MAX_ID - 1, le=MAX_ID)]


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _check_cards(cards) -> None:
    error = check_card_list(cards)
    if error is not None:
        raise _bad_request(error)


def _deck_error(e: Exception) -> HTTPException:
    if isinstance(e, DeckNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DECK_NOT_FOUND)
    if isinstance(e, DeckForbiddenError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=DECK_FORBIDDEN)
    return _bad_request(str(e))


class DeckAPI:
    @staticmethod
    @decks_router.post("", response_model=DeckSchema, status_code=status.HTTP_201_CREATED)
    async def create_deck(
        body: DeckCreateModel,
        user: TokenPayloadModel = Depends(jwt_auth.get_current_user),
        session: AsyncSession = Depends(get_session),
    ):
        """Create a deck of exactly ten cards for the signed-in user

        Args:
            body (DeckCreateModel): name and list of pokedex numbers

        Returns:
            DeckSchema: The new deck with its cards
        """
        if not body.name:
            raise _bad_request(MISSING_NAME)
        _check_cards(body.cards)
        try:
            return await deck_service.create_deck(session, user.userId, body.name, body.cards)
        except InvalidCardsError as e:
            raise _bad_request(str(e))

    @staticmethod
    @decks_router.get("/mine", response_model=List[DeckSchema])
    async def get_my_decks(
        user: TokenPayloadModel = Depends(jwt_auth.get_current_user),
        session: AsyncSession = Depends(get_session),
    ):
        """Decks of the signed-in user, newest first"""
        return await deck_service.read_user_decks(session, user.userId)

    @staticmethod
    @decks_router.get("/{deck_id}", response_model=DeckSchema)
    async def get_deck(
        deck_id: DeckId,
        user: TokenPayloadModel = Depends(jwt_auth.get_current_user),
        session: AsyncSession = Depends(get_session),
    ):
        try:
            return await deck_service.read_user_deck(session, deck_id, user.userId)
        except DeckNotFoundError as e:
            raise _deck_error(e)

    # Older clients list the catalog from here
    @staticmethod
    @decks_router.get("", response_model=List[CardSchema])
    async def get_cards(session: AsyncSession = Depends(get_session)):
        return await deck_service.list_cards(session)

    @staticmethod
    @decks_router.patch("/{deck_id}", response_model=DeckSchema)
    async def update_deck(
        deck_id: DeckId,
        body: DeckUpdateModel,
        user: TokenPayloadModel = Depends(jwt_auth.get_current_user),
        session: AsyncSession = Depends(get_session),
    ):
        """Rename the deck and/or replace its cards

        Args:
            deck_id (int): Deck to modify
            body (DeckUpdateModel): optional name, optional list of ten pokedex numbers

        Returns:
            DeckSchema: The deck after the update
        """
        if body.cards is not None:
            _check_cards(body.cards)
        try:
            return await deck_service.update_deck(
                session, deck_id, user.userId, name=body.name, pokedex_numbers=body.cards
            )
        except (DeckNotFoundError, DeckForbiddenError, InvalidCardsError) as e:
            raise _deck_error(e)

    @staticmethod
    @decks_router.delete("/{deck_id}", response_model=MessageSchema)
    async def delete_deck(
        deck_id: DeckId,
        user: TokenPayloadModel = Depends(jwt_auth.get_current_user),
        session: AsyncSession = Depends(get_session),
    ):
        try:
            await deck_service.delete_deck(session, deck_id, user.userId)
        except (DeckNotFoundError, DeckForbiddenError) as e:
            raise _deck_error(e)
        return MessageSchema(message="Deck deleted successfully")
