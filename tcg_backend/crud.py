from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from typing import List

from tcg_backend.models.schemas import Card, Deck, DeckCard, User

# These helpers never commit. The caller owns the transaction
# (see tcg_backend/services).


def _deck_with_cards():
    return selectinload(Deck.cards).selectinload(DeckCard.card)


def _select_decks():
    # populate_existing refreshes decks already in the identity map after their
    # cards were replaced in the same session
    return (
        select(Deck)
        .options(_deck_with_cards())
        .execution_options(populate_existing=True)
    )


class CreateData:
    @staticmethod
    async def create_user(
        username: str, email: str, hash_password: str, salt: str, session: AsyncSession
    ) -> User:
        """Add a user row and flush to obtain its id"""
        user = User(username=username, email=email, hash_password=hash_password, salt=salt)
        session.add(user)
        await session.flush()
        return user

    @staticmethod
    async def create_cards(cards: List[Card], session: AsyncSession) -> None:
        session.add_all(cards)
        await session.flush()

    @staticmethod
    async def create_deck(
        name: str, user_id: int, cards: List[Card], session: AsyncSession
    ) -> Deck:
        """Create a deck holding one copy of each card

        Args:
            name (str): Deck name
            user_id (int): Owner of the deck
            cards (List[Card]): Cards already loaded from the database
        """
        deck = Deck(
            name=name,
            user_id=user_id,
            cards=[DeckCard(card_id=card.id, count=1) for card in cards],
        )
        session.add(deck)
        await session.flush()
        return deck


class ReadData:
    @staticmethod
    async def read_user_by_email(email: str, session: AsyncSession) -> User | None:
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_user_by_username(username: str, session: AsyncSession) -> User | None:
        stmt = select(User).where(User.username == username)
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_all_cards(session: AsyncSession) -> List[Card]:
        """Read every card ordered by pokedex number"""
        stmt = select(Card).order_by(Card.pokedex_number.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_cards_by_pokedex_numbers(
        pokedex_numbers: List[int], session: AsyncSession
    ) -> List[Card]:
        """Read the cards matching the given pokedex numbers.

        Duplicated numbers only match once, so the result can be shorter
        than the request.
        """
        stmt = (
            select(Card)
            .where(Card.pokedex_number.in_(pokedex_numbers))
            .order_by(Card.pokedex_number.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_deck(deck_id: int, session: AsyncSession) -> Deck | None:
        """Read a deck regardless of its owner, cards included"""
        stmt = _select_decks().where(Deck.id == deck_id)
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_user_deck(deck_id: int, user_id: int, session: AsyncSession) -> Deck | None:
        stmt = _select_decks().where(Deck.id == deck_id, Deck.user_id == user_id)
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_user_decks(user_id: int, session: AsyncSession) -> List[Deck]:
        """Read the decks of a user, newest first"""
        stmt = (
            _select_decks()
            .where(Deck.user_id == user_id)
            .order_by(desc(Deck.created_at), desc(Deck.id))
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())


class UpdateData:
    @staticmethod
    async def update_deck_name(deck: Deck, name: str, session: AsyncSession) -> None:
        deck.name = name
        await session.flush()

    @staticmethod
    async def replace_deck_cards(deck: Deck, cards: List[Card], session: AsyncSession) -> None:
        """Swap the deck/card links; the orphaned links are deleted on flush.

        The deck must have been read with its cards loaded.
        """
        deck.cards = [DeckCard(card_id=card.id, count=1) for card in cards]
        await session.flush()


class DeleteData:
    @staticmethod
    async def delete_deck(deck_id: int, session: AsyncSession) -> None:
        await session.execute(delete(DeckCard).where(DeckCard.deck_id == deck_id))
        await session.execute(delete(Deck).where(Deck.id == deck_id))

    @staticmethod
    async def delete_all(session: AsyncSession) -> None:
        """Wipe every table, children first"""
        await session.execute(delete(DeckCard))
        await session.execute(delete(Deck))
        await session.execute(delete(Card))
        await session.execute(delete(User))
