import asyncio
import random

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import Session as SyncSession

from tcg_backend.create_engine import build_engine
from tcg_backend.db import create_tables
from tcg_backend.domain.battle_rules import PokemonType
from tcg_backend.domain.deck_rules import DECK_SIZE
from tcg_backend.models.schemas import Card, Deck, DeckCard, User
from tcg_backend.seed import (
    DEFAULT_PASSWORD,
    STARTER_DECK_NAME,
    get_parser,
    load_pokemon_data,
    seed_database,
)


def run_seed(async_url, pokemon_data, seed=0):
    async def _run():
        engine = build_engine(async_url)
        await create_tables(engine)
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with factory() as session:
            await seed_database(session, pokemon_data, random.Random(seed))
        await engine.dispose()

    asyncio.run(_run())


def test_bundled_card_list_is_valid():
    pokemon_data = load_pokemon_data()
    assert len(pokemon_data) >= DECK_SIZE
    numbers = [pokemon.pokedex_number for pokemon in pokemon_data]
    assert len(numbers) == len(set(numbers))
    assert {pokemon.type for pokemon in pokemon_data} == set(PokemonType)


def test_seed_database(async_url, sync_engine, user):
    pokemon_data = load_pokemon_data()
    run_seed(async_url, pokemon_data)

    with SyncSession(sync_engine) as session:
        usernames = sorted(session.scalars(select(User.username)))
        assert usernames == ["blue", "red"]

        cards = session.scalars(select(Card)).all()
        assert len(cards) == len(pokemon_data)
        pikachu = next(card for card in cards if card.pokedex_number == 25)
        assert pikachu.type == PokemonType.Electric
        assert pikachu.img_url.endswith("/official-artwork/25.png")

        decks = session.scalars(select(Deck)).all()
        assert len(decks) == 2
        for deck in decks:
            assert deck.name == STARTER_DECK_NAME
            links = session.scalars(select(DeckCard).where(DeckCard.deck_id == deck.id)).all()
            assert len(links) == DECK_SIZE
            assert len({link.card_id for link in links}) == DECK_SIZE
            assert all(link.count == 1 for link in links)


def test_seeded_users_can_sign_in(async_url, client):
    run_seed(async_url, load_pokemon_data())
    res = client.post(
        "/api/auth/sign-in", json={"email": "red@example.com", "password": DEFAULT_PASSWORD}
    )
    assert res.status_code == 200
    res = client.get("/api/decks/mine", headers={"Authorization": f"Bearer {res.json()['token']}"})
    assert [deck["name"] for deck in res.json()] == [STARTER_DECK_NAME]


def test_seed_with_too_few_cards_keeps_previous_content(async_url, sync_engine, cards, user):
    pokemon_data = load_pokemon_data()[: DECK_SIZE - 1]
    with pytest.raises(ValueError):
        run_seed(async_url, pokemon_data)

    with SyncSession(sync_engine) as session:
        assert session.scalar(select(func.count()).select_from(Card)) == len(cards)
        assert session.scalar(select(User.username)) == user["username"]


def test_parser_defaults():
    args = get_parser().parse_args([])
    assert args.data.name == "pokemon.json"
    assert args.seed is None
