import argparse
import asyncio
import json
import logging
import pathlib
import random
import sys
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tcg_backend.authentication.jwt_authentication import JWTAuthentication, jwt_auth
from tcg_backend.crud import CreateData, DeleteData, ReadData
from tcg_backend.db import Session, create_tables
from tcg_backend.domain.deck_rules import DECK_SIZE
from tcg_backend.models.dc_models import PokemonCardModel
from tcg_backend.models.schemas import Card, User

DEFAULT_DATA_PATH = pathlib.Path(__file__).parent / "data" / "pokemon.json"
SPRITE_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/"
    "other/official-artwork/{pokedex_number}.png"
)
STARTER_DECK_NAME = "Starter Deck"
DEFAULT_PASSWORD = "password123"
DEFAULT_USERS = [
    ("red", "red@example.com"),
    ("blue", "blue@example.com"),
]


def load_pokemon_data(path: pathlib.Path = DEFAULT_DATA_PATH) -> List[PokemonCardModel]:
    """Read the card list JSON: [{name, hp, attack, type, pokedexNumber}, ...]"""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return [PokemonCardModel.model_validate(entry) for entry in raw]


def to_card(pokemon: PokemonCardModel) -> Card:
    return Card(
        name=pokemon.name,
        hp=pokemon.hp,
        attack=pokemon.attack,
        type=pokemon.type,
        pokedex_number=pokemon.pokedex_number,
        img_url=SPRITE_URL.format(pokedex_number=pokemon.pokedex_number),
    )


async def create_starter_deck(
    user: User, cards: List[Card], rng: random.Random, session: AsyncSession
) -> None:
    """Give the user a deck of DECK_SIZE distinct random cards"""
    if len(cards) < DECK_SIZE:
        raise ValueError("Not enough cards to create a starter deck")
    selected_cards = rng.sample(cards, DECK_SIZE)
    await CreateData.create_deck(STARTER_DECK_NAME, user.id, selected_cards, session)
    logging.info(f'Deck "{STARTER_DECK_NAME}" created for {user.username}')


async def seed_database(
    session: AsyncSession,
    pokemon_data: List[PokemonCardModel],
    rng: Optional[random.Random] = None,
    auth: JWTAuthentication = jwt_auth,
) -> None:
    """Wipe the database and fill it with users, cards and starter decks.

    Everything happens in one transaction, so a failure leaves the previous
    content in place.
    """
    rng = rng or random.Random()
    async with session.begin():
        await DeleteData.delete_all(session)

        users = []
        for username, email in DEFAULT_USERS:
            hash_password, salt = auth.hash_password(DEFAULT_PASSWORD)
            users.append(await CreateData.create_user(username, email, hash_password, salt, session))
        logging.info(f"Users created: {', '.join(user.username for user in users)}")

        await CreateData.create_cards([to_card(pokemon) for pokemon in pokemon_data], session)
        cards = await ReadData.read_all_cards(session)
        logging.info(f"Created {len(cards)} Pokemon cards")

        for user in users:
            await create_starter_deck(user, cards, rng, session)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the TCG database")
    parser.add_argument("--data", type=pathlib.Path, default=DEFAULT_DATA_PATH, help="Card list JSON")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for starter decks")
    return parser


async def main(data_path: pathlib.Path, seed: Optional[int]) -> None:
    logging.info("Starting database seed...")
    await create_tables()
    pokemon_data = load_pokemon_data(data_path)
    async with Session() as session:
        await seed_database(session, pokemon_data, random.Random(seed))
    logging.info("Database seeding completed!")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    args = get_parser().parse_args()
    try:
        asyncio.run(main(args.data, args.seed))
    except Exception as e:
        logging.error(f"Seed error: {e}")
        sys.exit(1)
