"""Pytest configuration and fixtures.

Every test gets its own SQLite file. Tables and fixture rows are written with
a plain synchronous engine; the application talks to the same file through
aiosqlite via an overridden ``get_session`` dependency.
"""

import pathlib
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import Session as SyncSession

from tcg_backend.authentication.jwt_authentication import jwt_auth
from tcg_backend.create_engine import build_engine
from tcg_backend.db import get_session
from tcg_backend.domain.battle_rules import PokemonType
from tcg_backend.main import app
from tcg_backend.models.schemas import Base, Card, User

CARD_FIXTURES = [
    ("Bulbasaur", 45, 49, PokemonType.Grass, 1),
    ("Ivysaur", 60, 62, PokemonType.Grass, 2),
    ("Venusaur", 80, 82, PokemonType.Grass, 3),
    ("Charmander", 39, 52, PokemonType.Fire, 4),
    ("Charmeleon", 58, 64, PokemonType.Fire, 5),
    ("Charizard", 78, 84, PokemonType.Fire, 6),
    ("Squirtle", 44, 48, PokemonType.Water, 7),
    ("Wartortle", 59, 63, PokemonType.Water, 8),
    ("Blastoise", 79, 83, PokemonType.Water, 9),
    ("Caterpie", 45, 30, PokemonType.Bug, 10),
    ("Metapod", 50, 20, PokemonType.Bug, 11),
    ("Pikachu", 35, 55, PokemonType.Electric, 25),
]

FIRST_DECK = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
SECOND_DECK = [2, 3, 4, 5, 6, 7, 8, 9, 11, 25]
PASSWORD = "password123"


@pytest.fixture
def db_path(tmp_path: pathlib.Path) -> pathlib.Path:
    return tmp_path / "test.sqlite3"


@pytest.fixture
def sync_engine(db_path):
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def async_url(db_path) -> str:
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture
def cards(sync_engine):
    with SyncSession(sync_engine) as session:
        session.add_all(
            [
                Card(name=name, hp=hp, attack=attack, type=type_, pokedex_number=number)
                for name, hp, attack, type_, number in CARD_FIXTURES
            ]
        )
        session.commit()
    return CARD_FIXTURES


def _add_user(sync_engine, username: str, email: str) -> Dict:
    hash_password, salt = jwt_auth.hash_password(PASSWORD)
    with SyncSession(sync_engine) as session:
        user = User(username=username, email=email, hash_password=hash_password, salt=salt)
        session.add(user)
        session.commit()
        return {"id": user.id, "username": username, "email": email}


@pytest.fixture
def user(sync_engine):
    return _add_user(sync_engine, "ash", "ash@example.com")


@pytest.fixture
def other_user(sync_engine):
    return _add_user(sync_engine, "gary", "gary@example.com")


def bearer(user: Dict) -> Dict[str, str]:
    token = jwt_auth.create_access_token(user["id"], user["email"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(user):
    return bearer(user)


@pytest.fixture
def other_headers(other_user):
    return bearer(other_user)


@pytest.fixture
def client(sync_engine, async_url):
    engine = build_engine(async_url)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    # Not used as a context manager: the lifespan would create tables on the
    # default database instead of the per-test file.
    yield TestClient(app)
    app.dependency_overrides.clear()
