from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tcg_backend.db import get_session
from tcg_backend.models.schema_models import CardSchema
from tcg_backend.services import deck_service

cards_router = APIRouter(prefix="/api/cards", tags=["cards"])


class CardAPI:
    @staticmethod
    @cards_router.get("", response_model=List[CardSchema])
    async def get_cards(session: AsyncSession = Depends(get_session)):
        """Every card of the catalog, ordered by pokedex number"""
        return await deck_service.list_cards(session)
