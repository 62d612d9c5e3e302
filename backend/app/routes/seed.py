"""
Pokedex Backend - Seed Route
==============================

What:  POST /seed wipes the collection and reloads it from PokeAPI.
Who:   Operators bootstrapping a fresh environment.
"""

from typing import AsyncGenerator

import httpx
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db_session
from app.repositories.pokemon_repository import PokemonStore
from app.schemas.pokemon import ErrorResponse, SeedResponse
from app.services.seed_service import SeedService

router = APIRouter(prefix="/seed", tags=["Seed"])


async def get_pokeapi_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for the catalogue, closed when the request finishes."""
    async with httpx.AsyncClient(timeout=settings.seed_timeout) as client:
        yield client


def get_seed_service(
    db: AsyncSession = Depends(get_db_session),
    client: httpx.AsyncClient = Depends(get_pokeapi_client),
) -> SeedService:
    return SeedService(
        store=PokemonStore(db),
        client=client,
        base_url=settings.pokeapi_url,
        limit=settings.seed_limit,
    )


@router.post(
    "",
    response_model=SeedResponse,
    responses={503: {"description": "PokeAPI unavailable", "model": ErrorResponse}},
    summary="Reload all Pokemon from PokeAPI",
)
async def execute_seed(service: SeedService = Depends(get_seed_service)) -> SeedResponse:
    inserted = await service.populate()
    return SeedResponse(inserted=inserted)
