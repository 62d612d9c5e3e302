"""
Pokedex Backend - Pokemon Route Handlers
==========================================

What:  CRUD endpoints for Pokemon records.
How:   Each handler receives a PokemonService built per request by
       `get_pokemon_service` and returns its result; HTTP-only concerns
       (status codes, X-Total-Count) live here.

Route Inventory (prefix from settings.api_prefix, default /api/v2):
    POST   /pokemon           create
    GET    /pokemon           list (limit/offset)
    GET    /pokemon/{term}    find by no, id or name
    PATCH  /pokemon/{term}    partial update
    DELETE /pokemon/{id}      delete by id
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db_session
from app.repositories.pokemon_repository import PokemonStore
from app.schemas.pokemon import (
    ErrorResponse,
    PaginationParams,
    PokemonCreate,
    PokemonResponse,
    PokemonUpdate,
)
from app.services.pokemon_service import PokemonService

router = APIRouter(prefix="/pokemon", tags=["Pokemon"])


def get_pokemon_service(db: AsyncSession = Depends(get_db_session)) -> PokemonService:
    """Wire a service to this request's session and the configured page size."""
    return PokemonService(store=PokemonStore(db), default_limit=settings.default_limit)


@router.post(
    "",
    response_model=PokemonResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Name or number already exists", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a Pokemon",
)
async def create_pokemon(
    payload: PokemonCreate,
    service: PokemonService = Depends(get_pokemon_service),
) -> PokemonResponse:
    return await service.create(payload)


@router.get(
    "",
    response_model=List[PokemonResponse],
    summary="List Pokemon ordered by number",
    description=(
        "Returns at most `limit` records (default: DEFAULT_LIMIT) after skipping "
        "`offset`, ordered by `no`. The total record count is sent in X-Total-Count."
    ),
)
async def list_pokemon(
    response: Response,
    limit: Optional[int] = Query(default=None, ge=1, description="Records per page"),
    offset: int = Query(default=0, ge=0, description="Records to skip"),
    service: PokemonService = Depends(get_pokemon_service),
) -> List[PokemonResponse]:
    pokemons = await service.find_all(PaginationParams(limit=limit, offset=offset))
    response.headers["X-Total-Count"] = str(await service.count())
    return pokemons


@router.get(
    "/{term}",
    response_model=PokemonResponse,
    responses={404: {"description": "No match", "model": ErrorResponse}},
    summary="Find a Pokemon by number, id or name",
)
async def get_pokemon(
    term: str,
    service: PokemonService = Depends(get_pokemon_service),
) -> PokemonResponse:
    return await service.find_one(term)


@router.patch(
    "/{term}",
    response_model=PokemonResponse,
    responses={
        400: {"description": "Name or number already exists", "model": ErrorResponse},
        404: {"description": "No match", "model": ErrorResponse},
    },
    summary="Update a Pokemon",
)
async def update_pokemon(
    term: str,
    payload: PokemonUpdate,
    service: PokemonService = Depends(get_pokemon_service),
) -> PokemonResponse:
    return await service.update(term, payload)


@router.delete(
    "/{pokemon_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"description": "Invalid or unknown id", "model": ErrorResponse}},
    summary="Delete a Pokemon by id",
)
async def delete_pokemon(
    pokemon_id: str,
    service: PokemonService = Depends(get_pokemon_service),
) -> Response:
    await service.remove(pokemon_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
