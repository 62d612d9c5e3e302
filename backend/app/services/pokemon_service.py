"""
Pokedex Backend - Pokemon Service (Record Access)
===================================================

What:  Create, list, find, update and delete Pokemon records.
Why:   Holds the record rules (lowercase names, term resolution, error
       classification) independent of HTTP concerns.
How:   Constructed with a store and the default page size; every call is a
       single independent unit of work against that store.
Who:   Called by route handlers in routes/pokemon.py and by SeedService.

Term Resolution (find_one / update):
    1. term parses as an integer      → WHERE no = :term
    2. still no match, term is a UUID → WHERE id = :term
    3. still no match                 → WHERE name = lower(trim(term))
    First match wins; no match at all is a NotFoundError.

Error Classification:
    DuplicateConstraint → DuplicateKeyError (400, names field and value)
    anything else       → logged with traceback, DatabaseError (500, opaque)
"""

import logging
import math
import re
import uuid
from typing import List, NoReturn, Optional

from app.exceptions import (
    DatabaseError,
    DuplicateKeyError,
    InvalidRequestError,
    NotFoundError,
    ValidationError,
)
from app.models.pokemon import Pokemon
from app.repositories.errors import DuplicateConstraint, StoreFailure
from app.repositories.pokemon_repository import PokemonStore
from app.schemas.pokemon import (
    PaginationParams,
    PokemonCreate,
    PokemonResponse,
    PokemonUpdate,
)

logger = logging.getLogger(__name__)

# Largest value the `no` INTEGER column can hold
MAX_NO = 2**31 - 1


_DECIMAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_PREFIXED = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def parse_number(term: str) -> Optional[int]:
    """
    Return `term` as an integer catalogue number, or None.

    Numeric terms are plain decimals ("25", " 25 ", "2.5e1") or unsigned
    0x/0o/0b literals ("0x19"). Digit separators ("1_0"), "nan" and
    "inf" are not numbers. The value must be integral and fit the column.
    """
    text = term.strip()
    if _PREFIXED.fullmatch(text):
        value = float(int(text, 0))
    elif _DECIMAL.fullmatch(text):
        value = float(text)
    else:
        return None
    if not math.isfinite(value) or not value.is_integer() or abs(value) > MAX_NO:
        return None
    return int(value)


def parse_object_id(term: str) -> Optional[uuid.UUID]:
    """Return `term` as a record id if it is a syntactically valid UUID."""
    try:
        return uuid.UUID(str(term))
    except ValueError:
        return None


class PokemonService:
    """
    Business logic for Pokemon records.

    Args:
        store: PokemonStore bound to the current request's session
        default_limit: Page size used when a list request sends no limit
    """

    def __init__(self, store: PokemonStore, default_limit: int):
        self.store = store
        self.default_limit = default_limit

    async def create(self, payload: PokemonCreate) -> PokemonResponse:
        """
        Insert a new record with its name lowercased.

        Raises:
            DuplicateKeyError: name or no already taken
            DatabaseError: any other store failure
        """
        name = payload.name.lower()
        try:
            pokemon = await self.store.create(
                name=name,
                no=payload.no,
                attributes=payload.extra_fields,
            )
        except StoreFailure as exc:
            self.handle_exceptions(exc)
        logger.info("Pokemon created: %s (no=%s, id=%s)", pokemon.name, pokemon.no, pokemon.id)
        return PokemonResponse.from_record(pokemon)

    async def find_all(self, pagination: Optional[PaginationParams] = None) -> List[PokemonResponse]:
        """One page of records in ascending `no` order."""
        pagination = pagination or PaginationParams()
        limit = pagination.limit if pagination.limit is not None else self.default_limit
        try:
            pokemons = await self.store.find_page(limit=limit, offset=pagination.offset)
        except StoreFailure as exc:
            self.handle_exceptions(exc)
        return [PokemonResponse.from_record(pokemon) for pokemon in pokemons]

    async def count(self) -> int:
        try:
            return await self.store.count()
        except StoreFailure as exc:
            self.handle_exceptions(exc)

    async def find_one(self, term: str) -> PokemonResponse:
        return PokemonResponse.from_record(await self._resolve(term))

    async def _resolve(self, term: str) -> Pokemon:
        pokemon: Optional[Pokemon] = None
        try:
            no = parse_number(term)
            if no is not None:
                pokemon = await self.store.find_by_no(no)

            if pokemon is None:
                object_id = parse_object_id(term)
                if object_id is not None:
                    pokemon = await self.store.find_by_id(object_id)

            if pokemon is None:
                pokemon = await self.store.find_by_name(term.lower().strip())
        except StoreFailure as exc:
            self.handle_exceptions(exc)

        if pokemon is None:
            raise NotFoundError(
                message=f'Pokemon with id, name or no "{term}" not found',
                context={"term": term},
            )
        return pokemon

    async def update(self, term: str, payload: PokemonUpdate) -> PokemonResponse:
        """
        Merge the supplied fields onto the record resolved from `term`.

        Descriptive fields are merged key by key, so fields the client did
        not send keep their stored values. The returned representation is
        the record after the flush, i.e. the old record overlaid by the payload.

        Raises:
            NotFoundError: term matches nothing
            DuplicateKeyError: the new name or no is taken
            DatabaseError: any other store failure
        """
        pokemon = await self._resolve(term)

        changes = payload.changed_fields
        if changes.get("name"):
            changes["name"] = changes["name"].lower()
        if payload.extra_fields:
            changes["attributes"] = {**(pokemon.attributes or {}), **payload.extra_fields}

        try:
            pokemon = await self.store.update(pokemon, changes)
        except StoreFailure as exc:
            self.handle_exceptions(exc)
        logger.info("Pokemon %s updated: %s", pokemon.id, sorted(changes))
        return PokemonResponse.from_record(pokemon)

    async def remove(self, pokemon_id: str) -> None:
        """
        Delete by object id only; names and numbers are not resolved here.

        A malformed id ("ditto") is rejected as a ValidationError before the
        store is touched, so it answers 400 validation_error rather than
        invalid_request. A well-formed id that matches nothing is the
        InvalidRequestError case.

        Raises:
            ValidationError: pokemon_id is not a valid UUID
            InvalidRequestError: no record has that id
        """
        object_id = parse_object_id(pokemon_id)
        if object_id is None:
            raise ValidationError(
                message=f'"{pokemon_id}" is not a valid id',
                field="id",
            )

        try:
            deleted = await self.store.delete_by_id(object_id)
        except StoreFailure as exc:
            self.handle_exceptions(exc)

        if deleted == 0:
            raise InvalidRequestError(
                message=f'Pokemon with id "{pokemon_id}" not found',
                context={"id": pokemon_id},
            )
        logger.info("Pokemon %s deleted", object_id)

    @staticmethod
    def handle_exceptions(exc: StoreFailure) -> NoReturn:
        """
        Translate a store failure into a client-facing exception.

        Duplicate keys are the caller's fault and say which key collided;
        everything else is logged here and hidden behind a generic 500.
        """
        if isinstance(exc, DuplicateConstraint):
            raise DuplicateKeyError(field=exc.field, value=exc.value) from exc
        logger.error("Store failure: %s", exc, exc_info=exc)
        raise DatabaseError(
            message="Can't process Pokemon, check server logs",
            context={"error_type": type(getattr(exc, "cause", exc)).__name__},
        ) from exc
