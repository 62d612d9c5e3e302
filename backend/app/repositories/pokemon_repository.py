"""
Pokedex Backend - Pokemon Store
================================

What:  Persistence operations for Pokemon records over an AsyncSession.
Why:   Keeps SQL and driver error codes out of the service layer.
How:   Each write runs inside `_translate_failures`, which rolls the session
       back and re-raises the driver error as a StoreFailure variant.
Who:   Constructed per request (see routes/pokemon.py) and handed to
       PokemonService and SeedService.

Duplicate detection:
    The unique constraints are named uq_pokemons_<field>. Drivers report a
    violation differently, so the offending field is read from whichever
    shape the message has:
        PostgreSQL (asyncpg):  DETAIL:  Key (name)=(pikachu) already exists.
        SQLite:                UNIQUE constraint failed: pokemons.name
        Fallback:              the constraint name itself
"""

import re
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy import asc, delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.pokemon import Pokemon
from app.repositories.errors import DuplicateConstraint, StoreError, StoreFailure

UNIQUE_FIELDS = ("name", "no")

_DUPLICATE_PATTERNS = (
    re.compile(r"Key \((?P<field>\w+)\)=\((?P<value>.*?)\) already exists"),
    re.compile(r"UNIQUE constraint failed: \w+\.(?P<field>\w+)"),
    re.compile(r"uq_pokemons_(?P<field>\w+)"),
)


def classify_integrity_error(exc: IntegrityError, values: Dict[str, Any]) -> StoreFailure:
    """
    Map an IntegrityError to DuplicateConstraint when it names a unique field.

    `values` are the column values the failed write tried to store; the
    reported value is taken from there so it keeps its Python type.
    Anything else (NOT NULL, foreign keys) becomes a StoreError.
    """
    text = str(exc.orig if exc.orig is not None else exc)
    for pattern in _DUPLICATE_PATTERNS:
        match = pattern.search(text)
        if match and match.group("field") in UNIQUE_FIELDS:
            field = match.group("field")
            value = values.get(field, match.groupdict().get("value"))
            return DuplicateConstraint(field, value)
    return StoreError(exc)


class PokemonStore:
    """Document-style access to the `pokemons` table for one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _translate_failures(
        self, values: Optional[Dict[str, Any]] = None
    ) -> AsyncIterator[None]:
        try:
            yield
        except IntegrityError as exc:
            await self.session.rollback()
            raise classify_integrity_error(exc, values or {}) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StoreError(exc) from exc

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(
        self,
        name: str,
        no: Optional[int] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> Pokemon:
        """Insert a record and flush so the id and version are assigned."""
        pokemon = Pokemon(name=name, no=no, attributes=dict(attributes or {}))
        async with self._translate_failures({"name": name, "no": no}):
            self.session.add(pokemon)
            await self.session.flush()
        return pokemon

    async def update(self, pokemon: Pokemon, changes: Dict[str, Any]) -> Pokemon:
        """
        Apply `changes` (any of name, no, attributes) to a loaded record.

        attributes is replaced wholesale: callers pass the already-merged
        document so SQLAlchemy sees a new value and issues the UPDATE.
        """
        for key in ("name", "no", "attributes"):
            if key in changes:
                setattr(pokemon, key, changes[key])
        async with self._translate_failures(changes):
            await self.session.flush()
        return pokemon

    async def delete_by_id(self, pokemon_id: uuid.UUID) -> int:
        """Delete one record by object id. Returns the number of rows removed."""
        async with self._translate_failures():
            result = await self.session.execute(
                delete(Pokemon).where(Pokemon.id == pokemon_id)
            )
        return result.rowcount or 0

    async def delete_all(self) -> int:
        async with self._translate_failures():
            result = await self.session.execute(delete(Pokemon))
        return result.rowcount or 0

    async def insert_many(self, rows: List[Dict[str, Any]]) -> int:
        """Bulk insert {name, no} rows in a single flush."""
        pokemons = [
            Pokemon(name=row["name"], no=row.get("no"), attributes={})
            for row in rows
        ]
        async with self._translate_failures():
            self.session.add_all(pokemons)
            await self.session.flush()
        return len(pokemons)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def _first(self, *criteria: Any) -> Optional[Pokemon]:
        async with self._translate_failures():
            result = await self.session.execute(
                select(Pokemon).where(*criteria).limit(1)
            )
        return result.scalars().first()

    async def find_by_no(self, no: int) -> Optional[Pokemon]:
        return await self._first(Pokemon.no == no)

    async def find_by_id(self, pokemon_id: uuid.UUID) -> Optional[Pokemon]:
        return await self._first(Pokemon.id == pokemon_id)

    async def find_by_name(self, name: str) -> Optional[Pokemon]:
        return await self._first(Pokemon.name == name)

    async def find_page(self, limit: int, offset: int = 0) -> List[Pokemon]:
        """One page of records ordered by `no` ascending, records without `no` first."""
        async with self._translate_failures():
            result = await self.session.execute(
                select(Pokemon)
                .order_by(asc(Pokemon.no).nulls_first())
                .offset(offset)
                .limit(limit)
            )
        return list(result.scalars().all())

    async def count(self) -> int:
        async with self._translate_failures():
            result = await self.session.execute(select(func.count(Pokemon.id)))
        return result.scalar() or 0
