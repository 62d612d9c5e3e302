"""
Pokedex Backend - Pokemon Store Tests
=======================================

What:  PokemonStore against a real (in-memory SQLite) database.
Why:   Unique constraints and driver error translation only show up with a
       real driver; the service tests mock all of this away.
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from app.repositories.errors import DuplicateConstraint, StoreError
from app.repositories.pokemon_repository import classify_integrity_error


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO pokemons ...", {}, Exception(message))


class TestClassifyIntegrityError:
    """Driver message shapes mapped to store failures."""

    def test_postgres_detail(self):
        exc = _integrity_error(
            'duplicate key value violates unique constraint "uq_pokemons_name"\n'
            "DETAIL:  Key (name)=(pikachu) already exists."
        )
        failure = classify_integrity_error(exc, {})
        assert isinstance(failure, DuplicateConstraint)
        assert (failure.field, failure.value) == ("name", "pikachu")

    def test_sqlite_message_takes_value_from_write(self):
        exc = _integrity_error("UNIQUE constraint failed: pokemons.no")
        failure = classify_integrity_error(exc, {"name": "raichu", "no": 26})
        assert isinstance(failure, DuplicateConstraint)
        assert (failure.field, failure.value) == ("no", 26)

    def test_other_integrity_errors_are_store_errors(self):
        exc = _integrity_error("NOT NULL constraint failed: pokemons.name")
        assert isinstance(classify_integrity_error(exc, {}), StoreError)


class TestPokemonStore:
    """CRUD behavior of the store on SQLite."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_version(self, store):
        pokemon = await store.create(name="bulbasaur", no=1, attributes={"type": "grass"})

        assert pokemon.id is not None
        assert pokemon.version == 1
        assert pokemon.to_document() == {
            "id": pokemon.id,
            "no": 1,
            "name": "bulbasaur",
            "type": "grass",
        }

    @pytest.mark.asyncio
    async def test_duplicate_name_raises_duplicate_constraint(self, store, db_session):
        await store.create(name="pikachu", no=25)
        await db_session.commit()

        with pytest.raises(DuplicateConstraint) as exc_info:
            await store.create(name="pikachu", no=26)

        assert exc_info.value.field == "name"
        assert exc_info.value.value == "pikachu"
        # The session is usable again after the failed write
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_duplicate_no_raises_duplicate_constraint(self, store, db_session):
        await store.create(name="pikachu", no=25)
        await db_session.commit()

        with pytest.raises(DuplicateConstraint) as exc_info:
            await store.create(name="raichu", no=25)

        assert (exc_info.value.field, exc_info.value.value) == ("no", 25)

    @pytest.mark.asyncio
    async def test_records_without_no_do_not_collide(self, store):
        await store.create(name="missingno")
        await store.create(name="glitch")

        assert await store.count() == 2

    @pytest.mark.asyncio
    async def test_find_page_orders_by_no(self, store):
        for name, no in [("charmander", 4), ("bulbasaur", 1), ("squirtle", 7), ("ivysaur", 2)]:
            await store.create(name=name, no=no)

        page = await store.find_page(limit=2, offset=1)

        assert [p.no for p in page] == [2, 4]

    @pytest.mark.asyncio
    async def test_lookups(self, store):
        created = await store.create(name="eevee", no=133)

        assert (await store.find_by_no(133)).id == created.id
        assert (await store.find_by_id(created.id)).name == "eevee"
        assert (await store.find_by_name("eevee")).no == 133
        assert await store.find_by_name("EEVEE") is None
        assert await store.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_update_bumps_version(self, store):
        pokemon = await store.create(name="pichu", no=172, attributes={"stage": 1})

        updated = await store.update(pokemon, {"name": "pikachu", "attributes": {"stage": 2}})

        assert updated.version == 2
        reloaded = await store.find_by_name("pikachu")
        assert reloaded.attributes == {"stage": 2}

    @pytest.mark.asyncio
    async def test_delete_by_id_reports_rowcount(self, store):
        pokemon = await store.create(name="ditto", no=132)

        assert await store.delete_by_id(uuid4()) == 0
        assert await store.delete_by_id(pokemon.id) == 1
        assert await store.find_by_no(132) is None

    @pytest.mark.asyncio
    async def test_delete_all_and_insert_many(self, store):
        await store.create(name="old", no=999)

        removed = await store.delete_all()
        inserted = await store.insert_many([{"name": "bulbasaur", "no": 1}, {"name": "ivysaur", "no": 2}])

        assert removed == 1
        assert inserted == 2
        assert [p.name for p in await store.find_page(limit=10)] == ["bulbasaur", "ivysaur"]

    @pytest.mark.asyncio
    async def test_find_page_puts_records_without_no_first(self, store):
        await store.create(name="ivysaur", no=2)
        await store.create(name="missingno")
        await store.create(name="bulbasaur", no=1)

        page = await store.find_page(limit=10)

        assert [p.no for p in page] == [None, 1, 2]
