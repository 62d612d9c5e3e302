"""
Pokedex Backend - Seed Service
===============================

What:  Replaces every stored record with the PokeAPI catalogue.
Why:   Gives a fresh environment a realistic data set in one call.
How:   GET {pokeapi_url}/pokemon?limit=N, derive `no` from each result URL
       (https://pokeapi.co/api/v2/pokemon/25/ → 25), delete all, bulk insert.

Failure modes:
    PokeAPI unreachable / non-2xx / malformed body → UpstreamServiceError (503)
    Store failure                                  → same classification as
                                                     PokemonService
"""

import logging
from typing import Any, Dict, List

import httpx

from app.exceptions import UpstreamServiceError
from app.repositories.errors import StoreFailure
from app.repositories.pokemon_repository import PokemonStore
from app.services.pokemon_service import PokemonService

logger = logging.getLogger(__name__)


def number_from_url(url: str) -> int:
    """Catalogue number from the last path segment of a PokeAPI resource URL."""
    return int(url.rstrip("/").rsplit("/", 1)[-1])


class SeedService:
    """Populates the store from PokeAPI through an injected httpx client."""

    def __init__(
        self,
        store: PokemonStore,
        client: httpx.AsyncClient,
        base_url: str,
        limit: int,
    ):
        self.store = store
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.limit = limit

    async def fetch_catalogue(self) -> List[Dict[str, Any]]:
        """Download and parse the catalogue into {name, no} rows."""
        url = f"{self.base_url}/pokemon"
        try:
            response = await self.client.get(url, params={"limit": self.limit})
            response.raise_for_status()
            results = response.json()["results"]
            return [
                {"name": item["name"].lower(), "no": number_from_url(item["url"])}
                for item in results
            ]
        except httpx.HTTPError as exc:
            logger.error("PokeAPI request failed: %s", exc)
            raise UpstreamServiceError(context={"url": url, "error_type": type(exc).__name__}) from exc
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Unexpected PokeAPI payload: %s", exc)
            raise UpstreamServiceError(
                message="The Pokemon catalogue service returned an unexpected response",
                context={"url": url},
            ) from exc

    async def populate(self) -> int:
        """Fetch first, then wipe and insert, so an upstream failure leaves data intact."""
        rows = await self.fetch_catalogue()
        try:
            removed = await self.store.delete_all()
            inserted = await self.store.insert_many(rows)
        except StoreFailure as exc:
            PokemonService.handle_exceptions(exc)
        logger.info("Seed complete: removed %d, inserted %d", removed, inserted)
        return inserted
