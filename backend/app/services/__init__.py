# Services package init
"""
Pokedex Backend - Services Layer
==================================

What:  Business logic between routes (HTTP) and the store (persistence).

Service Inventory:
    - PokemonService: record create/list/find/update/remove and error classification
    - SeedService:    reload the store from the PokeAPI catalogue

Services receive their store (and, for seeding, an HTTP client) through
their constructor, so tests build them directly around an AsyncMock store.
"""
