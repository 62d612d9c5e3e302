# Repositories package init
"""
Pokedex Backend - Store Layer
==============================

What:  The only layer that knows how records are persisted.
Why:   Services work against a store object handed to their constructor, so a
       unit test can swap in an AsyncMock and the SQL stays in one place.

Store Inventory:
    - PokemonStore: create/find/update/delete over the `pokemons` table
    - errors:       StoreFailure variants raised by every store

Failure contract:
    Every write either succeeds or raises one of
    DuplicateConstraint(field, value) | StoreError(cause).
    Services branch on the type, never on driver error codes.
"""
