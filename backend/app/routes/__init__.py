# Routes package init
"""
Pokedex Backend - API Routes Package
======================================

Route Inventory:
    - pokemon.py: POST/GET/PATCH/DELETE {API_PREFIX}/pokemon...
    - seed.py:    POST {API_PREFIX}/seed
    - health.py:  GET  /health

Routes stay thin: extract request data, call the service, set status and
headers. Record rules live in app/services.
"""
