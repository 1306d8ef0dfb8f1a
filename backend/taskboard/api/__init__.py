"""API Layer - FastAPI routes, principal dependency and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
    - Routes are thin: they delegate to services/
"""
