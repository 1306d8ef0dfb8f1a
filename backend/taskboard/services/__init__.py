"""Services Layer - async orchestration of core rules over the database.

Invariants:
    - Each service wraps one request-scoped AsyncSession
    - Decisions (authorization, stats, feed ranking, field rules) are delegated to core/
    - Domain failures raised as core.errors types before any mutation
"""
