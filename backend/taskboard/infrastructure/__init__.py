"""Infrastructure Layer - database session management and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic (errors excepted)
    - All SQLAlchemy failures surface as core.errors.DatabaseError
"""
