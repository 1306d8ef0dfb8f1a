"""Taskboard Application Package - project membership, authorization and activity engine.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
