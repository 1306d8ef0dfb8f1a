"""Project Rules - field-level rules for project create and update.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - end_date, when both dates are set, is never before start_date
    - Partial updates apply only provided, non-null fields; everything else is preserved
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

from taskboard.core.errors import InputValidationError

UPDATABLE_PROJECT_FIELDS = (
    "name", "description", "start_date", "end_date",
    "status", "priority", "color",
)


def check_project_dates(start_date: date | None, end_date: date | None) -> None:
    """Raise InputValidationError if the project would end before it starts."""
    if start_date and end_date and end_date < start_date:
        raise InputValidationError(
            f"end_date {end_date.isoformat()} is before start_date {start_date.isoformat()}",
            field="end_date",
        )


def merge_project_changes(
    current: Mapping[str, Any], changes: Mapping[str, Any],
) -> dict[str, Any]:
    """Return the fields to write: provided non-null values over current ones.

    Unknown keys in `changes` are ignored. The merged date pair is checked, so
    moving only one of the two dates cannot produce an inverted range.
    """
    applied = {
        name: value for name, value in changes.items()
        if name in UPDATABLE_PROJECT_FIELDS and value is not None
    }
    merged = {**current, **applied}
    check_project_dates(merged.get("start_date"), merged.get("end_date"))
    return applied
