"""Project Rules - tests for date validation and partial-update merging."""

from datetime import date

import pytest

from taskboard.core.errors import InputValidationError
from taskboard.core.project_rules import check_project_dates, merge_project_changes


def test_dates_in_order_pass():
    check_project_dates(date(2026, 1, 1), date(2026, 2, 1))


def test_same_day_passes():
    check_project_dates(date(2026, 1, 1), date(2026, 1, 1))


def test_missing_dates_pass():
    check_project_dates(None, date(2026, 1, 1))
    check_project_dates(date(2026, 1, 1), None)
    check_project_dates(None, None)


def test_end_before_start_raises():
    with pytest.raises(InputValidationError) as exc_info:
        check_project_dates(date(2026, 3, 1), date(2026, 2, 1))
    assert exc_info.value.field == "end_date"
    assert exc_info.value.http_status == 400


def test_merge_drops_none_and_unknown_fields():
    applied = merge_project_changes(
        {"start_date": None, "end_date": None},
        {"name": "Renamed", "description": None, "created_by": "someone", "is_archived": True},
    )
    assert applied == {"name": "Renamed"}


def test_merge_checks_dates_against_current_values():
    current = {"start_date": date(2026, 5, 1), "end_date": date(2026, 6, 1)}
    with pytest.raises(InputValidationError):
        merge_project_changes(current, {"end_date": date(2026, 4, 1)})


def test_merge_accepts_moving_both_dates_together():
    current = {"start_date": date(2026, 5, 1), "end_date": date(2026, 6, 1)}
    applied = merge_project_changes(
        current, {"start_date": date(2026, 1, 1), "end_date": date(2026, 2, 1)},
    )
    assert applied == {"start_date": date(2026, 1, 1), "end_date": date(2026, 2, 1)}
