"""Activity Feed - tests for normalization, ranking and truncation.

Tests cover:
    - Project/task mapping to ActivityRecord (action labels by status)
    - 5 + 5 distinct timestamps -> 10 records strictly descending
    - Fewer than 10 sources -> all records, sorted
    - Truncation to the limit
    - Deterministic tie-break on identical dates
    - Naive and aware timestamps merge without error
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import UUID, uuid4

from taskboard.core.activity_feed import (
    ActivityRecord, compose_activity_feed, project_to_activity, rank_activity,
    task_to_activity,
)
from taskboard.core.domain_types import ActivityType

BASE = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)


def _project(name="P", status="active", minutes=0, id=None):
    return SimpleNamespace(
        id=id or uuid4(), name=name, status=status,
        updated_at=BASE + timedelta(minutes=minutes),
    )


def _task(title="T", status="todo", minutes=0, id=None):
    return SimpleNamespace(
        id=id or uuid4(), title=title, status=status,
        updated_at=BASE + timedelta(minutes=minutes),
    )


# ─── mapping ─────────────────────────────────────────────────────

def test_completed_project_maps_to_project_completed():
    project = _project(name="Launch", status="completed")
    record = project_to_activity(project)
    assert record == ActivityRecord(
        id=project.id, type=ActivityType.PROJECT, title="Launch",
        action="project completed", date=project.updated_at,
    )


def test_other_project_statuses_map_to_project_updated():
    assert project_to_activity(_project(status="active")).action == "project updated"
    assert project_to_activity(_project(status="on_hold")).action == "project updated"


def test_done_task_maps_to_task_completed():
    record = task_to_activity(_task(title="Write docs", status="done"))
    assert record.type == ActivityType.TASK
    assert record.title == "Write docs"
    assert record.action == "task completed"


def test_open_task_maps_to_task_updated():
    assert task_to_activity(_task(status="todo")).action == "task updated"
    assert task_to_activity(_task(status="in_progress")).action == "task updated"


def test_to_dict_serializes_id_type_and_date():
    task = _task(title="X")
    data = task_to_activity(task).to_dict()
    assert data == {
        "id": str(task.id),
        "type": "task",
        "title": "X",
        "action": "task updated",
        "date": task.updated_at.isoformat(),
    }


# ─── merge & rank ────────────────────────────────────────────────

def test_five_and_five_give_ten_strictly_descending():
    projects = [_project(name=f"P{i}", minutes=i * 2) for i in range(5)]
    tasks = [_task(title=f"T{i}", minutes=i * 2 + 1) for i in range(5)]
    feed = compose_activity_feed(projects, tasks)
    assert len(feed) == 10
    dates = [r.date for r in feed]
    assert all(a > b for a, b in zip(dates, dates[1:]))
    assert feed[0].title == "T4"
    assert feed[-1].title == "P0"


def test_fewer_sources_return_all_sorted():
    projects = [_project(name="old", minutes=1)]
    tasks = [_task(title="new", minutes=5), _task(title="mid", minutes=3)]
    feed = compose_activity_feed(projects, tasks)
    assert [r.title for r in feed] == ["new", "mid", "old"]


def test_empty_sources_return_empty_feed():
    assert compose_activity_feed([], []) == []


def test_feed_is_truncated_to_limit():
    projects = [_project(minutes=i) for i in range(8)]
    tasks = [_task(minutes=100 + i) for i in range(8)]
    feed = compose_activity_feed(projects, tasks)
    assert len(feed) == 10
    assert all(r.type == ActivityType.TASK for r in feed[:8])
    assert compose_activity_feed(projects, tasks, limit=3) == feed[:3]


def test_identical_dates_break_ties_by_type_then_id():
    low = UUID(int=1)
    high = UUID(int=2)
    records = [
        task_to_activity(_task(id=high)),
        task_to_activity(_task(id=low)),
        project_to_activity(_project(id=high)),
        project_to_activity(_project(id=low)),
    ]
    ranked = rank_activity(records)
    assert [(r.type.value, r.id) for r in ranked] == [
        ("project", low), ("project", high), ("task", low), ("task", high),
    ]


def test_tie_break_is_independent_of_input_order():
    projects = [_project(minutes=0) for _ in range(3)]
    tasks = [_task(minutes=0) for _ in range(3)]
    first = compose_activity_feed(projects, tasks)
    second = compose_activity_feed(list(reversed(projects)), list(reversed(tasks)))
    assert first == second


def test_naive_dates_are_read_as_utc():
    naive = SimpleNamespace(
        id=uuid4(), title="naive", status="todo",
        updated_at=datetime(2026, 10, 1, 13, 0),
    )
    aware = _project(name="aware", minutes=0)  # 12:00 UTC
    feed = compose_activity_feed([aware], [naive])
    assert [r.title for r in feed] == ["naive", "aware"]
    assert feed[0].date.tzinfo is timezone.utc
