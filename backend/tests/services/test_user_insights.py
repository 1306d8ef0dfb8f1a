"""User Insights - statistics and activity feed over a seeded SQLite database.

Tests cover:
    - Stats: membership-scoped projects (archived included), assigned-or-authored tasks
    - Stats ignore projects the user is not a member of and tasks not involving them
    - Activity: at most 5 rows per source, 10 records, strictly descending
    - Activity with fewer rows returns everything, sorted
    - /users/me/stats and /users/me/activity routes
"""

from datetime import datetime, timedelta, timezone

from taskboard.models.project import Project
from taskboard.models.project_member import ProjectMember
from taskboard.models.task import Task
from taskboard.services.user_insights import UserInsightsService

BASE = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


async def _project(db, owner, name, status="active", minutes=0, archived=False, members=()):
    project = Project(
        name=name, status=status, created_by=owner.id, is_archived=archived,
        updated_at=BASE + timedelta(minutes=minutes),
    )
    db.add(project)
    await db.flush()
    for user in (owner, *members):
        db.add(ProjectMember(project_id=project.id, user_id=user.id))
    await db.commit()
    return project


async def _task(db, project, author, title, status="todo", assignee=None, minutes=0):
    task = Task(
        project_id=project.id, title=title, status=status,
        created_by=author.id, assigned_to=assignee.id if assignee else None,
        updated_at=BASE + timedelta(minutes=minutes),
    )
    db.add(task)
    await db.commit()
    return task


async def _seed_stats_scenario(db, alice, bob):
    """alice: 3 member projects (2 active, 1 completed), 5 involved tasks (3 done)."""
    p1 = await _project(db, alice, "Active one")
    await _project(db, bob, "Active two", members=[alice], archived=True)
    await _project(db, alice, "Done", status="completed")
    foreign = await _project(db, bob, "Not alice's")

    await _task(db, p1, alice, "a1", status="done")
    await _task(db, p1, alice, "a2", status="done")
    await _task(db, foreign, bob, "assigned to alice", status="done", assignee=alice)
    await _task(db, p1, alice, "a3", status="in_progress")
    await _task(db, foreign, bob, "assigned to alice 2", status="todo", assignee=alice)
    await _task(db, foreign, bob, "bob only", status="done")


# ─── stats ───────────────────────────────────────────────────────

async def test_stats_for_three_projects_and_five_tasks(test_db, alice, bob):
    await _seed_stats_scenario(test_db, alice, bob)
    stats = await UserInsightsService(test_db).compute_user_stats(alice.id)
    assert stats.to_dict() == {
        "total_projects": 3,
        "active_projects": 2,
        "completed_projects": 1,
        "total_tasks": 5,
        "completed_tasks": 3,
    }


async def test_stats_for_user_without_data_are_zero(test_db, carol):
    stats = await UserInsightsService(test_db).compute_user_stats(carol.id)
    assert stats.total_projects == 0
    assert stats.total_tasks == 0


async def test_task_assigned_and_authored_counts_once(test_db, alice):
    project = await _project(test_db, alice, "Solo")
    await _task(test_db, project, alice, "self-assigned", status="done", assignee=alice)
    stats = await UserInsightsService(test_db).compute_user_stats(alice.id)
    assert stats.total_tasks == 1
    assert stats.completed_tasks == 1


# ─── activity ────────────────────────────────────────────────────

async def test_activity_returns_ten_newest_first(test_db, alice):
    projects = []
    for i in range(7):
        projects.append(await _project(test_db, alice, f"P{i}", minutes=i * 2))
    for i in range(7):
        await _task(test_db, projects[0], alice, f"T{i}", minutes=i * 2 + 1)

    feed = await UserInsightsService(test_db).compute_activity(alice.id)

    assert len(feed) == 10
    dates = [r.date for r in feed]
    assert all(a > b for a, b in zip(dates, dates[1:]))
    assert sum(1 for r in feed if r.type.value == "project") == 5
    assert sum(1 for r in feed if r.type.value == "task") == 5
    assert feed[0].title == "T6"
    assert {r.title for r in feed if r.type.value == "project"} == {"P2", "P3", "P4", "P5", "P6"}


async def test_activity_with_few_rows_returns_all_sorted(test_db, alice):
    project = await _project(test_db, alice, "Launch", status="completed", minutes=10)
    await _task(test_db, project, alice, "Countdown", status="done", minutes=20)
    await _task(test_db, project, alice, "Fuel", minutes=5)

    feed = await UserInsightsService(test_db).compute_activity(alice.id)

    assert [(r.title, r.action) for r in feed] == [
        ("Countdown", "task completed"),
        ("Launch", "project completed"),
        ("Fuel", "task updated"),
    ]


async def test_activity_excludes_unrelated_rows(test_db, alice, bob):
    foreign = await _project(test_db, bob, "Bob's")
    await _task(test_db, foreign, bob, "Bob's task")
    assert await UserInsightsService(test_db).compute_activity(alice.id) == []


# ─── routes ──────────────────────────────────────────────────────

async def test_stats_route(client, test_db, alice, bob, auth_headers):
    await _seed_stats_scenario(test_db, alice, bob)
    res = await client.get("/api/v1/users/me/stats", headers=auth_headers(alice))
    assert res.status_code == 200
    assert res.json() == {
        "total_projects": 3,
        "active_projects": 2,
        "completed_projects": 1,
        "total_tasks": 5,
        "completed_tasks": 3,
    }


async def test_activity_route_shape(client, test_db, alice, auth_headers):
    project = await _project(test_db, alice, "Launch", minutes=1)
    await _task(test_db, project, alice, "Countdown", minutes=2)
    res = await client.get("/api/v1/users/me/activity", headers=auth_headers(alice))
    assert res.status_code == 200
    body = res.json()
    assert [r["type"] for r in body] == ["task", "project"]
    assert body[0]["title"] == "Countdown"
    assert body[0]["action"] == "task updated"
    assert set(body[0]) == {"id", "type", "title", "action", "date"}


async def test_activity_reflects_task_update(client, test_db, alice, auth_headers):
    project = await _project(test_db, alice, "Launch", minutes=1)
    task = await _task(test_db, project, alice, "Countdown", minutes=0)
    res = await client.put(
        f"/api/v1/tasks/{task.id}", json={"status": "done"}, headers=auth_headers(alice),
    )
    assert res.status_code == 200
    res = await client.get("/api/v1/users/me/activity", headers=auth_headers(alice))
    assert res.json()[0]["action"] == "task completed"
