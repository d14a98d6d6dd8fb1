"""Reporting aggregator: grouped counts and effort sums over task snapshots.

Invariants:
    - Pending total equals the summed effort of every task that is not Completed
    - Owner grouping fans out: bucket counts sum to the completed tasks' owner counts
    - Unexpandable references are grouped under "Unknown"
    - Last-week window is inclusive at now - 7 days
"""

from datetime import timedelta

import pytest

from tracker_service.core.exceptions import ValidationError
from tracker_service.services.entity_store import EntityKind
from tracker_service.services.reports import UNKNOWN, group_closed_tasks
from tracker_service.services.resolver import ResolvedTask
from tracker_service.utils.identifiers import new_identifier
from tracker_service.utils.timeutils import utcnow


@pytest.fixture
def make_task(repository, seed):
    def _make(owners, status="To Do", days=1.0, project=None, team=None):
        return repository.create(ResolvedTask(
            name="task",
            project_id=project or seed["project"].id,
            team_id=team or seed["team"].id,
            owner_ids=[owner.id for owner in owners],
            time_to_complete=days,
            status=status,
        ))
    return _make


def test_closed_by_owner_example(reports, make_task, seed):
    a, b = seed["alice"], seed["bob"]
    make_task([a, b], status="Completed", days=2)
    make_task([a], status="Completed", days=4)
    pending = make_task([b], status="To Do", days=5)

    assert reports.closed_tasks("owner") == {"Alice": 2, "Bob": 1}
    assert reports.pending().total_days_pending == pending.time_to_complete


def test_owner_fan_out_sum(reports, repository, make_task, seed):
    a, b = seed["alice"], seed["bob"]
    make_task([a, b, b], status="Completed")
    make_task([b], status="Completed")
    make_task([a], status="Blocked")

    grouped = reports.closed_tasks("owner")
    expected = sum(len(t.owner_links) for t in repository.completed())
    assert sum(grouped.values()) == expected == 4
    assert grouped == {"Alice": 1, "Bob": 3}


def test_closed_by_team_and_project(reports, store, make_task, seed):
    mobile = store.create(EntityKind.TEAM, {"name": "Mobile"})
    make_task([seed["alice"]], status="Completed")
    make_task([seed["alice"], seed["bob"]], status="Completed", team=mobile.id)
    make_task([seed["bob"]], status="In Progress", team=mobile.id)

    assert reports.closed_tasks("team") == {"Platform": 1, "Mobile": 1}
    assert reports.closed_tasks("project") == {"Apollo": 2}


def test_unknown_references(reports, make_task, seed):
    dangling = new_identifier()
    make_task([seed["alice"]], status="Completed", project=dangling, team=dangling)

    assert reports.closed_tasks("project") == {UNKNOWN: 1}
    assert reports.closed_tasks("team") == {UNKNOWN: 1}


def test_unknown_owner_fans_out_with_known_owners(reports, make_task, seed):
    class _Dangling:
        id = new_identifier()

    make_task([_Dangling, seed["alice"]], status="Completed")

    assert reports.closed_tasks("owner") == {UNKNOWN: 1, "Alice": 1}


@pytest.mark.parametrize("group_by", [None, "", "tag", "owners"])
def test_unsupported_dimension(reports, group_by):
    with pytest.raises(ValidationError) as exc_info:
        reports.closed_tasks(group_by)
    assert exc_info.value.field == "groupBy"


def test_empty_reports(reports):
    assert reports.closed_tasks("team") == {}
    assert reports.pending().total_days_pending == 0
    last_week = reports.last_week()
    assert last_week.total == 0
    assert last_week.by_project == {}


def test_pending_total_and_breakdown(reports, store, make_task, seed):
    other = store.create(EntityKind.PROJECT, {"name": "Gemini"})
    make_task([seed["alice"]], status="To Do", days=1.5)
    make_task([seed["alice"]], status="Blocked", days=2)
    make_task([seed["bob"]], status="In Progress", days=4, project=other.id)
    make_task([seed["bob"]], status="Completed", days=100)

    report = reports.pending(breakdown=True)
    assert report.total_days_pending == 7.5
    assert report.by_project == {"Apollo": 3.5, "Gemini": 4}
    assert reports.pending().by_project is None


def test_last_week_window(reports, make_task, db, seed):
    now = utcnow()
    recent = make_task([seed["alice"]], status="Completed")
    old = make_task([seed["alice"]], status="Completed")
    make_task([seed["alice"]], status="To Do")
    recent.updated_at = now - timedelta(days=3)
    old.updated_at = now - timedelta(days=8)
    db.commit()

    report = reports.last_week(now=now)
    assert report.total == 1
    assert report.by_project == {"Apollo": 1}
    assert [task.id for task in report.tasks] == [recent.id]


def test_last_week_lower_bound_is_inclusive(reports, make_task, db, seed):
    now = utcnow()
    edge = make_task([seed["alice"]], status="Completed")
    edge.updated_at = now - timedelta(days=7)
    db.commit()

    assert reports.last_week(now=now).total == 1


def test_group_closed_tasks_without_owners_counts_unknown():
    class _Task:
        owner_links = []
        project = None
        team = None

    assert group_closed_tasks([_Task()], "owner") == {UNKNOWN: 1}
