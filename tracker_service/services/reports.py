"""
Aggregated views over the task collection.

The aggregation helpers are pure functions over a list of already loaded
tasks; ``ReportService`` only decides which snapshot each report reads.
"""
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional

from ..core.exceptions import ValidationError
from ..models.task import Task
from ..schemas.report import LastWeekReport, PendingReport
from ..utils.timeutils import utcnow
from .task_repository import TaskRepository, to_response

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
LAST_WEEK_WINDOW = timedelta(days=7)
GROUP_DIMENSIONS = ("team", "owner", "project")


def _display_name(record) -> str:
    if record is None or not getattr(record, "name", None):
        return UNKNOWN
    return record.name


def project_name(task: Task) -> str:
    return _display_name(task.project)


def team_name(task: Task) -> str:
    return _display_name(task.team)


def owner_names(task: Task) -> List[str]:
    """One name per owner entry; a task with no owners counts once as Unknown"""
    if not task.owner_links:
        return [UNKNOWN]
    return [_display_name(link.user) for link in task.owner_links]


KEY_FUNCTIONS: Dict[str, Callable[[Task], List[str]]] = {
    "team": lambda task: [team_name(task)],
    "project": lambda task: [project_name(task)],
    # fans out: one bucket increment per owner
    "owner": owner_names,
}


def count_by(tasks: Iterable[Task], keys: Callable[[Task], List[str]]) -> Dict[str, int]:
    counts: Dict[str, int] = defaultdict(int)
    for task in tasks:
        for key in keys(task):
            counts[key] += 1
    return dict(counts)


def total_time(tasks: Iterable[Task]) -> float:
    return sum(task.time_to_complete for task in tasks)


def time_by_project(tasks: Iterable[Task]) -> Dict[str, float]:
    totals: Dict[str, float] = defaultdict(float)
    for task in tasks:
        totals[project_name(task)] += task.time_to_complete
    return dict(totals)


def check_dimension(group_by: Optional[str]) -> str:
    if group_by not in GROUP_DIMENSIONS:
        raise ValidationError(
            "Invalid groupBy parameter. Must be 'team', 'owner', or 'project'.",
            field="groupBy",
        )
    return group_by


def group_closed_tasks(tasks: Iterable[Task], group_by: Optional[str]) -> Dict[str, int]:
    group_by = check_dimension(group_by)
    return count_by(tasks, KEY_FUNCTIONS[group_by])


class ReportService:
    """Builds the three task reports; never writes."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def last_week(self, now: Optional[datetime] = None) -> LastWeekReport:
        since = (now or utcnow()) - LAST_WEEK_WINDOW
        tasks = self.repository.completed(since=since)
        logger.debug(f"Last-week report over {len(tasks)} tasks since {since.isoformat()}")
        return LastWeekReport(
            total=len(tasks),
            by_project=count_by(tasks, KEY_FUNCTIONS["project"]),
            tasks=[to_response(task) for task in tasks],
        )

    def pending(self, breakdown: bool = False) -> PendingReport:
        tasks = self.repository.pending()
        return PendingReport(
            total_days_pending=total_time(tasks),
            by_project=time_by_project(tasks) if breakdown else None,
        )

    def closed_tasks(self, group_by: Optional[str]) -> Dict[str, int]:
        # Reject a bad dimension before touching the store
        group_by = check_dimension(group_by)
        return count_by(self.repository.completed(), KEY_FUNCTIONS[group_by])
