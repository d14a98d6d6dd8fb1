"""
Task persistence and queries.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from ..core.exceptions import NotFoundError, StoreError, ValidationError
from ..models.task import Task, TaskOwner, TaskStatus, TaskTag
from ..schemas.task import RefOut, TaskResponse
from ..utils.timeutils import convert_datetime_to_utc, utcnow
from .resolver import ResolvedTask, validate_status

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {"timeToComplete": Task.time_to_complete}


@dataclass
class TaskFilter:
    """Optional task filters, combined with AND"""
    owner: Optional[str] = None
    team: Optional[str] = None
    project: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None

    @classmethod
    def from_query(
        cls,
        owner: Optional[str] = None,
        team: Optional[str] = None,
        project: Optional[str] = None,
        status: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> "TaskFilter":
        """Build a filter from query-string values; ``tags`` is comma separated."""
        tag_list = None
        if tags:
            tag_list = [tag.strip() for tag in tags.split(",") if tag.strip()] or None
        return cls(owner=owner or None, team=team or None, project=project or None,
                   status=status or None, tags=tag_list)


def _ref(record_id: str, record: Any, expand: bool) -> RefOut:
    name = record.name if (expand and record is not None) else None
    return RefOut(id=record_id, name=name)


def to_response(task: Task, expand: bool = True) -> TaskResponse:
    """Render a task, optionally expanding references to include names."""
    return TaskResponse(
        id=task.id,
        name=task.name,
        project=_ref(task.project_id, task.project, expand),
        team=_ref(task.team_id, task.team, expand),
        owners=[_ref(link.user_id, link.user, expand) for link in task.owner_links],
        tags=task.tags,
        time_to_complete=task.time_to_complete,
        status=task.status,
        created_at=convert_datetime_to_utc(task.created_at),
        updated_at=convert_datetime_to_utc(task.updated_at),
    )


class TaskRepository:
    """Owns task records."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return select(Task).options(
            joinedload(Task.project),
            joinedload(Task.team),
            selectinload(Task.owner_links).joinedload(TaskOwner.user),
            selectinload(Task.tag_links),
        )

    def _all(self, stmt) -> List[Task]:
        try:
            return list(self.db.execute(stmt).scalars().unique().all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching tasks: {e}")
            raise StoreError("Error fetching tasks") from e

    def _commit(self, task: Optional[Task], action: str) -> None:
        try:
            self.db.commit()
            if task is not None:
                self.db.refresh(task)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error {action} task: {e}")
            raise StoreError(f"Error {action} task") from e

    def create(self, resolved: ResolvedTask) -> Task:
        now = utcnow()
        task = Task(
            name=resolved.name,
            project_id=resolved.project_id,
            team_id=resolved.team_id,
            time_to_complete=resolved.time_to_complete,
            status=resolved.status,
            created_at=now,
            updated_at=now,
        )
        task.set_owners(resolved.owner_ids)
        task.set_tags(resolved.tags)
        self.db.add(task)
        self._commit(task, "creating")
        logger.info(f"Created task {task.id} in project {task.project_id}")
        return task

    def get(self, task_id: str) -> Task:
        tasks = self._all(self._query().where(Task.id == task_id))
        if not tasks:
            raise NotFoundError("Task", task_id)
        return tasks[0]

    def list(self, task_filter: Optional[TaskFilter] = None, sort_by: Optional[str] = None) -> List[Task]:
        """List tasks matching ``task_filter``, optionally sorted ascending."""
        stmt = self._query()
        task_filter = task_filter or TaskFilter()

        if task_filter.owner:
            stmt = stmt.where(Task.owner_links.any(TaskOwner.user_id == task_filter.owner))
        if task_filter.team:
            stmt = stmt.where(Task.team_id == task_filter.team)
        if task_filter.project:
            stmt = stmt.where(Task.project_id == task_filter.project)
        if task_filter.status:
            stmt = stmt.where(Task.status == validate_status(task_filter.status))
        if task_filter.tags:
            stmt = stmt.where(Task.tag_links.any(TaskTag.tag.in_(task_filter.tags)))

        if sort_by:
            if sort_by not in SORTABLE_FIELDS:
                raise ValidationError(
                    f"Invalid sortBy '{sort_by}'. Must be one of: {', '.join(SORTABLE_FIELDS)}",
                    field="sortBy",
                )
            stmt = stmt.order_by(SORTABLE_FIELDS[sort_by].asc(), Task.created_at.asc())
        else:
            stmt = stmt.order_by(Task.created_at.asc())

        return self._all(stmt)

    def completed(self, since: Optional[datetime] = None) -> List[Task]:
        """Completed tasks, optionally only those updated at or after ``since``."""
        stmt = self._query().where(Task.status == TaskStatus.COMPLETED.value)
        if since is not None:
            stmt = stmt.where(Task.updated_at >= since)
        return self._all(stmt.order_by(Task.updated_at.asc()))

    def pending(self) -> List[Task]:
        stmt = self._query().where(Task.status != TaskStatus.COMPLETED.value)
        return self._all(stmt.order_by(Task.created_at.asc()))

    def update(self, task_id: str, changes: Dict[str, Any]) -> Task:
        """Replace the supplied mutable fields of a task."""
        task = self.get(task_id)

        for field_name, value in changes.items():
            if field_name == "owner_ids":
                task.set_owners(value)
            elif field_name == "tags":
                task.set_tags(value)
            elif field_name in ("name", "project_id", "team_id", "time_to_complete", "status"):
                setattr(task, field_name, value)

        task.touch()
        self._commit(task, "updating")
        logger.info(f"Updated task {task.id}")
        return task

    def delete(self, task_id: str) -> None:
        task = self.get(task_id)
        self.db.delete(task)
        self._commit(None, "deleting")
        logger.info(f"Deleted task {task_id}")
