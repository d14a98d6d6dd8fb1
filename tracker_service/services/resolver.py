"""
Reference resolution for task payloads.

A task payload names its project, team and owners either by identifier or
by a human readable value (project/team name, user email or name). Each raw
string is parsed once into an ``Identifier`` or a ``Name`` and then looked up
through a single function per entity kind. Resolution only reads; all of it
happens before the task repository writes anything.
"""
import logging
import math
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..core.exceptions import NotFoundError, ValidationError
from ..models.task import TaskStatus
from ..schemas.task import TaskCreate, TaskUpdate
from ..utils.identifiers import is_identifier
from .entity_store import EntityKind, EntityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identifier:
    value: str


@dataclass(frozen=True)
class Name:
    value: str


Reference = Union[Identifier, Name]


def parse_reference(raw: str) -> Reference:
    """Classify a raw reference string as an identifier or a name."""
    value = raw.strip()
    if is_identifier(value):
        return Identifier(value.lower())
    return Name(value)


# Fields tried, in order, when a reference is given as a name
NAME_FIELDS: Dict[EntityKind, Tuple[str, ...]] = {
    EntityKind.PROJECT: ("name",),
    EntityKind.TEAM: ("name",),
    EntityKind.USER: ("email", "name"),
}


@dataclass
class ResolvedTask:
    """A task payload whose references are canonical identifiers"""
    name: str
    project_id: str
    team_id: str
    owner_ids: List[str]
    time_to_complete: float
    status: str = TaskStatus.TODO.value
    tags: List[str] = field(default_factory=list)


def validate_status(value: Any) -> str:
    if value not in TaskStatus.values():
        raise ValidationError(
            f"Invalid status '{value}'. Must be one of: {', '.join(TaskStatus.values())}",
            field="status",
        )
    return value


def _require_text(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Field '{field_name}' is required", field=field_name)
    return value


def _require_time_to_complete(value: Any) -> float:
    if value is None:
        raise ValidationError("Field 'timeToComplete' is required", field="timeToComplete")
    if isinstance(value, bool) or not isinstance(value, Number) or not math.isfinite(value) or not value > 0:
        raise ValidationError(
            "Field 'timeToComplete' must be a positive number of days",
            field="timeToComplete",
        )
    return float(value)


def _require_owners(owners: Optional[Sequence[str]]) -> List[str]:
    if not owners:
        raise ValidationError("Field 'owners' requires at least one owner", field="owners")
    for owner in owners:
        _require_text(owner, "owners")
    return list(owners)


class ReferenceResolver:
    """Turns identifier-or-name references into canonical identifiers."""

    def __init__(self, store: EntityStore):
        self.store = store

    def lookup(self, kind: EntityKind, reference: Reference) -> str:
        """Return the identifier of the record ``reference`` points at.

        Raises:
            NotFoundError: no record of ``kind`` matches.
        """
        if isinstance(reference, Identifier):
            record = self.store.find_by_identifier(kind, reference.value)
        else:
            record = None
            for field_name in NAME_FIELDS[kind]:
                record = self.store.find_by_field(kind, field_name, reference.value)
                if record is not None:
                    break

        if record is None:
            logger.warning(f"Unresolved {kind.value} reference: {reference.value}")
            raise NotFoundError(kind.value, reference.value)
        return record.id

    def resolve_project(self, raw: str) -> str:
        return self.lookup(EntityKind.PROJECT, parse_reference(raw))

    def resolve_team(self, raw: str) -> str:
        return self.lookup(EntityKind.TEAM, parse_reference(raw))

    def resolve_owners(self, raws: Sequence[str]) -> List[str]:
        # Order and duplicates follow the input
        return [self.lookup(EntityKind.USER, parse_reference(raw)) for raw in raws]

    def resolve(self, payload: TaskCreate) -> ResolvedTask:
        """Validate a creation payload and resolve its references."""
        name = _require_text(payload.name, "name")
        project = _require_text(payload.project, "project")
        team = _require_text(payload.team, "team")
        owners = _require_owners(payload.owners)
        time_to_complete = _require_time_to_complete(payload.time_to_complete)
        status = TaskStatus.TODO.value if payload.status is None else validate_status(payload.status)

        return ResolvedTask(
            name=name,
            project_id=self.resolve_project(project),
            team_id=self.resolve_team(team),
            owner_ids=self.resolve_owners(owners),
            time_to_complete=time_to_complete,
            status=status,
            tags=list(payload.tags or []),
        )

    def resolve_update(self, payload: TaskUpdate) -> Dict[str, Any]:
        """Validate and resolve only the fields present in an update payload."""
        supplied = payload.model_dump(exclude_unset=True)
        changes: Dict[str, Any] = {}

        for field_name, value in supplied.items():
            if field_name == "name":
                changes["name"] = _require_text(value, "name")
            elif field_name == "project":
                changes["project_id"] = self.resolve_project(_require_text(value, "project"))
            elif field_name == "team":
                changes["team_id"] = self.resolve_team(_require_text(value, "team"))
            elif field_name == "owners":
                changes["owner_ids"] = self.resolve_owners(_require_owners(value))
            elif field_name == "tags":
                changes["tags"] = list(value or [])
            elif field_name == "time_to_complete":
                changes["time_to_complete"] = _require_time_to_complete(value)
            elif field_name == "status":
                changes["status"] = validate_status(value)

        return changes
