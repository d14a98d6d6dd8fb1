"""Reference resolver: identifier-or-name references become canonical ids.

Invariants:
    - Resolved owners keep input length, order and duplicates
    - Name and identifier references to the same record resolve identically
    - Missing fields and bad status values raise ValidationError naming the field
    - Unresolvable references raise NotFoundError naming the value, nothing is written
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from tracker_service.core.exceptions import NotFoundError, ValidationError
from tracker_service.models import Task
from tracker_service.schemas.task import TaskCreate, TaskUpdate
from tracker_service.services.resolver import Identifier, Name, parse_reference
from tracker_service.utils.identifiers import new_identifier


def _payload(**overrides):
    data = {
        "name": "Write docs",
        "project": "Apollo",
        "team": "Platform",
        "owners": ["alice@example.com"],
        "time_to_complete": 3,
    }
    data.update(overrides)
    return TaskCreate(**data)


def test_parse_reference_identifier():
    identifier = new_identifier()
    assert parse_reference(identifier) == Identifier(identifier)


def test_parse_reference_uppercase_identifier_is_normalised():
    identifier = new_identifier()
    assert parse_reference(identifier.upper()) == Identifier(identifier)


def test_parse_reference_name():
    assert parse_reference("  Apollo ") == Name("Apollo")
    assert parse_reference("abc123") == Name("abc123")


def test_project_by_name_matches_project_by_id(resolver, seed):
    by_name = resolver.resolve(_payload(project="Apollo"))
    by_id = resolver.resolve(_payload(project=seed["project"].id))
    assert by_name.project_id == by_id.project_id == seed["project"].id


def test_team_by_name_and_id(resolver, seed):
    assert resolver.resolve(_payload(team="Platform")).team_id == seed["team"].id
    assert resolver.resolve(_payload(team=seed["team"].id)).team_id == seed["team"].id


def test_owners_by_email_name_and_id_keep_order(resolver, seed):
    alice, bob = seed["alice"], seed["bob"]
    resolved = resolver.resolve(_payload(owners=["Bob", alice.id, "alice@example.com"]))
    assert resolved.owner_ids == [bob.id, alice.id, alice.id]


def test_duplicate_owners_are_preserved(resolver, seed):
    resolved = resolver.resolve(_payload(owners=["Alice", "Alice"]))
    assert resolved.owner_ids == [seed["alice"].id, seed["alice"].id]


def test_defaults(resolver, seed):
    resolved = resolver.resolve(_payload())
    assert resolved.status == "To Do"
    assert resolved.tags == []
    assert resolved.time_to_complete == 3.0


def test_tags_and_status_pass_through(resolver, seed):
    resolved = resolver.resolve(_payload(tags=["urgent", "docs"], status="Blocked"))
    assert resolved.tags == ["urgent", "docs"]
    assert resolved.status == "Blocked"


@pytest.mark.parametrize("field", ["name", "project", "team", "owners", "time_to_complete"])
def test_missing_required_field(resolver, seed, field):
    with pytest.raises(ValidationError) as exc_info:
        resolver.resolve(_payload(**{field: None}))
    expected = "timeToComplete" if field == "time_to_complete" else field
    assert exc_info.value.field == expected


def test_blank_name_is_missing(resolver, seed):
    with pytest.raises(ValidationError):
        resolver.resolve(_payload(name="   "))


@pytest.mark.parametrize("value", [0, -2])
def test_non_positive_time_to_complete(resolver, seed, value):
    with pytest.raises(ValidationError):
        resolver.resolve(_payload(time_to_complete=value))


@pytest.mark.parametrize("value", [True, "3", float("inf"), float("nan")])
def test_non_numeric_or_infinite_time_to_complete(resolver, seed, value):
    data = _payload().model_dump()
    data["time_to_complete"] = value
    with pytest.raises(ValidationError) as exc_info:
        resolver.resolve(TaskCreate.model_construct(**data))
    assert exc_info.value.field == "timeToComplete"


@pytest.mark.parametrize("value", [True, "3", float("inf")])
def test_task_schema_rejects_loose_time_to_complete(value):
    with pytest.raises(PydanticValidationError):
        TaskCreate(timeToComplete=value)


def test_invalid_status(resolver, seed):
    with pytest.raises(ValidationError) as exc_info:
        resolver.resolve(_payload(status="Done"))
    assert exc_info.value.field == "status"


def test_unknown_project_name(resolver, seed):
    with pytest.raises(NotFoundError) as exc_info:
        resolver.resolve(_payload(project="Gemini"))
    assert exc_info.value.value == "Gemini"
    assert exc_info.value.kind == "Project"


def test_unknown_project_identifier(resolver, seed):
    missing = new_identifier()
    with pytest.raises(NotFoundError) as exc_info:
        resolver.resolve(_payload(project=missing))
    assert exc_info.value.value == missing


def test_unknown_owner_names_the_value_and_writes_nothing(resolver, seed, db):
    with pytest.raises(NotFoundError) as exc_info:
        resolver.resolve(_payload(owners=["Alice", "nobody@example.com"]))
    assert exc_info.value.value == "nobody@example.com"
    assert db.query(Task).count() == 0


def test_resolve_update_only_supplied_fields(resolver, seed):
    changes = resolver.resolve_update(TaskUpdate(status="Completed", owners=["Bob"]))
    assert changes == {"status": "Completed", "owner_ids": [seed["bob"].id]}


def test_resolve_update_rejects_bad_status(resolver, seed):
    with pytest.raises(ValidationError):
        resolver.resolve_update(TaskUpdate(status="Archived"))
