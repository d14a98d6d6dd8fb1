"""
Generic create/find access to projects, teams, tags and users.
"""
import enum
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import StoreError, ValidationError
from ..models import Project, Tag, Team, User

logger = logging.getLogger(__name__)


class EntityKind(str, enum.Enum):
    PROJECT = "Project"
    TEAM = "Team"
    TAG = "Tag"
    USER = "User"


MODELS = {
    EntityKind.PROJECT: Project,
    EntityKind.TEAM: Team,
    EntityKind.TAG: Tag,
    EntityKind.USER: User,
}

# Column whose uniqueness is reported back to the caller on conflicts
UNIQUE_FIELDS = {
    EntityKind.PROJECT: "name",
    EntityKind.TEAM: "name",
    EntityKind.TAG: "name",
    EntityKind.USER: "email",
}


class EntityStore:
    """Thin repository over the four reference kinds."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_identifier(self, kind: EntityKind, identifier: str) -> Optional[Any]:
        try:
            return self.db.get(MODELS[kind], identifier)
        except SQLAlchemyError as e:
            logger.error(f"Error loading {kind.value} {identifier}: {e}")
            raise StoreError(f"Error loading {kind.value.lower()}") from e

    def find_by_field(self, kind: EntityKind, field: str, value: Any) -> Optional[Any]:
        model = MODELS[kind]
        if field not in model.__table__.columns:
            raise ValueError(f"{kind.value} has no field '{field}'")
        column = getattr(model, field)
        try:
            stmt = select(model).where(column == value).limit(1)
            return self.db.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Error looking up {kind.value} by {field}: {e}")
            raise StoreError(f"Error loading {kind.value.lower()}") from e

    def list(self, kind: EntityKind) -> List[Any]:
        try:
            return list(self.db.execute(select(MODELS[kind])).scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing {kind.value}: {e}")
            raise StoreError(f"Error fetching {kind.value.lower()}s") from e

    def create(self, kind: EntityKind, fields: Dict[str, Any]) -> Any:
        record = MODELS[kind](**fields)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except IntegrityError as e:
            self.db.rollback()
            field = UNIQUE_FIELDS[kind]
            logger.warning(f"Duplicate {kind.value} {field}: {fields.get(field)}")
            raise ValidationError(
                f"{kind.value} with this {field} already exists", field=field
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creating {kind.value}: {e}")
            raise StoreError(f"Error creating {kind.value.lower()}") from e

        logger.info(f"Created {kind.value} {record.id}")
        return record
