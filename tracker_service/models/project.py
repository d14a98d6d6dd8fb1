import enum
from sqlalchemy import Column, String, Text, DateTime

from ..core.database import Base
from ..utils.identifiers import new_identifier
from ..utils.timeutils import utcnow


class ProjectStatus(str, enum.Enum):
    """Project status enumeration"""
    TODO = "To Do"
    IN_PROGRESS = "In Progress"


class Project(Base):
    """Project model for database"""
    __tablename__ = "projects"

    id = Column(String(32), primary_key=True, default=new_identifier)
    name = Column(String(200), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    status = Column(
        String(20),
        default=ProjectStatus.TODO.value,
        nullable=False
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Project(id={self.id}, name='{self.name}')>"
