import enum
from typing import List
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..core.database import Base
from ..utils.identifiers import new_identifier
from ..utils.timeutils import utcnow


class TaskStatus(str, enum.Enum):
    """Task status enumeration"""
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    BLOCKED = "Blocked"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class TaskOwner(Base):
    """One entry of a task's ordered owner list"""
    __tablename__ = "task_owners"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(String(32), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User", lazy="joined")


class TaskTag(Base):
    """One entry of a task's ordered tag list"""
    __tablename__ = "task_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(String(32), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    tag = Column(String(100), nullable=False, index=True)


class Task(Base):
    """Task model for database"""
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True, default=new_identifier)
    name = Column(String(200), nullable=False, index=True)

    project_id = Column(String(32), ForeignKey("projects.id"), nullable=False, index=True)
    team_id = Column(String(32), ForeignKey("teams.id"), nullable=False, index=True)

    time_to_complete = Column(Float, nullable=False)
    status = Column(
        String(20),
        default=TaskStatus.TODO.value,
        nullable=False,
        index=True
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    project = relationship("Project")
    team = relationship("Team")
    owner_links = relationship(
        TaskOwner,
        order_by=TaskOwner.position,
        cascade="all, delete-orphan",
    )
    tag_links = relationship(
        TaskTag,
        order_by=TaskTag.position,
        cascade="all, delete-orphan",
    )

    @property
    def owner_ids(self) -> List[str]:
        return [link.user_id for link in self.owner_links]

    @property
    def tags(self) -> List[str]:
        return [link.tag for link in self.tag_links]

    def set_owners(self, user_ids: List[str]) -> None:
        """Replace the owner list, keeping order and duplicates"""
        self.owner_links = [
            TaskOwner(position=index, user_id=user_id)
            for index, user_id in enumerate(user_ids)
        ]

    def set_tags(self, tags: List[str]) -> None:
        self.tag_links = [
            TaskTag(position=index, tag=tag)
            for index, tag in enumerate(tags)
        ]

    def touch(self) -> None:
        """Refresh updated_at on every mutation"""
        now = utcnow()
        self.updated_at = now
        if self.created_at is None:
            self.created_at = now

    def __repr__(self):
        return f"<Task(id={self.id}, name='{self.name}', status='{self.status}')>"
