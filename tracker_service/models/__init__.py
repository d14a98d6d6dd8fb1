# tracker_service/models/__init__.py
"""Database models for Task Tracker Service."""
from .project import Project, ProjectStatus
from .team import Team
from .tag import Tag
from .user import User
from .task import Task, TaskOwner, TaskTag, TaskStatus

__all__ = [
    "Project", "ProjectStatus", "Team", "Tag", "User",
    "Task", "TaskOwner", "TaskTag", "TaskStatus",
]
