"""FastAPI providers wiring request-scoped sessions into the services."""
from fastapi import Depends
from sqlalchemy.orm import Session

from .core.database import get_db
from .services.entity_store import EntityStore
from .services.reports import ReportService
from .services.resolver import ReferenceResolver
from .services.task_repository import TaskRepository


def get_entity_store(db: Session = Depends(get_db)) -> EntityStore:
    return EntityStore(db)


def get_resolver(store: EntityStore = Depends(get_entity_store)) -> ReferenceResolver:
    return ReferenceResolver(store)


def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def get_report_service(repository: TaskRepository = Depends(get_task_repository)) -> ReportService:
    return ReportService(repository)
