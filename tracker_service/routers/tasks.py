from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from ..core.auth import get_current_user
from ..dependencies import get_resolver, get_task_repository
from ..schemas.task import TaskCreate, TaskResponse, TaskUpdate
from ..services.resolver import ReferenceResolver
from ..services.task_repository import TaskFilter, TaskRepository, to_response

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    resolver: ReferenceResolver = Depends(get_resolver),
    repository: TaskRepository = Depends(get_task_repository)
):
    """Create a task; project, team and owners may be given by id or by name"""
    resolved = resolver.resolve(task_data)
    return to_response(repository.create(resolved))


@router.get("", response_model=List[TaskResponse])
def get_tasks(
    owner: Optional[str] = Query(None, description="Owner user id"),
    team: Optional[str] = Query(None, description="Team id"),
    project: Optional[str] = Query(None, description="Project id"),
    status_filter: Optional[str] = Query(None, alias="status", description="Filter by status"),
    tags: Optional[str] = Query(None, description="Comma-separated tags, any may match"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Only 'timeToComplete' is supported"),
    populate: bool = Query(True, description="Include referenced names"),
    repository: TaskRepository = Depends(get_task_repository)
):
    """List tasks with optional filters and sorting"""
    task_filter = TaskFilter.from_query(
        owner=owner, team=team, project=project, status=status_filter, tags=tags
    )
    tasks = repository.list(task_filter, sort_by=sort_by)
    return [to_response(task, expand=populate) for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, repository: TaskRepository = Depends(get_task_repository)):
    """Get a specific task by ID"""
    return to_response(repository.get(task_id))


@router.put("/{task_id}", response_model=TaskResponse)
@router.post("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    resolver: ReferenceResolver = Depends(get_resolver),
    repository: TaskRepository = Depends(get_task_repository)
):
    """Update a task"""
    # Fail on an unknown id before resolving references
    repository.get(task_id)
    changes = resolver.resolve_update(task_update)
    return to_response(repository.update(task_id, changes))


@router.delete("/{task_id}")
def delete_task(task_id: str, repository: TaskRepository = Depends(get_task_repository)):
    """Delete a task"""
    repository.delete(task_id)
    return {"message": "Task deleted successfully"}
