"""Projects, teams and tags: create and list."""
from typing import List
from fastapi import APIRouter, Depends, status

from ..core.auth import get_current_user
from ..dependencies import get_entity_store
from ..schemas.catalog import (
    ProjectCreate, ProjectResponse, TeamCreate, TeamResponse, TagCreate, TagResponse
)
from ..services.entity_store import EntityKind, EntityStore

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.post("/projects", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED, tags=["projects"])
def create_project(project_in: ProjectCreate, store: EntityStore = Depends(get_entity_store)):
    return store.create(EntityKind.PROJECT, {
        "name": project_in.name.strip(),
        "description": project_in.description,
        "status": project_in.status.value,
    })


@router.get("/projects", response_model=List[ProjectResponse], tags=["projects"])
def list_projects(store: EntityStore = Depends(get_entity_store)):
    return store.list(EntityKind.PROJECT)


@router.post("/teams", response_model=TeamResponse, status_code=status.HTTP_201_CREATED, tags=["teams"])
def create_team(team_in: TeamCreate, store: EntityStore = Depends(get_entity_store)):
    return store.create(EntityKind.TEAM, {
        "name": team_in.name.strip(),
        "description": team_in.description,
        "owners": list(team_in.owners),
    })


@router.get("/teams", response_model=List[TeamResponse], tags=["teams"])
def list_teams(store: EntityStore = Depends(get_entity_store)):
    return store.list(EntityKind.TEAM)


@router.post("/tags", response_model=TagResponse, status_code=status.HTTP_201_CREATED, tags=["tags"])
def create_tag(tag_in: TagCreate, store: EntityStore = Depends(get_entity_store)):
    return store.create(EntityKind.TAG, {"name": tag_in.name.strip()})


@router.get("/tags", response_model=List[TagResponse], tags=["tags"])
def list_tags(store: EntityStore = Depends(get_entity_store)):
    return store.list(EntityKind.TAG)
