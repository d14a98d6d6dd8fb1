"""
Pydantic schemas for projects, teams and tags.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from ..models.project import ProjectStatus


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Project name")
    description: Optional[str] = Field(None, description="Project description")
    status: ProjectStatus = Field(ProjectStatus.TODO, description="Project status")


class ProjectResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    status: str
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        from_attributes = True
        populate_by_name = True


class TeamCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, description="Team name")
    description: Optional[str] = Field(None, description="Team description")
    owners: List[str] = Field(default_factory=list, description="Free-text owner labels")


class TeamResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    owners: List[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Tag name")


class TagResponse(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True
