"""
Pydantic schemas for tasks.

Creation and update payloads are deliberately loose: references may be an
identifier or a name, and required fields are checked by the reference
resolver so that every problem surfaces as the same typed error.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    """Schema for creating a task"""
    name: Optional[str] = Field(None, description="Task name")
    project: Optional[str] = Field(None, description="Project identifier or name")
    team: Optional[str] = Field(None, description="Team identifier or name")
    owners: Optional[List[str]] = Field(None, description="User identifiers, emails or names")
    tags: Optional[List[str]] = Field(None, description="Task tags")
    time_to_complete: Optional[float] = Field(
        None, alias="timeToComplete", strict=True, allow_inf_nan=False,
        description="Estimated effort in days"
    )
    status: Optional[str] = Field(None, description="Task status")

    class Config:
        populate_by_name = True


class TaskUpdate(TaskCreate):
    """Schema for updating a task, only supplied fields are replaced"""
    pass


class RefOut(BaseModel):
    """An expanded reference"""
    id: str
    name: Optional[str] = None


class TaskResponse(BaseModel):
    """Schema for task response"""
    id: str = Field(..., description="Task ID")
    name: str
    project: RefOut
    team: RefOut
    owners: List[RefOut] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    time_to_complete: float = Field(..., alias="timeToComplete")
    status: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    class Config:
        populate_by_name = True
