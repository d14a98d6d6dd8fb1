"""
Pydantic schemas for task reports.
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .task import TaskResponse


class LastWeekReport(BaseModel):
    """Tasks completed during the last seven days"""
    total: int = Field(..., description="Number of tasks completed in the window")
    by_project: Dict[str, int] = Field(default_factory=dict, alias="byProject")
    tasks: List[TaskResponse] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class PendingReport(BaseModel):
    """Remaining effort over every task that is not completed"""
    total_days_pending: float = Field(..., alias="totalDaysPending")
    by_project: Optional[Dict[str, float]] = Field(None, alias="byProject")

    class Config:
        populate_by_name = True
