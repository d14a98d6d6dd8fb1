from typing import Dict, Optional
from fastapi import APIRouter, Depends, Query

from ..core.auth import get_current_user
from ..dependencies import get_report_service
from ..schemas.report import LastWeekReport, PendingReport
from ..services.reports import ReportService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/last-week", response_model=LastWeekReport)
def last_week_report(reports: ReportService = Depends(get_report_service)):
    """Tasks completed in the last seven days, counted per project"""
    return reports.last_week()


@router.get("/pending", response_model=PendingReport)
def pending_report(
    breakdown: bool = Query(False, description="Add per-project totals"),
    reports: ReportService = Depends(get_report_service)
):
    """Total days of work left on tasks that are not completed"""
    return reports.pending(breakdown=breakdown)


@router.get("/closed-tasks", response_model=Dict[str, int])
def closed_tasks_report(
    group_by: Optional[str] = Query(None, alias="groupBy", description="team, owner or project"),
    reports: ReportService = Depends(get_report_service)
):
    """Completed tasks counted per team, owner or project"""
    return reports.closed_tasks(group_by)
