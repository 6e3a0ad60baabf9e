from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.config import ALL_UNITS
from core.models import Role


class DashboardFiltersModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    unit: str = ALL_UNITS
    project: str = ""
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")


class ProjectIn(BaseModel):
    project_name: str
    unit_name: str
    start_date: str = ""
    end_date: str = ""
    budget: float = Field(default=0, ge=0)


class ProjectModel(ProjectIn):
    project_id: str


class ReportIn(BaseModel):
    user_unit: str
    project_id: str
    report_date: Optional[str] = None
    past_result: str = ""
    next_plan: str = ""
    progress_percent: int = Field(default=0, ge=0, le=100)
    problems: str = ""
    note: str = ""
    recorder_name: str = ""


class ReportModel(BaseModel):
    report_id: str
    project_id: str
    project_name: str
    unit_name: str
    report_date: str
    past_result: str = ""
    next_plan: str = ""
    progress_percent: int = 0
    problems: str = "-"
    note: str = ""
    created_at: str = ""
    attachment_url: Optional[str] = None


class HistoryQueryModel(BaseModel):
    role: Role = Role.USER
    unit: str = ""
    text: str = ""
