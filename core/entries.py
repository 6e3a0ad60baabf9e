"""Builders for new projects and reports entered through the admin and unit forms."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from core.config import PROJECT_UNITS
from core.models import NO_PROBLEMS, Project, Report, coerce_float, coerce_int


class EntryError(ValueError):
    """A form entry that cannot become a project or report."""


def _now(now: Optional[datetime]) -> datetime:
    return now or datetime.now(timezone.utc)


def _epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def new_project(
    project_name: str,
    unit_name: str,
    start_date: str = "",
    end_date: str = "",
    budget: object = 0,
    *,
    now: Optional[datetime] = None,
) -> Project:
    name = (project_name or "").strip()
    if not name:
        raise EntryError("project_name is required")
    if unit_name not in PROJECT_UNITS:
        raise EntryError(f"unknown unit: {unit_name!r}")
    return Project(
        project_id=f"P{_epoch_ms(_now(now))}",
        project_name=name,
        unit_name=unit_name,
        start_date=(start_date or "").strip(),
        end_date=(end_date or "").strip(),
        budget=max(0.0, coerce_float(budget)),
    )


def new_report(
    user_unit: str,
    project: Optional[Project],
    *,
    report_date: Optional[str] = None,
    past_result: str = "",
    next_plan: str = "",
    progress_percent: object = 0,
    problems: str = "",
    note: str = "",
    recorder_name: str = "",
    now: Optional[datetime] = None,
) -> Report:
    """Build a report for ``project`` submitted by a user of ``user_unit``.

    The unit is always the submitter's; the project must belong to it. The
    recorder's name is required and is stored in ``attachment_url``.
    """
    if project is None:
        raise EntryError("a project must be selected")
    if project.unit_name != user_unit:
        raise EntryError(f"project {project.project_id} does not belong to unit {user_unit!r}")
    recorder = (recorder_name or "").strip()
    if not recorder:
        raise EntryError("recorder_name is required")

    moment = _now(now)
    progress = min(100, max(0, coerce_int(progress_percent)))
    return Report(
        report_id=f"R{_epoch_ms(moment)}",
        project_id=project.project_id,
        project_name=project.project_name,
        unit_name=user_unit,
        report_date=(report_date or "").strip() or moment.astimezone(timezone.utc).date().isoformat(),
        past_result=past_result or "",
        next_plan=next_plan or "",
        progress_percent=progress,
        problems=(problems or "").strip() or NO_PROBLEMS,
        note=note or "",
        created_at=moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
        attachment_url=recorder,
    )
