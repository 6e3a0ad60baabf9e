from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Iterable, List, Optional

import pandas as pd

from core.config import ALL_UNITS
from core.models import Project


@dataclass(frozen=True)
class ReportFilters:
    unit: str = ALL_UNITS
    project: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def all_units(self) -> bool:
        return not self.unit or self.unit == ALL_UNITS


def _as_date(value: object) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    ts = pd.to_datetime(str(value).strip(), errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.date()


def normalize_filters(raw: dict) -> ReportFilters:
    raw = raw or {}
    unit = (raw.get("unit") or "").strip() or ALL_UNITS
    project = (raw.get("project") or "").strip()
    start = raw.get("start_date", raw.get("startDate"))
    end = raw.get("end_date", raw.get("endDate"))
    return ReportFilters(unit=unit, project=project, start_date=_as_date(start), end_date=_as_date(end))


def select_unit(filters: ReportFilters, unit: str) -> ReportFilters:
    """Switch the unit filter; a project chosen under another unit is dropped."""
    unit = (unit or "").strip() or ALL_UNITS
    if unit == filters.unit:
        return filters
    return replace(filters, unit=unit, project="")


def select_project(filters: ReportFilters, project_id: str) -> ReportFilters:
    return replace(filters, project=(project_id or "").strip())


def available_projects(projects: Iterable[Project], unit: str) -> List[Project]:
    if not unit or unit == ALL_UNITS:
        return list(projects)
    return [p for p in projects if p.unit_name == unit]
