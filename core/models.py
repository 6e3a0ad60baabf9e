from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


logger = logging.getLogger(__name__)

NO_PROBLEMS = "-"


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


def _as_str(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def coerce_float(value: object, default: float = 0.0) -> float:
    try:
        out = float(value)  # type: ignore[arg-type]
    except Exception:
        return default
    if out != out:  # NaN
        return default
    return out


def coerce_int(value: object, default: int = 0) -> int:
    try:
        return int(round(float(value)))  # type: ignore[arg-type]
    except Exception:
        return default


def coerce_number(value: object, default: float = 0) -> float:
    """Numeric value as stored: whole numbers come back as int, fractions are kept."""
    out = coerce_float(value, default)
    return int(out) if float(out).is_integer() else out


@dataclass(frozen=True)
class Project:
    project_id: str
    project_name: str
    unit_name: str
    start_date: str = ""
    end_date: str = ""
    budget: float = 0.0

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Project":
        project_id = _as_str(raw.get("project_id"))
        if not project_id:
            raise ValueError("project record without project_id")
        return cls(
            project_id=project_id,
            project_name=_as_str(raw.get("project_name")),
            unit_name=_as_str(raw.get("unit_name")),
            start_date=_as_str(raw.get("start_date")),
            end_date=_as_str(raw.get("end_date")),
            budget=max(0.0, coerce_float(raw.get("budget"))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Report:
    report_id: str
    project_id: str
    project_name: str
    unit_name: str
    report_date: str
    past_result: str = ""
    next_plan: str = ""
    progress_percent: float = 0
    problems: str = NO_PROBLEMS
    note: str = ""
    created_at: str = ""
    # Also carries the recorder's name when a report is entered through the form.
    attachment_url: Optional[str] = None

    @property
    def recorder_name(self) -> Optional[str]:
        return self.attachment_url

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Report":
        report_id = _as_str(raw.get("report_id"))
        if not report_id:
            raise ValueError("report record without report_id")
        attachment = raw.get("attachment_url")
        return cls(
            report_id=report_id,
            project_id=_as_str(raw.get("project_id")),
            project_name=_as_str(raw.get("project_name")),
            unit_name=_as_str(raw.get("unit_name")),
            report_date=_as_str(raw.get("report_date")),
            past_result=_as_str(raw.get("past_result")),
            next_plan=_as_str(raw.get("next_plan")),
            progress_percent=coerce_number(raw.get("progress_percent")),
            problems=_as_str(raw.get("problems")) or NO_PROBLEMS,
            note=_as_str(raw.get("note")),
            created_at=_as_str(raw.get("created_at")),
            attachment_url=_as_str(attachment) if attachment not in (None, "") else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        if out["attachment_url"] is None:
            out.pop("attachment_url")
        return out


def parse_projects(records: Iterable[object]) -> List[Project]:
    out: List[Project] = []
    for rec in records:
        if isinstance(rec, Project):
            out.append(rec)
            continue
        if not isinstance(rec, dict):
            logger.warning("Skipping non-object project record: %r", rec)
            continue
        try:
            out.append(Project.from_dict(rec))
        except Exception as exc:
            logger.warning("Skipping malformed project record: %s", exc)
    return out


def parse_reports(records: Iterable[object]) -> List[Report]:
    out: List[Report] = []
    for rec in records:
        if isinstance(rec, Report):
            out.append(rec)
            continue
        if not isinstance(rec, dict):
            logger.warning("Skipping non-object report record: %r", rec)
            continue
        try:
            out.append(Report.from_dict(rec))
        except Exception as exc:
            logger.warning("Skipping malformed report record: %s", exc)
    return out
