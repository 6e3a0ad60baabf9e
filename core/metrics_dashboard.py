from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Sequence

import altair as alt
import pandas as pd

from core.charts import to_vega_spec
from core.filters import ReportFilters
from core.models import Project, Report, coerce_number


STATUS_COMPLETED = "Completed"
STATUS_IN_PROGRESS = "In Progress"
STATUS_NOT_STARTED = "Not Started"
STATUS_ORDER = [STATUS_COMPLETED, STATUS_IN_PROGRESS, STATUS_NOT_STARTED]
STATUS_COLORS = ["#10b981", "#0ea5e9", "#94a3b8"]

NAME_MAX_CHARS = 20

PROJECT_COLUMNS = ["project_id", "project_name", "unit_name", "start_date", "end_date", "budget"]
REPORT_COLUMNS = ["report_id", "project_id", "project_name", "unit_name", "report_date", "progress_percent"]


def classify_status(progress: float) -> str:
    if progress == 100:
        return STATUS_COMPLETED
    if progress > 0:
        return STATUS_IN_PROGRESS
    return STATUS_NOT_STARTED


def progress_color(progress: float) -> str:
    if progress == 100:
        return "#10b981"  # emerald-500
    if progress >= 50:
        return "#0ea5e9"  # sky-500
    if progress > 20:
        return "#eab308"  # yellow-500
    return "#ef4444"  # red-500


def short_name(name: str) -> str:
    return name[:NAME_MAX_CHARS] + "..." if len(name) > NAME_MAX_CHARS else name


def parse_report_timestamp(value: object) -> pd.Timestamp:
    """Parse a report date into a naive timestamp; offsets are normalized to UTC first."""
    if value is None:
        return pd.NaT
    ts = pd.to_datetime(str(value).strip(), errors="coerce")
    if ts is None or pd.isna(ts):
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def _projects_frame(projects: Sequence[Project]) -> pd.DataFrame:
    return pd.DataFrame([p.to_dict() for p in projects], columns=PROJECT_COLUMNS)


def _reports_frame(reports: Sequence[Report]) -> pd.DataFrame:
    df = pd.DataFrame([r.to_dict() for r in reports], columns=REPORT_COLUMNS)
    df["report_ts"] = pd.to_datetime(df["report_date"].apply(parse_report_timestamp), errors="coerce")
    return df


def filter_reports(reports_df: pd.DataFrame, filters: ReportFilters) -> pd.DataFrame:
    df = reports_df
    if not filters.all_units:
        df = df[df["unit_name"] == filters.unit]
    if filters.project:
        df = df[df["project_id"] == filters.project]
    if filters.start_date is not None:
        df = df[df["report_ts"] >= pd.Timestamp(filters.start_date)]
    if filters.end_date is not None:
        # Inclusive through the last millisecond of the end day.
        end_of_day = pd.Timestamp(filters.end_date) + pd.Timedelta(days=1) - pd.Timedelta(milliseconds=1)
        df = df[df["report_ts"] <= end_of_day]
    return df


def target_projects(projects_df: pd.DataFrame, filters: ReportFilters) -> pd.DataFrame:
    df = projects_df
    if not filters.all_units:
        df = df[df["unit_name"] == filters.unit]
    if filters.project:
        df = df[df["project_id"] == filters.project]
    return df


def latest_progress(filtered_reports: pd.DataFrame) -> Dict[str, float]:
    """Progress of the most recent report per project (ties keep the earlier record)."""
    if filtered_reports.empty:
        return {}
    latest = (
        filtered_reports.sort_values("report_ts", ascending=False, kind="mergesort", na_position="last")
        .drop_duplicates(subset=["project_id"], keep="first")
    )
    return {str(pid): coerce_number(p) for pid, p in zip(latest["project_id"], latest["progress_percent"])}


def _progress_chart(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    df = pd.DataFrame(rows)
    bar = (
        alt.Chart(df)
        .mark_bar(cornerRadiusEnd=4)
        .encode(
            x=alt.X("name:N", title=None, sort=None, axis=alt.Axis(labelAngle=-30)),
            y=alt.Y("progress:Q", title="Progress (%)", scale=alt.Scale(domain=[0, 100])),
            color=alt.Color("color:N", scale=None, legend=None),
            tooltip=[
                alt.Tooltip("full_name:N", title="Project"),
                alt.Tooltip("progress:Q", title="Progress", format=".0f"),
                alt.Tooltip("status:N", title="Status"),
            ],
        )
        .properties(height=300)
    )
    return to_vega_spec(bar)


def _status_chart(status_count: List[Dict[str, Any]]) -> Dict[str, Any]:
    df = pd.DataFrame(status_count)
    arc = (
        alt.Chart(df)
        .mark_arc(innerRadius=60)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color("name:N", title="Status", scale=alt.Scale(domain=STATUS_ORDER, range=STATUS_COLORS)),
            tooltip=["name", "value"],
        )
        .properties(height=300)
    )
    return to_vega_spec(arc)


def compute_dashboard(
    projects: Sequence[Project],
    reports: Sequence[Report],
    filters: ReportFilters,
) -> Dict[str, Any]:
    projects_df = _projects_frame(projects)
    reports_df = _reports_frame(reports)

    filtered_reports = filter_reports(reports_df, filters)
    targets = target_projects(projects_df, filters)
    latest = latest_progress(filtered_reports)

    project_progress: List[Dict[str, Any]] = []
    for pid, name in zip(targets["project_id"], targets["project_name"]):
        progress = latest.get(str(pid), 0)
        project_progress.append(
            {
                "project_id": str(pid),
                "name": short_name(str(name)),
                "full_name": str(name),
                "progress": progress,
                "status": classify_status(progress),
                "color": progress_color(progress),
            }
        )

    total_projects = len(project_progress)
    statuses = [row["status"] for row in project_progress]
    status_count = [{"name": s, "value": statuses.count(s)} for s in STATUS_ORDER]
    avg_progress = (
        sum(row["progress"] for row in project_progress) / total_projects if total_projects else 0.0
    )

    charts: Dict[str, Any] = {}
    if project_progress:
        charts = {
            "project_progress": _progress_chart(project_progress),
            "status_distribution": _status_chart(status_count),
        }

    return {
        "filters": asdict(filters),
        "total_projects": total_projects,
        "total_reports": int(len(filtered_reports)),
        "completed_projects": statuses.count(STATUS_COMPLETED),
        "avg_progress": float(avg_progress),
        "status_count": status_count,
        "project_progress": project_progress,
        "charts": charts,
    }
