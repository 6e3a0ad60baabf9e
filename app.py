import pandas as pd
import streamlit as st
from typing import Dict, List

from core.config import ALL_UNITS, UNITS, get_settings
from core.filters import ReportFilters, available_projects, select_project, select_unit
from core.logging_config import setup_logging
from core.metrics_dashboard import compute_dashboard
from core.metrics_history import compute_history
from core.models import Role
from core.store import TrackerStore


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .kpi-card {border: 1px solid #334155;border-radius: 12px;padding: 14px;background: #1e293b;margin-bottom: 12px;}
        .kpi-label {color: #94a3b8;font-size: 0.85rem;}
        .kpi-value {color: #f8fafc;font-size: 1.6rem;font-weight: 700;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #0f172a;border: 1px solid #334155;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #cbd5e1;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def kpi_card(col, label: str, value: str):
    col.markdown(
        f"<div class='kpi-card'><div class='kpi-label'>{label}</div><div class='kpi-value'>{value}</div></div>",
        unsafe_allow_html=True,
    )


def format_filter_summary(filters: ReportFilters, project_names: Dict[str, str]) -> str:
    unit_chip = "Unit: All" if filters.all_units else f"Unit: {filters.unit}"
    project_chip = f"Project: {project_names.get(filters.project, filters.project)}" if filters.project else "Project: All"
    if filters.start_date or filters.end_date:
        date_chip = f"Dates: {filters.start_date or '…'} – {filters.end_date or '…'}"
    else:
        date_chip = "Dates: All"
    return "".join([f"<span class='chip'>{txt}</span>" for txt in [unit_chip, project_chip, date_chip]])


@st.cache_resource
def get_store() -> TrackerStore:
    # Shared by every session in this process; its executor and HTTP session live as long as the server.
    return TrackerStore()


def current_filters() -> ReportFilters:
    return st.session_state.setdefault("report_filters", ReportFilters())


def on_unit_change():
    filters = select_unit(current_filters(), st.session_state["unit_select"])
    st.session_state["report_filters"] = filters
    st.session_state["project_select"] = filters.project


def on_project_change():
    st.session_state["report_filters"] = select_project(current_filters(), st.session_state["project_select"])


# ---------- UI setup ----------
setup_logging(get_settings().LOG_LEVEL)
st.set_page_config(page_title="Unit Project Tracker", layout="wide")
inject_base_styles()
st.title("Unit Project Tracker")
st.caption("Project progress reported by each unit.")

store = get_store()
projects = store.list_projects()
reports = store.list_reports()

# ----- Sidebar: filters -----
with st.sidebar:
    st.markdown("### Filters")
    filters = current_filters()
    unit_options: List[str] = [ALL_UNITS] + UNITS
    st.selectbox(
        "Unit",
        options=unit_options,
        index=unit_options.index(filters.unit) if filters.unit in unit_options else 0,
        key="unit_select",
        on_change=on_unit_change,
    )

    filters = current_filters()
    unit_projects = available_projects(projects, filters.unit)
    project_options = [""] + [p.project_id for p in unit_projects]
    project_names = {p.project_id: p.project_name for p in projects}
    st.selectbox(
        "Project",
        options=project_options,
        index=project_options.index(filters.project) if filters.project in project_options else 0,
        format_func=lambda pid: project_names.get(pid, "All projects") if pid else "All projects",
        key="project_select",
        on_change=on_project_change,
    )

    start = st.date_input("Start date", value=filters.start_date)
    end = st.date_input("End date", value=filters.end_date)
    filters = ReportFilters(unit=filters.unit, project=filters.project, start_date=start or None, end_date=end or None)
    st.session_state["report_filters"] = filters

    st.markdown("---")
    if st.button("Refresh"):
        st.rerun()

stats = compute_dashboard(projects, reports, filters)

st.markdown(f"<div class='chip-row'>{format_filter_summary(filters, project_names)}</div>", unsafe_allow_html=True)
cols = st.columns(4)
kpi_card(cols[0], "Projects", f"{stats['total_projects']:,}")
kpi_card(cols[1], "Reports", f"{stats['total_reports']:,}")
kpi_card(cols[2], "Completed", f"{stats['completed_projects']:,}")
kpi_card(cols[3], "Average progress", f"{stats['avg_progress']:.1f}%")

if stats["charts"]:
    c1, c2 = st.columns([3, 2])
    with c1:
        st.subheader("Progress by project")
        st.vega_lite_chart(stats["charts"]["project_progress"], use_container_width=True)
    with c2:
        st.subheader("Status distribution")
        st.vega_lite_chart(stats["charts"]["status_distribution"], use_container_width=True)
else:
    st.info("No projects match the selected filters.")

st.subheader("Report history")
query = st.text_input("Search by project name or date", "")
history = compute_history(
    reports,
    role=Role.ADMIN if filters.all_units else Role.USER,
    unit=filters.unit,
    text=query,
)
if history["rows"]:
    st.dataframe(
        pd.DataFrame(history["rows"])[
            ["report_date", "project_name", "unit_name", "progress_percent", "problems", "recorder_name"]
        ],
        use_container_width=True,
        hide_index=True,
    )
else:
    st.caption("No reports found.")
