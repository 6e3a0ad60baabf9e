from __future__ import annotations

from contextlib import asynccontextmanager
import logging
import math
from typing import Optional

import numpy as np
from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import DashboardFiltersModel, HistoryQueryModel, ProjectIn, ReportIn, ReportModel
from core.config import ALL_UNITS, UNITS, get_settings
from core.entries import EntryError, new_project, new_report
from core.filters import available_projects, normalize_filters
from core.logging_config import setup_logging
from core.metrics_dashboard import compute_dashboard
from core.metrics_history import compute_history
from core.models import Project, Report
from core.store import TrackerStore


logger = logging.getLogger(__name__)


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for numpy scalars and non-finite floats."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
            },
        ),
    )


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _store(request: Request) -> TrackerStore:
    return request.app.state.store


def _find_project(store: TrackerStore, project_id: str) -> Optional[Project]:
    # Only go to the endpoint when the project is not cached yet.
    cached = next((p for p in store.cached_projects() if p.project_id == project_id), None)
    if cached is not None:
        return cached
    return next((p for p in store.list_projects() if p.project_id == project_id), None)


def create_app(store: Optional[TrackerStore] = None) -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.store.close(wait=False)

    app = FastAPI(title="Unit Tracker API", version="0.1.0", lifespan=lifespan)
    app.state.store = store or TrackerStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/meta/units")
    def meta_units():
        return _json({"units": UNITS})

    @app.get("/meta/projects")
    def meta_projects(request: Request, unit: str = Query(default=ALL_UNITS)):
        projects = available_projects(_store(request).list_projects(), unit)
        return _json({"projects": [p.to_dict() for p in projects]})

    # ---------- projects ----------
    @app.get("/projects")
    def list_projects(request: Request):
        return _json([p.to_dict() for p in _store(request).list_projects()])

    @app.post("/projects")
    def add_project(request: Request, body: ProjectIn):
        try:
            project = new_project(body.project_name, body.unit_name, body.start_date, body.end_date, body.budget)
        except EntryError as exc:
            return _error(exc, status_code=400)
        _store(request).add_project(project)
        return _json(project.to_dict(), status_code=202)

    @app.put("/projects/{project_id}")
    def update_project(request: Request, project_id: str, body: ProjectIn):
        project = Project.from_dict({**body.model_dump(), "project_id": project_id})
        _store(request).update_project(project)
        return _json(project.to_dict(), status_code=202)

    @app.delete("/projects/{project_id}")
    def delete_project(request: Request, project_id: str):
        _store(request).delete_project(project_id)
        return _json({"project_id": project_id}, status_code=202)

    # ---------- reports ----------
    @app.get("/reports")
    def list_reports(request: Request):
        return _json([r.to_dict() for r in _store(request).list_reports()])

    @app.post("/reports")
    def add_report(request: Request, body: ReportIn):
        store = _store(request)
        try:
            report = new_report(
                body.user_unit,
                _find_project(store, body.project_id),
                report_date=body.report_date,
                past_result=body.past_result,
                next_plan=body.next_plan,
                progress_percent=body.progress_percent,
                problems=body.problems,
                note=body.note,
                recorder_name=body.recorder_name,
            )
        except EntryError as exc:
            return _error(exc, status_code=400)
        store.add_report(report)
        return _json(report.to_dict(), status_code=202)

    @app.put("/reports/{report_id}")
    def update_report(request: Request, report_id: str, body: ReportModel):
        report = Report.from_dict({**body.model_dump(), "report_id": report_id})
        _store(request).update_report(report)
        return _json(report.to_dict(), status_code=202)

    @app.delete("/reports/{report_id}")
    def delete_report(request: Request, report_id: str):
        _store(request).delete_report(report_id)
        return _json({"report_id": report_id}, status_code=202)

    # ---------- dashboard ----------
    @app.post("/dashboard")
    def dashboard(request: Request, filters: DashboardFiltersModel):
        try:
            store = _store(request)
            f = normalize_filters(filters.model_dump())
            return _json(compute_dashboard(store.list_projects(), store.list_reports(), f))
        except Exception as exc:
            logger.exception("dashboard failed")
            return _error(exc)

    @app.post("/dashboard/summary")
    def dashboard_summary(request: Request, filters: DashboardFiltersModel):
        try:
            f = normalize_filters(filters.model_dump())
            return _json(_store(request).dashboard_summary(f))
        except Exception as exc:
            logger.exception("dashboard_summary failed")
            return _error(exc)

    @app.post("/history")
    def history(request: Request, query: HistoryQueryModel):
        try:
            reports = _store(request).list_reports()
            return _json(compute_history(reports, role=query.role, unit=query.unit, text=query.text))
        except Exception as exc:
            logger.exception("history failed")
            return _error(exc)

    return app


setup_logging(get_settings().LOG_LEVEL)
app = create_app()
