from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from core import client as tc
from core.client import TrackerClient, extract_collection
from core.config import ALL_UNITS, get_settings
from core.filters import ReportFilters
from core.models import Project, Report, parse_projects, parse_reports
from core.seed import SEED_PROJECTS, SEED_REPORTS


logger = logging.getLogger(__name__)

EMPTY_SUMMARY: Dict[str, Any] = {
    "total_projects": 0,
    "total_reports": 0,
    "completed_projects": 0,
    "avg_progress_percent": 0,
}


class TrackerStore:
    """Last-known-good cache of projects and reports in front of the tracker script.

    Reads never fail: when the endpoint gives nothing usable the cached
    collection is served, or the seed data when the cache is empty. Writes
    update the cache first and hand the remote call to a background executor;
    the returned future resolves to the endpoint's reply, or ``None`` when it
    gave nothing usable, and is never needed for the cached view to be current.

    Cache changes go through these methods under one lock, so concurrent
    request handlers cannot drop each other's writes. Background workers
    never touch the cache.
    """

    def __init__(
        self,
        client: Optional[TrackerClient] = None,
        *,
        executor: Optional[Executor] = None,
        seed_projects: Optional[List[Project]] = None,
        seed_reports: Optional[List[Report]] = None,
    ):
        self.client = client or TrackerClient()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=get_settings().TRACKER_WRITE_WORKERS,
            thread_name_prefix="tracker-write",
        )
        self._seed_projects = list(SEED_PROJECTS if seed_projects is None else seed_projects)
        self._seed_reports = list(SEED_REPORTS if seed_reports is None else seed_reports)
        self._projects: List[Project] = []
        self._reports: List[Report] = []
        self._lock = threading.Lock()

    # ---------- projects ----------
    def list_projects(self) -> List[Project]:
        records = extract_collection(self.client.call(tc.GET_PROJECTS, dict(tc.READ_ALL_PAYLOAD)), "projects")
        with self._lock:
            if records is not None:
                self._projects = parse_projects(records)
                return list(self._projects)
            if self._projects:
                return list(self._projects)
        logger.info("Serving seed projects (no remote data, empty cache)")
        return list(self._seed_projects)

    def cached_projects(self) -> List[Project]:
        with self._lock:
            return list(self._projects)

    def add_project(self, project: Project) -> Future:
        with self._lock:
            self._projects = self._projects + [project]
        return self._dispatch(tc.ADD_PROJECT, project.to_dict())

    def update_project(self, project: Project) -> Future:
        with self._lock:
            self._projects = [project if p.project_id == project.project_id else p for p in self._projects]
        return self._dispatch(tc.UPDATE_PROJECT, project.to_dict())

    def delete_project(self, project_id: str) -> Future:
        with self._lock:
            self._projects = [p for p in self._projects if p.project_id != project_id]
        return self._dispatch(tc.DELETE_PROJECT, {"project_id": project_id})

    # ---------- reports ----------
    def list_reports(self) -> List[Report]:
        records = extract_collection(self.client.call(tc.GET_REPORTS, dict(tc.READ_ALL_PAYLOAD)), "reports")
        with self._lock:
            if records is not None:
                self._reports = parse_reports(records)
                return list(self._reports)
            if self._reports:
                return list(self._reports)
        logger.info("Serving seed reports (no remote data, empty cache)")
        return list(self._seed_reports)

    def cached_reports(self) -> List[Report]:
        with self._lock:
            return list(self._reports)

    def add_report(self, report: Report) -> Future:
        with self._lock:
            self._reports = self._reports + [report]
        return self._dispatch(tc.SAVE_REPORT, report.to_dict())

    def update_report(self, report: Report) -> Future:
        with self._lock:
            self._reports = [report if r.report_id == report.report_id else r for r in self._reports]
        return self._dispatch(tc.UPDATE_REPORT, report.to_dict())

    def delete_report(self, report_id: str) -> Future:
        with self._lock:
            self._reports = [r for r in self._reports if r.report_id != report_id]
        return self._dispatch(tc.DELETE_REPORT, {"report_id": report_id})

    # ---------- dashboard ----------
    def dashboard_summary(self, filters: Optional[ReportFilters] = None) -> Dict[str, Any]:
        filters = filters or ReportFilters()
        result = self.client.call(
            tc.GET_DASHBOARD_SUMMARY,
            {
                "unit": filters.unit or ALL_UNITS,
                "project": filters.project or "",
                "startDate": filters.start_date.isoformat() if filters.start_date else "",
                "endDate": filters.end_date.isoformat() if filters.end_date else "",
            },
        )
        if isinstance(result, dict) and result.get("status") == "success" and isinstance(result.get("data"), dict):
            return result["data"]
        return dict(EMPTY_SUMMARY)

    # ---------- lifecycle ----------
    def _dispatch(self, action: str, payload: Dict[str, Any]) -> Future:
        future = self._executor.submit(self.client.call, action, payload)
        future.add_done_callback(lambda f: _log_write_outcome(action, f))
        return future

    def close(self, wait: bool = True) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "TrackerStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _log_write_outcome(action: str, future: Future) -> None:
    if future.cancelled():
        logger.warning("[tracker] %s cancelled before it was sent", action)
        return
    exc = future.exception()
    if exc is not None:
        logger.error("[tracker] %s failed: %s", action, exc)
    elif future.result() is None:
        logger.warning("[tracker] %s not confirmed by the endpoint", action)
