"""Pytest configuration and fixtures."""

import threading
from typing import Any, Dict, List, Optional, Tuple

import pytest

from core.config import UNITS
from core.models import Project, Report
from core.store import TrackerStore


UNIT_A = UNITS[0]
UNIT_B = UNITS[1]

READ_ACTIONS = {"getProjects", "getReports", "getDashboardSummary"}


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = ""):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class FakeSession:
    """Stands in for `requests.Session`; replays one scripted response or exception."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse(200, "[]")
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        pass


class FakeClient:
    """Tracker client double: scripted read results, recorded (optionally blocked) writes."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None, block_writes: bool = False):
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.release = threading.Event()
        if not block_writes:
            self.release.set()

    def call(self, action: str, payload: Optional[Dict[str, Any]] = None):
        self.calls.append((action, payload or {}))
        if action not in READ_ACTIONS:
            self.release.wait(timeout=10)
            return self.responses.get(action, {"status": "success"})
        result = self.responses.get(action)
        if isinstance(result, Exception):
            raise result
        return result

    def actions(self) -> List[str]:
        return [a for a, _ in self.calls]


def make_project(project_id: str, unit: str = UNIT_A, name: Optional[str] = None) -> Project:
    return Project(
        project_id=project_id,
        project_name=name or f"Project {project_id}",
        unit_name=unit,
        start_date="2025-01-01",
        end_date="2025-12-31",
        budget=1000,
    )


def make_report(
    report_id: str,
    project_id: str,
    report_date: str,
    progress: int,
    unit: str = UNIT_A,
) -> Report:
    return Report(
        report_id=report_id,
        project_id=project_id,
        project_name=f"Project {project_id}",
        unit_name=unit,
        report_date=report_date,
        past_result="done",
        next_plan="next",
        progress_percent=progress,
        created_at=f"{report_date[:10]}T08:00:00Z",
    )


@pytest.fixture
def fake_client():
    client = FakeClient()
    yield client
    client.release.set()


@pytest.fixture
def store(fake_client):
    s = TrackerStore(fake_client)
    yield s
    fake_client.release.set()
    s.close()
