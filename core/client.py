"""Remote calls to the spreadsheet-backed tracker script.

Every call is a single POST carrying an ``action`` name and a payload wrapped
under ``data``. Any failure (transport, HTTP status, unparsable body or an
``{"status": "error"}`` payload) is logged and reported as ``None``.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, List, Optional

import requests

from core.config import Settings, get_settings


logger = logging.getLogger(__name__)

GET_PROJECTS = "getProjects"
GET_REPORTS = "getReports"
ADD_PROJECT = "addProject"
UPDATE_PROJECT = "updateProject"
DELETE_PROJECT = "deleteProject"
SAVE_REPORT = "saveReport"
UPDATE_REPORT = "updateReport"
DELETE_REPORT = "deleteReport"
GET_DASHBOARD_SUMMARY = "getDashboardSummary"

# Reads always ask for the full dataset; unit/role filtering happens client-side.
READ_ALL_PAYLOAD: Dict[str, str] = {"unit": "ALL", "role": "admin"}


class TrackerClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.base_url = base_url or settings.TRACKER_SCRIPT_URL
        self.timeout = timeout if timeout is not None else settings.TRACKER_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def call(self, action: str, payload: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        body = json.dumps({"action": action, "data": payload or {}}, ensure_ascii=False)
        params = {"action": action, "t": int(time.time() * 1000)}

        try:
            resp = self.session.post(
                self.base_url,
                params=params,
                data=body.encode("utf-8"),
                headers={"Content-Type": "text/plain;charset=utf-8"},
                allow_redirects=True,
                timeout=self.timeout,
            )
        except Exception as exc:
            logger.warning("[tracker] Network failure (%s): %s", action, exc)
            return None

        if not resp.ok:
            logger.warning("[tracker] HTTP error %s (%s)", resp.status_code, action)
            return None

        text = resp.text
        if not text:
            return None

        try:
            result = json.loads(text)
        except ValueError:
            logger.warning("[tracker] JSON parse error (%s): %s", action, text[:100])
            return None

        if isinstance(result, dict) and result.get("status") == "error":
            logger.warning("[tracker] Script error (%s): %s", action, result.get("message"))
            return None
        return result

    def close(self) -> None:
        self.session.close()


def extract_collection(result: object, field: str) -> Optional[List[Any]]:
    """Return the first list found as a bare array, under ``field``, or under ``data``."""
    if result is None:
        return None
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        for key in (field, "data"):
            value = result.get(key)
            if isinstance(value, list):
                return value
    return None
