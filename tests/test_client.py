import json

import pytest
import requests

from core.client import READ_ALL_PAYLOAD, TrackerClient, extract_collection
from tests.conftest import FakeResponse, FakeSession


def _client(session: FakeSession) -> TrackerClient:
    return TrackerClient("https://tracker.example/exec", timeout=5, session=session)


class TestCall:
    def test_wraps_payload_under_data_and_passes_action(self):
        session = FakeSession(FakeResponse(200, '[{"project_id": "P1"}]'))
        result = _client(session).call("getProjects", dict(READ_ALL_PAYLOAD))

        assert result == [{"project_id": "P1"}]
        sent = session.calls[0]
        assert sent["url"] == "https://tracker.example/exec"
        assert sent["params"]["action"] == "getProjects"
        assert "t" in sent["params"]
        assert sent["headers"]["Content-Type"] == "text/plain;charset=utf-8"
        assert sent["timeout"] == 5
        assert json.loads(sent["data"].decode("utf-8")) == {
            "action": "getProjects",
            "data": {"unit": "ALL", "role": "admin"},
        }

    def test_unicode_payload_is_sent_as_utf8(self):
        session = FakeSession(FakeResponse(200, '{"status": "success"}'))
        _client(session).call("addProject", {"project_name": "ระบบฐานข้อมูล"})
        body = json.loads(session.calls[0]["data"].decode("utf-8"))
        assert body["data"]["project_name"] == "ระบบฐานข้อมูล"

    @pytest.mark.parametrize(
        "session",
        [
            FakeSession(error=requests.ConnectionError("unreachable")),
            FakeSession(FakeResponse(500, '{"status": "ok"}')),
            FakeSession(FakeResponse(302, "")),
            FakeSession(FakeResponse(200, "")),
            FakeSession(FakeResponse(200, "<html>Sign in</html>")),
            FakeSession(FakeResponse(200, '{"status": "error", "message": "Sheet not found"}')),
        ],
        ids=["network", "http-500", "redirect-status", "empty-body", "html-body", "script-error"],
    )
    def test_soft_failures_return_none(self, session):
        assert _client(session).call("getReports", {}) is None

    def test_script_error_is_logged(self, caplog):
        session = FakeSession(FakeResponse(200, '{"status": "error", "message": "Sheet not found"}'))
        with caplog.at_level("WARNING", logger="core.client"):
            _client(session).call("getReports", {})
        assert "Sheet not found" in caplog.text


class TestExtractCollection:
    def test_bare_array(self):
        assert extract_collection([1, 2], "projects") == [1, 2]

    def test_named_field_before_data(self):
        assert extract_collection({"projects": [1], "data": [2]}, "projects") == [1]

    def test_generic_data_field(self):
        assert extract_collection({"status": "success", "data": [3]}, "reports") == [3]

    def test_named_field_not_a_list_falls_through_to_data(self):
        assert extract_collection({"reports": "n/a", "data": [4]}, "reports") == [4]

    @pytest.mark.parametrize("result", [None, {}, {"data": {"rows": []}}, "text", 7])
    def test_no_array_shape(self, result):
        assert extract_collection(result, "projects") is None

    def test_empty_array_is_still_a_match(self):
        assert extract_collection({"projects": []}, "projects") == []
