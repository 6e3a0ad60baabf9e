from datetime import date

from core.config import ALL_UNITS
from core.filters import ReportFilters, available_projects, normalize_filters, select_project, select_unit
from tests.conftest import UNIT_A, UNIT_B, make_project


def test_normalize_defaults():
    f = normalize_filters({})
    assert f == ReportFilters(unit=ALL_UNITS, project="", start_date=None, end_date=None)
    assert f.all_units


def test_normalize_camel_case_dates():
    f = normalize_filters({"unit": f" {UNIT_A} ", "project": "P1", "startDate": "2025-01-01", "endDate": "2025-03-01"})
    assert f.unit == UNIT_A
    assert f.project == "P1"
    assert f.start_date == date(2025, 1, 1)
    assert f.end_date == date(2025, 3, 1)


def test_normalize_snake_case_and_bad_dates():
    f = normalize_filters({"unit": "", "start_date": "garbage", "end_date": ""})
    assert f.unit == ALL_UNITS
    assert f.start_date is None
    assert f.end_date is None


def test_select_unit_resets_project():
    f = select_project(select_unit(ReportFilters(), UNIT_A), "P1")
    assert f.project == "P1"
    switched = select_unit(f, UNIT_B)
    assert switched.unit == UNIT_B
    assert switched.project == ""


def test_select_same_unit_keeps_project():
    f = ReportFilters(unit=UNIT_A, project="P1", start_date=date(2025, 1, 1))
    assert select_unit(f, UNIT_A) is f


def test_select_unit_keeps_dates():
    f = ReportFilters(unit=UNIT_A, project="P1", end_date=date(2025, 1, 1))
    assert select_unit(f, ALL_UNITS).end_date == date(2025, 1, 1)


def test_available_projects():
    projects = [make_project("A1", UNIT_A), make_project("B1", UNIT_B)]
    assert [p.project_id for p in available_projects(projects, UNIT_A)] == ["A1"]
    assert [p.project_id for p in available_projects(projects, ALL_UNITS)] == ["A1", "B1"]
