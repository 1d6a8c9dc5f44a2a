import json
import pytest
from fastapi import status
from datetime import date

from timesheet_generator.core.reference_data import (
    EMPLOYEES,
    PROJECTS,
    Project,
    ReferenceData,
    ReferenceDataError,
    load_reference_data,
)


def test_default_reference_data_is_valid(reference):
    assert reference.validate(7.5, 1.0) is reference
    assert [p.code for p in reference.projects] == ["SPARK", "RADIATE", "SYNTHPERSONA"]
    assert reference.holiday_name(date(2026, 12, 25)) == "Christmas"


def test_too_many_projects_for_the_floor():
    # Eight floors of 1h before the last project overflow a 7.5h day
    projects = tuple(Project(code=f"P{i}", name=f"P{i}") for i in range(9))
    reference = ReferenceData(employees=EMPLOYEES, projects=projects)
    with pytest.raises(ReferenceDataError):
        reference.validate(7.5, 1.0)


def test_last_project_may_fall_below_the_floor():
    # Seven floors leave half an hour for the eighth project
    projects = tuple(Project(code=f"P{i}", name=f"P{i}") for i in range(8))
    reference = ReferenceData(employees=EMPLOYEES, projects=projects)
    assert reference.validate(7.5, 1.0) is reference


def test_duplicate_project_codes():
    reference = ReferenceData(employees=EMPLOYEES, projects=PROJECTS + PROJECTS[:1])
    with pytest.raises(ReferenceDataError):
        reference.validate(7.5, 1.0)


def test_load_reference_data(tmp_path):
    path = tmp_path / "reference.json"
    path.write_text(json.dumps({
        "employees": [
            {"id": "x1", "name": "Ada", "role": "Engineer", "skills": ["Python"],
             "taskCategories": ["Debugging"]},
        ],
        "holidays": [{"date": "2027-01-01", "name": "New Year's Day"}],
    }))

    reference = load_reference_data(str(path))

    assert [e.name for e in reference.employees] == ["Ada"]
    assert reference.employees[0].task_categories == ("Debugging",)
    # Missing section keeps the built-in table
    assert reference.projects == PROJECTS
    assert reference.is_holiday(date(2027, 1, 1))
    assert not reference.is_holiday(date(2026, 1, 1))


def test_load_reference_data_bad_holiday(tmp_path):
    path = tmp_path / "reference.json"
    path.write_text(json.dumps({"holidays": [{"date": "not-a-date", "name": "Oops"}]}))
    with pytest.raises(ReferenceDataError):
        load_reference_data(str(path))


class TestReferenceEndpoints:
    """Test reference data endpoints"""

    def test_list_employees(self, client, reference):
        """Test listing employees"""
        response = client.get("/employees")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [e["id"] for e in data] == [e.id for e in reference.employees]
        assert data[0]["task_categories"]

    def test_get_employee_not_found(self, client):
        """Test getting an unknown employee"""
        response = client.get("/employees/nobody")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_projects(self, client):
        """Test listing projects"""
        response = client.get("/projects")
        assert response.status_code == status.HTTP_200_OK
        assert [p["code"] for p in response.json()] == ["SPARK", "RADIATE", "SYNTHPERSONA"]

    def test_list_holidays_by_year(self, client):
        """Test listing holidays for a year"""
        response = client.get("/holidays?year=2026")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 13
        assert data[0] == {"date": "2026-01-01", "name": "New Year's Day"}

        response = client.get("/holidays?year=2025")
        assert response.json() == []
