"""
Reference Data

Employees, projects and the public holiday calendar the generator works from.
The tables are immutable; a JSON file can replace any of them so several
configurations (e.g. holiday calendars per locale) can coexist.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Tuple


class ReferenceDataError(ValueError):
    """Raised when a reference data table is inconsistent."""


@dataclass(frozen=True)
class Employee:
    id: str
    name: str
    role: str
    skills: Tuple[str, ...] = ()
    task_categories: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Project:
    code: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class Holiday:
    date: date
    name: str


@dataclass(frozen=True)
class ReferenceData:
    employees: Tuple[Employee, ...]
    projects: Tuple[Project, ...]
    holidays: Tuple[Holiday, ...] = ()
    _holiday_index: Dict[date, str] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._holiday_index.update({h.date: h.name for h in self.holidays})

    def find_employee(self, employee_id: str) -> Optional[Employee]:
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        return None

    def find_project(self, code: str) -> Optional[Project]:
        for project in self.projects:
            if project.code == code:
                return project
        return None

    def holiday_name(self, day: date) -> Optional[str]:
        return self._holiday_index.get(day)

    def is_holiday(self, day: date) -> bool:
        return day in self._holiday_index

    def validate(self, min_daily_hours: float, min_project_hours: float) -> "ReferenceData":
        """Check uniqueness and that every project but the last can receive its hourly floor."""
        employee_ids = [e.id for e in self.employees]
        if len(set(employee_ids)) != len(employee_ids):
            raise ReferenceDataError("Employee ids must be unique")

        project_codes = [p.code for p in self.projects]
        if len(set(project_codes)) != len(project_codes):
            raise ReferenceDataError("Project codes must be unique")
        if not self.projects:
            raise ReferenceDataError("At least one project is required")

        for employee in self.employees:
            if not employee.task_categories:
                raise ReferenceDataError(f"Employee {employee.id} has no task categories")

        # The last project takes the remainder, so only the others need the floor
        if (len(self.projects) - 1) * min_project_hours > min_daily_hours:
            raise ReferenceDataError(
                f"{len(self.projects) - 1} project floors of {min_project_hours:g}h "
                f"do not fit in a {min_daily_hours:g}h day"
            )
        return self


PROJECTS = (
    Project(code="SPARK", name="Spark", description="AI Search Discovery Platform"),
    Project(code="RADIATE", name="Radiate", description="GEO Optimization Tool"),
    Project(code="SYNTHPERSONA", name="SynthPersona", description="Synthetic Persona Generation"),
)

EMPLOYEES = (
    Employee(
        id="emp-001",
        name="Aarav",
        role="ML Engineer",
        skills=("Python", "PyTorch", "LLM fine-tuning"),
        task_categories=(
            "Model training and evaluation",
            "Prompt engineering experiments",
            "Embedding pipeline improvements",
            "Code review and pair programming",
        ),
    ),
    Employee(
        id="emp-002",
        name="Diya",
        role="Data Scientist",
        skills=("Python", "SQL", "Statistics"),
        task_categories=(
            "Dataset curation and labelling",
            "Exploratory data analysis",
            "Metrics dashboard updates",
            "Persona quality assessment",
        ),
    ),
    Employee(
        id="emp-003",
        name="Kabir",
        role="Full Stack Developer",
        skills=("TypeScript", "React", "FastAPI"),
        task_categories=(
            "Frontend feature development",
            "API integration",
            "Bug fixes, regression testing",
            "Deployment and CI/CD maintenance",
        ),
    ),
    Employee(
        id="emp-004",
        name="Meera",
        role="Research Lead",
        skills=("NLP", "Information Retrieval", "Experiment design"),
        task_categories=(
            "Literature review",
            "Research sync and planning",
            "Search relevance analysis",
            "Writing technical \"design notes\"",
        ),
    ),
)

PUBLIC_HOLIDAYS_2026 = (
    Holiday(date=date(2026, 1, 1), name="New Year's Day"),
    Holiday(date=date(2026, 1, 14), name="Sankranti"),
    Holiday(date=date(2026, 1, 26), name="Republic Day"),
    Holiday(date=date(2026, 3, 4), name="Holi"),
    Holiday(date=date(2026, 5, 1), name="Labour Day"),
    Holiday(date=date(2026, 8, 17), name="Independence Day"),
    Holiday(date=date(2026, 8, 28), name="Rakshabandhan"),
    Holiday(date=date(2026, 9, 14), name="Ganesha Chaturthi"),
    Holiday(date=date(2026, 10, 2), name="Gandhi Jayanti"),
    Holiday(date=date(2026, 10, 20), name="Dussehra/Vijayadasami"),
    Holiday(date=date(2026, 11, 9), name="Diwali"),
    Holiday(date=date(2026, 11, 11), name="Bhai Duj"),
    Holiday(date=date(2026, 12, 25), name="Christmas"),
)

DEFAULT_REFERENCE_DATA = ReferenceData(
    employees=EMPLOYEES,
    projects=PROJECTS,
    holidays=PUBLIC_HOLIDAYS_2026,
)


def _as_tuple(value) -> Tuple[str, ...]:
    return tuple(str(x) for x in (value or []))


def load_reference_data(path: str) -> ReferenceData:
    """Load reference tables from JSON; missing sections keep the built-in table."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    employees = EMPLOYEES
    if data.get("employees") is not None:
        employees = tuple(
            Employee(
                id=str(x.get("id", "")),
                name=str(x.get("name", "")),
                role=str(x.get("role", "")),
                skills=_as_tuple(x.get("skills")),
                task_categories=_as_tuple(x.get("task_categories", x.get("taskCategories"))),
            )
            for x in data["employees"]
            if isinstance(x, dict)
        )

    projects = PROJECTS
    if data.get("projects") is not None:
        projects = tuple(
            Project(
                code=str(x.get("code", "")),
                name=str(x.get("name", "")),
                description=str(x.get("description", "")),
            )
            for x in data["projects"]
            if isinstance(x, dict)
        )

    holidays = PUBLIC_HOLIDAYS_2026
    if data.get("holidays") is not None:
        try:
            holidays = tuple(
                Holiday(date=date.fromisoformat(str(x["date"])), name=str(x.get("name", "")))
                for x in data["holidays"]
                if isinstance(x, dict)
            )
        except (KeyError, ValueError) as e:
            raise ReferenceDataError(f"Invalid holiday entry in {path}: {e}") from e

    return ReferenceData(employees=employees, projects=projects, holidays=holidays)
