"""
Random timesheet generation.

For every employee and every working day in the requested range a daily total
between 7.5 and 14 hours is drawn and split across all projects. Projects are
visited in a random order; each gets a random share (at least one hour, at most
60% of the day) except the last one, which takes whatever remains so the day
always adds up to the drawn total.
"""

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from timesheet_generator.core.calendar import LeaveMap, is_working_day
from timesheet_generator.core.reference_data import Employee, ReferenceData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationPolicy:
    daily_hours_min: float = 7.5
    daily_hours_max: float = 14.0
    project_share_cap: float = 0.6
    min_project_hours: float = 1.0


@dataclass(frozen=True)
class TimesheetEntry:
    id: str
    employee_id: str
    employee_name: str
    date: date
    project_code: str
    project_name: str
    task_description: str
    hours: float


def round_to_half(value: float) -> float:
    """Round to the nearest 0.5 (ties go to the even multiple)."""
    return round(value * 2) / 2


def entry_id(employee_id: str, day: date, project_code: str) -> str:
    return f"{employee_id}-{day.isoformat()}-{project_code}"


def _allocate_day(
    employee: Employee,
    day: date,
    reference: ReferenceData,
    policy: GenerationPolicy,
    rng: random.Random,
) -> List[TimesheetEntry]:
    daily_total = round_to_half(rng.uniform(policy.daily_hours_min, policy.daily_hours_max))
    remaining_hours = daily_total

    shuffled_projects = list(reference.projects)
    rng.shuffle(shuffled_projects)

    entries = []
    for i, project in enumerate(shuffled_projects):
        if i == len(shuffled_projects) - 1:
            # Last project gets remaining hours
            hours = remaining_hours
        else:
            # Leave room for every project still to come to get its floor
            projects_remaining = len(shuffled_projects) - i
            max_hours = min(
                policy.project_share_cap * daily_total,
                remaining_hours - (projects_remaining - 1) * policy.min_project_hours,
            )
            if max_hours <= policy.min_project_hours:
                hours = policy.min_project_hours
            else:
                hours = round_to_half(rng.uniform(policy.min_project_hours, max_hours))

        remaining_hours -= hours

        entries.append(TimesheetEntry(
            id=entry_id(employee.id, day, project.code),
            employee_id=employee.id,
            employee_name=employee.name,
            date=day,
            project_code=project.code,
            project_name=project.name,
            task_description=rng.choice(employee.task_categories),
            hours=hours,
        ))
    return entries


def sort_entries(entries: Iterable[TimesheetEntry]) -> List[TimesheetEntry]:
    """Sort by date, then employee, then project."""
    return sorted(entries, key=lambda e: (e.date.isoformat(), e.employee_name, e.project_name))


def generate_timesheet(
    leave_map: LeaveMap,
    dates: Iterable[date],
    reference: ReferenceData,
    policy: Optional[GenerationPolicy] = None,
    rng: Optional[random.Random] = None,
) -> List[TimesheetEntry]:
    """Generate entries for every employee on every working day in `dates`."""
    policy = policy or GenerationPolicy()
    rng = rng or random.Random()
    days = list(dates)

    entries: List[TimesheetEntry] = []
    for employee in reference.employees:
        for day in days:
            if not is_working_day(day, employee.id, leave_map, reference):
                continue
            entries.extend(_allocate_day(employee, day, reference, policy, rng))

    logger.debug(
        "Generated %d entries for %d employees over %d days",
        len(entries), len(reference.employees), len(days),
    )
    return sort_entries(entries)


def filter_entries(
    entries: Iterable[TimesheetEntry],
    employee_id: Optional[str] = None,
    project_code: Optional[str] = None,
    work_date: Optional[date] = None,
) -> List[TimesheetEntry]:
    result = []
    for e in entries:
        if employee_id and e.employee_id != employee_id:
            continue
        if project_code and e.project_code != project_code:
            continue
        if work_date and e.date != work_date:
            continue
        result.append(e)
    return result


def entries_for_employee(entries: Iterable[TimesheetEntry], employee_id: str) -> List[TimesheetEntry]:
    return [e for e in entries if e.employee_id == employee_id]


def total_hours(entries: Iterable[TimesheetEntry]) -> float:
    return sum(e.hours for e in entries)


def total_hours_for_employee(entries: Iterable[TimesheetEntry], employee_id: str) -> float:
    return total_hours(entries_for_employee(entries, employee_id))


def total_hours_for_project(entries: Iterable[TimesheetEntry], project_code: str) -> float:
    return total_hours(e for e in entries if e.project_code == project_code)
