"""
Day classification.

A day is a working day for an employee unless it falls on a weekend, is listed
in the holiday table, or the employee marked it as leave.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Mapping, Optional, Set

from timesheet_generator.core.reference_data import ReferenceData

# employee id -> dates the employee is absent
LeaveMap = Mapping[str, Set[date]]


@dataclass(frozen=True)
class DayInfo:
    date: date
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None

    @property
    def is_workday(self) -> bool:
        """Working day for anyone not on leave."""
        return not self.is_weekend and not self.is_holiday


@dataclass(frozen=True)
class DayStatus:
    date: date
    is_weekend: bool
    is_holiday: bool
    is_leave: bool
    holiday_name: Optional[str] = None


def is_weekend(day: date) -> bool:
    """Check if the given date is a weekend (Saturday or Sunday)."""
    return day.weekday() in [5, 6]  # 5 = Saturday, 6 = Sunday


def day_info(day: date, reference: ReferenceData) -> DayInfo:
    """Employee-independent part of a day's status."""
    return DayInfo(
        date=day,
        is_weekend=is_weekend(day),
        is_holiday=reference.is_holiday(day),
        holiday_name=reference.holiday_name(day),
    )


def classify_day(day: date, employee_id: str, leave_map: LeaveMap, reference: ReferenceData) -> DayStatus:
    info = day_info(day, reference)
    return DayStatus(
        date=day,
        is_weekend=info.is_weekend,
        is_holiday=info.is_holiday,
        holiday_name=info.holiday_name,
        is_leave=day in leave_map.get(employee_id, ()),
    )


def is_working_day(day: date, employee_id: str, leave_map: LeaveMap, reference: ReferenceData) -> bool:
    status = classify_day(day, employee_id, leave_map, reference)
    return not status.is_weekend and not status.is_holiday and not status.is_leave


def empty_leave_map(reference: ReferenceData) -> Dict[str, Set[date]]:
    return {employee.id: set() for employee in reference.employees}
