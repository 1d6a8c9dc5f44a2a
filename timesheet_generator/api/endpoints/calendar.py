from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from timesheet_generator.db.session import get_db
from timesheet_generator.core.calendar import classify_day, day_info, is_working_day
from timesheet_generator.core.date_filters import expand_range
from timesheet_generator.core.reference_data import ReferenceData
from timesheet_generator.schemas import CalendarResponse, DayStatusResponse
from timesheet_generator.api.dependencies import (
    get_reference_data,
    get_employee_or_404,
    resolve_period_or_400,
)
from timesheet_generator.api.endpoints.leaves import load_leave_map

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("", response_model=CalendarResponse)
def get_calendar(
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    date_range: Optional[str] = Query(None, description="Named preset, e.g. last_15_days"),
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """
    Calendar grid for a period: which days are weekends or holidays and who is on leave.

    With no dates the last 15 days ending today are shown.
    """
    start, end = resolve_period_or_400(from_date, to_date, date_range)
    leave_map = load_leave_map(db, reference)

    days = []
    working_days_count = 0
    for day in expand_range(start, end):
        info = day_info(day, reference)
        if info.is_workday:
            working_days_count += 1

        statuses = {}
        on_leave = []
        for employee in reference.employees:
            if info.is_weekend:
                statuses[employee.id] = "WEEKEND"
            elif info.is_holiday:
                statuses[employee.id] = "HOLIDAY"
            elif day in leave_map.get(employee.id, ()):
                statuses[employee.id] = "LEAVE"
                on_leave.append(employee.id)
            else:
                statuses[employee.id] = "WORKING"

        days.append({
            "date": day,
            "weekday": day.strftime("%a"),
            "is_weekend": info.is_weekend,
            "is_holiday": info.is_holiday,
            "holiday_name": info.holiday_name,
            "employees_on_leave": on_leave,
            "statuses": statuses,
        })

    return {
        "from_date": start,
        "to_date": end,
        "day_count": len(days),
        "working_days_count": working_days_count,
        "days": days,
    }


@router.get("/day-status", response_model=DayStatusResponse)
def get_day_status(
    day: date = Query(..., description="Date to classify"),
    employee_id: str = Query(...),
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """Classify a single day for one employee."""
    get_employee_or_404(reference, employee_id)
    leave_map = load_leave_map(db, reference)

    day_status = classify_day(day, employee_id, leave_map, reference)
    return {
        "date": day_status.date,
        "employee_id": employee_id,
        "is_weekend": day_status.is_weekend,
        "is_holiday": day_status.is_holiday,
        "holiday_name": day_status.holiday_name,
        "is_leave": day_status.is_leave,
        "is_working_day": is_working_day(day, employee_id, leave_map, reference),
    }
