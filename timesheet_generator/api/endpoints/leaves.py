import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, Set

from timesheet_generator.db.session import get_db
from timesheet_generator.models.leave_day import LeaveDay
from timesheet_generator.core.calendar import day_info, empty_leave_map
from timesheet_generator.core.reference_data import ReferenceData
from timesheet_generator.schemas import (
    LeaveToggleRequest,
    LeaveToggleResponse,
    LeaveMapResponse,
    LeaveClearResponse,
)
from timesheet_generator.api.dependencies import get_reference_data, get_employee_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leaves", tags=["Leaves"])


def load_leave_map(db: Session, reference: ReferenceData) -> Dict[str, Set[date]]:
    """Leave map with every known employee present, even without leave."""
    leave_map = empty_leave_map(reference)
    for leave in db.query(LeaveDay).all():
        leave_map.setdefault(leave.employee_id, set()).add(leave.leave_date)
    return leave_map


def _employee_leave_days(db: Session, employee_id: str):
    rows = db.query(LeaveDay.leave_date).filter(
        LeaveDay.employee_id == employee_id
    ).order_by(LeaveDay.leave_date.asc()).all()
    return [row.leave_date for row in rows]


@router.get("", response_model=LeaveMapResponse)
def get_leave_map(
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """Leave days for every employee."""
    leave_map = load_leave_map(db, reference)
    return {
        "leaves": {employee_id: sorted(days) for employee_id, days in leave_map.items()},
        "total_leave_days": sum(len(days) for days in leave_map.values()),
    }


@router.post("/toggle", response_model=LeaveToggleResponse)
def toggle_leave(
    toggle: LeaveToggleRequest,
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """
    Mark a day as leave, or unmark it if it already is.

    Only working days can be marked; weekends and holidays are rejected.
    """
    get_employee_or_404(reference, toggle.employee_id)

    info = day_info(toggle.leave_date, reference)
    if info.is_weekend:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{toggle.leave_date} is a weekend and cannot be marked as leave"
        )
    if info.is_holiday:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{toggle.leave_date} is a holiday ({info.holiday_name}) and cannot be marked as leave"
        )

    existing = db.query(LeaveDay).filter(
        LeaveDay.employee_id == toggle.employee_id,
        LeaveDay.leave_date == toggle.leave_date
    ).first()

    if existing:
        db.delete(existing)
        on_leave = False
    else:
        db.add(LeaveDay(employee_id=toggle.employee_id, leave_date=toggle.leave_date))
        on_leave = True
    db.commit()

    logger.info(
        "Leave %s for %s on %s",
        "marked" if on_leave else "removed", toggle.employee_id, toggle.leave_date,
    )
    return {
        "employee_id": toggle.employee_id,
        "leave_date": toggle.leave_date,
        "on_leave": on_leave,
        "leave_days": _employee_leave_days(db, toggle.employee_id),
    }


@router.delete("", response_model=LeaveClearResponse)
def clear_all_leaves(db: Session = Depends(get_db)):
    """Remove every leave day for every employee."""
    cleared = db.query(LeaveDay).delete()
    db.commit()
    return {"cleared": cleared}


@router.delete("/{employee_id}", response_model=LeaveClearResponse)
def clear_employee_leaves(
    employee_id: str,
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """Remove every leave day for one employee."""
    get_employee_or_404(reference, employee_id)
    cleared = db.query(LeaveDay).filter(LeaveDay.employee_id == employee_id).delete()
    db.commit()
    return {"cleared": cleared}
