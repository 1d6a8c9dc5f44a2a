"""
Reference Data Endpoints

Read-only access to the employees, projects and holiday calendar the generator
works from.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from timesheet_generator.core.reference_data import ReferenceData
from timesheet_generator.schemas import EmployeeResponse, ProjectResponse, HolidayResponse
from timesheet_generator.api.dependencies import get_reference_data, get_employee_or_404

router = APIRouter(tags=["Reference Data"])


@router.get("/employees", response_model=List[EmployeeResponse])
def list_employees(reference: ReferenceData = Depends(get_reference_data)):
    """List all employees."""
    return list(reference.employees)


@router.get("/employees/{employee_id}", response_model=EmployeeResponse)
def get_employee(employee_id: str, reference: ReferenceData = Depends(get_reference_data)):
    """Get a specific employee."""
    return get_employee_or_404(reference, employee_id)


@router.get("/projects", response_model=List[ProjectResponse])
def list_projects(reference: ReferenceData = Depends(get_reference_data)):
    """List all projects hours are allocated to."""
    return list(reference.projects)


@router.get("/holidays", response_model=List[HolidayResponse])
def list_holidays(
    year: Optional[int] = Query(None, description="Filter by year"),
    reference: ReferenceData = Depends(get_reference_data)
):
    """
    List public holidays ordered by date.

    - **year**: Filter holidays by year
    """
    holidays = reference.holidays
    if year is not None:
        holidays = [h for h in holidays if h.date.year == year]
    return sorted(holidays, key=lambda h: h.date)
