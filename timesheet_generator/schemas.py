from pydantic import BaseModel, Field, validator, model_validator
from typing import Optional, List, Dict
from datetime import date, datetime
from timesheet_generator.core.config import settings


# ============= Reference Data Schemas =============
class EmployeeResponse(BaseModel):
    id: str
    name: str
    role: str
    skills: List[str]
    task_categories: List[str]

    class Config:
        from_attributes = True


class ProjectResponse(BaseModel):
    code: str
    name: str
    description: str

    class Config:
        from_attributes = True


class HolidayResponse(BaseModel):
    date: date
    name: str

    class Config:
        from_attributes = True


# ============= Calendar Schemas =============
class DayStatusResponse(BaseModel):
    date: date
    employee_id: str
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None
    is_leave: bool
    is_working_day: bool


class CalendarDay(BaseModel):
    date: date
    weekday: str
    is_weekend: bool
    is_holiday: bool
    holiday_name: Optional[str] = None
    employees_on_leave: List[str] = []
    # employee id -> WORKING / LEAVE / WEEKEND / HOLIDAY
    statuses: Dict[str, str] = {}


class CalendarResponse(BaseModel):
    from_date: date
    to_date: date
    day_count: int
    working_days_count: int
    days: List[CalendarDay]


# ============= Leave Schemas =============
class LeaveToggleRequest(BaseModel):
    employee_id: str = Field(..., min_length=1)
    leave_date: date


class LeaveToggleResponse(BaseModel):
    employee_id: str
    leave_date: date
    on_leave: bool
    leave_days: List[date]


class LeaveMapResponse(BaseModel):
    leaves: Dict[str, List[date]]
    total_leave_days: int


class LeaveClearResponse(BaseModel):
    cleared: int


# ============= Timesheet Schemas =============
class GenerateRequest(BaseModel):
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    date_range: Optional[str] = None  # Named preset, e.g. "last_15_days"

    @validator('to_date')
    def validate_dates(cls, v, values):
        if v is not None and values.get('from_date') is not None and v < values['from_date']:
            raise ValueError('to_date must be greater than or equal to from_date')
        return v

    @model_validator(mode='after')
    def validate_range(self):
        if (self.from_date is None) != (self.to_date is None):
            raise ValueError('from_date and to_date must be given together')
        if self.from_date is not None and self.to_date is not None:
            days = (self.to_date - self.from_date).days + 1
            if days > settings.MAX_RANGE_DAYS:
                raise ValueError(f'Date range cannot exceed {settings.MAX_RANGE_DAYS} days')
        return self


class TimesheetEntryResponse(BaseModel):
    id: str
    employee_id: str
    employee_name: str
    date: date
    project_code: str
    project_name: str
    task_description: str
    hours: float

    class Config:
        from_attributes = True


class TimesheetResponse(BaseModel):
    from_date: date
    to_date: date
    generated_at: datetime
    entry_count: int
    total_hours: float
    entries: List[TimesheetEntryResponse]


class TimesheetPreviewResponse(BaseModel):
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    generated_at: Optional[datetime] = None
    entry_count: int
    shown_count: int
    total_hours: float
    entries: List[TimesheetEntryResponse]


class SummaryRow(BaseModel):
    employee: str
    hours_by_project: Dict[str, float]
    total_hours: float
