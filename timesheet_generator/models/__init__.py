# Import all models here so Base.metadata knows every table
from timesheet_generator.models.leave_day import LeaveDay
from timesheet_generator.models.timesheet_entry import GenerationRun, TimesheetEntryRecord

__all__ = [
    "LeaveDay",
    "GenerationRun",
    "TimesheetEntryRecord",
]
