import logging
import random
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from datetime import date

from timesheet_generator.db.session import get_db
from timesheet_generator.models.timesheet_entry import GenerationRun, TimesheetEntryRecord
from timesheet_generator.core.date_filters import expand_range
from timesheet_generator.core.export import build_summary
from timesheet_generator.core.generator import (
    GenerationPolicy,
    TimesheetEntry,
    filter_entries,
    generate_timesheet,
    sort_entries,
    total_hours,
)
from timesheet_generator.core.reference_data import ReferenceData
from timesheet_generator.schemas import (
    GenerateRequest,
    TimesheetResponse,
    TimesheetPreviewResponse,
    SummaryRow,
)
from timesheet_generator.api.dependencies import (
    get_policy,
    get_reference_data,
    get_rng,
    resolve_period_or_400,
)
from timesheet_generator.api.endpoints.leaves import load_leave_map

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timesheets", tags=["Timesheets"])


def load_current_run(db: Session) -> Tuple[Optional[GenerationRun], List[TimesheetEntry]]:
    """The last generated timesheet, sorted by date, employee and project."""
    run = db.query(GenerationRun).order_by(GenerationRun.created_at.desc()).first()
    if run is None:
        return None, []
    records = db.query(TimesheetEntryRecord).filter(TimesheetEntryRecord.run_id == run.id).all()
    entries = [record.to_entry() for record in records]
    return run, sort_entries(entries)


@router.post("/generate", response_model=TimesheetResponse, status_code=status.HTTP_201_CREATED)
def generate(
    request: GenerateRequest,
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data),
    policy: GenerationPolicy = Depends(get_policy),
    rng: random.Random = Depends(get_rng)
):
    """
    Generate a fresh timesheet for the period, replacing the previous one.

    - **from_date** / **to_date**: Inclusive period
    - **date_range**: Named preset used when no dates are given
    - With neither, the last 15 days ending today are used
    """
    start, end = resolve_period_or_400(request.from_date, request.to_date, request.date_range)

    leave_map = load_leave_map(db, reference)
    entries = generate_timesheet(leave_map, expand_range(start, end), reference, policy, rng)

    # Regenerated wholesale: drop the previous run and its entries
    db.query(TimesheetEntryRecord).delete()
    db.query(GenerationRun).delete()

    hours = total_hours(entries)
    run = GenerationRun(from_date=start, to_date=end, entry_count=len(entries), total_hours=hours)
    run.entries = [TimesheetEntryRecord.from_entry(e) for e in entries]
    db.add(run)
    db.commit()
    db.refresh(run)

    logger.info("Generated %d timesheet entries (%s hours) for %s to %s", len(entries), hours, start, end)

    return {
        "from_date": start,
        "to_date": end,
        "generated_at": run.created_at,
        "entry_count": len(entries),
        "total_hours": hours,
        "entries": entries,
    }


@router.get("", response_model=TimesheetPreviewResponse)
def preview_timesheet(
    employee_id: Optional[str] = Query(None),
    project_code: Optional[str] = Query(None),
    work_date: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Preview the last generated timesheet, optionally filtered.

    - **employee_id**: Only this employee's entries
    - **project_code**: Only this project's entries
    - **work_date**: Only entries on this date
    """
    run, entries = load_current_run(db)
    shown = filter_entries(entries, employee_id=employee_id, project_code=project_code, work_date=work_date)

    return {
        "from_date": run.from_date if run else None,
        "to_date": run.to_date if run else None,
        "generated_at": run.created_at if run else None,
        "entry_count": len(entries),
        "shown_count": len(shown),
        "total_hours": total_hours(shown),
        "entries": shown,
    }


@router.get("/summary", response_model=List[SummaryRow])
def timesheet_summary(
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """Hours per employee per project, with a trailing TOTAL row."""
    _, entries = load_current_run(db)
    project_names = [p.name for p in reference.projects]

    return [
        {
            "employee": row["Employee"],
            "hours_by_project": {name: row[name] for name in project_names},
            "total_hours": row["Total Hours"],
        }
        for row in build_summary(entries, reference)
    ]
