"""
Export Endpoints

Download the last generated timesheet as CSV or Excel. An empty timesheet
exports as header-only files.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response, StreamingResponse
from sqlalchemy.orm import Session
from typing import Optional
from io import BytesIO

from timesheet_generator.db.session import get_db
from timesheet_generator.core.export import (
    CSV_FILENAME,
    EXCEL_FILENAME,
    EXCEL_MEDIA_TYPE,
    build_employee_workbook,
    build_workbook,
    employee_excel_filename,
    filter_for_export,
    render_csv,
)
from timesheet_generator.core.reference_data import ReferenceData
from timesheet_generator.api.dependencies import get_reference_data, get_employee_or_404
from timesheet_generator.api.endpoints.timesheets import load_current_run

router = APIRouter(prefix="/timesheets/export", tags=["Exports"])


def _excel_response(content: bytes, filename: str) -> StreamingResponse:
    return StreamingResponse(
        BytesIO(content),
        media_type=EXCEL_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


@router.get("/csv")
def export_to_csv(
    employee_id: Optional[str] = Query(None, description="Only export this employee"),
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """Export the timesheet as CSV."""
    if employee_id is not None:
        get_employee_or_404(reference, employee_id)

    _, entries = load_current_run(db)
    content = render_csv(filter_for_export(entries, employee_id))

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"}
    )


@router.get("/excel")
def export_to_excel(
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """Export the timesheet and its per-project summary to Excel."""
    _, entries = load_current_run(db)
    return _excel_response(build_workbook(entries, reference), EXCEL_FILENAME)


@router.get("/excel/{employee_id}")
def export_employee_to_excel(
    employee_id: str,
    db: Session = Depends(get_db),
    reference: ReferenceData = Depends(get_reference_data)
):
    """Export one employee's entries to a single-sheet workbook."""
    employee = get_employee_or_404(reference, employee_id)
    _, entries = load_current_run(db)
    return _excel_response(build_employee_workbook(entries, employee), employee_excel_filename(employee))
