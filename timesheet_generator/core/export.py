"""CSV and Excel export utilities for generated timesheet entries."""

import csv
import io
import re
from typing import Dict, Iterable, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from timesheet_generator.core.generator import TimesheetEntry, entries_for_employee
from timesheet_generator.core.reference_data import Employee, ReferenceData

TIMESHEET_HEADERS = ["Date", "Employee", "Project", "Project Code", "Task", "Hours"]
TOTAL_HOURS = "Total Hours"

CSV_FILENAME = "timesheet.csv"
EXCEL_FILENAME = "timesheet.xlsx"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Characters openpyxl refuses in sheet titles
_INVALID_TITLE_CHARS = re.compile(r"[\\/*?:\[\]]")


def format_hours(hours: float) -> str:
    """Shortest form: 8 rather than 8.0, 7.5 stays 7.5."""
    return f"{hours:g}"


def entries_to_rows(entries: Iterable[TimesheetEntry]) -> List[Dict[str, object]]:
    return [
        {
            "Date": e.date.isoformat(),
            "Employee": e.employee_name,
            "Project": e.project_name,
            "Project Code": e.project_code,
            "Task": e.task_description,
            "Hours": e.hours,
        }
        for e in entries
    ]


def render_csv(entries: Iterable[TimesheetEntry]) -> str:
    """Render entries as CSV text.

    Fields containing a comma, quote or newline are quoted, inner quotes doubled.
    """
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=TIMESHEET_HEADERS, lineterminator="\n")
    writer.writeheader()
    for row in entries_to_rows(entries):
        row["Hours"] = format_hours(row["Hours"])
        writer.writerow(row)
    return buf.getvalue()


def build_summary(entries: Sequence[TimesheetEntry], reference: ReferenceData) -> List[Dict[str, object]]:
    """Hours per employee per project, with a trailing TOTAL row."""
    summary = []
    for employee in reference.employees:
        row: Dict[str, object] = {"Employee": employee.name}
        row_total = 0.0
        for project in reference.projects:
            project_hours = sum(
                e.hours for e in entries
                if e.employee_id == employee.id and e.project_code == project.code
            )
            row[project.name] = project_hours
            row_total += project_hours
        row[TOTAL_HOURS] = row_total
        summary.append(row)

    total_row: Dict[str, object] = {"Employee": "TOTAL"}
    grand_total = 0.0
    for project in reference.projects:
        project_total = sum(e.hours for e in entries if e.project_code == project.code)
        total_row[project.name] = project_total
        grand_total += project_total
    total_row[TOTAL_HOURS] = grand_total
    summary.append(total_row)

    return summary


def summary_headers(reference: ReferenceData) -> List[str]:
    return ["Employee"] + [p.name for p in reference.projects] + [TOTAL_HOURS]


def employee_excel_filename(employee: Employee) -> str:
    return f"timesheet-{employee.name.lower()}.xlsx"


def sheet_title(name: str) -> str:
    title = _INVALID_TITLE_CHARS.sub("_", name).strip() or "Sheet"
    return title[:31]


# ── Excel workbook ──────────────────────────────────────────────────────

header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
header_font = Font(color="FFFFFF", bold=True)
total_fill = PatternFill(start_color="FFC000", end_color="FFC000", fill_type="solid")
total_font = Font(bold=True)
center = Alignment(horizontal="center", vertical="center")
border = Border(
    left=Side(style='thin'), right=Side(style='thin'),
    top=Side(style='thin'), bottom=Side(style='thin'),
)

TIMESHEET_COL_WIDTHS = [12, 12, 14, 14, 40, 8]


def _write_table(ws, headers: Sequence[str], rows: Iterable[Dict[str, object]], widths: Sequence[int]):
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill, cell.font, cell.alignment, cell.border = header_fill, header_font, center, border

    row_num = 2
    for r in rows:
        for col, header in enumerate(headers, 1):
            ws.cell(row=row_num, column=col, value=r.get(header)).border = border
        row_num += 1

    for col, width in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(col)].width = width
    return row_num


def _write_timesheet_sheet(ws, entries: Iterable[TimesheetEntry]) -> None:
    _write_table(ws, TIMESHEET_HEADERS, entries_to_rows(entries), TIMESHEET_COL_WIDTHS)


def _write_summary_sheet(ws, entries: Sequence[TimesheetEntry], reference: ReferenceData) -> None:
    headers = summary_headers(reference)
    next_row = _write_table(ws, headers, build_summary(entries, reference), [14] * len(headers))

    # TOTAL row is the last one written
    for col in range(1, len(headers) + 1):
        cell = ws.cell(row=next_row - 1, column=col)
        cell.fill, cell.font = total_fill, total_font


def _to_bytes(wb: Workbook) -> bytes:
    excel_file = io.BytesIO()
    wb.save(excel_file)
    return excel_file.getvalue()


def build_workbook(entries: Sequence[TimesheetEntry], reference: ReferenceData) -> bytes:
    """Workbook with the full timesheet and the per-project summary."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Timesheet"
    _write_timesheet_sheet(ws, entries)

    _write_summary_sheet(wb.create_sheet("Summary"), entries, reference)
    return _to_bytes(wb)


def build_employee_workbook(entries: Sequence[TimesheetEntry], employee: Employee) -> bytes:
    """Single sheet, named after the employee, holding only their entries."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title(employee.name)
    _write_timesheet_sheet(ws, entries_for_employee(entries, employee.id))
    return _to_bytes(wb)


def filter_for_export(entries: Sequence[TimesheetEntry], employee_id: Optional[str] = None) -> List[TimesheetEntry]:
    if employee_id is None:
        return list(entries)
    return entries_for_employee(entries, employee_id)
