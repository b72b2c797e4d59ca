# backend/checklist_core/checklists/exports.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional
from uuid import UUID

from django.utils import timezone
from rest_framework.exceptions import ValidationError

from checklist_core.checklists.renderers import ReportHeader, render_csv, render_docx, render_pdf
from checklist_core.checklists.selectors import ReportRow, entries_by_creation_range, reconcile
from checklist_core.common.api.exceptions import NoDataError
from checklist_core.hospitals.services import HospitalService
from checklist_core.iam.scope import HospitalScope

logger = logging.getLogger(__name__)

NO_DATA_MSG = "No data available for export"
NO_DATA_RANGE_MSG = "No data available for export in this date range"

DAY_COLUMNS = ["Hospital", "Task ID", "Area", "Task Name", "Description", "Status", "Staff Name", "Timestamp"]
RANGE_COLUMNS = [
    "Date",
    "Hospital",
    "Task ID",
    "Area",
    "Task Name",
    "Description",
    "Status",
    "Staff Name",
    "Created At",
    "Completed At",
]

# header and filename of an export spanning every hospital
ALL_HOSPITALS_BRANDING = {"name": "All Hospitals", "code": "ALL", "address": "", "phone": "", "email": ""}

CONTENT_TYPES = {
    "csv": "text/csv",
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass(frozen=True)
class DayExportRow:
    task_code: str
    hospital: str
    area: str
    task_name: str
    description: str
    status: str  # "Yes" / "No"
    staff_name: str
    timestamp: Optional[datetime]


@dataclass(frozen=True)
class ExportFile:
    content: bytes
    filename: str
    content_type: str


def yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime("%Y-%m-%d %H:%M:%S")


def safe_code(code: str) -> str:
    return re.sub(r"[^A-Za-z0-9]", "_", code or "")


def export_filename(code: str, ext: str, *, day: date | None = None, start: date | None = None, end: date | None = None) -> str:
    if day is not None:
        return f"checklist_{safe_code(code)}_{day.isoformat()}.{ext}"
    return f"checklist_{safe_code(code)}_{start.isoformat()}_to_{end.isoformat()}.{ext}"


def export_rows_for_day(*, day: date, scope: HospitalScope, area_id: UUID | None = None) -> list[DayExportRow]:
    """Reconciled view flattened for export; untouched tasks export as "No"."""
    rows = []
    for r in reconcile(day=day, scope=scope, area_id=area_id):
        task, entry = r.task, r.entry
        hospital = task.area.hospital
        rows.append(
            DayExportRow(
                task_code=task.code,
                hospital=hospital.name if hospital is not None else "",
                area=task.area.name,
                task_name=task.name,
                description=task.description,
                status=yes_no(r.is_completed),
                staff_name=entry.staff_name if entry is not None else "",
                timestamp=entry.completed_at if entry is not None else None,
            )
        )
    return rows


def _contact_line(branding: dict[str, Any]) -> str:
    parts = []
    if branding.get("address"):
        parts.append(branding["address"])
    if branding.get("phone"):
        parts.append(f"Tel: {branding['phone']}")
    if branding.get("email"):
        parts.append(branding["email"])
    return " | ".join(parts)


def _footer(branding: dict[str, Any], *, total: int | None = None) -> str:
    generated = timezone.localtime(timezone.now()).strftime("%Y-%m-%d %H:%M")
    text = f"{branding['name']} | Generated on {generated}"
    if total is not None:
        text += f" | Total entries: {total}"
    return text


def export_format(value: str | None) -> str:
    """Normalized export format; csv when missing. Checked before any query runs."""
    fmt = (value or "csv").strip().lower()
    if fmt not in CONTENT_TYPES:
        raise ValidationError({"format": f"Unsupported export format. Use one of: {', '.join(CONTENT_TYPES)}."})
    return fmt


def _renderer(fmt: str) -> Callable[..., bytes]:
    if fmt == "pdf":
        return render_pdf
    if fmt == "docx":
        return render_docx
    return lambda header, columns, rows: render_csv(columns, rows)


def _branding(scope: HospitalScope) -> dict[str, Any]:
    # an all-hospitals export must not carry one hospital's name
    if scope.is_all:
        return dict(ALL_HOSPITALS_BRANDING)
    return HospitalService.branding(hospital_id=scope.hospital_id)


def _drop_column(columns: list[str], rows: list[list[str]], name: str) -> tuple[list[str], list[list[str]]]:
    idx = columns.index(name)
    return columns[:idx] + columns[idx + 1:], [row[:idx] + row[idx + 1:] for row in rows]


def export_day(*, day: date, scope: HospitalScope, area_id: UUID | None = None, fmt: str = "csv") -> ExportFile:
    fmt = export_format(fmt)
    render = _renderer(fmt)

    data = export_rows_for_day(day=day, scope=scope, area_id=area_id)
    if not data:
        raise NoDataError(NO_DATA_MSG)

    branding = _branding(scope)
    columns = list(DAY_COLUMNS)
    rows = [
        [
            r.hospital,
            r.task_code,
            r.area,
            r.task_name,
            r.description,
            r.status,
            r.staff_name,
            format_timestamp(r.timestamp),
        ]
        for r in data
    ]
    if fmt != "csv" and not scope.is_all:
        # the hospital is already in the document header
        columns, rows = _drop_column(columns, rows, "Hospital")

    header = ReportHeader(
        hospital_name=branding["name"],
        date_line=f"Date: {day.strftime('%A, %B %d, %Y')}",
        contact_line=_contact_line(branding),
        footer=_footer(branding),
    )
    content = render(header, columns, rows)
    logger.info("Checklist export day=%s format=%s rows=%d", day, fmt, len(rows))
    return ExportFile(
        content=content,
        filename=export_filename(branding["code"], fmt, day=day),
        content_type=CONTENT_TYPES[fmt],
    )


def _range_row(r: ReportRow) -> list[str]:
    return [
        r.date.isoformat(),
        r.hospital,
        r.task_code,
        r.area,
        r.task_name,
        r.description,
        yes_no(r.status),
        r.staff_name,
        format_timestamp(r.created_at),
        format_timestamp(r.completed_at),
    ]


def export_range(
    *,
    start: date,
    end: date,
    scope: HospitalScope,
    area_id: UUID | None = None,
    fmt: str = "csv",
) -> ExportFile:
    fmt = export_format(fmt)
    render = _renderer(fmt)

    data = entries_by_creation_range(start=start, end=end, scope=scope, area_id=area_id)
    if not data:
        raise NoDataError(NO_DATA_RANGE_MSG)

    branding = _branding(scope)
    columns = list(RANGE_COLUMNS)
    rows = [_range_row(r) for r in data]
    if fmt != "csv" and not scope.is_all:
        columns, rows = _drop_column(columns, rows, "Hospital")

    header = ReportHeader(
        hospital_name=branding["name"],
        date_line=f"Period: {start.strftime('%B %d, %Y')} - {end.strftime('%B %d, %Y')}",
        contact_line=_contact_line(branding),
        footer=_footer(branding, total=len(rows)),
    )
    content = render(header, columns, rows)
    logger.info("Checklist export range=%s..%s format=%s rows=%d", start, end, fmt, len(rows))
    return ExportFile(
        content=content,
        filename=export_filename(branding["code"], fmt, start=start, end=end),
        content_type=CONTENT_TYPES[fmt],
    )
