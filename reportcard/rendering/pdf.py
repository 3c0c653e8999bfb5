"""reportlab implementation of the report renderer.

Reports are written flat into the configured output directory::

    {output_dir}/student_{id}_{YYYYmmdd_HHMMSS}_{suffix}.pdf

The random suffix keeps two renders for the same student in the same
second from overwriting each other.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import time
import typing as typ
import uuid
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from reportcard.logging import get_logger, log_info

from .errors import ReportCleanupError, ReportRenderingError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from reportcard.reporting.models import ReportMetadata
    from reportcard.students.models import StudentRecord

    from .config import RendererConfig

logger = get_logger(__name__)

_SECONDS_PER_DAY = 86_400
_LABEL_COLUMN_WIDTH = 55 * mm
_VALUE_COLUMN_WIDTH = 115 * mm
_PLACEHOLDER = "-"

_TABLE_STYLE = TableStyle(
    [
        ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.lightgrey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
)


def _text(value: object) -> str:
    if value is None or value == "":
        return _PLACEHOLDER
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value)


def _report_filename(student_id: int, generated_at: dt.datetime) -> str:
    stamp = generated_at.strftime("%Y%m%d_%H%M%S")
    return f"student_{student_id}_{stamp}_{uuid.uuid4().hex[:8]}.pdf"


def _field_table(rows: list[tuple[str, object]]) -> Table:
    table = Table(
        [[label, _text(value)] for label, value in rows],
        colWidths=[_LABEL_COLUMN_WIDTH, _VALUE_COLUMN_WIDTH],
    )
    table.setStyle(_TABLE_STYLE)
    return table


def _profile_rows(student: StudentRecord) -> list[tuple[str, object]]:
    return [
        ("Name", student.format_name()),
        ("Student ID", student.id),
        ("Email", student.email),
        ("Phone", student.phone),
        ("Gender", student.gender),
        ("Date of birth", student.dob),
        ("Class", student.class_name),
        ("Section", student.section),
        ("Roll", student.roll),
        ("Admission date", student.admission_date),
        ("Status", "Active" if student.system_access else "Inactive"),
    ]


def _family_rows(student: StudentRecord) -> list[tuple[str, object]]:
    return [
        ("Father", student.father_name),
        ("Mother", student.mother_name),
        ("Guardian", student.guardian_name),
        ("Guardian phone", student.guardian_phone),
    ]


def _address_rows(student: StudentRecord) -> list[tuple[str, object]]:
    return [
        ("Current address", student.current_address),
        ("Permanent address", student.permanent_address),
    ]


class PdfReportRenderer:
    """Render student reports to PDF files on the local filesystem.

    Parameters
    ----------
    config
        Output directory, retention period and report heading.

    """

    def __init__(self, config: RendererConfig) -> None:
        """Initialise the renderer with its configuration."""
        self._config = config
        self._styles = getSampleStyleSheet()

    @property
    def output_dir(self) -> Path:
        """Directory receiving rendered reports."""
        return self._config.output_dir

    def _story(self, student: StudentRecord, metadata: ReportMetadata) -> list[object]:
        heading = self._styles["Heading2"]
        body = self._styles["BodyText"]
        return [
            Paragraph(escape(self._config.school_name), self._styles["Title"]),
            Paragraph(escape(f"Student Report: {student.format_name()}"), heading),
            Paragraph(escape(f"Report ID: {metadata.report_id}"), body),
            Paragraph(
                escape(f"Generated at: {metadata.generated_at.isoformat()}"), body
            ),
            Paragraph(escape(f"Generated by: {metadata.generated_by}"), body),
            Spacer(1, 6 * mm),
            Paragraph("Profile", heading),
            _field_table(_profile_rows(student)),
            Spacer(1, 6 * mm),
            Paragraph("Parents and guardian", heading),
            _field_table(_family_rows(student)),
            Spacer(1, 6 * mm),
            Paragraph("Address", heading),
            _field_table(_address_rows(student)),
        ]

    def _render_sync(self, student: StudentRecord, metadata: ReportMetadata) -> Path:
        output_dir = self._config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / _report_filename(student.id, metadata.generated_at)
        document = SimpleDocTemplate(
            str(path),
            pagesize=A4,
            title=f"Student Report {metadata.report_id}",
            author=metadata.generated_by,
        )
        document.build(self._story(student, metadata))
        return path.resolve()

    async def generate_student_report(
        self,
        student: StudentRecord,
        metadata: ReportMetadata,
    ) -> str:
        """Render ``student`` to a new PDF and return its absolute path.

        Raises
        ------
        ReportRenderingError
            If the directory cannot be created or the document cannot be
            written.

        """
        try:
            path = await asyncio.to_thread(self._render_sync, student, metadata)
        except OSError as exc:
            raise ReportRenderingError(student.id, str(exc)) from exc

        log_info(
            logger,
            "Rendered report %s for student %d to %s",
            metadata.report_id,
            student.id,
            path,
        )
        return str(path)

    def _cleanup_sync(self) -> int:
        output_dir = self._config.output_dir
        if not output_dir.is_dir():
            return 0

        cutoff = time.time() - self._config.retention_days * _SECONDS_PER_DAY
        removed = 0
        for path in output_dir.glob("*.pdf"):
            if path.is_file() and path.stat().st_mtime < cutoff:
                path.unlink()
                removed += 1
        return removed

    async def cleanup_old_reports(self) -> int:
        """Delete reports older than the retention period.

        Returns
        -------
        int
            Number of files removed.

        Raises
        ------
        ReportCleanupError
            If a file cannot be inspected or removed.

        """
        try:
            removed = await asyncio.to_thread(self._cleanup_sync)
        except OSError as exc:
            raise ReportCleanupError(self._config.output_dir, str(exc)) from exc

        log_info(
            logger,
            "Removed %d report(s) older than %d day(s) from %s",
            removed,
            self._config.retention_days,
            self._config.output_dir,
        )
        return removed
