"""
Word Report Renderer

Linear, text-only DOCX built with python-docx: title, activity metadata,
table of contents, session report. Every labelled line is written even when
its value is empty. No images and no attendance sections are included, and
the summary is capped at SUMMARY_MAX_CHARS.
"""

import io
import logging

from docx import Document
from docx.shared import Pt

from .base import ReportRenderer
from .exceptions import RenderBackendError
from .report_model import ReportModel

logger = logging.getLogger(__name__)

SUMMARY_MAX_CHARS = 5000

TITLE = "ACTIVITY CONDUCTED REPORT"

ACTIVITY_LINES = (
    ("Activity Name", "activity_name"),
    ("Co-ordinator", "coordinator"),
    ("Date", "activity_date"),
    ("Duration", "duration"),
    ("PO & POs", "po"),
    ("Program Line", "program_line"),
)


def truncate_summary(summary: str) -> str:
    return (summary or "")[:SUMMARY_MAX_CHARS]


class WordReportRenderer(ReportRenderer):
    media_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    extension = "docx"
    label = "DOCX"

    def build_document(self, model: ReportModel):
        """python-docx Document for the report (not yet serialized)."""
        document = Document()

        title = document.add_paragraph()
        run = title.add_run(TITLE)
        run.bold = True
        run.font.size = Pt(14)
        title.paragraph_format.space_after = Pt(10)

        for label, key in ACTIVITY_LINES:
            document.add_paragraph(f"{label}: {model.field(key)}")
        document.add_paragraph("")

        self._add_heading(document, "TABLE OF CONTENTS")
        for number, entry in model.numbered_contents():
            document.add_paragraph(f"{number}. {entry}")

        document.add_paragraph("")
        self._add_heading(document, "SESSION REPORT")

        f = model.field
        document.add_paragraph(f"Session Name: {f('session_name')}")
        document.add_paragraph(f"Resource Person: {f('session_resource_person')}")
        document.add_paragraph(f"Co-ordinators: {f('session_coordinators')}")
        document.add_paragraph(f"Start Date: {f('session_start_date')} Time: {f('session_start_time')}")
        document.add_paragraph(f"End Date: {f('session_end_date')} Time: {f('session_end_time')}")
        document.add_paragraph(f"Participants: {f('session_participants')}")
        document.add_paragraph(f"Activity Title: {f('session_activity_title')}")
        document.add_paragraph(f"Preamble: {f('session_preamble')}")
        document.add_paragraph("Summary:")
        document.add_paragraph(truncate_summary(f('session_summary')))

        return document

    def build(self, model: ReportModel) -> bytes:
        try:
            document = self.build_document(model)
            buffer = io.BytesIO()
            document.save(buffer)
        except Exception as e:
            raise RenderBackendError("python-docx", str(e)) from e
        return buffer.getvalue()

    @staticmethod
    def _add_heading(document, text: str) -> None:
        paragraph = document.add_paragraph()
        paragraph.add_run(text).bold = True
