"""
Print Report Renderer

Projects the Report Model into print markup (HTML + CSS) and converts it to
an A4 PDF with zero margins via WeasyPrint. The conversion is one awaited
unit: either the whole PDF comes back or the render fails.
"""

import asyncio
import io
import logging
from typing import Optional

from settings_helper import Settings, get_settings

from .base import ReportRenderer
from .branding_config import get_branding
from .exceptions import RenderBackendError
from .renderers import RenderContext, render_pages
from .report_model import ReportModel
from .templates import generate_base_html, generate_css

logger = logging.getLogger(__name__)


class PrintReportRenderer(ReportRenderer):
    media_type = "application/pdf"
    extension = "pdf"
    label = "PDF"

    def __init__(self, branding: Optional[dict] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.branding = branding or get_branding()

    def render_html(self, model: ReportModel) -> str:
        """Complete HTML document for the report."""
        ctx = RenderContext(model, self.branding)
        body = render_pages(ctx)
        css = generate_css(self.branding)

        title = model.field("activity_name") or self.branding.get("report_title", "Activity Report")
        return generate_base_html(title, css, body)

    def build(self, model: ReportModel) -> bytes:
        html_content = self.render_html(model)

        pdf_buffer = io.BytesIO()
        try:
            from weasyprint import HTML
            HTML(string=html_content).write_pdf(pdf_buffer)
        except Exception as e:
            raise RenderBackendError("weasyprint", str(e)) from e

        content = pdf_buffer.getvalue()
        if not content:
            raise RenderBackendError("weasyprint", "empty PDF output")
        return content

    async def produce(self, model: ReportModel) -> bytes:
        conversion = asyncio.to_thread(self.build, model)
        timeout = self.settings.pdf_timeout_seconds
        if timeout and timeout > 0:
            return await asyncio.wait_for(conversion, timeout=timeout)
        return await conversion
