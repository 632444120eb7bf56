"""
Reports Router - Activity report form, PDF preview/download, DOCX and Excel

Transport boundary for the report engine:
- parses the multipart form into raw text fields
- spools uploaded files to a per-request temporary directory
- collects attendance uploads into an index-ordered UploadSet
- maps RenderResult outcomes to HTTP responses

Failures return 500 with "<Format> error: <message>"; no partial document
is ever sent.
"""

import io
import logging
import tempfile
import uuid
from pathlib import Path
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse, StreamingResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from settings_helper import Settings, get_settings
from report_engine.assets import UploadedFile
from report_engine.base import ReportRenderer
from report_engine.branding_config import BrandingAssets, get_branding, load_branding_assets
from report_engine.excel_report import ExcelReportRenderer
from report_engine.exceptions import AssetReadError
from report_engine.print_report import PrintReportRenderer
from report_engine.report_model import (
    ATTENDANCE_UPLOAD_LIMIT,
    FIXED_IMAGE_GROUPS,
    MAX_ATTENDANCE_SECTIONS,
    UPLOAD_LIMITS,
    ReportModel,
    UploadSet,
    build_report_model,
)
from report_engine.word_report import WordReportRenderer

logger = logging.getLogger(__name__)

router = APIRouter()

# Multipart parser bounds: every category at its upload limit plus text fields
MAX_FORM_FILES = sum(UPLOAD_LIMITS.values()) + MAX_ATTENDANCE_SECTIONS * ATTENDANCE_UPLOAD_LIMIT
MAX_FORM_FIELDS = 2000


def fixed_field_name(group: str) -> str:
    return f"{group}[]"


def attendance_field_name(index: int) -> str:
    return f"attendanceFiles{index}[]"


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_branding_assets(request: Request, settings: Settings = Depends(get_settings)) -> BrandingAssets:
    """Branding marks loaded at startup; read on demand if startup was skipped."""
    assets = getattr(request.app.state, "branding_assets", None)
    if assets is None:
        assets = load_branding_assets(settings)
        request.app.state.branding_assets = assets
    return assets


# =============================================================================
# REQUEST PARSING
# =============================================================================

def _text_fields(form) -> Dict[str, Any]:
    raw: Dict[str, Any] = {}
    for key in form.keys():
        values = [v for v in form.getlist(key) if isinstance(v, str)]
        if not values:
            continue
        raw[key] = values[0] if len(values) == 1 else values
    return raw


async def _spool_uploads(form, field_name: str, limit: int, spool_dir: Path) -> List[UploadedFile]:
    uploads = [
        v for v in form.getlist(field_name)
        if isinstance(v, StarletteUploadFile) and v.filename
    ]
    if len(uploads) > limit:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files for {field_name}: {len(uploads)} (max {limit})",
        )

    spooled = []
    for upload in uploads:
        path = spool_dir / uuid.uuid4().hex
        path.write_bytes(await upload.read())
        spooled.append(UploadedFile(
            path=path,
            media_type=upload.content_type or "application/octet-stream",
            filename=upload.filename,
        ))
    return spooled


async def _upload_set(form, spool_dir: Path) -> UploadSet:
    known_fields = {fixed_field_name(g) for g in FIXED_IMAGE_GROUPS}
    known_fields.update(attendance_field_name(i) for i in range(MAX_ATTENDANCE_SECTIONS))
    for key in form.keys():
        if key not in known_fields and any(isinstance(v, StarletteUploadFile) for v in form.getlist(key)):
            logger.warning("Ignoring files under unexpected field %s", key)

    fixed = {
        group: await _spool_uploads(form, fixed_field_name(group), UPLOAD_LIMITS[group], spool_dir)
        for group in FIXED_IMAGE_GROUPS
    }
    attendance = [
        await _spool_uploads(form, attendance_field_name(i), ATTENDANCE_UPLOAD_LIMIT, spool_dir)
        for i in range(MAX_ATTENDANCE_SECTIONS)
    ]
    # Drop trailing empty slots so the set is only as long as what was sent
    while attendance and not attendance[-1]:
        attendance.pop()

    return UploadSet(fixed=fixed, attendance=attendance)


async def _load_report_model(
    request: Request,
    spool_dir: Path,
    branding_assets: BrandingAssets,
    settings: Settings,
) -> ReportModel:
    form = await request.form(max_files=MAX_FORM_FILES, max_fields=MAX_FORM_FIELDS)
    try:
        raw_fields = _text_fields(form)
        uploads = await _upload_set(form, spool_dir)
    finally:
        await form.close()

    return await build_report_model(raw_fields, uploads, branding_assets, settings.academic_year)


async def _render_response(
    request: Request,
    renderer: ReportRenderer,
    error_prefix: str,
    disposition: str,
    branding_assets: BrandingAssets,
    settings: Settings,
):
    with tempfile.TemporaryDirectory(prefix="report-", dir=settings.upload_dir or None) as tmp:
        try:
            model = await _load_report_model(request, Path(tmp), branding_assets, settings)
        except AssetReadError as e:
            logger.error("%s: %s", error_prefix, e)
            return PlainTextResponse(f"{error_prefix}: {e}", status_code=500)

        result = await renderer.render(model)

    if not result.ok:
        return PlainTextResponse(f"{error_prefix}: {result.message}", status_code=500)

    return StreamingResponse(
        io.BytesIO(result.content),
        media_type=result.media_type,
        headers={"Content-Disposition": f"{disposition}; filename={result.filename}"},
    )


# =============================================================================
# ROUTES
# =============================================================================

@router.get("/", response_class=FileResponse)
async def get_report_form(settings: Settings = Depends(get_settings)):
    return FileResponse(settings.views_dir / "form.html", media_type="text/html")


@router.post("/preview")
async def preview_report_pdf(
    request: Request,
    branding_assets: BrandingAssets = Depends(get_branding_assets),
    settings: Settings = Depends(get_settings),
):
    renderer = PrintReportRenderer(get_branding(), settings)
    return await _render_response(request, renderer, "Preview error", "inline", branding_assets, settings)


@router.post("/generate")
async def generate_report_pdf(
    request: Request,
    branding_assets: BrandingAssets = Depends(get_branding_assets),
    settings: Settings = Depends(get_settings),
):
    renderer = PrintReportRenderer(get_branding(), settings)
    return await _render_response(request, renderer, "PDF error", "attachment", branding_assets, settings)


@router.post("/generate-docx")
async def generate_report_docx(
    request: Request,
    branding_assets: BrandingAssets = Depends(get_branding_assets),
    settings: Settings = Depends(get_settings),
):
    return await _render_response(
        request, WordReportRenderer(), "DOCX error", "attachment", branding_assets, settings
    )


@router.post("/generate-excel")
async def generate_report_excel(
    request: Request,
    branding_assets: BrandingAssets = Depends(get_branding_assets),
    settings: Settings = Depends(get_settings),
):
    return await _render_response(
        request, ExcelReportRenderer(), "Excel error", "attachment", branding_assets, settings
    )


@router.post("/preview-html", response_class=HTMLResponse)
async def preview_report_html(
    request: Request,
    branding_assets: BrandingAssets = Depends(get_branding_assets),
    settings: Settings = Depends(get_settings),
):
    """Print markup before PDF conversion."""
    with tempfile.TemporaryDirectory(prefix="report-", dir=settings.upload_dir or None) as tmp:
        try:
            model = await _load_report_model(request, Path(tmp), branding_assets, settings)
        except AssetReadError as e:
            logger.error("HTML error: %s", e)
            return PlainTextResponse(f"HTML error: {e}", status_code=500)

    renderer = PrintReportRenderer(get_branding(), settings)
    return HTMLResponse(content=renderer.render_html(model))
