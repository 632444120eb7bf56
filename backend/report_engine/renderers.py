"""
Section Renderers for Activity Reports

Each renderer function takes the render context and returns HTML for one
print section. Renderers are registered in SECTION_RENDERERS for lookup
by layout section id.

A renderer returns '' when its section has nothing to show; empty image
categories get no heading at all.
"""

from html import escape as html_escape
from typing import Any, Callable, Dict, List, Sequence, Tuple

from .assets import EncodedAsset
from .layout_config import get_sections_by_page
from .report_model import FEEDBACK, INVITATION, PHOTOS, POSTER, RESOURCE, ReportModel
from .templates import render_header

# (model field key, label)
ACTIVITY_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("activity_name", "Activity Name"),
    ("coordinator", "Co-ordinator"),
    ("activity_date", "Date"),
    ("duration", "Duration"),
    ("po", "PO & POs"),
    ("program_line", "Program Line"),
)

SESSION_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("session_name", "Session Name"),
    ("session_resource_person", "Resource Person"),
    ("session_coordinators", "Co-ordinator(s)"),
    ("session_start_date", "Start Date"),
    ("session_start_time", "Start Time"),
    ("session_end_date", "End Date"),
    ("session_end_time", "End Time"),
    ("session_participants", "Participants"),
    ("session_activity_title", "Activity Title"),
)


class RenderContext:
    """Context object passed to all renderers with everything they need."""
    def __init__(self, model: ReportModel, branding: dict):
        self.model = model
        self.branding = branding

    def get(self, key: str) -> str:
        return self.model.field(key)


def esc(text: Any) -> str:
    if text is None:
        return ''
    return html_escape(str(text))


def field_line(label: str, value: str) -> str:
    if not value:
        return ''
    return f'<div class="field"><span class="label">{esc(label)}:</span> {esc(value)}</div>'


def image_blocks(assets: Sequence[EncodedAsset]) -> str:
    return ''.join(
        f'<div class="image-block"><img src="{a.data_url}" alt="Image"></div>' for a in assets
    )


def section(title: str, content: str) -> str:
    return f'''<div class="section">
        <div class="section-title">{esc(title)}</div>
        {content}
    </div>'''


def image_section(title: str, assets: Sequence[EncodedAsset]) -> str:
    if not assets:
        return ''
    return section(title, image_blocks(assets))


# =============================================================================
# SECTION RENDERERS
# =============================================================================

def r_header(ctx: RenderContext) -> str:
    marks = ctx.model.branding_assets
    return render_header(ctx.branding, marks.left, marks.right, ctx.get("academic_year"))


def r_activity_details(ctx: RenderContext) -> str:
    lines = ''.join(field_line(label, ctx.get(key)) for key, label in ACTIVITY_FIELDS)
    if not lines:
        return ''
    return f'<div class="section activity-details">{lines}</div>'


def r_table_of_contents(ctx: RenderContext) -> str:
    entries = ctx.model.numbered_contents()
    if not entries:
        return ''
    rows = ''.join(
        f'<tr><td class="sl-no">{n}.</td><td>{esc(entry)}</td></tr>' for n, entry in entries
    )
    table = f'''<table class="toc">
            <thead><tr><th>Sl. No</th><th>Content</th></tr></thead>
            <tbody>{rows}</tbody>
        </table>'''
    return section("TABLE OF CONTENTS", table)


def r_invitation(ctx: RenderContext) -> str:
    return image_section("INVITATION", ctx.model.images(INVITATION))


def r_poster(ctx: RenderContext) -> str:
    return image_section("POSTER", ctx.model.images(POSTER))


def r_resource_person(ctx: RenderContext) -> str:
    resource_images = ctx.model.images(RESOURCE)
    parts = []
    if resource_images:
        parts.append(image_blocks(resource_images[:1]))
    description = ctx.get("resource_text")
    if description:
        parts.append('<div class="subsection-title">Description</div>')
        parts.append(f'<div class="text-block">{esc(description)}</div>')
    return section("RESOURCE PERSON DETAILS", ''.join(parts))


def r_session_report(ctx: RenderContext) -> str:
    parts = [field_line(label, ctx.get(key)) for key, label in SESSION_FIELDS]

    preamble = ctx.get("session_preamble")
    if preamble:
        parts.append('<div class="subsection-title">Preamble</div>')
        parts.append(f'<div class="text-block">{esc(preamble)}</div>')

    summary = ctx.get("session_summary")
    if summary:
        parts.append('<div class="subsection-title">Summary</div>')
        parts.append(f'<div class="text-block">{esc(summary)}</div>')

    return section("SESSION REPORT", ''.join(parts))


def r_attendance(ctx: RenderContext) -> str:
    sections = ctx.model.attendance_sections
    if not sections:
        return ''
    blocks = ''.join(
        f'''<div class="attendance-block">
            <div class="subsection-title">{esc(s.title)}</div>
            {image_blocks(s.images)}
        </div>'''
        for s in sections
    )
    return section("ATTENDANCE", blocks)


def r_photos(ctx: RenderContext) -> str:
    return image_section("PHOTOS", ctx.model.images(PHOTOS))


def r_feedback(ctx: RenderContext) -> str:
    return image_section("FEEDBACK", ctx.model.images(FEEDBACK))


# =============================================================================
# RENDERER REGISTRY
# =============================================================================

SECTION_RENDERERS: Dict[str, Callable[[RenderContext], str]] = {
    'header': r_header,
    'activity_details': r_activity_details,
    'table_of_contents': r_table_of_contents,
    'invitation': r_invitation,
    'poster': r_poster,
    'resource_person': r_resource_person,
    'session_report': r_session_report,
    'attendance': r_attendance,
    'photos': r_photos,
    'feedback': r_feedback,
}


def render_section(ctx: RenderContext, section_def: dict) -> str:
    renderer = SECTION_RENDERERS.get(section_def.get('id'))
    if not renderer:
        return ''
    return renderer(ctx)


def render_pages(ctx: RenderContext, layout: dict = None) -> str:
    """Render all layout pages; pages that end up empty are dropped."""
    pages: List[str] = []
    for _page, sections in get_sections_by_page(layout).items():
        html = '\n'.join(p for p in (render_section(ctx, s) for s in sections) if p)
        if html.strip():
            pages.append(html)

    return '\n'.join(
        f'<div class="page{" page-break" if i else ""}">{html}</div>' for i, html in enumerate(pages)
    )
