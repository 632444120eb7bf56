"""
Report Templates

CSS generation and base HTML templates using report branding.
All styles are dynamically generated from branding config.
"""

from html import escape as html_escape

from .assets import EncodedAsset
from .branding_config import get_logo_size_px


def generate_css(branding: dict) -> str:
    """Generate complete CSS for activity reports based on branding."""
    primary = branding.get("primary_color", "#1f3a68")
    text_color = branding.get("text_color", "#1a1a1a")
    muted_color = branding.get("muted_color", "#666666")
    heading_bg = branding.get("heading_background", "#e8edf5")

    font_family = branding.get("font_family", "Arial, Helvetica, sans-serif")
    title_font_size = branding.get("title_font_size", "16pt")
    heading_font_size = branding.get("heading_font_size", "13pt")
    body_font_size = branding.get("body_font_size", "10pt")

    logo_size = get_logo_size_px(branding)
    border_style = branding.get("border_style", "solid")

    return f'''
        @page {{ size: A4; margin: 0; }}

        * {{ margin: 0; padding: 0; box-sizing: border-box; }}

        html {{ -webkit-print-color-adjust: exact; print-color-adjust: exact; }}

        body {{
            font-family: {font_family};
            font-size: {body_font_size};
            line-height: 1.35;
            color: {text_color};
        }}

        .page {{ padding: 14mm 16mm; }}
        .page-break {{ page-break-before: always; }}

        /* Header: left mark, title block, right mark */
        .report-header {{
            display: table;
            width: 100%;
            border-bottom: 2px {border_style} {primary};
            padding-bottom: 6px;
            margin-bottom: 10px;
        }}
        .report-header .mark {{ display: table-cell; width: {logo_size}; vertical-align: middle; }}
        .report-header .mark img {{ width: {logo_size}; height: auto; }}
        .report-header .header-text {{ display: table-cell; text-align: center; vertical-align: middle; }}
        .report-title {{ font-size: {title_font_size}; font-weight: 700; color: {primary}; }}
        .academic-year {{ font-size: {body_font_size}; color: {muted_color}; margin-top: 2px; }}

        /* Sections */
        .section {{ margin-bottom: 12px; }}
        .section-title {{
            font-size: {heading_font_size};
            font-weight: 700;
            color: {primary};
            background: {heading_bg};
            text-transform: uppercase;
            padding: 4px 8px;
            margin-bottom: 8px;
        }}
        .subsection-title {{
            font-size: {body_font_size};
            font-weight: 700;
            color: {primary};
            border-bottom: 1px solid {heading_bg};
            margin: 6px 0 4px 0;
        }}

        /* Labelled fields */
        .field {{ margin-bottom: 4px; }}
        .field .label {{ font-weight: 700; color: {muted_color}; }}
        .text-block {{ white-space: pre-wrap; text-align: justify; }}

        /* Table of contents */
        table.toc {{ width: 100%; border-collapse: collapse; }}
        table.toc th {{ background: {heading_bg}; text-align: left; padding: 4px 6px; border: 1px solid #ccc; }}
        table.toc td {{ padding: 4px 6px; border: 1px solid #ccc; }}
        table.toc td.sl-no {{ width: 60px; text-align: center; }}

        /* Images */
        .image-block {{ text-align: center; margin: 6px 0 10px 0; page-break-inside: avoid; }}
        .image-block img {{ max-width: 100%; max-height: 230mm; }}
    '''


def generate_base_html(title: str, css: str, body: str) -> str:
    """Generate complete HTML document with CSS and body content."""
    return f'''<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{html_escape(title)}</title>
    <style>
{css}
    </style>
</head>
<body>
    {body}
</body>
</html>'''


def render_header(branding: dict, left: EncodedAsset, right: EncodedAsset, academic_year: str = "") -> str:
    """Render header HTML: both branding marks around the report title."""
    title = html_escape(branding.get("report_title", "ACTIVITY CONDUCTED REPORT"))
    year_html = ''
    if academic_year:
        year_html = f'<div class="academic-year">Academic Year {html_escape(academic_year)}</div>'

    return f'''<div class="report-header">
            <div class="mark"><img src="{left.data_url}" alt="Logo"></div>
            <div class="header-text">
                <div class="report-title">{title}</div>
                {year_html}
            </div>
            <div class="mark"><img src="{right.data_url}" alt="Logo"></div>
        </div>'''
