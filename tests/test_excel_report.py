"""
Spreadsheet renderer tests
"""

import asyncio
import io

import pytest
from openpyxl import load_workbook

from report_engine.excel_report import (
    COLUMN_WIDTH,
    IMAGE_PLACEHOLDER,
    IMAGE_ROW_SPAN,
    ExcelReportRenderer,
)


@pytest.fixture
def renderer():
    return ExcelReportRenderer()


def column_a(ws):
    return [ws.cell(row=r, column=1).value for r in range(1, ws.max_row + 1)]


def find_row(ws, value, column=1):
    for r in range(1, ws.max_row + 1):
        if ws.cell(row=r, column=column).value == value:
            return r
    raise AssertionError(f"{value!r} not found")


class TestSheetLayout:

    def test_title_row(self, renderer, make_model):
        ws = renderer.build_workbook(make_model({})).active
        assert ws.title == "Report"
        assert ws["A1"].value == "ACTIVITY CONDUCTED REPORT"
        assert ws["A1"].font.bold
        assert ws["A1"].font.size == 16

    def test_workshop_scenario(self, renderer, workshop_model):
        ws = renderer.build_workbook(workshop_model).active
        values = column_a(ws)

        toc = find_row(ws, "TABLE OF CONTENTS")
        assert [ws.cell(row=toc + 1, column=c).value for c in (1, 2)] == ["Sl. No", "Content"]
        assert [ws.cell(row=toc + 2, column=c).value for c in (1, 2)] == [1, "Intro"]
        assert [ws.cell(row=toc + 3, column=c).value for c in (1, 2)] == [2, "Closing"]

        assert values.count("INVITATION") == 1
        assert values.count("ATTENDANCE") == 1
        assert values.count("Day 1") == 1
        for heading in ("POSTER", "PHOTOS", "FEEDBACK"):
            assert heading not in values

        # 1 invitation + 2 attendance
        assert len(ws._images) == 3
        assert values.count(IMAGE_PLACEHOLDER) == 3

    def test_section_order(self, renderer, make_model, make_upload, png_bytes):
        fixed = {name: [make_upload(png_bytes)] for name in ("invitation", "poster", "resource", "photos", "feedback")}
        model = make_model({"tocRows[]": "Intro", "attendanceTitles[]": "Day 1"}, fixed=fixed)
        ws = renderer.build_workbook(model).active
        headings = [
            "TABLE OF CONTENTS", "INVITATION", "POSTER", "RESOURCE PERSON DETAILS",
            "SESSION REPORT", "ATTENDANCE", "PHOTOS", "FEEDBACK",
        ]
        rows = [find_row(ws, h) for h in headings]
        assert rows == sorted(rows)

    def test_metadata_rows_skip_empty_values(self, renderer, make_model):
        ws = renderer.build_workbook(make_model({"activityName": "Workshop A"})).active
        values = column_a(ws)
        assert "Activity Name" in values
        assert "Academic Year" in values
        assert "Duration" not in values
        assert "Session Name" not in values

    def test_summary_not_truncated(self, renderer, make_model):
        summary = "y" * 6000
        ws = renderer.build_workbook(make_model({"sessionSummary": summary})).active
        row = find_row(ws, "Summary")
        assert ws.cell(row=row, column=2).value == summary

    def test_formula_like_text_stays_text(self, renderer, make_model):
        ws = renderer.build_workbook(make_model({"activityName": "=1+1"})).active
        row = find_row(ws, "Activity Name")
        cell = ws.cell(row=row, column=2)
        assert cell.value == "=1+1"
        assert cell.data_type == "s"

    def test_empty_report_omits_item_sections(self, renderer, make_model):
        ws = renderer.build_workbook(make_model({})).active
        values = column_a(ws)
        for heading in ("TABLE OF CONTENTS", "INVITATION", "POSTER", "ATTENDANCE", "PHOTOS", "FEEDBACK"):
            assert heading not in values
        assert "RESOURCE PERSON DETAILS" in values
        assert "SESSION REPORT" in values
        assert IMAGE_PLACEHOLDER not in values
        assert len(ws._images) == 0

    def test_attendance_title_before_its_images(self, renderer, workshop_model):
        ws = renderer.build_workbook(workshop_model).active
        title_row = find_row(ws, "Day 1")
        assert ws.cell(row=title_row, column=1).font.bold
        assert ws.cell(row=title_row + 1, column=1).value == IMAGE_PLACEHOLDER

    def test_empty_attendance_section_has_title_only(self, renderer, make_model):
        ws = renderer.build_workbook(make_model({"attendanceTitles[]": ["Day 1", "Day 2"]})).active
        day1 = find_row(ws, "Day 1")
        assert ws.cell(row=day1 + 1, column=1).value == "Day 2"
        assert len(ws._images) == 0

    def test_column_widths(self, renderer, workshop_model):
        ws = renderer.build_workbook(workshop_model).active
        for column in ("A", "B"):
            assert ws.column_dimensions[column].width == COLUMN_WIDTH


class TestImageAnchoring:

    def test_fixed_anchor_below_placeholder(self, renderer, workshop_model):
        ws = renderer.build_workbook(workshop_model).active
        placeholder_rows = [r for r in range(1, ws.max_row + 1)
                            if ws.cell(row=r, column=1).value == IMAGE_PLACEHOLDER]

        for image, placeholder in zip(ws._images, placeholder_rows):
            start, end = image.anchor._from, image.anchor.to
            # zero-based markers: row index == placeholder number is the next row down
            assert (start.col, start.row) == (1, placeholder)
            assert (end.col, end.row) == (6, placeholder + 15)

    def test_content_continues_after_image_span(self, renderer, make_model, make_upload, png_bytes):
        model = make_model({}, fixed={"photos": [make_upload(png_bytes), make_upload(png_bytes)]})
        ws = renderer.build_workbook(model).active
        placeholders = [r for r in range(1, ws.max_row + 1)
                        if ws.cell(row=r, column=1).value == IMAGE_PLACEHOLDER]

        assert placeholders[1] == placeholders[0] + 1 + IMAGE_ROW_SPAN
        for r in range(placeholders[0] + 1, placeholders[1]):
            assert ws.cell(row=r, column=1).value is None

    def test_single_resource_image(self, renderer, make_model, make_upload, png_bytes):
        model = make_model(
            {"resourceText": "Dr. Rao"},
            fixed={"resource": [make_upload(png_bytes), make_upload(png_bytes)]},
        )
        ws = renderer.build_workbook(model).active
        assert len(ws._images) == 1
        description = find_row(ws, "Description")
        assert ws.cell(row=description + 1, column=1).value == "Dr. Rao"

    def test_image_format_follows_media_type(self, renderer, make_model, make_upload, png_bytes, jpeg_bytes, gif_bytes):
        model = make_model({}, fixed={"photos": [
            make_upload(jpeg_bytes, "image/jpeg"),
            make_upload(png_bytes, "image/png"),
            make_upload(gif_bytes, "image/gif"),
        ]})
        ws = renderer.build_workbook(model).active
        assert [image.format for image in ws._images] == ["jpeg", "png", "png"]


SVG_BYTES = b'<svg xmlns="http://www.w3.org/2000/svg" width="4" height="4"><rect width="4" height="4"/></svg>'


class TestUnreadableImages:

    def test_unreadable_image_keeps_placeholder(self, renderer, make_model, make_upload, png_bytes):
        model = make_model({}, fixed={"photos": [
            make_upload(SVG_BYTES, "image/svg+xml"),
            make_upload(png_bytes, "image/png"),
        ]})
        ws = renderer.build_workbook(model).active

        photos = find_row(ws, "PHOTOS")
        assert ws.cell(row=photos + 1, column=1).value == IMAGE_PLACEHOLDER
        assert ws.cell(row=photos + 2 + IMAGE_ROW_SPAN, column=1).value == IMAGE_PLACEHOLDER
        assert len(ws._images) == 1
        assert ws._images[0].anchor._from.row == photos + 2 + IMAGE_ROW_SPAN

    def test_report_still_renders(self, renderer, make_model, make_upload, caplog):
        model = make_model({"activityName": "Workshop A"}, fixed={"photos": [
            make_upload(SVG_BYTES, "image/svg+xml"),
        ]})
        with caplog.at_level("WARNING", logger="report_engine.excel_report"):
            result = asyncio.run(renderer.render(model))

        assert result.ok
        ws = load_workbook(io.BytesIO(result.content)).active
        assert "PHOTOS" in column_a(ws)
        assert "image/svg+xml" in caplog.text


class TestWorkbookBytes:

    def test_round_trips_through_openpyxl(self, renderer, workshop_model):
        content = renderer.build(workshop_model)
        ws = load_workbook(io.BytesIO(content)).active
        assert ws["A1"].value == "ACTIVITY CONDUCTED REPORT"
        assert "Day 1" in column_a(ws)

    def test_render_result(self, renderer, workshop_model):
        result = asyncio.run(renderer.render(workshop_model))
        assert result.ok
        assert result.filename == "report.xlsx"
        assert result.media_type == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
