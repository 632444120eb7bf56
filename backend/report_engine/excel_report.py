"""
Spreadsheet Report Renderer

Builds a single "Report" sheet top to bottom with openpyxl, following the
print section order. Rows are only ever appended; a row cursor tracks the
next free row.

Image placement: a "(Image Below)" placeholder row, then the image anchored
over a fixed cell region (IMAGE_COL_SPAN x IMAGE_ROW_SPAN) starting on the
row below the placeholder. Content continues after that region.

Images are stored as jpeg or png, chosen from the asset media type. Pillow
re-encodes an image only when its real format differs from that choice
(a GIF declared as image/gif becomes a png part). An image Pillow cannot
read at all (svg, heic) keeps its placeholder row and region and is left
out of the sheet with a warning; the rest of the report still renders.
"""

import io
import logging
from typing import Iterable, Optional, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.drawing.image import Image as XLImage
from openpyxl.drawing.spreadsheet_drawing import AnchorMarker, TwoCellAnchor
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from PIL import Image as PILImage

from .assets import EncodedAsset
from .base import ReportRenderer
from .exceptions import RenderBackendError
from .report_model import FEEDBACK, INVITATION, PHOTOS, POSTER, RESOURCE, ReportModel

logger = logging.getLogger(__name__)

SHEET_TITLE = "Report"
REPORT_TITLE = "ACTIVITY CONDUCTED REPORT"
IMAGE_PLACEHOLDER = "(Image Below)"

# Zero-based anchor offsets relative to the placeholder row
IMAGE_COL_START = 1
IMAGE_COL_END = 6
IMAGE_ROW_SPAN = 16

COLUMN_WIDTH = 40

TITLE_FONT = Font(bold=True, size=16)
HEADING_FONT = Font(bold=True, size=14)
BOLD_FONT = Font(bold=True)

ACTIVITY_ROWS = (
    ("Activity Name", "activity_name"),
    ("Co-ordinator", "coordinator"),
    ("Date", "activity_date"),
    ("Duration", "duration"),
    ("PO & POs", "po"),
    ("Program Line", "program_line"),
    ("Academic Year", "academic_year"),
)

SESSION_ROWS = (
    ("Session Name", "session_name"),
    ("Resource Person", "session_resource_person"),
    ("Co-ordinator(s)", "session_coordinators"),
    ("Start Date", "session_start_date"),
    ("Start Time", "session_start_time"),
    ("End Date", "session_end_date"),
    ("End Time", "session_end_time"),
    ("Participants", "session_participants"),
    ("Activity Title", "session_activity_title"),
    ("Preamble", "session_preamble"),
    ("Summary", "session_summary"),
)


def sheet_image(asset: EncodedAsset) -> XLImage:
    """
    openpyxl image for an asset.

    The stored format follows the asset extension: jpeg for JPEG uploads,
    png for everything else. Bytes whose real format differs are converted.

    Raises:
        OSError: the bytes are not a raster image Pillow can read
    """
    data = asset.decode()
    target = "jpeg" if asset.extension == "jpg" else "png"

    image = XLImage(io.BytesIO(data))
    if image.format != target:
        converted = io.BytesIO()
        with PILImage.open(io.BytesIO(data)) as pil_image:
            mode = "RGB" if target == "jpeg" else "RGBA"
            pil_image.convert(mode).save(converted, format=target.upper())
        converted.seek(0)
        image = XLImage(converted)
    return image


class SheetWriter:
    """Append-only row writer over one worksheet."""

    def __init__(self, worksheet):
        self.ws = worksheet
        self.next_row = 1

    @property
    def last_row(self) -> int:
        return self.next_row - 1

    def add_row(self, values: Iterable = (), font: Optional[Font] = None) -> int:
        row = self.next_row
        for column, value in enumerate(values, 1):
            if value is None:
                continue
            cell = self.ws.cell(row=row, column=column)
            if isinstance(value, str):
                cell.value = ILLEGAL_CHARACTERS_RE.sub("", value)
                # text starting with "=" stays text, never a formula
                cell.data_type = "s"
            else:
                cell.value = value
            if font is not None:
                cell.font = font
        self.next_row += 1
        return row

    def add_blank(self) -> int:
        return self.add_row()

    def add_image(self, asset: EncodedAsset) -> int:
        placeholder_row = self.add_row([IMAGE_PLACEHOLDER])

        self.next_row = placeholder_row + 1 + IMAGE_ROW_SPAN
        try:
            image = sheet_image(asset)
        except (OSError, ValueError) as e:
            logger.warning("Image (%s) not embeddable, placeholder kept: %s", asset.media_type, e)
            return placeholder_row

        # AnchorMarker rows are zero-based: row=placeholder_row is the row below it
        image.anchor = TwoCellAnchor(
            _from=AnchorMarker(col=IMAGE_COL_START, row=placeholder_row),
            to=AnchorMarker(col=IMAGE_COL_END, row=placeholder_row + IMAGE_ROW_SPAN - 1),
        )
        self.ws.add_image(image)
        return placeholder_row

    def add_images(self, assets: Sequence[EncodedAsset]) -> None:
        for asset in assets:
            self.add_image(asset)

    def set_column_widths(self, width: float) -> None:
        for column in range(1, (self.ws.max_column or 1) + 1):
            self.ws.column_dimensions[get_column_letter(column)].width = width


class ExcelReportRenderer(ReportRenderer):
    media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"
    label = "Excel"

    def build_workbook(self, model: ReportModel) -> Workbook:
        workbook = Workbook()
        ws = workbook.active
        ws.title = SHEET_TITLE
        sheet = SheetWriter(ws)

        sheet.add_row([REPORT_TITLE], TITLE_FONT)
        sheet.add_blank()
        self._key_value_rows(sheet, model, ACTIVITY_ROWS)
        sheet.add_blank()

        self._table_of_contents(sheet, model)
        self._image_section(sheet, "INVITATION", model.images(INVITATION))
        self._image_section(sheet, "POSTER", model.images(POSTER))
        self._resource_person(sheet, model)

        sheet.add_row(["SESSION REPORT"], HEADING_FONT)
        self._key_value_rows(sheet, model, SESSION_ROWS)
        sheet.add_blank()

        self._attendance(sheet, model)
        self._image_section(sheet, "PHOTOS", model.images(PHOTOS))
        self._image_section(sheet, "FEEDBACK", model.images(FEEDBACK))

        sheet.set_column_widths(COLUMN_WIDTH)
        logger.debug("Sheet built: %d rows, %d images", sheet.last_row, len(ws._images))
        return workbook

    def build(self, model: ReportModel) -> bytes:
        try:
            workbook = self.build_workbook(model)
            buffer = io.BytesIO()
            workbook.save(buffer)
        except Exception as e:
            raise RenderBackendError("openpyxl", str(e)) from e
        return buffer.getvalue()

    # =========================================================================
    # SECTIONS
    # =========================================================================

    @staticmethod
    def _key_value_rows(sheet: SheetWriter, model: ReportModel, rows) -> None:
        for label, key in rows:
            value = model.field(key)
            if value:
                sheet.add_row([label, value])

    @staticmethod
    def _table_of_contents(sheet: SheetWriter, model: ReportModel) -> None:
        entries = model.numbered_contents()
        if not entries:
            return
        sheet.add_row(["TABLE OF CONTENTS"], HEADING_FONT)
        sheet.add_row(["Sl. No", "Content"], BOLD_FONT)
        for number, entry in entries:
            sheet.add_row([number, entry])
        sheet.add_blank()

    @staticmethod
    def _image_section(sheet: SheetWriter, title: str, assets: Sequence[EncodedAsset]) -> None:
        if not assets:
            return
        sheet.add_row([title], HEADING_FONT)
        sheet.add_images(assets)
        sheet.add_blank()

    @staticmethod
    def _resource_person(sheet: SheetWriter, model: ReportModel) -> None:
        sheet.add_row(["RESOURCE PERSON DETAILS"], HEADING_FONT)
        resource_images = model.images(RESOURCE)
        if resource_images:
            sheet.add_image(resource_images[0])
        description = model.field("resource_text")
        if description:
            sheet.add_row(["Description"])
            sheet.add_row([description])
        sheet.add_blank()

    @staticmethod
    def _attendance(sheet: SheetWriter, model: ReportModel) -> None:
        sections = model.attendance_sections
        if not sections:
            return
        sheet.add_row(["ATTENDANCE"], HEADING_FONT)
        for section in sections:
            sheet.add_row([section.title], BOLD_FONT)
            sheet.add_images(section.images)
        sheet.add_blank()
