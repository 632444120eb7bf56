"""
Report Model

The single, format-agnostic representation of one submitted activity report.
Built fresh per request from the raw form fields and the uploaded files,
consumed by exactly one renderer, then discarded.

Normalization rules:
- Every text field is optional. Absent -> "".
- Table of contents accepts a single string or a list under either key;
  empty entries are dropped.
- Attendance titles drive the section count. Title i is paired with
  attendance upload slot i. A title without a slot gets no images; a slot
  without a title is ignored.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .assets import EncodedAsset, UploadedFile, encode_files
from .branding_config import BrandingAssets

logger = logging.getLogger(__name__)

MAX_ATTENDANCE_SECTIONS = 20

# Form field name -> model field key
REPORT_FIELDS = {
    "activityName": "activity_name",
    "coordinator": "coordinator",
    "activityDate": "activity_date",
    "duration": "duration",
    "po": "po",
    "programLine": "program_line",
    "resourceText": "resource_text",
    "sessionName": "session_name",
    "sessionResourcePerson": "session_resource_person",
    "sessionCoordinators": "session_coordinators",
    "sessionStartDate": "session_start_date",
    "sessionStartTime": "session_start_time",
    "sessionEndDate": "session_end_date",
    "sessionEndTime": "session_end_time",
    "sessionParticipants": "session_participants",
    "sessionActivityTitle": "session_activity_title",
    "sessionPreamble": "session_preamble",
    "sessionSummary": "session_summary",
}

TOC_KEYS = ("tocRows[]", "tocRows")
ATTENDANCE_TITLE_KEYS = ("attendanceTitles[]", "attendanceTitles")

# Fixed image categories, in report order
INVITATION = "invitation"
POSTER = "poster"
RESOURCE = "resource"
PHOTOS = "photos"
FEEDBACK = "feedback"
FIXED_IMAGE_GROUPS = (INVITATION, POSTER, RESOURCE, PHOTOS, FEEDBACK)

# Upload limits per category (files per request)
UPLOAD_LIMITS = {
    INVITATION: 50,
    POSTER: 50,
    RESOURCE: 10,
    PHOTOS: 50,
    FEEDBACK: 50,
}
ATTENDANCE_UPLOAD_LIMIT = 50


@dataclass(frozen=True)
class AttendanceSection:
    title: str
    images: Tuple[EncodedAsset, ...] = ()


@dataclass(frozen=True)
class ReportModel:
    fields: Mapping[str, str]
    table_of_contents: Tuple[str, ...]
    fixed_image_groups: Mapping[str, Tuple[EncodedAsset, ...]]
    attendance_sections: Tuple[AttendanceSection, ...]
    branding_assets: BrandingAssets

    def field(self, key: str) -> str:
        return self.fields.get(key, "")

    def images(self, group: str) -> Tuple[EncodedAsset, ...]:
        return self.fixed_image_groups.get(group, ())

    def numbered_contents(self) -> List[Tuple[int, str]]:
        """Table of contents as (1-based number, entry) pairs."""
        return [(i + 1, entry) for i, entry in enumerate(self.table_of_contents)]


@dataclass(frozen=True)
class UploadSet:
    """
    Uploaded files grouped by category, built once at the transport boundary.

    attendance[i] holds the files submitted for attendance slot i.
    """
    fixed: Mapping[str, Sequence[UploadedFile]] = field(default_factory=dict)
    attendance: Sequence[Sequence[UploadedFile]] = ()

    def __post_init__(self):
        if len(self.attendance) > MAX_ATTENDANCE_SECTIONS:
            raise ValueError(
                f"At most {MAX_ATTENDANCE_SECTIONS} attendance slots allowed, got {len(self.attendance)}"
            )

    def group(self, name: str) -> Sequence[UploadedFile]:
        return self.fixed.get(name) or ()

    def attendance_slot(self, index: int) -> Sequence[UploadedFile]:
        if 0 <= index < len(self.attendance):
            return self.attendance[index] or ()
        return ()


# =============================================================================
# NORMALIZATION HELPERS
# =============================================================================

def as_list(value: Any) -> List[Any]:
    """Single value or sequence -> list. None -> []."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def first_value(raw: Mapping[str, Any], key: str) -> str:
    value = raw.get(key)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None:
        return ""
    return str(value)


def first_present(raw: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Value of the first key holding a truthy value, else None."""
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def normalize_fields(raw: Mapping[str, Any], academic_year: str = "") -> Dict[str, str]:
    fields = {model_key: first_value(raw, form_key) for form_key, model_key in REPORT_FIELDS.items()}
    fields["academic_year"] = academic_year or ""
    return fields


def normalize_table_of_contents(raw: Mapping[str, Any]) -> Tuple[str, ...]:
    entries = as_list(first_present(raw, TOC_KEYS))
    return tuple(str(e) for e in entries if e)


def normalize_attendance_titles(raw: Mapping[str, Any]) -> List[str]:
    titles = as_list(first_present(raw, ATTENDANCE_TITLE_KEYS))
    return ["" if t is None else str(t) for t in titles]


# =============================================================================
# BUILDER
# =============================================================================

async def build_report_model(
    raw_fields: Mapping[str, Any],
    uploads: Optional[UploadSet],
    branding_assets: BrandingAssets,
    academic_year: str = "",
) -> ReportModel:
    """
    Build the canonical Report Model from raw request input.

    Every uploaded file referenced by the model is encoded concurrently;
    the model is assembled only after all encodings finish.

    Raises:
        AssetReadError: an uploaded file could not be read
    """
    raw_fields = raw_fields or {}
    uploads = uploads or UploadSet()

    fields = normalize_fields(raw_fields, academic_year)
    toc = normalize_table_of_contents(raw_fields)
    titles = normalize_attendance_titles(raw_fields)

    # Section count follows titles; slots past the last title are never read
    fixed_jobs = [encode_files(uploads.group(name)) for name in FIXED_IMAGE_GROUPS]
    attendance_jobs = [encode_files(uploads.attendance_slot(i)) for i in range(len(titles))]

    encoded = await asyncio.gather(*fixed_jobs, *attendance_jobs)
    fixed_encoded = encoded[:len(FIXED_IMAGE_GROUPS)]
    attendance_encoded = encoded[len(FIXED_IMAGE_GROUPS):]

    fixed_groups = {
        name: tuple(assets) for name, assets in zip(FIXED_IMAGE_GROUPS, fixed_encoded)
    }
    sections = tuple(
        AttendanceSection(title=title, images=tuple(assets))
        for title, assets in zip(titles, attendance_encoded)
    )

    model = ReportModel(
        fields=MappingProxyType(fields),
        table_of_contents=toc,
        fixed_image_groups=MappingProxyType(fixed_groups),
        attendance_sections=sections,
        branding_assets=branding_assets,
    )

    logger.debug(
        "Built report model: %d toc rows, %d attendance sections, images %s",
        len(toc),
        len(sections),
        {name: len(assets) for name, assets in fixed_groups.items()},
    )
    return model


def build_report_model_sync(
    raw_fields: Mapping[str, Any],
    uploads: Optional[UploadSet],
    branding_assets: BrandingAssets,
    academic_year: str = "",
) -> ReportModel:
    """Blocking wrapper around build_report_model for non-async callers."""
    return asyncio.run(build_report_model(raw_fields, uploads, branding_assets, academic_year))
