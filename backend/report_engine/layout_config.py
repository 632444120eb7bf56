"""
Print Layout Configuration

Fixed section order for the print document. Each section has:
id, name, page, order

Sections sharing a page number flow together; a new page number starts a
new printed page. A section that renders nothing (no items) is skipped
and does not open a page.
"""

from typing import Dict, List

DEFAULT_PRINT_LAYOUT = {
    "version": 1,

    "sections": [
        # Page 1 - cover
        {"id": "header", "name": "Header", "page": 1, "order": 1},
        {"id": "activity_details", "name": "Activity Details", "page": 1, "order": 2},
        {"id": "table_of_contents", "name": "Table of Contents", "page": 1, "order": 3},

        # Image evidence, one category per page
        {"id": "invitation", "name": "Invitation", "page": 2, "order": 1},
        {"id": "poster", "name": "Poster", "page": 3, "order": 1},
        {"id": "resource_person", "name": "Resource Person Details", "page": 4, "order": 1},

        {"id": "session_report", "name": "Session Report", "page": 5, "order": 1},

        {"id": "attendance", "name": "Attendance", "page": 6, "order": 1},
        {"id": "photos", "name": "Photos", "page": 7, "order": 1},
        {"id": "feedback", "name": "Feedback", "page": 8, "order": 1},
    ],
}


def get_sections_by_page(layout: dict = None) -> Dict[int, List[dict]]:
    """Group layout sections by page, each page sorted by order."""
    layout = layout or DEFAULT_PRINT_LAYOUT
    pages: Dict[int, List[dict]] = {}
    for section in layout.get("sections", []):
        pages.setdefault(section.get("page", 1), []).append(section)
    for sections in pages.values():
        sections.sort(key=lambda s: s.get("order", 0))
    return dict(sorted(pages.items()))

