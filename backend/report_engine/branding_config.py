"""
Branding Configuration for Activity Reports

Defines default branding settings and loads the two header marks
(left/right logos) from local static files.

The marks are constants, identical for every report. A missing mark is a
configuration fault and stops the service at startup.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from settings_helper import Settings, get_settings

from .assets import EncodedAsset
from .exceptions import BrandingConfigError

logger = logging.getLogger(__name__)

# =============================================================================
# DEFAULT BRANDING
# =============================================================================

DEFAULT_BRANDING = {
    "version": 1,

    # Identity
    "report_title": "ACTIVITY CONDUCTED REPORT",

    # Logos
    "logo_size": "large",         # small (40px), medium (60px), large (80px)

    # Colors
    "primary_color": "#1f3a68",   # Headings, borders
    "text_color": "#1a1a1a",      # Body text
    "muted_color": "#666666",     # Labels
    "heading_background": "#e8edf5",

    # Typography
    "font_family": "Arial, Helvetica, sans-serif",
    "title_font_size": "16pt",
    "heading_font_size": "13pt",
    "body_font_size": "10pt",

    "border_style": "solid",      # solid, double, none
}

LOGO_SIZES = {
    "small": "40px",
    "medium": "60px",
    "large": "80px",
    "xlarge": "104px",
}

LOGO_MEDIA_TYPE = "image/png"


@dataclass(frozen=True)
class BrandingAssets:
    left: EncodedAsset
    right: EncodedAsset


# =============================================================================
# BRANDING LOADER
# =============================================================================

def get_branding(overrides: Optional[dict] = None) -> dict:
    """
    Complete branding config dict.

    Merges overrides over DEFAULT_BRANDING. The academic year is report
    data and lives on the Report Model, not here.
    """
    branding = dict(DEFAULT_BRANDING)
    branding.update(overrides or {})
    return branding


def load_branding_assets(settings: Optional[Settings] = None) -> BrandingAssets:
    """
    Read both header marks from the static directory.

    Raises:
        BrandingConfigError: either file is missing or unreadable
    """
    settings = settings or get_settings()
    static_dir = Path(settings.static_dir)

    left = _read_mark(static_dir / settings.branding_left)
    right = _read_mark(static_dir / settings.branding_right)

    logger.info("Loaded branding marks from %s", static_dir)
    return BrandingAssets(left=left, right=right)


def get_logo_size_px(branding: dict) -> str:
    """Get logo size in pixels based on size setting."""
    size_key = branding.get("logo_size", "large")
    return LOGO_SIZES.get(size_key, LOGO_SIZES["large"])


# =============================================================================
# PRIVATE HELPERS
# =============================================================================

def _read_mark(path: Path) -> EncodedAsset:
    try:
        content = path.read_bytes()
    except OSError as e:
        raise BrandingConfigError(f"Branding mark not readable: {path} ({e.strerror or e})") from e
    return EncodedAsset.from_bytes(content, LOGO_MEDIA_TYPE)
