"""
Settings Helper - Read report service settings from the environment

All values have working defaults so the service starts with no configuration.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent


def _get_float(name: str, default: float) -> float:
    """Get float setting from environment."""
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    app_name: str = "Activity Report Generator"
    version: str = "1.0.0"

    # Branding marks (left/right header logos)
    static_dir: Path = Path(os.getenv("REPORT_STATIC_DIR", str(BACKEND_DIR / "static")))
    branding_left: str = os.getenv("REPORT_BRANDING_LEFT", "logo1.png")
    branding_right: str = os.getenv("REPORT_BRANDING_RIGHT", "logo2.png")

    views_dir: Path = BACKEND_DIR / "views"

    academic_year: str = os.getenv("REPORT_ACADEMIC_YEAR", "2024-25")

    # Root for per-request upload spool directories ("" = system temp)
    upload_dir: str = os.getenv("REPORT_UPLOAD_DIR", "")

    # Bound on HTML -> PDF conversion, 0 disables the bound
    pdf_timeout_seconds: float = _get_float("REPORT_PDF_TIMEOUT", 0.0)

    log_level: str = os.getenv("REPORT_LOG_LEVEL", "INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get process-wide settings (read once)."""
    return Settings()
