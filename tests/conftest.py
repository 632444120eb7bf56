# tests/conftest.py
"""
Pytest configuration and fixtures.
Adds backend/ to sys.path so `import report_engine` works without installing.
"""

import io
import sys
from pathlib import Path

import pytest
from PIL import Image

project_root = Path(__file__).parent.parent
backend_root = project_root / "backend"
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

from report_engine.assets import EncodedAsset, UploadedFile  # noqa: E402
from report_engine.branding_config import BrandingAssets  # noqa: E402
from report_engine.report_model import UploadSet, build_report_model_sync  # noqa: E402


def image_bytes(fmt: str, color=(200, 30, 30), size=(8, 6)) -> bytes:
    buf = io.BytesIO()
    mode = "RGB" if fmt in ("JPEG", "GIF") else "RGBA"
    Image.new(mode, size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    return image_bytes("PNG")


@pytest.fixture
def jpeg_bytes():
    return image_bytes("JPEG", color=(20, 120, 220))


@pytest.fixture
def gif_bytes():
    return image_bytes("GIF", color=(10, 200, 10))


@pytest.fixture
def branding_assets():
    left = EncodedAsset.from_bytes(image_bytes("PNG", color=(1, 2, 3)), "image/png")
    right = EncodedAsset.from_bytes(image_bytes("PNG", color=(4, 5, 6)), "image/png")
    return BrandingAssets(left=left, right=right)


@pytest.fixture
def make_upload(tmp_path):
    """Spool bytes to a temp file the way the router does."""
    counter = {"n": 0}

    def _make(content: bytes, media_type: str = "image/png", filename: str = "") -> UploadedFile:
        counter["n"] += 1
        path = tmp_path / f"upload-{counter['n']}"
        path.write_bytes(content)
        return UploadedFile(path=path, media_type=media_type, filename=filename or path.name)

    return _make


@pytest.fixture
def make_model(branding_assets):
    def _make(raw_fields=None, fixed=None, attendance=(), academic_year="2024-25"):
        uploads = UploadSet(fixed=fixed or {}, attendance=list(attendance))
        return build_report_model_sync(raw_fields or {}, uploads, branding_assets, academic_year)

    return _make


@pytest.fixture
def workshop_model(make_model, make_upload, png_bytes, jpeg_bytes):
    """One invitation image, TOC Intro/Closing, attendance "Day 1" with two images."""
    return make_model(
        raw_fields={
            "activityName": "Workshop A",
            "tocRows[]": ["Intro", "Closing"],
            "attendanceTitles[]": "Day 1",
        },
        fixed={"invitation": [make_upload(png_bytes)]},
        attendance=[[make_upload(png_bytes), make_upload(jpeg_bytes, "image/jpeg")]],
    )
