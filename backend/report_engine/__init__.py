"""
Report Engine Package

Turns one submitted activity report into PDF, DOCX and XLSX documents.
Separated from routers for maintainability.

Components:
- assets: Asset encoder (uploaded file -> inline media type + base64)
- report_model: Canonical report model and its builder
- branding_config: Default branding settings and header marks
- layout_config: Print section order
- templates: CSS generation and base HTML
- renderers: Print section renderers (r_* functions)
- print_report / word_report / excel_report: Output formats
"""

from .assets import EncodedAsset, UploadedFile, encode_file, encode_files
from .base import FaultKind, RenderResult, ReportRenderer
from .branding_config import DEFAULT_BRANDING, BrandingAssets, get_branding, load_branding_assets
from .excel_report import ExcelReportRenderer
from .exceptions import AssetReadError, BrandingConfigError, RenderBackendError, ReportEngineError
from .print_report import PrintReportRenderer
from .report_model import (
    AttendanceSection,
    ReportModel,
    UploadSet,
    build_report_model,
    build_report_model_sync,
)
from .word_report import WordReportRenderer

__all__ = [
    'AssetReadError',
    'AttendanceSection',
    'BrandingAssets',
    'BrandingConfigError',
    'DEFAULT_BRANDING',
    'EncodedAsset',
    'ExcelReportRenderer',
    'FaultKind',
    'PrintReportRenderer',
    'RenderBackendError',
    'RenderResult',
    'ReportEngineError',
    'ReportModel',
    'ReportRenderer',
    'UploadSet',
    'UploadedFile',
    'WordReportRenderer',
    'build_report_model',
    'build_report_model_sync',
    'encode_file',
    'encode_files',
    'get_branding',
    'load_branding_assets',
]
