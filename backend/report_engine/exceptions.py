"""
Report Engine Exceptions

Two fault families exist: upstream I/O (an asset cannot be read) and
rendering backend faults (PDF / DOCX / XLSX assembly failed).
Missing or malformed form input is never an error.
"""


class ReportEngineError(Exception):
    """Base class for all report engine faults."""


class AssetReadError(ReportEngineError, OSError):
    """An uploaded or local asset could not be read."""

    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"Cannot read asset {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BrandingConfigError(ReportEngineError):
    """Branding marks are missing. Raised at startup, never per request."""


class RenderBackendError(ReportEngineError):
    """A rendering backend failed to produce output."""

    def __init__(self, backend: str, message: str):
        self.backend = backend
        super().__init__(f"{backend}: {message}")
