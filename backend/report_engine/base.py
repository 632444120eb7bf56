"""
Base Report Renderer

Provides the shared render contract for all output formats:
- build(model) produces the document bytes (may raise)
- render(model) wraps build in a RenderResult (never raises for
  I/O or backend faults), so callers map outcomes to their own transport

A renderer only reads the Report Model. It never sees request data.
"""

import asyncio
import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .report_model import ReportModel

logger = logging.getLogger(__name__)


class FaultKind(str, enum.Enum):
    IO = "io"
    BACKEND = "backend"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class RenderResult:
    ok: bool
    content: bytes = b""
    media_type: str = ""
    filename: str = ""
    kind: Optional[FaultKind] = None
    message: str = ""

    @classmethod
    def success(cls, content: bytes, media_type: str, filename: str) -> "RenderResult":
        return cls(ok=True, content=content, media_type=media_type, filename=filename)

    @classmethod
    def failure(cls, kind: FaultKind, message: str) -> "RenderResult":
        return cls(ok=False, kind=kind, message=message)


class ReportRenderer(ABC):
    """
    Base class for all report output formats.

    Subclasses implement:
        - build(model) -> bytes: Produce the complete document
    and set media_type / extension / label.
    """

    media_type: str = "application/octet-stream"
    extension: str = "bin"
    label: str = "Report"

    @property
    def filename(self) -> str:
        return f"report.{self.extension}"

    @abstractmethod
    def build(self, model: ReportModel) -> bytes:
        """
        Produce the document for a report model.

        Raises:
            RenderBackendError: the document backend failed
            OSError: an asset could not be read
        """
        pass

    async def produce(self, model: ReportModel) -> bytes:
        """Run build off the event loop. Subclasses may bound or replace this."""
        return await asyncio.to_thread(self.build, model)

    async def render(self, model: ReportModel) -> RenderResult:
        try:
            content = await self.produce(model)
        except asyncio.TimeoutError:
            logger.error("%s rendering timed out", self.label)
            return RenderResult.failure(FaultKind.TIMEOUT, f"{self.label} rendering timed out")
        except OSError as e:
            logger.exception("%s rendering failed reading an asset", self.label)
            return RenderResult.failure(FaultKind.IO, str(e))
        except Exception as e:
            # RenderBackendError and anything the document libraries raise
            logger.exception("%s backend failed", self.label)
            return RenderResult.failure(FaultKind.BACKEND, str(e))

        logger.info("Rendered %s (%d bytes)", self.label, len(content))
        return RenderResult.success(content, self.media_type, self.filename)
