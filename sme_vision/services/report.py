"""Turn a stored analysis result into a downloadable PDF report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from sme_vision.core.errors import NoResultToExport
from sme_vision.schemas import AnalysisResult

logger = logging.getLogger(__name__)

REPORT_FILENAME = "SME_Financial_Report.pdf"


class ReportRenderer(Protocol):
    async def export_report(self, result: AnalysisResult) -> bytes:
        ...


@dataclass(frozen=True, slots=True)
class ReportDownload:
    """PDF bytes ready to be saved by the browser."""

    filename: str
    content: bytes
    media_type: str = "application/pdf"

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


class ReportExporter:
    def __init__(
        self, renderer: ReportRenderer, *, filename: str = REPORT_FILENAME
    ) -> None:
        self._renderer = renderer
        self._filename = filename

    async def export(self, result: Optional[AnalysisResult]) -> ReportDownload:
        if result is None:
            raise NoResultToExport()
        content = await self._renderer.export_report(result)
        logger.info("Prepared %s (%d bytes)", self._filename, len(content))
        return ReportDownload(filename=self._filename, content=content)


__all__ = ["REPORT_FILENAME", "ReportDownload", "ReportExporter", "ReportRenderer"]
