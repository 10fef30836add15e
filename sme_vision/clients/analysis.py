"""Client for the remote document analysis and PDF report service."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from sme_vision.core.config import BackendSettings
from sme_vision.core.errors import (
    AnalysisRequestFailed,
    MalformedAnalysisResult,
    ReportExportFailed,
)
from sme_vision.schemas import AnalysisResult, SelectedFile
from sme_vision.utils.http import RetryConfig, request_with_retry

logger = logging.getLogger(__name__)


class AnalysisClient:
    """Submit documents for analysis and stored results for PDF rendering."""

    def __init__(
        self,
        settings: BackendSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        )

    def _retry_config(self) -> RetryConfig:
        return RetryConfig(attempts=self._settings.request_attempts)

    async def analyze(self, upload: SelectedFile) -> AnalysisResult:
        """Upload ``upload`` as multipart field ``file`` and parse the result."""

        files = {"file": (upload.filename, upload.content, upload.media_type)}
        logger.info(
            "Submitting %s (%d bytes) for analysis", upload.filename, upload.size
        )
        try:
            async with self._client() as client:
                response = await request_with_retry(
                    client.post,
                    self._settings.analyze_path,
                    files=files,
                    retry_config=self._retry_config(),
                )
        except httpx.HTTPStatusError as exc:
            raise AnalysisRequestFailed(
                f"Analysis service responded with HTTP {exc.response.status_code}."
            ) from exc
        except httpx.HTTPError as exc:
            raise AnalysisRequestFailed(
                f"Analysis service is unreachable: {exc}"
            ) from exc

        return parse_analysis_payload(_decode_json(response))

    async def export_report(self, result: AnalysisResult) -> bytes:
        """Post ``result`` to the report renderer and return the PDF bytes."""

        try:
            async with self._client() as client:
                response = await request_with_retry(
                    client.post,
                    self._settings.report_path,
                    json=result.to_payload(),
                    retry_config=self._retry_config(),
                )
        except httpx.HTTPStatusError as exc:
            raise ReportExportFailed(
                f"Report service responded with HTTP {exc.response.status_code}."
            ) from exc
        except httpx.HTTPError as exc:
            raise ReportExportFailed(f"Report service is unreachable: {exc}") from exc

        if not response.content:
            raise ReportExportFailed("Report service returned an empty document.")
        logger.info("Received %d byte report", len(response.content))
        return response.content


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedAnalysisResult(
            "Analysis service did not return JSON."
        ) from exc


def parse_analysis_payload(payload: Any) -> AnalysisResult:
    """Validate a decoded analysis payload before it is stored."""
    if not isinstance(payload, dict):
        raise MalformedAnalysisResult("Analysis payload must be a JSON object.")
    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as exc:
        missing = sorted(
            {".".join(str(part) for part in error["loc"]) for error in exc.errors()}
        )
        logger.warning("Rejected analysis payload; invalid fields: %s", missing)
        raise MalformedAnalysisResult(
            f"Analysis result is missing or has invalid fields: {', '.join(missing)}"
        ) from exc


__all__ = ["AnalysisClient", "parse_analysis_payload"]
