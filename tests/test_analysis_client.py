try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from sme_vision.clients import AnalysisClient
from sme_vision.core.config import BackendSettings
from sme_vision.core.errors import (
    AnalysisRequestFailed,
    MalformedAnalysisResult,
    ReportExportFailed,
)
from sme_vision.schemas import AnalysisResult, SelectedFile


class RecordingBackend:
    """httpx transport handler that records requests and replays responses."""

    def __init__(self, *responses: httpx.Response) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError("No backend response configured")
        return self._responses.pop(0)


def _client(backend, **overrides) -> AnalysisClient:
    settings = BackendSettings(base_url="https://backend.test", **overrides)
    return AnalysisClient(settings, transport=httpx.MockTransport(backend))


def _upload() -> SelectedFile:
    return SelectedFile(filename="ledger.csv", content=b"date,amount\n", content_type="text/csv")


@pytest.mark.asyncio
async def test_analyze_posts_multipart_file(analysis_payload):
    backend = RecordingBackend(httpx.Response(200, json=analysis_payload))

    result = await _client(backend).analyze(_upload())

    assert result.to_payload() == analysis_payload
    assert len(backend.requests) == 1
    request = backend.requests[0]
    assert request.method == "POST"
    assert request.url == "https://backend.test/analyze/final-report"
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = request.read()
    assert b'name="file"' in body
    assert b'filename="ledger.csv"' in body
    assert b"date,amount" in body


@pytest.mark.asyncio
async def test_analyze_non_success_status_raises():
    backend = RecordingBackend(httpx.Response(500, text="boom"))

    with pytest.raises(AnalysisRequestFailed) as exc_info:
        await _client(backend).analyze(_upload())

    assert "500" in str(exc_info.value)
    assert len(backend.requests) == 1


@pytest.mark.asyncio
async def test_analyze_transport_error_raises():
    def offline(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(AnalysisRequestFailed):
        await _client(offline).analyze(_upload())


@pytest.mark.asyncio
async def test_analyze_non_json_body_is_malformed():
    backend = RecordingBackend(httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(MalformedAnalysisResult):
        await _client(backend).analyze(_upload())


@pytest.mark.asyncio
async def test_analyze_missing_fields_is_malformed(analysis_payload):
    del analysis_payload["loan_recommendation"]
    backend = RecordingBackend(httpx.Response(200, json=analysis_payload))

    with pytest.raises(MalformedAnalysisResult):
        await _client(backend).analyze(_upload())


@pytest.mark.asyncio
async def test_configured_attempts_retry_failed_calls(analysis_payload, monkeypatch):
    async def no_sleep(_: float) -> None:
        return None

    monkeypatch.setattr("sme_vision.utils.http.asyncio.sleep", no_sleep)
    backend = RecordingBackend(
        httpx.Response(503),
        httpx.Response(200, json=analysis_payload),
    )

    result = await _client(backend, request_attempts=2).analyze(_upload())

    assert result.investor_metrics.credit_score == 750
    assert len(backend.requests) == 2


@pytest.mark.asyncio
async def test_export_report_posts_result_json(analysis_payload):
    backend = RecordingBackend(
        httpx.Response(200, content=b"%PDF-1.4 report", headers={"content-type": "application/pdf"})
    )
    result = AnalysisResult.model_validate(analysis_payload)

    pdf = await _client(backend).export_report(result)

    assert pdf == b"%PDF-1.4 report"
    request = backend.requests[0]
    assert request.url == "https://backend.test/download-pdf"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.read()) == analysis_payload


@pytest.mark.asyncio
async def test_export_report_failure_raises(analysis_payload):
    backend = RecordingBackend(httpx.Response(502))
    result = AnalysisResult.model_validate(analysis_payload)

    with pytest.raises(ReportExportFailed):
        await _client(backend).export_report(result)


@pytest.mark.asyncio
async def test_export_report_empty_body_raises(analysis_payload):
    backend = RecordingBackend(httpx.Response(200, content=b""))
    result = AnalysisResult.model_validate(analysis_payload)

    with pytest.raises(ReportExportFailed):
        await _client(backend).export_report(result)
