"""
Error taxonomy for dashboard operations.

Each failure is terminal to the operation that raised it. The API layer turns
any ``DashboardError`` into a JSON notice using ``code`` and ``status_code``.
"""

from __future__ import annotations

from http import HTTPStatus


class DashboardError(RuntimeError):
    """Base class for failures surfaced to the dashboard user as a notice."""

    code: str = "dashboard_error"
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "The dashboard could not complete the request."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class NoFileSelected(DashboardError):
    code = "no_file_selected"
    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Please select a CSV / XLSX / PDF file"


class UnsupportedFileType(DashboardError):
    code = "unsupported_file_type"
    status_code = HTTPStatus.UNSUPPORTED_MEDIA_TYPE
    default_message = "Only CSV, XLSX and PDF documents can be analyzed."


class FileTooLarge(DashboardError):
    code = "file_too_large"
    status_code = HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    default_message = "The selected document exceeds the upload size limit."


class AnalysisRequestFailed(DashboardError):
    code = "analysis_request_failed"
    status_code = HTTPStatus.BAD_GATEWAY
    default_message = "The analysis service could not process the document."


class MalformedAnalysisResult(DashboardError):
    code = "malformed_analysis_result"
    status_code = HTTPStatus.BAD_GATEWAY
    default_message = "The analysis service returned an incomplete result."


class NoAnalysisResult(DashboardError):
    code = "no_analysis_result"
    status_code = HTTPStatus.CONFLICT
    default_message = "Analyze a document before requesting its summary."


class UnsupportedLanguageKey(DashboardError):
    code = "unsupported_language"
    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    default_message = "The requested summary language is not available."


class NoResultToExport(DashboardError):
    code = "no_result_to_export"
    status_code = HTTPStatus.CONFLICT
    default_message = "Analyze a document before downloading the report."


class ReportExportFailed(DashboardError):
    code = "report_export_failed"
    status_code = HTTPStatus.BAD_GATEWAY
    default_message = "The PDF report could not be generated."


class SessionNotFound(DashboardError):
    code = "session_not_found"
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Dashboard session not found."


__all__ = [
    "AnalysisRequestFailed",
    "DashboardError",
    "FileTooLarge",
    "MalformedAnalysisResult",
    "NoAnalysisResult",
    "NoFileSelected",
    "NoResultToExport",
    "ReportExportFailed",
    "SessionNotFound",
    "UnsupportedFileType",
    "UnsupportedLanguageKey",
]
