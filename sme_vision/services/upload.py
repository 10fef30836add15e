"""Own the chosen document and the analyze request lifecycle."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional, Protocol

from sme_vision.core.errors import FileTooLarge, NoFileSelected, UnsupportedFileType
from sme_vision.schemas import AnalysisResult, SelectedFile

logger = logging.getLogger(__name__)


class DocumentAnalyzer(Protocol):
    async def analyze(self, upload: SelectedFile) -> AnalysisResult:
        ...


class UploadController:
    """Hold the selected file, the loading flag and the latest analysis result.

    ``submit`` is the only way a result gets stored; each success replaces the
    previous result wholesale. The loading flag is cleared on every exit path.
    ``max_upload_bytes=None`` disables the size check.
    """

    def __init__(
        self,
        analyzer: DocumentAnalyzer,
        *,
        allowed_extensions: Iterable[str] = ("csv", "xlsx", "pdf"),
        max_upload_bytes: int | None = None,
    ) -> None:
        self._analyzer = analyzer
        self._allowed = frozenset(ext.lower().lstrip(".") for ext in allowed_extensions)
        self._max_bytes = max_upload_bytes
        self._selected: Optional[SelectedFile] = None
        self._result: Optional[AnalysisResult] = None
        self._loading = False
        self._in_flight: Optional[asyncio.Task[AnalysisResult]] = None
        self._closed = False

    @property
    def selected_file(self) -> Optional[SelectedFile]:
        return self._selected

    @property
    def max_upload_bytes(self) -> Optional[int]:
        return self._max_bytes

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self._result

    def select_file(self, upload: SelectedFile) -> None:
        """Replace the held document after the extension and size checks."""
        if self._allowed and upload.extension not in self._allowed:
            allowed = ", ".join(sorted(self._allowed)).upper()
            raise UnsupportedFileType(
                f"'{upload.filename}' is not supported. Choose a {allowed} file."
            )
        if self._max_bytes is not None and upload.size > self._max_bytes:
            raise FileTooLarge(
                f"'{upload.filename}' is {upload.size} bytes; "
                f"the limit is {self._max_bytes} bytes."
            )
        self._selected = upload
        logger.info("Selected %s (%d bytes)", upload.filename, upload.size)

    async def submit(self) -> Optional[AnalysisResult]:
        """Analyze the selected document and store the result.

        Returns ``None`` without doing anything while a request is already in
        flight or after the controller was closed.
        """
        if self._selected is None:
            raise NoFileSelected()
        if self._loading:
            logger.info("Analysis already in progress; ignoring resubmission")
            return None
        if self._closed:
            return None

        upload = self._selected
        self._loading = True
        self._in_flight = asyncio.ensure_future(self._analyzer.analyze(upload))
        try:
            result = await self._in_flight
        except asyncio.CancelledError:
            if self._closed:
                logger.info("Analysis of %s cancelled on teardown", upload.filename)
                return None
            raise
        except Exception:
            logger.warning("Analysis of %s failed", upload.filename)
            raise
        finally:
            self._loading = False
            self._in_flight = None

        if self._closed:
            return None
        self._result = result
        logger.info("Stored analysis result for %s", upload.filename)
        return result

    def close(self) -> None:
        """Cancel the in-flight request; nothing is written afterwards."""
        self._closed = True
        if self._in_flight is not None and not self._in_flight.done():
            self._in_flight.cancel()


__all__ = ["DocumentAnalyzer", "UploadController"]
