"""
One dashboard session wiring intro, upload, results, narration, chat and
report export together, plus the in-memory store that keeps sessions alive.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional
from uuid import uuid4

from sme_vision.clients.speech import SpeechRelay
from sme_vision.core.config import AppSettings
from sme_vision.core.errors import NoAnalysisResult, SessionNotFound
from sme_vision.schemas import (
    AnalysisResult,
    ChatMessage,
    DashboardView,
    NarrationRequest,
    SelectedFile,
    SummaryLanguage,
    Utterance,
)

from .chat import ChatSession, ReplyStrategy
from .intro import IntroSequencer
from .narration import NarrationEngine
from .presenter import ResultPresenter
from .report import ReportDownload, ReportExporter, ReportRenderer
from .upload import DocumentAnalyzer, UploadController

logger = logging.getLogger(__name__)


class DashboardSession:
    """State owned by a single open dashboard.

    Each session narrates through its own ``SpeechRelay``, so one dashboard
    never hears or cancels another dashboard's narration.
    """

    def __init__(
        self,
        *,
        session_id: str,
        intro: IntroSequencer,
        speech: SpeechRelay,
        upload: UploadController,
        presenter: ResultPresenter,
        narration: NarrationEngine,
        chat: ChatSession,
        exporter: ReportExporter,
    ) -> None:
        self.session_id = session_id
        self.speech = speech
        self.intro = intro
        self.upload = upload
        self.presenter = presenter
        self.narration = narration
        self.chat = chat
        self.exporter = exporter

    @classmethod
    def build(
        cls,
        *,
        settings: AppSettings,
        analyzer: DocumentAnalyzer,
        renderer: ReportRenderer,
        reply_strategy: ReplyStrategy | None = None,
        session_id: str | None = None,
    ) -> "DashboardSession":
        speech = SpeechRelay()
        narration = NarrationEngine(speech)
        upload = UploadController(
            analyzer,
            allowed_extensions=settings.upload.allowed_extensions,
            max_upload_bytes=settings.upload.max_upload_bytes,
        )
        intro = IntroSequencer(
            narration,
            expand_delay=settings.intro.expand_delay_ms / 1000,
            main_delay=settings.intro.main_delay_ms / 1000,
            welcome_text=settings.intro.welcome_text,
            welcome_rate=settings.intro.welcome_rate,
        )
        return cls(
            session_id=session_id or uuid4().hex,
            speech=speech,
            intro=intro,
            upload=upload,
            presenter=ResultPresenter(),
            narration=narration,
            chat=ChatSession(reply_strategy, result_provider=lambda: upload.result),
            exporter=ReportExporter(renderer, filename=settings.report_filename),
        )

    @property
    def result(self) -> Optional[AnalysisResult]:
        return self.upload.result

    def mount(self) -> None:
        self.intro.start()

    def teardown(self) -> None:
        self.intro.teardown()
        self.upload.close()
        logger.info("Dashboard session %s torn down", self.session_id)

    @property
    def max_upload_bytes(self) -> Optional[int]:
        return self.upload.max_upload_bytes

    def select_file(self, upload: SelectedFile) -> None:
        self.upload.select_file(upload)

    async def analyze(self) -> Optional[AnalysisResult]:
        return await self.upload.submit()

    def select_language(self, code: str) -> SummaryLanguage:
        return self.presenter.select_language(code)

    def play_voice_summary(self) -> NarrationRequest:
        """Narrate the summary in the selected language."""
        result = self.result
        if result is None:
            raise NoAnalysisResult()
        summary = self.presenter.summary(result)
        return self.narration.speak(summary.text, summary.language.value)

    async def send_chat(self, text: str | None = None) -> List[ChatMessage]:
        return await self.chat.submit(text)

    def update_draft(self, text: str) -> None:
        self.chat.update_draft(text)

    def current_utterance(self) -> Optional[Utterance]:
        return self.speech.current()

    def finish_utterance(self, utterance_id: int) -> bool:
        return self.speech.finish(utterance_id)

    async def download_report(self) -> ReportDownload:
        return await self.exporter.export(self.result)

    def view(self) -> DashboardView:
        selected = self.upload.selected_file
        return DashboardView(
            session_id=self.session_id,
            phase=self.intro.phase,
            intro_visible=self.intro.intro_visible,
            selected_file=selected.filename if selected else None,
            is_loading=self.upload.is_loading,
            selected_language=self.presenter.selected_language,
            result=self.presenter.render(self.result),
            transcript=list(self.chat.transcript),
            draft=self.chat.draft,
        )


class DashboardSessionStore:
    """Process-local registry of open dashboards; lost on restart."""

    def __init__(self) -> None:
        self._sessions: Dict[str, DashboardSession] = {}

    def add(self, session: DashboardSession) -> DashboardSession:
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> DashboardSession:
        try:
            return self._sessions[session_id]
        except KeyError as exc:
            raise SessionNotFound(f"Dashboard session '{session_id}' not found.") from exc

    def remove(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFound(f"Dashboard session '{session_id}' not found.")
        session.teardown()

    def close_all(self) -> None:
        for session in list(self._sessions.values()):
            session.teardown()
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)


__all__ = ["DashboardSession", "DashboardSessionStore"]
