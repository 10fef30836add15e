"""
FastAPI routes for the SME Vision dashboard.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, List

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile
from fastapi.responses import JSONResponse

from sme_vision.core.errors import DashboardError, FileTooLarge
from sme_vision.dependencies import (
    SettingsDependency,
    get_analysis_client,
    get_reply_strategy,
    get_session_store,
)
from sme_vision.schemas import (
    ChatDraft,
    ChatMessage,
    ChatRequest,
    DashboardView,
    LanguageSelection,
    NarrationRequest,
    Notice,
    SelectedFile,
    Utterance,
)
from sme_vision.services import DashboardSession, DashboardSessionStore

router = APIRouter()
logger = logging.getLogger(__name__)

StoreDependency = Annotated[DashboardSessionStore, Depends(get_session_store)]


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    """Render a dashboard failure as the notice shown to the user."""
    logger.info(
        "%s %s failed: %s (%s)", request.method, request.url.path, exc.code, exc
    )
    notice = Notice(error=exc.code, message=exc.message)
    return JSONResponse(status_code=int(exc.status_code), content=notice.model_dump())


def _get_session(session_id: str, store: StoreDependency) -> DashboardSession:
    return store.get(session_id)


SessionDependency = Annotated[DashboardSession, Depends(_get_session)]


async def _read_bounded(file: UploadFile, filename: str, limit: int | None) -> bytes:
    """Buffer at most ``limit`` bytes of an upload, rejecting anything larger."""
    if limit is None:
        return await file.read()
    if file.size is not None and file.size > limit:
        raise FileTooLarge(f"'{filename}' exceeds the limit of {limit} bytes.")
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise FileTooLarge(f"'{filename}' exceeds the limit of {limit} bytes.")
    return content


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.post("/sessions", status_code=HTTPStatus.CREATED, response_model=DashboardView)
async def create_session(
    settings: SettingsDependency,
    store: StoreDependency,
    analysis_client: Annotated[Any, Depends(get_analysis_client)],
    reply_strategy: Annotated[Any, Depends(get_reply_strategy)],
) -> DashboardView:
    """Open a dashboard and start its intro sequence."""
    session = DashboardSession.build(
        settings=settings,
        analyzer=analysis_client,
        renderer=analysis_client,
        reply_strategy=reply_strategy,
    )
    store.add(session)
    session.mount()
    logger.info("Opened dashboard session %s", session.session_id)
    return session.view()


@router.get("/sessions/{session_id}", response_model=DashboardView)
async def get_dashboard(session: SessionDependency) -> DashboardView:
    return session.view()


@router.delete("/sessions/{session_id}", status_code=HTTPStatus.NO_CONTENT)
async def close_session(session_id: str, store: StoreDependency) -> Response:
    """Tear the dashboard down, cancelling pending timers and requests."""
    store.remove(session_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.post("/sessions/{session_id}/file", response_model=DashboardView)
async def select_file(
    session: SessionDependency,
    file: UploadFile = File(..., description="CSV, XLSX or PDF document."),
) -> DashboardView:
    filename = file.filename or "upload"
    content = await _read_bounded(file, filename, session.max_upload_bytes)
    session.select_file(
        SelectedFile(
            filename=filename,
            content=content,
            content_type=file.content_type,
        )
    )
    return session.view()


@router.post("/sessions/{session_id}/analyze", response_model=DashboardView)
async def analyze_document(session: SessionDependency) -> DashboardView:
    """Send the selected document for analysis and return the refreshed view."""
    await session.analyze()
    return session.view()


@router.put("/sessions/{session_id}/language", response_model=DashboardView)
async def select_language(
    payload: LanguageSelection, session: SessionDependency
) -> DashboardView:
    session.select_language(payload.language)
    return session.view()


@router.post("/sessions/{session_id}/voice-summary", response_model=NarrationRequest)
async def play_voice_summary(session: SessionDependency) -> NarrationRequest:
    """Narrate the summary in the selected language."""
    return session.play_voice_summary()


@router.post("/sessions/{session_id}/chat", response_model=List[ChatMessage])
async def send_chat(payload: ChatRequest, session: SessionDependency) -> List[ChatMessage]:
    """Ask the assistant a question and return the full transcript.

    Without ``text`` the saved draft is sent.
    """
    await session.send_chat(payload.text)
    return list(session.chat.transcript)


@router.put("/sessions/{session_id}/chat/draft", response_model=DashboardView)
async def save_chat_draft(payload: ChatDraft, session: SessionDependency) -> DashboardView:
    session.update_draft(payload.text)
    return session.view()


@router.get("/sessions/{session_id}/report")
async def download_report(session: SessionDependency) -> Response:
    """Render the stored analysis as a PDF attachment."""
    download = await session.download_report()
    return Response(
        content=download.content,
        media_type=download.media_type,
        headers={"Content-Disposition": download.content_disposition},
    )


@router.get("/sessions/{session_id}/narration", response_model=Utterance | None)
async def current_narration(session: SessionDependency) -> Utterance | Response:
    """Return the utterance this dashboard's browser should be speaking, if any.

    The same utterance is returned until the browser reports it finished.
    """
    utterance = session.current_utterance()
    if utterance is None:
        return Response(status_code=HTTPStatus.NO_CONTENT)
    return utterance


@router.delete(
    "/sessions/{session_id}/narration/{utterance_id}",
    status_code=HTTPStatus.NO_CONTENT,
)
async def finish_narration(utterance_id: int, session: SessionDependency) -> Response:
    """Mark an utterance as played; stale ids are ignored."""
    session.finish_utterance(utterance_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


__all__ = ["dashboard_error_handler", "router"]
