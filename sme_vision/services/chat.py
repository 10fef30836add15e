"""Dashboard assistant transcript and reply strategies."""

from __future__ import annotations

import json
import logging
from textwrap import dedent
from typing import Callable, List, Optional, Protocol, Sequence

from sme_vision.clients.gemini import GeminiClient, GeminiModelError
from sme_vision.schemas import AnalysisResult, ChatMessage

logger = logging.getLogger(__name__)

DEFAULT_CANNED_REPLY = "Your financial profile looks suitable for a business loan."


class ReplyStrategy(Protocol):
    async def reply(
        self,
        *,
        question: str,
        history: Sequence[ChatMessage],
        result: Optional[AnalysisResult],
    ) -> str:
        ...


class CannedReplyStrategy:
    """Answer every question with the same sentence."""

    def __init__(self, text: str = DEFAULT_CANNED_REPLY) -> None:
        self._text = text

    async def reply(self, **_: object) -> str:
        return self._text


class GeminiReplyStrategy:
    """Ask Gemini to answer using the current analysis as context.

    Falls back to the canned sentence when Gemini is unavailable so every
    submission still produces a bot turn.
    """

    def __init__(
        self,
        gemini_client: GeminiClient,
        fallback: CannedReplyStrategy | None = None,
        *,
        history_limit: int = 10,
    ) -> None:
        self._gemini = gemini_client
        self._fallback = fallback or CannedReplyStrategy()
        self._history_limit = history_limit

    async def reply(
        self,
        *,
        question: str,
        history: Sequence[ChatMessage],
        result: Optional[AnalysisResult],
    ) -> str:
        prompt = self._build_prompt(question=question, history=history, result=result)
        try:
            response = await self._gemini.generate_text(prompt)
        except GeminiModelError as exc:
            logger.warning("Gemini reply unavailable, using canned reply: %s", exc)
            return await self._fallback.reply()
        text = (response or "").strip()
        return text or await self._fallback.reply()

    def _build_prompt(
        self,
        *,
        question: str,
        history: Sequence[ChatMessage],
        result: Optional[AnalysisResult],
    ) -> str:
        system_prompt = dedent(
            """
            You are the assistant inside a financial health dashboard for small
            businesses. Answer questions about loans, EMIs, cash flow and risk
            in plain language.

            Requirements:
            - Base every figure you mention on the analysis provided.
            - If no analysis is available, say so and answer generally.
            - Never mention internal schemas or JSON structures to the user.
            - Keep replies under 3 short paragraphs.
            """
        ).strip()

        payload = {
            "analysis": result.to_payload() if result else None,
            "history": [
                message.model_dump() for message in list(history)[-self._history_limit :]
            ],
            "question": question,
        }
        return f"{system_prompt}\nContext:\n{json.dumps(payload, default=str)}"


class ChatSession:
    """Append-only transcript where every question gets exactly one reply.

    ``result_provider`` supplies the analysis the assistant may refer to.
    """

    def __init__(
        self,
        strategy: ReplyStrategy | None = None,
        *,
        result_provider: Callable[[], Optional[AnalysisResult]] = lambda: None,
    ) -> None:
        self._strategy = strategy or CannedReplyStrategy()
        self._result_provider = result_provider
        self._transcript: List[ChatMessage] = []
        self.draft = ""

    @property
    def transcript(self) -> tuple[ChatMessage, ...]:
        return tuple(self._transcript)

    def update_draft(self, text: str) -> None:
        self.draft = text

    async def submit(self, text: str | None = None) -> List[ChatMessage]:
        """Append the question and its reply; blank input is ignored.

        Returns the appended messages, or an empty list for blank input.
        """
        question = self.draft if text is None else text
        if not question or not question.strip():
            return []

        reply = await self._strategy.reply(
            question=question,
            history=self.transcript,
            result=self._result_provider(),
        )
        turn = [
            ChatMessage(role="user", text=question),
            ChatMessage(role="bot", text=reply),
        ]
        self._transcript.extend(turn)
        self.draft = ""
        logger.debug("Chat transcript now holds %d messages", len(self._transcript))
        return turn


__all__ = [
    "CannedReplyStrategy",
    "ChatSession",
    "DEFAULT_CANNED_REPLY",
    "GeminiReplyStrategy",
    "ReplyStrategy",
]
