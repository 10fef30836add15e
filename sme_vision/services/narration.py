"""Narration on top of the shared speech engine."""

from __future__ import annotations

import logging

from sme_vision.clients.speech import SpeechEngine
from sme_vision.schemas import NarrationRequest

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"

_LOCALES = {
    "tamil": "ta-IN",
    "hindi": "hi-IN",
}


def locale_for(language: str | None) -> str:
    """Map a summary language code to a speech locale; unknown codes speak en-US."""
    if language is None:
        return DEFAULT_LOCALE
    return _LOCALES.get(str(getattr(language, "value", language)).lower(), DEFAULT_LOCALE)


class NarrationEngine:
    """Speak text so the most recent request always wins.

    Every call cancels whatever the engine is playing or has queued before
    enqueueing exactly one new utterance.
    """

    def __init__(self, engine: SpeechEngine) -> None:
        self._engine = engine

    def speak(
        self, text: str, language: str | None = None, *, rate: float = 1.0
    ) -> NarrationRequest:
        request = NarrationRequest(text=text, locale=locale_for(language), rate=rate)
        self._engine.cancel_all()
        self._engine.speak(request.text, request.locale, request.rate)
        logger.debug("Narration requested in %s", request.locale)
        return request


__all__ = ["DEFAULT_LOCALE", "NarrationEngine", "locale_for"]
