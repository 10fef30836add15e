"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from sme_vision.clients import AnalysisClient, GeminiClient
from sme_vision.core.config import get_settings
from sme_vision.services import (
    CannedReplyStrategy,
    DashboardSessionStore,
    GeminiReplyStrategy,
    ReplyStrategy,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_analysis_client() -> AnalysisClient:
    """Provide the remote analysis and report client."""
    settings = _settings()
    return AnalysisClient(settings.backend)


@lru_cache()
def get_gemini_client() -> GeminiClient | None:
    """Provide Gemini client when an API key is configured."""
    settings = _settings()
    if not settings.gemini.api_key:
        return None
    return GeminiClient(settings.gemini)


@lru_cache()
def get_reply_strategy() -> ReplyStrategy:
    """Select the assistant reply strategy from configuration."""
    settings = _settings()
    canned = CannedReplyStrategy(settings.chat.canned_reply)
    if settings.chat.reply_strategy == "gemini":
        gemini = get_gemini_client()
        if gemini is not None:
            return GeminiReplyStrategy(gemini, canned)
    return canned


@lru_cache()
def get_session_store() -> DashboardSessionStore:
    """Provide the process-local dashboard session registry."""
    return DashboardSessionStore()


__all__ = [
    "get_analysis_client",
    "get_gemini_client",
    "get_reply_strategy",
    "get_session_store",
]
