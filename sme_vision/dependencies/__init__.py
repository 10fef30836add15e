"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_analysis_client,
    get_gemini_client,
    get_reply_strategy,
    get_session_store,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_analysis_client",
    "get_app_settings",
    "get_gemini_client",
    "get_reply_strategy",
    "get_session_store",
]
