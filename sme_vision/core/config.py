"""
Application configuration models and helpers.

Centralizes settings management so the dashboard API, the session
components and the maintenance scripts share a consistent configuration
surface.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal, Optional

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Best-effort load key=value pairs from a .env file without extra deps."""
    env_path = Path(path)
    if not env_path.exists():
        return
    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        if not key or key in os.environ:
            continue
        cleaned = value.strip().strip('"').strip("'")
        os.environ[key] = cleaned


_load_env_file()


class BackendSettings(BaseSettings):
    """Location of the remote analysis and report rendering service."""

    model_config = SettingsConfigDict(populate_by_name=True)

    base_url: str = Field(
        "https://sme-vision-backend.onrender.com",
        validation_alias="SME_BACKEND_URL",
    )
    analyze_path: str = Field(
        "/analyze/final-report", validation_alias="SME_ANALYZE_PATH"
    )
    report_path: str = Field("/download-pdf", validation_alias="SME_REPORT_PATH")
    timeout_seconds: float = Field(60.0, validation_alias="SME_BACKEND_TIMEOUT")
    request_attempts: int = Field(
        1,
        ge=1,
        validation_alias="SME_BACKEND_ATTEMPTS",
        description="Total attempts per backend call. One means no retry.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class IntroSettings(BaseSettings):
    """Timing and narration for the splash sequence."""

    model_config = SettingsConfigDict(populate_by_name=True)

    expand_delay_ms: int = Field(1800, ge=0, validation_alias="INTRO_EXPAND_DELAY_MS")
    main_delay_ms: int = Field(4200, ge=0, validation_alias="INTRO_MAIN_DELAY_MS")
    welcome_text: str = Field(
        "Welcome to SME Vision", validation_alias="INTRO_WELCOME_TEXT"
    )
    welcome_rate: float = Field(0.95, gt=0, validation_alias="INTRO_WELCOME_RATE")


class UploadSettings(BaseSettings):
    """Client-side checks applied before a document is sent for analysis."""

    model_config = SettingsConfigDict(populate_by_name=True)

    allowed_extensions: Annotated[tuple[str, ...], NoDecode] = Field(
        ("csv", "xlsx", "pdf"), validation_alias="UPLOAD_ALLOWED_EXTENSIONS"
    )
    max_upload_bytes: int = Field(
        15 * 1024 * 1024, gt=0, validation_alias="UPLOAD_MAX_BYTES"
    )

    @field_validator("allowed_extensions", mode="before")
    @classmethod
    def _split_extensions(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing extensions as a comma-separated string."""
        if isinstance(value, str):
            value = value.split(",")
        return tuple(
            item.strip().lower().lstrip(".") for item in value if item.strip()
        )


class ChatSettings(BaseSettings):
    """Configuration for the dashboard assistant."""

    model_config = SettingsConfigDict(populate_by_name=True)

    reply_strategy: Literal["canned", "gemini"] = Field(
        "canned", validation_alias="CHAT_REPLY_STRATEGY"
    )
    canned_reply: str = Field(
        "Your financial profile looks suitable for a business loan.",
        validation_alias="CHAT_CANNED_REPLY",
    )


class GeminiSettings(BaseSettings):
    """Configuration for Gemini model access."""

    model_config = SettingsConfigDict(populate_by_name=True)

    api_key: Optional[str] = Field(None, validation_alias="GEMINI_API_KEY")
    model_name: str = Field("gemini-1.5-flash", validation_alias="GEMINI_MODEL_NAME")


class AppSettings(BaseSettings):
    """Root settings object for the dashboard application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    report_filename: str = Field(
        "SME_Financial_Report.pdf", validation_alias="REPORT_FILENAME"
    )
    backend: BackendSettings = Field(default_factory=BackendSettings)
    intro: IntroSettings = Field(default_factory=IntroSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "BackendSettings",
    "ChatSettings",
    "GeminiSettings",
    "IntroSettings",
    "UploadSettings",
    "get_settings",
]
