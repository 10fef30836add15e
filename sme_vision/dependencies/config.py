"""
FastAPI dependency utilities for injecting dashboard configuration.
"""

from typing import Annotated

from fastapi import Depends

from sme_vision.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning the cached application settings."""
    return get_settings()


SettingsDependency = Annotated[AppSettings, Depends(get_app_settings)]

__all__ = ["SettingsDependency", "get_app_settings"]
