"""
FastAPI application entrypoint for the SME Vision dashboard.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from sme_vision.api.routes import dashboard_error_handler, router as api_router
from sme_vision.core.config import get_settings
from sme_vision.core.errors import DashboardError
from sme_vision.core.logging import configure_logging
from sme_vision.dependencies import get_session_store


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    get_session_store().close_all()


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="SME Vision Financial Health Dashboard",
        version="0.1.0",
        description=(
            "Dashboard sessions for document analysis, multilingual summaries, "
            "narration, the loan assistant and PDF reports."
        ),
        lifespan=_lifespan,
    )
    app.add_exception_handler(DashboardError, dashboard_error_handler)
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
