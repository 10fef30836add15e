"""Service layer exports."""

from .chat import CannedReplyStrategy, ChatSession, GeminiReplyStrategy, ReplyStrategy
from .dashboard import DashboardSession, DashboardSessionStore
from .intro import IntroSequencer
from .narration import NarrationEngine, locale_for
from .presenter import ResultPresenter
from .report import ReportDownload, ReportExporter
from .upload import UploadController

__all__ = [
    "CannedReplyStrategy",
    "ChatSession",
    "DashboardSession",
    "DashboardSessionStore",
    "GeminiReplyStrategy",
    "IntroSequencer",
    "NarrationEngine",
    "ReplyStrategy",
    "ReportDownload",
    "ReportExporter",
    "ResultPresenter",
    "UploadController",
    "locale_for",
]
