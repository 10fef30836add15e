"""Public schema exports."""

from .analysis import (
    DEFAULT_SUMMARY_LANGUAGE,
    AnalysisResult,
    InvestorMetrics,
    LoanRecommendation,
    SummaryLanguage,
)
from .upload import SelectedFile
from .dashboard import (
    ChartPoint,
    ChatDraft,
    ChatMessage,
    ChatRequest,
    DashboardView,
    LanguageSelection,
    LoanView,
    MetricCard,
    NarrationRequest,
    Notice,
    ResultView,
    SummaryView,
    UiPhase,
    Utterance,
)

__all__ = [
    "DEFAULT_SUMMARY_LANGUAGE",
    "AnalysisResult",
    "ChartPoint",
    "ChatDraft",
    "ChatMessage",
    "ChatRequest",
    "DashboardView",
    "InvestorMetrics",
    "LanguageSelection",
    "LoanRecommendation",
    "LoanView",
    "MetricCard",
    "NarrationRequest",
    "Notice",
    "ResultView",
    "SelectedFile",
    "SummaryLanguage",
    "SummaryView",
    "UiPhase",
    "Utterance",
]
