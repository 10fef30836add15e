"""
View models produced by the dashboard session and returned by the API.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .analysis import Number, SummaryLanguage


class UiPhase(str, Enum):
    """Which view tree is active. Phases only ever move forward."""

    INTRO = "intro"
    EXPANDED = "expanded"
    MAIN = "main"

    @property
    def rank(self) -> int:
        return _PHASE_ORDER.index(self)


_PHASE_ORDER = (UiPhase.INTRO, UiPhase.EXPANDED, UiPhase.MAIN)


class ChatMessage(BaseModel):
    """One turn of the dashboard assistant transcript."""

    role: Literal["user", "bot"]
    text: str


class ChatRequest(BaseModel):
    text: Optional[str] = Field(
        None,
        description="Question typed into the assistant box. Omit to send the saved draft.",
    )


class ChatDraft(BaseModel):
    text: str = Field("", description="Unsent text in the assistant box.")


class NarrationRequest(BaseModel):
    """Text and locale handed to the speech engine for one utterance."""

    text: str
    locale: str = Field(..., description="BCP 47 tag such as en-US or ta-IN.")
    rate: float = 1.0


class Utterance(NarrationRequest):
    """Narration request accepted by the speech relay."""

    utterance_id: int = Field(..., description="Monotonic id; the newest wins.")


class MetricCard(BaseModel):
    key: str
    label: str
    value: Number


class ChartPoint(BaseModel):
    category: str
    value: Number


class SummaryView(BaseModel):
    requested_language: SummaryLanguage
    language: SummaryLanguage = Field(
        ..., description="Language the text is actually in."
    )
    text: str
    fallback_used: bool = False


class LoanView(BaseModel):
    eligible: Union[bool, str]
    recommended_amount: Number
    tenure_months: int
    risk_level: str


class ResultView(BaseModel):
    """Everything rendered from a stored analysis result."""

    metrics: List[MetricCard]
    chart: List[ChartPoint]
    summary: SummaryView
    loan: LoanView


class DashboardView(BaseModel):
    session_id: str
    phase: UiPhase
    intro_visible: bool
    selected_file: Optional[str] = None
    is_loading: bool = False
    selected_language: SummaryLanguage
    result: Optional[ResultView] = None
    transcript: List[ChatMessage] = Field(default_factory=list)
    draft: str = ""


class LanguageSelection(BaseModel):
    language: str = Field(..., description="One of english, tamil or hindi.")


class Notice(BaseModel):
    """Error payload shown to the user as a blocking notice."""

    error: str
    message: str


__all__ = [
    "ChartPoint",
    "ChatDraft",
    "ChatMessage",
    "ChatRequest",
    "DashboardView",
    "LanguageSelection",
    "LoanView",
    "MetricCard",
    "NarrationRequest",
    "Notice",
    "ResultView",
    "SummaryView",
    "UiPhase",
    "Utterance",
]
