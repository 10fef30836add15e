"""
Pydantic models describing the remote analysis payload.

The backend speaks snake_case; camelCase keys are accepted as aliases. Unknown
keys are preserved so the result can be posted back for report rendering
exactly as it was received.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class SummaryLanguage(str, Enum):
    """Languages the AI summary is delivered in."""

    ENGLISH = "english"
    TAMIL = "tamil"
    HINDI = "hindi"


DEFAULT_SUMMARY_LANGUAGE = SummaryLanguage.ENGLISH


class _ReceivedModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class InvestorMetrics(_ReceivedModel):
    """Aggregate figures summarizing the analyzed document."""

    total_income: Number = Field(..., description="Total income in rupees.")
    total_expense: Number = Field(..., description="Total expense in rupees.")
    net_profit: Number = Field(..., description="Income minus expense.")
    credit_score: Number = Field(..., description="Derived credit score.")


class LoanRecommendation(_ReceivedModel):
    """Eligibility, amount, tenure and risk assessment for a business loan."""

    eligible: Union[bool, str] = Field(
        ..., description="Eligibility flag, rendered exactly as received."
    )
    recommended_amount: Number = Field(...)
    tenure_months: int = Field(..., ge=0)
    risk_level: str = Field(..., description="Risk bucket such as Low or High.")


class AnalysisResult(_ReceivedModel):
    """Structured output of the analysis engine for one submitted document."""

    investor_metrics: InvestorMetrics
    ai_summary: Dict[str, str] = Field(
        ..., description="Narrative text keyed by language code."
    )
    loan_recommendation: LoanRecommendation

    @field_validator("ai_summary")
    @classmethod
    def _require_default_language(cls, value: Dict[str, str]) -> Dict[str, str]:
        """The english narrative backs every other language, so it must exist."""
        if not (value.get(DEFAULT_SUMMARY_LANGUAGE.value) or "").strip():
            raise ValueError("ai_summary must include a non-empty 'english' entry")
        return value

    def summary_for(self, language: SummaryLanguage) -> str | None:
        text = self.ai_summary.get(language.value)
        return text if text else None

    def to_payload(self) -> dict:
        """Serialize with the backend's field names for the report endpoint."""
        return self.model_dump(mode="json")


__all__ = [
    "AnalysisResult",
    "DEFAULT_SUMMARY_LANGUAGE",
    "InvestorMetrics",
    "LoanRecommendation",
    "SummaryLanguage",
]
