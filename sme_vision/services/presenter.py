"""Project a stored analysis result into the dashboard's result views."""

from __future__ import annotations

import logging
from typing import List, Optional

from sme_vision.core.errors import UnsupportedLanguageKey
from sme_vision.schemas import (
    DEFAULT_SUMMARY_LANGUAGE,
    AnalysisResult,
    ChartPoint,
    LoanView,
    MetricCard,
    ResultView,
    SummaryLanguage,
    SummaryView,
)

logger = logging.getLogger(__name__)


def parse_language(code: str | SummaryLanguage) -> SummaryLanguage:
    if isinstance(code, SummaryLanguage):
        return code
    try:
        return SummaryLanguage(str(code).strip().lower())
    except ValueError as exc:
        supported = ", ".join(language.value for language in SummaryLanguage)
        raise UnsupportedLanguageKey(
            f"'{code}' is not a summary language. Choose one of: {supported}."
        ) from exc


def metric_cards(result: AnalysisResult) -> List[MetricCard]:
    metrics = result.investor_metrics
    return [
        MetricCard(key="total_income", label="Income", value=metrics.total_income),
        MetricCard(key="total_expense", label="Expense", value=metrics.total_expense),
        MetricCard(key="net_profit", label="Profit", value=metrics.net_profit),
        MetricCard(key="credit_score", label="Credit", value=metrics.credit_score),
    ]


def chart_series(result: AnalysisResult) -> List[ChartPoint]:
    metrics = result.investor_metrics
    return [
        ChartPoint(category="Income", value=metrics.total_income),
        ChartPoint(category="Expense", value=metrics.total_expense),
    ]


def summary_view(result: AnalysisResult, language: SummaryLanguage) -> SummaryView:
    """Return the narrative for ``language``, falling back to english.

    The fallback is flagged on the view rather than hidden.
    """
    text = result.summary_for(language)
    if text is not None:
        return SummaryView(requested_language=language, language=language, text=text)

    fallback = result.summary_for(DEFAULT_SUMMARY_LANGUAGE)
    if fallback is None:
        raise UnsupportedLanguageKey(
            f"No '{language.value}' summary was returned for this document."
        )
    logger.warning(
        "Summary missing for %s; showing %s instead",
        language.value,
        DEFAULT_SUMMARY_LANGUAGE.value,
    )
    return SummaryView(
        requested_language=language,
        language=DEFAULT_SUMMARY_LANGUAGE,
        text=fallback,
        fallback_used=True,
    )


def loan_view(result: AnalysisResult) -> LoanView:
    loan = result.loan_recommendation
    return LoanView(
        eligible=loan.eligible,
        recommended_amount=loan.recommended_amount,
        tenure_months=loan.tenure_months,
        risk_level=loan.risk_level,
    )


class ResultPresenter:
    """Render result views for the currently selected summary language."""

    def __init__(self, language: SummaryLanguage = DEFAULT_SUMMARY_LANGUAGE) -> None:
        self._language = language

    @property
    def selected_language(self) -> SummaryLanguage:
        return self._language

    def select_language(self, code: str | SummaryLanguage) -> SummaryLanguage:
        self._language = parse_language(code)
        return self._language

    def summary(self, result: AnalysisResult) -> SummaryView:
        return summary_view(result, self._language)

    def render(self, result: Optional[AnalysisResult]) -> Optional[ResultView]:
        if result is None:
            return None
        return ResultView(
            metrics=metric_cards(result),
            chart=chart_series(result),
            summary=self.summary(result),
            loan=loan_view(result),
        )


__all__ = [
    "ResultPresenter",
    "chart_series",
    "loan_view",
    "metric_cards",
    "parse_language",
    "summary_view",
]
