try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from sme_vision.core.errors import UnsupportedLanguageKey
from sme_vision.schemas import AnalysisResult, SummaryLanguage
from sme_vision.services.presenter import ResultPresenter, chart_series, parse_language


@pytest.fixture
def result(analysis_payload) -> AnalysisResult:
    return AnalysisResult.model_validate(analysis_payload)


def test_render_without_result_shows_nothing():
    assert ResultPresenter().render(None) is None


def test_render_projects_metrics_chart_and_loan(result):
    view = ResultPresenter().render(result)

    assert [(card.label, card.value) for card in view.metrics] == [
        ("Income", 100000),
        ("Expense", 40000),
        ("Profit", 60000),
        ("Credit", 750),
    ]
    assert [point.model_dump() for point in view.chart] == [
        {"category": "Income", "value": 100000},
        {"category": "Expense", "value": 40000},
    ]
    assert view.loan.model_dump() == {
        "eligible": True,
        "recommended_amount": 500000,
        "tenure_months": 24,
        "risk_level": "Low",
    }
    assert view.summary.text == "Healthy"
    assert view.summary.language is SummaryLanguage.ENGLISH


@pytest.mark.parametrize(
    "language, expected",
    [("english", "Healthy"), ("tamil", "ஆரோக்கியமானது"), ("hindi", "स्वस्थ")],
)
def test_switching_language_changes_only_the_summary(result, language, expected):
    presenter = ResultPresenter()
    before = presenter.render(result)

    presenter.select_language(language)
    after = presenter.render(result)

    assert after.summary.text == expected
    assert after.summary.fallback_used is False
    assert after.metrics == before.metrics
    assert after.chart == before.chart
    assert after.loan == before.loan


def test_select_language_rejects_unknown_code():
    presenter = ResultPresenter()
    presenter.select_language("tamil")

    with pytest.raises(UnsupportedLanguageKey):
        presenter.select_language("french")

    assert presenter.selected_language is SummaryLanguage.TAMIL


def test_parse_language_normalizes_case():
    assert parse_language(" Hindi ") is SummaryLanguage.HINDI


def test_missing_language_falls_back_to_english_visibly(analysis_payload):
    del analysis_payload["ai_summary"]["tamil"]
    result = AnalysisResult.model_validate(analysis_payload)
    presenter = ResultPresenter()
    presenter.select_language("tamil")

    summary = presenter.render(result).summary

    assert summary.text == "Healthy"
    assert summary.fallback_used is True
    assert summary.requested_language is SummaryLanguage.TAMIL
    assert summary.language is SummaryLanguage.ENGLISH


def test_chart_series_follows_result(analysis_payload):
    analysis_payload["investor_metrics"]["total_expense"] = 12.5
    result = AnalysisResult.model_validate(analysis_payload)

    assert [point.value for point in chart_series(result)] == [100000, 12.5]
