"""Pytest configuration shared across the suite."""

import copy

import pytest

SAMPLE_ANALYSIS = {
    "investor_metrics": {
        "total_income": 100000,
        "total_expense": 40000,
        "net_profit": 60000,
        "credit_score": 750,
    },
    "ai_summary": {
        "english": "Healthy",
        "tamil": "ஆரோக்கியமானது",
        "hindi": "स्वस्थ",
    },
    "loan_recommendation": {
        "eligible": True,
        "recommended_amount": 500000,
        "tenure_months": 24,
        "risk_level": "Low",
    },
}


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def analysis_payload() -> dict:
    """Fresh copy of a complete analysis response."""
    return copy.deepcopy(SAMPLE_ANALYSIS)
