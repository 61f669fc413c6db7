"""
Unit tests for FastAPI dependency injection functions.

Each provider builds a fresh use case per request, reading configuration
from the environment at call time.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from drivewise.entrypoints.http.dependencies import (
    get_calculate_loan_cost_use_case,
    get_compare_financing_terms_use_case,
    get_compare_lease_vs_buy_use_case,
    get_estimate_affordability_use_case,
    get_estimate_lease_options_use_case,
    get_match_budget_brackets_use_case,
)
from drivewise.infra.config import BRACKET_OVERLAP_THRESHOLD_ENV, NET_INCOME_RATIO_ENV
from drivewise.use_cases.calculate_loan_cost import CalculateLoanCost
from drivewise.use_cases.compare_financing_terms import CompareFinancingTerms
from drivewise.use_cases.compare_lease_vs_buy import CompareLeaseVsBuy
from drivewise.use_cases.estimate_affordability import EstimateAffordability
from drivewise.use_cases.estimate_lease_options import EstimateLeaseOptions
from drivewise.use_cases.match_budget_brackets import MatchBudgetBrackets


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(NET_INCOME_RATIO_ENV, raising=False)
    monkeypatch.delenv(BRACKET_OVERLAP_THRESHOLD_ENV, raising=False)


# ==============================================================================
# Affordability
# ==============================================================================


def test_estimate_affordability_uses_default_ratio() -> None:
    use_case = get_estimate_affordability_use_case()

    assert isinstance(use_case, EstimateAffordability)
    assert use_case.net_income_ratio == Decimal("1")


def test_estimate_affordability_reads_ratio_per_call(monkeypatch: pytest.MonkeyPatch) -> None:
    """No caching: a changed environment is picked up by the next request."""
    first = get_estimate_affordability_use_case()
    monkeypatch.setenv(NET_INCOME_RATIO_ENV, "0.8")
    second = get_estimate_affordability_use_case()

    assert first.net_income_ratio == Decimal("1")
    assert second.net_income_ratio == Decimal("0.8")


def test_estimate_affordability_rejects_invalid_ratio(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(NET_INCOME_RATIO_ENV, "2")

    with pytest.raises(RuntimeError):
        get_estimate_affordability_use_case()


def test_match_budget_brackets_reads_threshold(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(BRACKET_OVERLAP_THRESHOLD_ENV, "0.5")

    use_case = get_match_budget_brackets_use_case()

    assert isinstance(use_case, MatchBudgetBrackets)
    assert use_case.overlap_threshold == Decimal("0.5")


# ==============================================================================
# Financing
# ==============================================================================


def test_calculate_loan_cost_defaults() -> None:
    use_case = get_calculate_loan_cost_use_case()

    assert isinstance(use_case, CalculateLoanCost)
    assert use_case.term_months == 60
    assert use_case.down_payment_share == Decimal("0.20")


def test_compare_financing_terms_defaults() -> None:
    use_case = get_compare_financing_terms_use_case()

    assert isinstance(use_case, CompareFinancingTerms)
    assert use_case.terms == (36, 48, 60, 72)


def test_estimate_lease_options_provider() -> None:
    assert isinstance(get_estimate_lease_options_use_case(), EstimateLeaseOptions)


def test_compare_lease_vs_buy_provider() -> None:
    use_case = get_compare_lease_vs_buy_use_case()

    assert isinstance(use_case, CompareLeaseVsBuy)
    assert use_case.financing.terms == (36, 48, 60, 72)


def test_providers_return_new_instances() -> None:
    assert get_calculate_loan_cost_use_case() is not get_calculate_loan_cost_use_case()
