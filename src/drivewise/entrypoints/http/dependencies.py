"""
Dependency injection for FastAPI routes.

Use cases are pure and hold no per-request state; they are still built per
request so configuration read from the environment is picked up without a
restart, and so tests can override each provider independently.
"""

from __future__ import annotations

from drivewise.infra.config import bracket_overlap_threshold, net_income_ratio
from drivewise.use_cases.calculate_loan_cost import CalculateLoanCost
from drivewise.use_cases.compare_financing_terms import CompareFinancingTerms
from drivewise.use_cases.compare_lease_vs_buy import CompareLeaseVsBuy
from drivewise.use_cases.estimate_affordability import EstimateAffordability
from drivewise.use_cases.estimate_lease_options import EstimateLeaseOptions
from drivewise.use_cases.match_budget_brackets import MatchBudgetBrackets


def get_estimate_affordability_use_case() -> EstimateAffordability:
    """
    Factory function that returns a configured EstimateAffordability use case.

    Raises:
        RuntimeError: If DRIVEWISE_NET_INCOME_RATIO is set to an invalid value
    """
    return EstimateAffordability(net_income_ratio=net_income_ratio())


def get_match_budget_brackets_use_case() -> MatchBudgetBrackets:
    return MatchBudgetBrackets(overlap_threshold=bracket_overlap_threshold())


def get_calculate_loan_cost_use_case() -> CalculateLoanCost:
    return CalculateLoanCost()


def get_compare_financing_terms_use_case() -> CompareFinancingTerms:
    return CompareFinancingTerms()


def get_estimate_lease_options_use_case() -> EstimateLeaseOptions:
    return EstimateLeaseOptions()


def get_compare_lease_vs_buy_use_case() -> CompareLeaseVsBuy:
    return CompareLeaseVsBuy()
