from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from drivewise.domain.amortization import (
    MONTHS_PER_YEAR,
    AmortizationRow,
    build_amortization_schedule,
    monthly_payment,
)
from drivewise.domain.financing import (
    BUDGET_GUIDELINE_PERCENT,
    DOWN_PAYMENT_SHARE,
    EXCELLENT_PERCENT,
    GOOD_PERCENT,
    LOAN_TERM_MONTHS,
    MONTHLY_INSURANCE,
    MONTHLY_MAINTENANCE,
    AncillaryMonthly,
    BudgetImpact,
    BudgetStatus,
    LoanCostBreakdown,
    LoanCostRequest,
    annual_rate_for,
    monthly_gas_for,
)
from drivewise.domain.money import ZERO, as_decimal, bounded_amount, to_cents
from drivewise.domain.price_text import parse_representative_price

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


@dataclass(frozen=True, slots=True)
class CalculateLoanCost:
    """
    Cost breakdown of financing a chosen vehicle.

    Rounding policy (same as every financing calculation here):
    - Intermediate calculations use full precision Decimal
    - Down payment and monthly payment are rounded to cents (ROUND_HALF_UP)
    - Totals are computed from the rounded monthly payment, so
      total_interest_over_term = monthly_loan_payment * term_months - loan_amount

    The loan math never depends on income; only the budget verdict does.
    An unknown price (0) still yields a full breakdown, flagged with
    price_known=False and without a budget verdict.
    """

    term_months: int = LOAN_TERM_MONTHS
    down_payment_share: Decimal = DOWN_PAYMENT_SHARE

    def execute(self, req: LoanCostRequest) -> LoanCostBreakdown:
        vehicle_price = resolve_vehicle_price(req)
        price_known = vehicle_price > 0
        if not price_known:
            logger.info(
                "Vehicle price unknown, budget verdict suppressed",
                extra={"price_text": req.price_text},
            )

        down_payment = to_cents(vehicle_price * self.down_payment_share)
        loan_amount = vehicle_price - down_payment
        annual_rate = annual_rate_for(req.profile.credit_score_tier)
        payment = to_cents(monthly_payment(loan_amount, annual_rate, self.term_months))

        ancillary = AncillaryMonthly(
            insurance=MONTHLY_INSURANCE,
            gas=monthly_gas_for(req.fuel_economy_city_mpg),
            maintenance=MONTHLY_MAINTENANCE,
        )
        term = Decimal(self.term_months)
        total_monthly_cost = payment + ancillary.total
        total_interest = payment * term - loan_amount
        total_cost = vehicle_price + total_interest + ancillary.total * term

        budget_impact = None
        if price_known:
            budget_impact = assess_budget_impact(
                total_monthly_cost, req.profile.known_annual_income()
            )

        return LoanCostBreakdown(
            vehicle_price=vehicle_price,
            price_known=price_known,
            down_payment=down_payment,
            loan_amount=loan_amount,
            annual_interest_rate=annual_rate,
            term_months=self.term_months,
            monthly_loan_payment=payment,
            ancillary_monthly=ancillary,
            total_monthly_cost=total_monthly_cost,
            total_interest_over_term=total_interest,
            total_cost_over_term=total_cost,
            budget_impact=budget_impact,
            schedule=self._schedule(req, loan_amount, annual_rate, payment),
        )

    def _schedule(
        self, req: LoanCostRequest, loan_amount: Decimal, annual_rate: Decimal, payment: Decimal
    ) -> tuple[AmortizationRow, ...]:
        if req.schedule_months <= 0 or loan_amount <= 0:
            return ()
        rows = build_amortization_schedule(
            loan_amount, annual_rate, self.term_months, payment, months=req.schedule_months
        )
        return tuple(rows)


def resolve_vehicle_price(req: LoanCostRequest) -> Decimal:
    """Explicit price wins over the catalog label. Clamped into [0, MAX_AMOUNT]."""
    price = as_decimal(req.vehicle_price)
    if price is None:
        price = parse_representative_price(req.price_text)
    return to_cents(bounded_amount(price))


def assess_budget_impact(
    total_monthly_cost: Decimal, annual_income: Decimal | None
) -> BudgetImpact | None:
    """
    Compare the monthly cost of ownership with gross monthly income.

    within_guideline is strict: exactly 20% is already outside the guideline.
    The verdict uses the unrounded ratio; the reported percent is rounded.
    """
    if annual_income is None or annual_income <= ZERO:
        return None

    percent = total_monthly_cost / (annual_income / MONTHS_PER_YEAR) * HUNDRED
    within_guideline = percent < BUDGET_GUIDELINE_PERCENT

    if percent <= EXCELLENT_PERCENT:
        status = BudgetStatus.EXCELLENT
    elif percent <= GOOD_PERCENT:
        status = BudgetStatus.GOOD
    elif within_guideline:
        status = BudgetStatus.CAUTION
    else:
        status = BudgetStatus.WARNING

    return BudgetImpact(
        percent_of_monthly_income=to_cents(percent),
        within_guideline=within_guideline,
        status=status,
    )
