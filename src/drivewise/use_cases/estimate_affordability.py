from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from drivewise.domain.affordability import (
    CONSERVATIVE_MIN_SHARE,
    CONSERVATIVE_SHARE,
    DEFAULT_NET_INCOME_RATIO,
    GAS_CEILING,
    GAS_SHARE,
    INSURANCE_CEILING,
    INSURANCE_SHARE,
    MAINTENANCE_CEILING,
    MAINTENANCE_SHARE,
    MODERATE_SHARE,
    PLANNING_ANNUAL_RATE,
    PLANNING_DOWN_PAYMENT_SHARE,
    PLANNING_TERM_MONTHS,
    RECOMMENDATION_INCOME_SHARE,
    STEP_DOWN_MIN_SHARE,
    AffordabilityDerived,
    AffordabilityResult,
    AncillaryCosts,
    PriceRange,
    PriceTiers,
)
from drivewise.domain.amortization import MONTHS_PER_YEAR, principal_for_payment
from drivewise.domain.money import ONE, non_negative, round_to_thousand, to_cents
from drivewise.domain.profile import FinancialProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EstimateAffordability:
    """
    Recommend a vehicle price range from income using the 10% rule.

    Steps:
    - Net monthly income = annual income / 12 * net_income_ratio
      (ratio defaults to 1: gross is treated as net)
    - 10% of it is the total monthly vehicle budget
    - Insurance, gas and maintenance are estimated, each capped by a fixed
      ceiling and by a share of that budget
    - The remainder is the largest monthly loan payment, converted to a loan
      principal at a fixed 6% / 48-month planning assumption
    - That principal is 80% of the car price (20% down payment)

    Returns None when the profile carries no usable income. That is an
    expected outcome (incomplete onboarding), not an error.
    """

    net_income_ratio: Decimal = DEFAULT_NET_INCOME_RATIO

    def execute(self, profile: FinancialProfile) -> AffordabilityResult | None:
        annual_income = profile.known_annual_income()
        if annual_income is None:
            logger.info("Affordability estimate skipped: no income on profile")
            return None

        gross_monthly_income = annual_income / MONTHS_PER_YEAR
        net_monthly_income = gross_monthly_income * self.net_income_ratio
        max_monthly_car_expense = net_monthly_income * RECOMMENDATION_INCOME_SHARE

        insurance = min(INSURANCE_CEILING, INSURANCE_SHARE * max_monthly_car_expense)
        gas = min(GAS_CEILING, GAS_SHARE * max_monthly_car_expense)
        maintenance = min(MAINTENANCE_CEILING, MAINTENANCE_SHARE * max_monthly_car_expense)
        ancillary_total = insurance + gas + maintenance

        max_monthly_loan_payment = non_negative(max_monthly_car_expense - ancillary_total)
        max_loan_amount = principal_for_payment(
            max_monthly_loan_payment, PLANNING_ANNUAL_RATE, PLANNING_TERM_MONTHS
        )
        max_car_price = max_loan_amount / (ONE - PLANNING_DOWN_PAYMENT_SHARE)

        return AffordabilityResult(
            max_monthly_car_expense=to_cents(max_monthly_car_expense),
            ancillary_costs=AncillaryCosts(
                insurance=to_cents(insurance),
                gas=to_cents(gas),
                maintenance=to_cents(maintenance),
                total=to_cents(ancillary_total),
            ),
            max_monthly_loan_payment=to_cents(max_monthly_loan_payment),
            price_tiers=build_price_tiers(max_car_price),
            derived=AffordabilityDerived(
                gross_monthly_income=to_cents(gross_monthly_income),
                net_monthly_income=to_cents(net_monthly_income),
                max_car_price=to_cents(max_car_price),
                implied_down_payment=to_cents(max_car_price * PLANNING_DOWN_PAYMENT_SHARE),
                implied_loan_amount=to_cents(max_loan_amount),
            ),
        )


def build_price_tiers(max_car_price: Decimal) -> PriceTiers:
    """Overlapping conservative/moderate/optimistic bands, rounded to the nearest 1,000."""
    conservative_max = max_car_price * CONSERVATIVE_SHARE
    moderate_max = max_car_price * MODERATE_SHARE

    return PriceTiers(
        conservative=PriceRange(
            min=round_to_thousand(conservative_max * CONSERVATIVE_MIN_SHARE),
            max=round_to_thousand(conservative_max),
        ),
        moderate=PriceRange(
            min=round_to_thousand(conservative_max * STEP_DOWN_MIN_SHARE),
            max=round_to_thousand(moderate_max),
        ),
        optimistic=PriceRange(
            min=round_to_thousand(moderate_max * STEP_DOWN_MIN_SHARE),
            max=round_to_thousand(max_car_price),
        ),
    )
