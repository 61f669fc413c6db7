from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

# 10% rule: total monthly vehicle spend recommended against net monthly income
RECOMMENDATION_INCOME_SHARE = Decimal("0.10")

# Ancillary estimates: min(ceiling, share * max monthly car expense)
INSURANCE_CEILING = Decimal("200")
INSURANCE_SHARE = Decimal("0.30")
GAS_CEILING = Decimal("150")
GAS_SHARE = Decimal("0.25")
MAINTENANCE_CEILING = Decimal("100")
MAINTENANCE_SHARE = Decimal("0.15")

# Planning assumptions, independent of the borrower's credit tier
PLANNING_ANNUAL_RATE = Decimal("0.06")
PLANNING_TERM_MONTHS = 48
PLANNING_DOWN_PAYMENT_SHARE = Decimal("0.20")

CONSERVATIVE_SHARE = Decimal("0.8")
MODERATE_SHARE = Decimal("0.9")
CONSERVATIVE_MIN_SHARE = Decimal("0.6")
STEP_DOWN_MIN_SHARE = Decimal("0.8")

DEFAULT_NET_INCOME_RATIO = Decimal("1")
DEFAULT_BRACKET_OVERLAP_THRESHOLD = Decimal("0.30")


@dataclass(frozen=True, slots=True)
class AncillaryCosts:
    insurance: Decimal
    gas: Decimal
    maintenance: Decimal
    total: Decimal


@dataclass(frozen=True, slots=True)
class PriceRange:
    min: Decimal
    max: Decimal

    @property
    def width(self) -> Decimal:
        return self.max - self.min


@dataclass(frozen=True, slots=True)
class PriceTiers:
    """Ascending, overlapping confidence bands."""

    conservative: PriceRange
    moderate: PriceRange
    optimistic: PriceRange


@dataclass(frozen=True, slots=True)
class AffordabilityDerived:
    gross_monthly_income: Decimal
    net_monthly_income: Decimal
    max_car_price: Decimal
    implied_down_payment: Decimal
    implied_loan_amount: Decimal


@dataclass(frozen=True, slots=True)
class AffordabilityResult:
    max_monthly_car_expense: Decimal
    ancillary_costs: AncillaryCosts
    max_monthly_loan_payment: Decimal
    price_tiers: PriceTiers
    derived: AffordabilityDerived


@dataclass(frozen=True, slots=True)
class BudgetBracket:
    """A budget option offered to the user. ``max`` is None for open-ended options."""

    label: str
    min: Decimal
    max: Decimal | None = None


@dataclass(frozen=True, slots=True)
class BracketRecommendation:
    bracket: BudgetBracket
    overlap: Decimal
    recommended: bool


@dataclass(frozen=True, slots=True)
class BracketMatchRequest:
    labels: tuple[str, ...]
    moderate_tier: PriceRange
