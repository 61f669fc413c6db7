from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from drivewise.domain.amortization import AmortizationRow
from drivewise.domain.errors import ValidationError
from drivewise.domain.profile import CreditScoreTier, FinancialProfile

DOWN_PAYMENT_SHARE = Decimal("0.20")
LOAN_TERM_MONTHS = 60

EXCELLENT_CREDIT_ANNUAL_RATE = Decimal("0.045")
STANDARD_ANNUAL_RATE = Decimal("0.065")

MONTHLY_INSURANCE = Decimal("150")
MONTHLY_MAINTENANCE = Decimal("75")
MONTHLY_GAS_EFFICIENT = Decimal("100")
MONTHLY_GAS_STANDARD = Decimal("150")
EFFICIENT_CITY_MPG = Decimal("35")

# 20% guideline: looser than the 10% rule used for recommendations
BUDGET_GUIDELINE_PERCENT = Decimal("20")
EXCELLENT_PERCENT = Decimal("10")
GOOD_PERCENT = Decimal("15")

FINANCING_TERMS = (36, 48, 60, 72)

LEASE_RESIDUAL_SHARES = {
    24: Decimal("0.65"),
    36: Decimal("0.55"),
    48: Decimal("0.45"),
}
LEASE_MONEY_FACTOR_DIVISOR = Decimal("24")
LEASE_SECURITY_DEPOSIT = Decimal("500")
LEASE_FEES = Decimal("250")
LEASE_MILEAGE_ALLOWANCE = 12_000
LEASE_EXCESS_MILEAGE_FEE = Decimal("0.25")
DEFAULT_ANNUAL_MILES = 12_000

# Loan term used for the buy side when no loan matches the lease term
LEASE_VS_BUY_FALLBACK_TERM = 48


def annual_rate_for(tier: CreditScoreTier) -> Decimal:
    """Two-tier rate table: excellent credit vs everything else."""
    if tier is CreditScoreTier.EXCELLENT:
        return EXCELLENT_CREDIT_ANNUAL_RATE
    return STANDARD_ANNUAL_RATE


def monthly_gas_for(city_mpg: Decimal | None) -> Decimal:
    if city_mpg is not None and city_mpg > EFFICIENT_CITY_MPG:
        return MONTHLY_GAS_EFFICIENT
    return MONTHLY_GAS_STANDARD


class BudgetStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    CAUTION = "caution"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class LoanCostRequest:
    profile: FinancialProfile
    vehicle_price: Decimal | None = None
    price_text: str | None = None
    fuel_economy_city_mpg: Decimal | None = None
    schedule_months: int = 0


@dataclass(frozen=True, slots=True)
class AncillaryMonthly:
    insurance: Decimal
    gas: Decimal
    maintenance: Decimal

    @property
    def total(self) -> Decimal:
        return self.insurance + self.gas + self.maintenance


@dataclass(frozen=True, slots=True)
class BudgetImpact:
    percent_of_monthly_income: Decimal
    within_guideline: bool
    status: BudgetStatus


@dataclass(frozen=True, slots=True)
class LoanCostBreakdown:
    vehicle_price: Decimal
    price_known: bool
    down_payment: Decimal
    loan_amount: Decimal
    annual_interest_rate: Decimal
    term_months: int
    monthly_loan_payment: Decimal
    ancillary_monthly: AncillaryMonthly
    total_monthly_cost: Decimal
    total_interest_over_term: Decimal
    total_cost_over_term: Decimal
    budget_impact: BudgetImpact | None = None
    schedule: tuple[AmortizationRow, ...] = ()


@dataclass(frozen=True, slots=True)
class FinancingTermsRequest:
    vehicle_price: Decimal
    profile: FinancialProfile
    down_payment_share: Decimal = DOWN_PAYMENT_SHARE


@dataclass(frozen=True, slots=True)
class FinancingOption:
    term_months: int
    down_payment: Decimal
    loan_amount: Decimal
    annual_interest_rate: Decimal
    monthly_payment: Decimal
    total_payments: Decimal
    total_interest: Decimal
    total_cost: Decimal


@dataclass(frozen=True, slots=True)
class MileageAnalysis:
    allowed_miles: int
    projected_miles: int
    excess_miles: int
    excess_fees: Decimal
    is_overage: bool
    utilization_percent: Decimal


@dataclass(frozen=True, slots=True)
class LeaseOption:
    term_months: int
    vehicle_price: Decimal
    residual_value: Decimal
    money_factor: Decimal
    monthly_payment: Decimal
    total_payments: Decimal
    upfront_costs: Decimal
    mileage_allowance_per_year: int
    excess_mileage_fee: Decimal
    mileage: MileageAnalysis


@dataclass(frozen=True, slots=True)
class LeaseOptionsRequest:
    vehicle_price: Decimal
    profile: FinancialProfile
    estimated_miles_per_year: int = DEFAULT_ANNUAL_MILES


@dataclass(frozen=True, slots=True)
class LeaseVsBuyRequest:
    vehicle_price: Decimal
    profile: FinancialProfile
    term_months: int = 36
    estimated_miles_per_year: int = DEFAULT_ANNUAL_MILES

    def validate(self) -> None:
        """
        Raises ValidationError when the lease term is not one of the offered ones.
        """
        if self.term_months not in LEASE_RESIDUAL_SHARES:
            offered = ", ".join(str(term) for term in sorted(LEASE_RESIDUAL_SHARES))
            raise ValidationError(
                errors=[
                    {
                        "field": "term_months",
                        "message": f"Lease term must be one of: {offered}",
                        "code": "UNSUPPORTED_TERM",
                    }
                ]
            )


@dataclass(frozen=True, slots=True)
class LeaseVsBuyComparison:
    """
    Cost of leasing against financing the same vehicle.

    lease_advantage > 0 means leasing is cheaper over the lease term;
    equity_built is what the buyer owns once the lease would have ended.
    """

    lease: LeaseOption
    financing: FinancingOption
    lease_cost: Decimal
    finance_cost: Decimal
    lease_advantage: Decimal
    remaining_loan_balance: Decimal
    vehicle_value_at_end: Decimal
    equity_built: Decimal
