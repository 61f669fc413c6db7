from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from drivewise.domain.financing import (
    LEASE_EXCESS_MILEAGE_FEE,
    LEASE_FEES,
    LEASE_MILEAGE_ALLOWANCE,
    LEASE_MONEY_FACTOR_DIVISOR,
    LEASE_RESIDUAL_SHARES,
    LEASE_SECURITY_DEPOSIT,
    LeaseOption,
    LeaseOptionsRequest,
    MileageAnalysis,
    annual_rate_for,
)
from drivewise.domain.money import ONE, ZERO, bounded_amount, to_cents

MONEY_FACTOR_PLACES = Decimal("0.00001")
MONTHS_PER_YEAR = Decimal("12")


def _whole_miles(value: Decimal) -> int:
    return int(value.quantize(ONE, rounding=ROUND_HALF_UP))


def analyze_mileage(
    term_months: int,
    estimated_miles_per_year: int,
    allowance_per_year: int = LEASE_MILEAGE_ALLOWANCE,
    excess_fee: Decimal = LEASE_EXCESS_MILEAGE_FEE,
) -> MileageAnalysis:
    """
    Project the driver's mileage over a lease term against its allowance.

    Miles are whole numbers (halves up); fees and utilization are rounded
    to cents. Utilization is projected / allowed * 100, and 0 when nothing
    is allowed.
    """
    years = Decimal(max(term_months, 0)) / MONTHS_PER_YEAR
    allowed = _whole_miles(Decimal(allowance_per_year) * years)
    projected = _whole_miles(bounded_amount(Decimal(estimated_miles_per_year)) * years)
    excess = max(0, projected - allowed)

    utilization = ZERO
    if allowed > 0:
        utilization = to_cents(Decimal(projected) / Decimal(allowed) * Decimal("100"))

    return MileageAnalysis(
        allowed_miles=allowed,
        projected_miles=projected,
        excess_miles=excess,
        excess_fees=to_cents(Decimal(excess) * excess_fee),
        is_overage=excess > 0,
        utilization_percent=utilization,
    )


@dataclass(frozen=True, slots=True)
class EstimateLeaseOptions:
    """
    Simplified closed-end lease estimate.

    monthly = (price - residual) / term + (price + residual) * money_factor
    money_factor = annual_rate / 24
    upfront = first payment + security deposit + fees
    """

    residual_shares: tuple[tuple[int, Decimal], ...] = tuple(sorted(LEASE_RESIDUAL_SHARES.items()))

    def execute(self, req: LeaseOptionsRequest) -> list[LeaseOption]:
        vehicle_price = to_cents(bounded_amount(req.vehicle_price))
        money_factor = annual_rate_for(req.profile.credit_score_tier) / LEASE_MONEY_FACTOR_DIVISOR

        options = []
        for term_months, residual_share in self.residual_shares:
            residual_value = to_cents(vehicle_price * residual_share)
            depreciation_part = (vehicle_price - residual_value) / Decimal(term_months)
            finance_part = (vehicle_price + residual_value) * money_factor
            payment = to_cents(depreciation_part + finance_part)

            options.append(
                LeaseOption(
                    term_months=term_months,
                    vehicle_price=vehicle_price,
                    residual_value=residual_value,
                    money_factor=money_factor.quantize(MONEY_FACTOR_PLACES, rounding=ROUND_HALF_UP),
                    monthly_payment=payment,
                    total_payments=payment * Decimal(term_months),
                    upfront_costs=payment + LEASE_SECURITY_DEPOSIT + LEASE_FEES,
                    mileage_allowance_per_year=LEASE_MILEAGE_ALLOWANCE,
                    excess_mileage_fee=LEASE_EXCESS_MILEAGE_FEE,
                    mileage=analyze_mileage(term_months, req.estimated_miles_per_year),
                )
            )
        return options
