from __future__ import annotations

import logging
from dataclasses import dataclass, field

from drivewise.domain.amortization import build_amortization_schedule
from drivewise.domain.errors import InternalError
from drivewise.domain.financing import (
    LEASE_VS_BUY_FALLBACK_TERM,
    FinancingOption,
    FinancingTermsRequest,
    LeaseOptionsRequest,
    LeaseVsBuyComparison,
    LeaseVsBuyRequest,
)
from drivewise.domain.money import ZERO
from drivewise.use_cases.compare_financing_terms import CompareFinancingTerms
from drivewise.use_cases.estimate_lease_options import EstimateLeaseOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompareLeaseVsBuy:
    """
    Lease one vehicle or finance it with the default down payment.

    The loan is the one whose term matches the lease, otherwise the 48-month
    loan. Both sides are compared over the lease term:
    - lease_cost = total lease payments + upfront costs
    - finance_cost = monthly loan payment * loan term + down payment
    - equity_built = max(0, residual value - loan balance after the lease term)

    The loan balance is the amortization schedule's closing balance.
    """

    lease: EstimateLeaseOptions = field(default_factory=EstimateLeaseOptions)
    financing: CompareFinancingTerms = field(default_factory=CompareFinancingTerms)

    def execute(self, req: LeaseVsBuyRequest) -> LeaseVsBuyComparison:
        req.validate()

        leases = self.lease.execute(
            LeaseOptionsRequest(
                vehicle_price=req.vehicle_price,
                profile=req.profile,
                estimated_miles_per_year=req.estimated_miles_per_year,
            )
        )
        lease = next((option for option in leases if option.term_months == req.term_months), None)
        if lease is None:
            raise InternalError(
                "No lease estimate for the requested term", term_months=req.term_months
            )

        loans = self.financing.execute(
            FinancingTermsRequest(vehicle_price=req.vehicle_price, profile=req.profile)
        )
        loan = _loan_for_term(loans, req.term_months)

        schedule = build_amortization_schedule(
            loan.loan_amount,
            loan.annual_interest_rate,
            loan.term_months,
            loan.monthly_payment,
            months=lease.term_months,
        )
        remaining = schedule[-1].closing_balance if schedule else loan.loan_amount

        lease_cost = lease.total_payments + lease.upfront_costs
        finance_cost = loan.total_cost

        return LeaseVsBuyComparison(
            lease=lease,
            financing=loan,
            lease_cost=lease_cost,
            finance_cost=finance_cost,
            lease_advantage=finance_cost - lease_cost,
            remaining_loan_balance=remaining,
            vehicle_value_at_end=lease.residual_value,
            equity_built=max(ZERO, lease.residual_value - remaining),
        )


def _loan_for_term(loans: list[FinancingOption], term_months: int) -> FinancingOption:
    by_term = {loan.term_months: loan for loan in loans}
    if term_months in by_term:
        return by_term[term_months]
    if LEASE_VS_BUY_FALLBACK_TERM in by_term:
        logger.info(
            "No loan for lease term, using fallback",
            extra={"term_months": term_months, "fallback_term": LEASE_VS_BUY_FALLBACK_TERM},
        )
        return by_term[LEASE_VS_BUY_FALLBACK_TERM]
    raise InternalError(
        "No loan option for the lease term or its fallback",
        term_months=term_months,
        fallback_term=LEASE_VS_BUY_FALLBACK_TERM,
    )
