from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from drivewise.domain.amortization import monthly_payment
from drivewise.domain.financing import (
    FINANCING_TERMS,
    FinancingOption,
    FinancingTermsRequest,
    annual_rate_for,
)
from drivewise.domain.money import ONE, ZERO, bounded_amount, to_cents


@dataclass(frozen=True, slots=True)
class CompareFinancingTerms:
    """
    Same vehicle, same rate, one financing option per loan term.

    Totals follow the rounding policy of CalculateLoanCost: they are derived
    from the cent-rounded monthly payment.
    """

    terms: tuple[int, ...] = FINANCING_TERMS

    def execute(self, req: FinancingTermsRequest) -> list[FinancingOption]:
        vehicle_price = to_cents(bounded_amount(req.vehicle_price))
        share = min(max(req.down_payment_share, ZERO), ONE)
        down_payment = to_cents(vehicle_price * share)
        loan_amount = vehicle_price - down_payment
        annual_rate = annual_rate_for(req.profile.credit_score_tier)

        options = []
        for term_months in self.terms:
            payment = to_cents(monthly_payment(loan_amount, annual_rate, term_months))
            total_payments = payment * Decimal(term_months)
            options.append(
                FinancingOption(
                    term_months=term_months,
                    down_payment=down_payment,
                    loan_amount=loan_amount,
                    annual_interest_rate=annual_rate,
                    monthly_payment=payment,
                    total_payments=total_payments,
                    total_interest=total_payments - loan_amount,
                    total_cost=total_payments + down_payment,
                )
            )
        return options
