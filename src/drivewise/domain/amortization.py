"""Amortizing-loan arithmetic shared by every calculator.

Standard annuity payment:

    payment = principal * r(1+r)^n / ((1+r)^n - 1)

where r is the monthly rate (annual_rate / 12) and n the term in months.
Payment and principal are both derived from ``annuity_factor`` so the
forward and inverse calculations can never drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from drivewise.domain.money import ONE, ZERO, non_negative, to_cents

MONTHS_PER_YEAR = Decimal("12")


@dataclass(frozen=True, slots=True)
class AmortizationRow:
    period: int
    opening_balance: Decimal
    payment: Decimal
    principal_component: Decimal
    interest_component: Decimal
    closing_balance: Decimal


def annuity_factor(annual_rate: Decimal, term_months: int) -> Decimal:
    """
    Payment per unit of principal.

    Zero rate falls back to the linear split 1/n. A non-positive term has no
    payment schedule and yields 0.
    """
    if term_months <= 0:
        return ZERO

    n = Decimal(term_months)
    monthly_rate = annual_rate / MONTHS_PER_YEAR
    if monthly_rate == 0:
        return ONE / n

    growth = (ONE + monthly_rate) ** term_months
    return monthly_rate * growth / (growth - ONE)


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    """Full-precision monthly payment for ``principal``."""
    if term_months <= 0:
        return ZERO

    principal = non_negative(principal)
    if annual_rate == 0:
        return principal / Decimal(term_months)
    return principal * annuity_factor(annual_rate, term_months)


def principal_for_payment(payment: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    """Largest principal a monthly ``payment`` can service (inverse of monthly_payment)."""
    if term_months <= 0:
        return ZERO

    payment = non_negative(payment)
    if annual_rate == 0:
        return payment * Decimal(term_months)
    return payment / annuity_factor(annual_rate, term_months)


def build_amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    payment: Decimal,
    months: int | None = None,
) -> list[AmortizationRow]:
    """
    Split each payment into interest and principal.

    Rows are cent-rounded; the running balance is carried at full precision
    and never goes below zero. ``months`` limits the schedule to its first rows.
    """
    monthly_rate = annual_rate / MONTHS_PER_YEAR
    periods = term_months if months is None else min(months, term_months)

    rows: list[AmortizationRow] = []
    balance = non_negative(principal)
    for period in range(1, periods + 1):
        interest = balance * monthly_rate
        principal_part = min(payment - interest, balance)
        closing = non_negative(balance - principal_part)
        rows.append(
            AmortizationRow(
                period=period,
                opening_balance=to_cents(balance),
                payment=to_cents(payment),
                principal_component=to_cents(principal_part),
                interest_component=to_cents(interest),
                closing_balance=to_cents(closing),
            )
        )
        balance = closing

    return rows
