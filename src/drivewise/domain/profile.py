from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from drivewise.domain.money import ZERO, as_decimal, bounded_amount


class CreditScoreTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> CreditScoreTier:
        """Unrecognised or missing tiers map to UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class FinancialProfile:
    """Caller-supplied financial situation. Immutable per calculation."""

    annual_income: Decimal | None = None
    credit_score_tier: CreditScoreTier = CreditScoreTier.UNKNOWN

    def known_annual_income(self) -> Decimal | None:
        """
        Annual income usable for income-based guidance.

        None when the income is missing, non-numeric or zero. Negative
        amounts clamp to zero and are therefore also unknown; amounts above
        MAX_AMOUNT clamp to MAX_AMOUNT.
        """
        income = as_decimal(self.annual_income)
        if income is None:
            return None

        income = bounded_amount(income)
        if income == ZERO:
            return None
        return income
