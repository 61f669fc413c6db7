from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from drivewise.domain.affordability import (
    DEFAULT_BRACKET_OVERLAP_THRESHOLD,
    BracketMatchRequest,
    BracketRecommendation,
    BudgetBracket,
    PriceRange,
)
from drivewise.domain.money import non_negative
from drivewise.domain.price_text import parse_budget_bracket


def bracket_overlap(bracket: BudgetBracket, tier: PriceRange) -> Decimal:
    """Length of the intersection of the two ranges (0 when disjoint)."""
    upper = tier.max if bracket.max is None else min(bracket.max, tier.max)
    lower = max(bracket.min, tier.min)
    return non_negative(upper - lower)


@dataclass(frozen=True, slots=True)
class MatchBudgetBrackets:
    """
    Flag budget options that agree with the recommended (moderate) tier.

    A bracket is recommended when its overlap with the tier exceeds
    overlap_threshold of the tier's width. Labels without any amount are skipped.
    """

    overlap_threshold: Decimal = DEFAULT_BRACKET_OVERLAP_THRESHOLD

    def execute(self, req: BracketMatchRequest) -> list[BracketRecommendation]:
        required_overlap = req.moderate_tier.width * self.overlap_threshold

        recommendations = []
        for label in req.labels:
            bracket = parse_budget_bracket(label)
            if bracket is None:
                continue

            overlap = bracket_overlap(bracket, req.moderate_tier)
            recommendations.append(
                BracketRecommendation(
                    bracket=bracket,
                    overlap=overlap,
                    recommended=overlap > required_overlap,
                )
            )
        return recommendations
