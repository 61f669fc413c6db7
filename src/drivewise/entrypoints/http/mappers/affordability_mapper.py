from __future__ import annotations

from drivewise.domain.affordability import (
    AffordabilityResult,
    BracketMatchRequest,
    BracketRecommendation,
    PriceRange,
)
from drivewise.domain.price_text import parse_currency_amount
from drivewise.domain.profile import CreditScoreTier, FinancialProfile
from drivewise.entrypoints.http.dtos.affordability import (
    AffordabilityDerivedDTO,
    AffordabilityEstimateDTO,
    AffordabilityRequestDTO,
    AffordabilityResponseDTO,
    AncillaryCostsDTO,
    BracketMatchRequestDTO,
    BracketMatchResponseDTO,
    BracketRecommendationDTO,
    PriceRangeDTO,
    PriceTiersDTO,
)

MISSING_INCOME_MESSAGE = (
    "Complete your financial information to see personalized recommendations."
)
NO_PAYMENT_ROOM_MESSAGE = (
    "Based on your income, we recommend focusing on improving your financial situation "
    "before taking on a car payment. Consider looking at reliable used vehicles or "
    "improving your income first."
)


def recommendation_message(result: AffordabilityResult | None) -> str:
    """Headline advice shown next to the estimate."""
    if result is None:
        return MISSING_INCOME_MESSAGE
    if result.max_monthly_loan_payment <= 0:
        return NO_PAYMENT_ROOM_MESSAGE

    moderate = result.price_tiers.moderate
    return (
        "Based on your income and the 10% rule, we recommend a vehicle in the "
        f"${moderate.min:,.0f} - ${moderate.max:,.0f} range, with a maximum monthly "
        f"payment of ${result.max_monthly_loan_payment:,.2f}."
    )


class AffordabilityMapper:
    """Maps between REST DTOs and domain models for affordability guidance."""

    @staticmethod
    def to_profile(annual_income: str | None, credit_score_tier: str | None) -> FinancialProfile:
        """
        Builds a FinancialProfile from form values.

        Income parsing is lenient: missing or non-numeric income becomes None
        and is answered with "no estimate" rather than a validation error.
        """
        return FinancialProfile(
            annual_income=parse_currency_amount(annual_income),
            credit_score_tier=CreditScoreTier.parse(credit_score_tier),
        )

    @staticmethod
    def to_domain_profile(dto: AffordabilityRequestDTO) -> FinancialProfile:
        return AffordabilityMapper.to_profile(dto.annual_income, dto.credit_score_tier)

    @staticmethod
    def to_price_range_dto(price_range: PriceRange) -> PriceRangeDTO:
        return PriceRangeDTO(min=str(price_range.min), max=str(price_range.max))

    @staticmethod
    def to_response(result: AffordabilityResult | None) -> AffordabilityResponseDTO:
        """Converts the estimate (Decimal -> string), or the no-data outcome."""
        if result is None:
            return AffordabilityResponseDTO(available=False, message=MISSING_INCOME_MESSAGE)

        to_range = AffordabilityMapper.to_price_range_dto
        tiers = result.price_tiers
        return AffordabilityResponseDTO(
            available=True,
            message=recommendation_message(result),
            estimate=AffordabilityEstimateDTO(
                max_monthly_car_expense=str(result.max_monthly_car_expense),
                ancillary_costs=AncillaryCostsDTO(
                    insurance=str(result.ancillary_costs.insurance),
                    gas=str(result.ancillary_costs.gas),
                    maintenance=str(result.ancillary_costs.maintenance),
                    total=str(result.ancillary_costs.total),
                ),
                max_monthly_loan_payment=str(result.max_monthly_loan_payment),
                price_tiers=PriceTiersDTO(
                    conservative=to_range(tiers.conservative),
                    moderate=to_range(tiers.moderate),
                    optimistic=to_range(tiers.optimistic),
                ),
                derived=AffordabilityDerivedDTO(
                    gross_monthly_income=str(result.derived.gross_monthly_income),
                    net_monthly_income=str(result.derived.net_monthly_income),
                    max_car_price=str(result.derived.max_car_price),
                    implied_down_payment=str(result.derived.implied_down_payment),
                    implied_loan_amount=str(result.derived.implied_loan_amount),
                ),
            ),
        )

    @staticmethod
    def to_bracket_request(
        dto: BracketMatchRequestDTO, result: AffordabilityResult
    ) -> BracketMatchRequest:
        return BracketMatchRequest(
            labels=tuple(dto.brackets),
            moderate_tier=result.price_tiers.moderate,
        )

    @staticmethod
    def to_bracket_response(
        result: AffordabilityResult | None,
        recommendations: list[BracketRecommendation],
    ) -> BracketMatchResponseDTO:
        if result is None:
            return BracketMatchResponseDTO(available=False, message=MISSING_INCOME_MESSAGE)

        return BracketMatchResponseDTO(
            available=True,
            moderate_tier=AffordabilityMapper.to_price_range_dto(result.price_tiers.moderate),
            brackets=[
                BracketRecommendationDTO(
                    label=item.bracket.label,
                    min=str(item.bracket.min),
                    max=None if item.bracket.max is None else str(item.bracket.max),
                    overlap=str(item.overlap),
                    recommended=item.recommended,
                )
                for item in recommendations
            ],
        )
