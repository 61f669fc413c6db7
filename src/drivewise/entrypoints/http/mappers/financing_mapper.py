from __future__ import annotations

from decimal import Decimal, InvalidOperation

from drivewise.domain.errors import ValidationError
from drivewise.domain.financing import (
    FinancingOption,
    FinancingTermsRequest,
    LeaseOption,
    LeaseOptionsRequest,
    LeaseVsBuyComparison,
    LeaseVsBuyRequest,
    LoanCostBreakdown,
    LoanCostRequest,
)
from drivewise.domain.price_text import parse_city_mpg
from drivewise.entrypoints.http.dtos.financing import (
    AmortizationRowDTO,
    AncillaryMonthlyDTO,
    BudgetImpactDTO,
    FinancingOptionDTO,
    FinancingTermsRequestDTO,
    FinancingTermsResponseDTO,
    LeaseOptionDTO,
    LeaseOptionsRequestDTO,
    LeaseOptionsResponseDTO,
    LeaseVsBuyRequestDTO,
    LeaseVsBuyResponseDTO,
    LoanCostRequestDTO,
    LoanCostResponseDTO,
    MileageAnalysisDTO,
)
from drivewise.entrypoints.http.mappers.affordability_mapper import AffordabilityMapper


def _parse_decimal(value: str, field: str, errors: list[dict[str, str]]) -> Decimal:
    try:
        return Decimal(value)
    except (InvalidOperation, ValueError):
        errors.append(
            {
                "field": field,
                "message": f"Must be a valid decimal: {value}",
                "code": "INVALID_DECIMAL",
            }
        )
        return Decimal("0")  # Placeholder to continue validation


class FinancingMapper:
    """Maps between REST DTOs and domain models for financing."""

    @staticmethod
    def to_loan_cost_request(dto: LoanCostRequestDTO) -> LoanCostRequest:
        """
        Converts request DTO to domain LoanCostRequest.

        Handles string -> Decimal conversion at the boundary.

        Raises:
            ValidationError: If neither price nor price_text is given, or the
                price is not a valid decimal
        """
        errors: list[dict[str, str]] = []

        if dto.price is None and not dto.price_text:
            errors.append(
                {
                    "field": "price",
                    "message": "Provide price or price_text",
                    "code": "MISSING_PRICE",
                }
            )

        price = None
        if dto.price is not None:
            price = _parse_decimal(dto.price, "price", errors)

        if errors:
            raise ValidationError(errors=errors)

        return LoanCostRequest(
            profile=AffordabilityMapper.to_profile(dto.annual_income, dto.credit_score_tier),
            vehicle_price=price,
            price_text=dto.price_text,
            fuel_economy_city_mpg=parse_city_mpg(dto.fuel_economy),
            schedule_months=dto.schedule_months,
        )

    @staticmethod
    def to_loan_cost_response(breakdown: LoanCostBreakdown) -> LoanCostResponseDTO:
        """Converts LoanCostBreakdown to response DTO (Decimal -> string)."""
        impact = breakdown.budget_impact
        ancillary = breakdown.ancillary_monthly

        return LoanCostResponseDTO(
            vehicle_price=str(breakdown.vehicle_price),
            price_known=breakdown.price_known,
            down_payment=str(breakdown.down_payment),
            loan_amount=str(breakdown.loan_amount),
            annual_interest_rate=str(breakdown.annual_interest_rate),
            term_months=breakdown.term_months,
            monthly_loan_payment=str(breakdown.monthly_loan_payment),
            ancillary_monthly=AncillaryMonthlyDTO(
                insurance=str(ancillary.insurance),
                gas=str(ancillary.gas),
                maintenance=str(ancillary.maintenance),
                total=str(ancillary.total),
            ),
            total_monthly_cost=str(breakdown.total_monthly_cost),
            total_interest_over_term=str(breakdown.total_interest_over_term),
            total_cost_over_term=str(breakdown.total_cost_over_term),
            budget_impact=None
            if impact is None
            else BudgetImpactDTO(
                percent_of_monthly_income=str(impact.percent_of_monthly_income),
                within_guideline=impact.within_guideline,
                status=impact.status.value,
            ),
            schedule=[
                AmortizationRowDTO(
                    period=row.period,
                    opening_balance=str(row.opening_balance),
                    payment=str(row.payment),
                    principal_component=str(row.principal_component),
                    interest_component=str(row.interest_component),
                    closing_balance=str(row.closing_balance),
                )
                for row in breakdown.schedule
            ],
        )

    @staticmethod
    def to_terms_request(dto: FinancingTermsRequestDTO) -> FinancingTermsRequest:
        errors: list[dict[str, str]] = []
        price = _parse_decimal(dto.price, "price", errors)
        share = _parse_decimal(dto.down_payment_share, "down_payment_share", errors)

        if errors:
            raise ValidationError(errors=errors)

        return FinancingTermsRequest(
            vehicle_price=price,
            profile=AffordabilityMapper.to_profile(None, dto.credit_score_tier),
            down_payment_share=share,
        )

    @staticmethod
    def to_terms_response(options: list[FinancingOption]) -> FinancingTermsResponseDTO:
        return FinancingTermsResponseDTO(
            options=[FinancingMapper._financing_option(option) for option in options]
        )

    @staticmethod
    def to_lease_request(dto: LeaseOptionsRequestDTO) -> LeaseOptionsRequest:
        errors: list[dict[str, str]] = []
        price = _parse_decimal(dto.price, "price", errors)

        if errors:
            raise ValidationError(errors=errors)

        return LeaseOptionsRequest(
            vehicle_price=price,
            profile=AffordabilityMapper.to_profile(None, dto.credit_score_tier),
            estimated_miles_per_year=dto.estimated_miles_per_year,
        )

    @staticmethod
    def to_lease_response(options: list[LeaseOption]) -> LeaseOptionsResponseDTO:
        return LeaseOptionsResponseDTO(
            options=[FinancingMapper._lease_option(option) for option in options]
        )

    @staticmethod
    def to_lease_vs_buy_request(dto: LeaseVsBuyRequestDTO) -> LeaseVsBuyRequest:
        """
        Raises:
            ValidationError: If the price is not a valid decimal
        """
        errors: list[dict[str, str]] = []
        price = _parse_decimal(dto.price, "price", errors)

        if errors:
            raise ValidationError(errors=errors)

        return LeaseVsBuyRequest(
            vehicle_price=price,
            profile=AffordabilityMapper.to_profile(None, dto.credit_score_tier),
            term_months=dto.term_months,
            estimated_miles_per_year=dto.estimated_miles_per_year,
        )

    @staticmethod
    def to_lease_vs_buy_response(comparison: LeaseVsBuyComparison) -> LeaseVsBuyResponseDTO:
        return LeaseVsBuyResponseDTO(
            lease=FinancingMapper._lease_option(comparison.lease),
            financing=FinancingMapper._financing_option(comparison.financing),
            lease_cost=str(comparison.lease_cost),
            finance_cost=str(comparison.finance_cost),
            lease_advantage=str(comparison.lease_advantage),
            remaining_loan_balance=str(comparison.remaining_loan_balance),
            vehicle_value_at_end=str(comparison.vehicle_value_at_end),
            equity_built=str(comparison.equity_built),
        )

    @staticmethod
    def _financing_option(option: FinancingOption) -> FinancingOptionDTO:
        return FinancingOptionDTO(
            term_months=option.term_months,
            down_payment=str(option.down_payment),
            loan_amount=str(option.loan_amount),
            annual_interest_rate=str(option.annual_interest_rate),
            monthly_payment=str(option.monthly_payment),
            total_payments=str(option.total_payments),
            total_interest=str(option.total_interest),
            total_cost=str(option.total_cost),
        )

    @staticmethod
    def _lease_option(option: LeaseOption) -> LeaseOptionDTO:
        mileage = option.mileage
        return LeaseOptionDTO(
            term_months=option.term_months,
            vehicle_price=str(option.vehicle_price),
            residual_value=str(option.residual_value),
            money_factor=str(option.money_factor),
            monthly_payment=str(option.monthly_payment),
            total_payments=str(option.total_payments),
            upfront_costs=str(option.upfront_costs),
            mileage_allowance_per_year=option.mileage_allowance_per_year,
            excess_mileage_fee=str(option.excess_mileage_fee),
            mileage=MileageAnalysisDTO(
                allowed_miles=mileage.allowed_miles,
                projected_miles=mileage.projected_miles,
                excess_miles=mileage.excess_miles,
                excess_fees=str(mileage.excess_fees),
                is_overage=mileage.is_overage,
                utilization_percent=str(mileage.utilization_percent),
            ),
        )
