from fastapi import APIRouter, Depends

from drivewise.entrypoints.http.dependencies import (
    get_calculate_loan_cost_use_case,
    get_compare_financing_terms_use_case,
    get_compare_lease_vs_buy_use_case,
    get_estimate_lease_options_use_case,
)
from drivewise.entrypoints.http.dtos.financing import (
    FinancingTermsRequestDTO,
    FinancingTermsResponseDTO,
    LeaseOptionsRequestDTO,
    LeaseOptionsResponseDTO,
    LeaseVsBuyRequestDTO,
    LeaseVsBuyResponseDTO,
    LoanCostRequestDTO,
    LoanCostResponseDTO,
)
from drivewise.entrypoints.http.error_responses import ErrorResponse
from drivewise.entrypoints.http.mappers.financing_mapper import FinancingMapper
from drivewise.use_cases.calculate_loan_cost import CalculateLoanCost
from drivewise.use_cases.compare_financing_terms import CompareFinancingTerms
from drivewise.use_cases.compare_lease_vs_buy import CompareLeaseVsBuy
from drivewise.use_cases.estimate_lease_options import EstimateLeaseOptions


router = APIRouter(tags=["Financing"])


@router.post(
    "/financing/breakdown",
    response_model=LoanCostResponseDTO,
    summary="Calculate loan cost breakdown",
    description="""
    Full cost breakdown of financing a selected vehicle.

    ## Monetary Values
    - All monetary values are strings (e.g., "30000.00")
    - `price` wins over `price_text`; a label such as "$26,420 - $28,500"
      is reduced to the mean of its amounts

    ## Assumptions
    - 20% down payment, 60-month term
    - 4.5% APR for excellent credit, 6.5% otherwise
    - Insurance 150/month, maintenance 75/month, gas 100/month when the
      city fuel economy is above 35 mpg and 150/month otherwise

    ## Budget impact
    Present only when annual income is known and the price could be
    determined. `within_guideline` is true below 20% of gross monthly income.

    ## Example
    ```
    POST /v1/financing/breakdown
    {
        "price": "30000.00",
        "annual_income": "60000",
        "credit_score_tier": "excellent"
    }
    ```
    """,
    responses={
        422: {
            "model": ErrorResponse,
            "description": "Validation error",
            "content": {
                "application/json": {
                    "examples": {
                        "missing_price": {
                            "summary": "Neither price nor price_text",
                            "value": {
                                "detail": "Validation failed",
                                "code": "VALIDATION_ERROR",
                                "errors": [
                                    {
                                        "field": "price",
                                        "message": "Provide price or price_text",
                                        "code": "MISSING_PRICE",
                                    }
                                ],
                            },
                        },
                    }
                }
            },
        },
    },
)
def calculate_loan_cost(
    payload: LoanCostRequestDTO,
    use_case: CalculateLoanCost = Depends(get_calculate_loan_cost_use_case),
) -> LoanCostResponseDTO:
    """
    Calculate loan cost endpoint.

    Follows the parse -> execute -> map -> return pattern.
    """
    request = FinancingMapper.to_loan_cost_request(payload)
    breakdown = use_case.execute(request)
    return FinancingMapper.to_loan_cost_response(breakdown)


@router.post(
    "/financing/terms",
    response_model=FinancingTermsResponseDTO,
    summary="Compare loan terms",
    description="""
    One financing option per term (36, 48, 60, 72 months) for the same
    vehicle price, down payment share and credit-tier rate.
    """,
    responses={422: {"model": ErrorResponse, "description": "Validation error"}},
)
def compare_financing_terms(
    payload: FinancingTermsRequestDTO,
    use_case: CompareFinancingTerms = Depends(get_compare_financing_terms_use_case),
) -> FinancingTermsResponseDTO:
    request = FinancingMapper.to_terms_request(payload)
    options = use_case.execute(request)
    return FinancingMapper.to_terms_response(options)


@router.post(
    "/financing/lease-options",
    response_model=LeaseOptionsResponseDTO,
    summary="Estimate lease options",
    description="""
    Simplified lease estimates for 24, 36 and 48 months with residual values
    of 65%, 55% and 45% of the price. Money factor = APR / 24.
    """,
    responses={422: {"model": ErrorResponse, "description": "Validation error"}},
)
def estimate_lease_options(
    payload: LeaseOptionsRequestDTO,
    use_case: EstimateLeaseOptions = Depends(get_estimate_lease_options_use_case),
) -> LeaseOptionsResponseDTO:
    request = FinancingMapper.to_lease_request(payload)
    options = use_case.execute(request)
    return FinancingMapper.to_lease_response(options)


@router.post(
    "/financing/lease-vs-buy",
    response_model=LeaseVsBuyResponseDTO,
    summary="Compare leasing with financing",
    description="""
    Leasing the vehicle for `term_months` (24, 36 or 48) against financing it
    with a 20% down payment. The loan uses the same term when one is offered
    and 48 months otherwise.

    - `lease_cost` = lease payments + upfront costs
    - `finance_cost` = loan payments over the loan term + down payment
    - `lease_advantage` = finance_cost - lease_cost (positive favors leasing)
    - `equity_built` = residual value - loan balance when the lease would end
    """,
    responses={
        422: {
            "model": ErrorResponse,
            "description": "Validation error",
            "content": {
                "application/json": {
                    "examples": {
                        "unsupported_term": {
                            "summary": "Lease term not offered",
                            "value": {
                                "detail": "Validation failed",
                                "code": "VALIDATION_ERROR",
                                "errors": [
                                    {
                                        "field": "term_months",
                                        "message": "Lease term must be one of: 24, 36, 48",
                                        "code": "UNSUPPORTED_TERM",
                                    }
                                ],
                            },
                        },
                    }
                }
            },
        },
        500: {"model": ErrorResponse, "description": "No loan option to compare against"},
    },
)
def compare_lease_vs_buy(
    payload: LeaseVsBuyRequestDTO,
    use_case: CompareLeaseVsBuy = Depends(get_compare_lease_vs_buy_use_case),
) -> LeaseVsBuyResponseDTO:
    request = FinancingMapper.to_lease_vs_buy_request(payload)
    comparison = use_case.execute(request)
    return FinancingMapper.to_lease_vs_buy_response(comparison)
