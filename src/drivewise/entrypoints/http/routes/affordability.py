from fastapi import APIRouter, Depends

from drivewise.entrypoints.http.dependencies import (
    get_estimate_affordability_use_case,
    get_match_budget_brackets_use_case,
)
from drivewise.entrypoints.http.dtos.affordability import (
    AffordabilityRequestDTO,
    AffordabilityResponseDTO,
    BracketMatchRequestDTO,
    BracketMatchResponseDTO,
)
from drivewise.entrypoints.http.mappers.affordability_mapper import (
    MISSING_INCOME_MESSAGE,
    AffordabilityMapper,
)
from drivewise.use_cases.estimate_affordability import EstimateAffordability
from drivewise.use_cases.match_budget_brackets import MatchBudgetBrackets


router = APIRouter(tags=["Affordability"])


@router.post(
    "/affordability/estimate",
    response_model=AffordabilityResponseDTO,
    summary="Recommend a vehicle price range",
    description="""
    Estimate a recommended purchase price range from annual income.

    ## Method
    - Net monthly income = annual income / 12 (no tax adjustment by default)
    - 10% rule: total monthly vehicle spend is capped at 10% of net monthly income
    - Insurance, gas and maintenance are estimated and subtracted
    - The remaining monthly payment is converted to a loan at 6% APR over 48 months
    - Maximum price assumes a 20% down payment

    ## Missing income
    A profile without usable income is not an error: the response has
    `available: false` and a message asking for financial information.

    ## Example
    ```
    POST /v1/affordability/estimate
    {"annual_income": "$60,000", "credit_score_tier": "good"}
    ```
    """,
    responses={
        200: {
            "description": "Estimate, or a no-data prompt",
            "content": {
                "application/json": {
                    "examples": {
                        "estimate": {
                            "summary": "Income supplied",
                            "value": AffordabilityResponseDTO.model_config["json_schema_extra"][
                                "example"
                            ],
                        },
                        "no_data": {
                            "summary": "Income missing",
                            "value": {
                                "available": False,
                                "message": MISSING_INCOME_MESSAGE,
                                "estimate": None,
                            },
                        },
                    }
                }
            },
        },
    },
)
def estimate_affordability(
    payload: AffordabilityRequestDTO,
    use_case: EstimateAffordability = Depends(get_estimate_affordability_use_case),
) -> AffordabilityResponseDTO:
    """Parse -> execute -> map -> return."""
    # 1. Map to domain profile (lenient income parsing)
    profile = AffordabilityMapper.to_domain_profile(payload)

    # 2. Execute use case (None when income is missing)
    result = use_case.execute(profile)

    # 3. Map to response
    return AffordabilityMapper.to_response(result)


@router.post(
    "/affordability/brackets",
    response_model=BracketMatchResponseDTO,
    summary="Flag recommended budget options",
    description="""
    Mark each budget option as recommended when its overlap with the
    moderate price tier exceeds 30% of that tier's width.

    Labels such as `"$25,000 - $35,000"`, `"Under $10,000"` or `"$40,000+"`
    are understood. Labels without any amount are ignored.
    """,
)
def match_budget_brackets(
    payload: BracketMatchRequestDTO,
    estimate_use_case: EstimateAffordability = Depends(get_estimate_affordability_use_case),
    match_use_case: MatchBudgetBrackets = Depends(get_match_budget_brackets_use_case),
) -> BracketMatchResponseDTO:
    profile = AffordabilityMapper.to_profile(payload.annual_income, None)
    result = estimate_use_case.execute(profile)

    if result is None:
        return AffordabilityMapper.to_bracket_response(None, [])

    recommendations = match_use_case.execute(AffordabilityMapper.to_bracket_request(payload, result))
    return AffordabilityMapper.to_bracket_response(result, recommendations)
