from pydantic import BaseModel, ConfigDict, Field


class AffordabilityRequestDTO(BaseModel):
    """Request payload for estimating a recommended price range."""

    annual_income: str | None = Field(
        default=None,
        description="Gross annual income as entered by the user (e.g. '$60,000' or '60000')",
        examples=["60000"],
    )
    credit_score_tier: str | None = Field(
        default=None,
        description="One of: excellent, good, fair, poor, unknown",
        examples=["good"],
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"annual_income": "60000", "credit_score_tier": "good"}}
    )


class PriceRangeDTO(BaseModel):
    min: str = Field(description="Lower bound as decimal string", examples=["5000"])
    max: str = Field(description="Upper bound as decimal string", examples=["7000"])


class PriceTiersDTO(BaseModel):
    conservative: PriceRangeDTO
    moderate: PriceRangeDTO
    optimistic: PriceRangeDTO


class AncillaryCostsDTO(BaseModel):
    insurance: str
    gas: str
    maintenance: str
    total: str


class AffordabilityDerivedDTO(BaseModel):
    gross_monthly_income: str
    net_monthly_income: str
    max_car_price: str
    implied_down_payment: str
    implied_loan_amount: str


class AffordabilityEstimateDTO(BaseModel):
    max_monthly_car_expense: str = Field(
        description="10% of net monthly income as decimal string",
        examples=["500.00"],
    )
    ancillary_costs: AncillaryCostsDTO
    max_monthly_loan_payment: str = Field(
        description="Monthly budget left for the loan payment",
        examples=["150.00"],
    )
    price_tiers: PriceTiersDTO
    derived: AffordabilityDerivedDTO


class AffordabilityResponseDTO(BaseModel):
    """Estimate, or a prompt to complete the financial profile when income is missing."""

    available: bool = Field(description="False when the profile has no usable income")
    message: str | None = Field(
        default=None, description="Headline recommendation, or a prompt when no estimate exists"
    )
    estimate: AffordabilityEstimateDTO | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "available": True,
                "message": (
                    "Based on your income and the 10% rule, we recommend a vehicle in the "
                    "$5,000 - $7,000 range, with a maximum monthly payment of $150.00."
                ),
                "estimate": {
                    "max_monthly_car_expense": "500.00",
                    "ancillary_costs": {
                        "insurance": "150.00",
                        "gas": "125.00",
                        "maintenance": "75.00",
                        "total": "350.00",
                    },
                    "max_monthly_loan_payment": "150.00",
                    "price_tiers": {
                        "conservative": {"min": "4000", "max": "6000"},
                        "moderate": {"min": "5000", "max": "7000"},
                        "optimistic": {"min": "6000", "max": "8000"},
                    },
                    "derived": {
                        "gross_monthly_income": "5000.00",
                        "net_monthly_income": "5000.00",
                        "max_car_price": "7983.81",
                        "implied_down_payment": "1596.76",
                        "implied_loan_amount": "6387.05",
                    },
                },
            }
        }
    )


class BracketMatchRequestDTO(BaseModel):
    """Budget option labels to check against the recommended price range."""

    annual_income: str | None = Field(default=None, examples=["90000"])
    brackets: list[str] = Field(
        description="Budget option labels, e.g. '$25,000 - $35,000'",
        min_length=1,
        examples=[["$5,000 - $10,000", "$10,000 - $15,000"]],
    )


class BracketRecommendationDTO(BaseModel):
    label: str
    min: str
    max: str | None = Field(default=None, description="None for open-ended options")
    overlap: str
    recommended: bool


class BracketMatchResponseDTO(BaseModel):
    available: bool
    message: str | None = None
    moderate_tier: PriceRangeDTO | None = None
    brackets: list[BracketRecommendationDTO] = Field(default_factory=list)
