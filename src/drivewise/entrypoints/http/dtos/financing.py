from pydantic import BaseModel, ConfigDict, Field

# Up to 15 integer digits and 2 decimals
DECIMAL_PATTERN = r"^\d{1,15}(\.\d{1,2})?$"
SHARE_PATTERN = r"^(0(\.\d{1,4})?|1(\.0{1,4})?)$"
MAX_MILES_PER_YEAR = 200_000


class LoanCostRequestDTO(BaseModel):
    """Request payload for a vehicle's loan cost breakdown."""

    price: str | None = Field(
        default=None,
        description="Vehicle price as decimal string. Takes precedence over price_text",
        examples=["30000.00"],
        pattern=DECIMAL_PATTERN,
    )
    price_text: str | None = Field(
        default=None,
        description="Catalog price label, e.g. '$26,420 - $28,500'",
        examples=["$26,420 - $28,500"],
    )
    annual_income: str | None = Field(default=None, examples=["60000"])
    credit_score_tier: str | None = Field(default=None, examples=["excellent"])
    fuel_economy: str | None = Field(
        default=None,
        description="Fuel economy label, city figure first (e.g. '32/41 mpg')",
        examples=["51/53 mpg"],
    )
    schedule_months: int = Field(
        default=0,
        description="Number of leading amortization rows to include (0 = none)",
        ge=0,
        le=72,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "price": "30000.00",
                "annual_income": "60000",
                "credit_score_tier": "excellent",
                "fuel_economy": "32/41 mpg",
            }
        }
    )


class AncillaryMonthlyDTO(BaseModel):
    insurance: str
    gas: str
    maintenance: str
    total: str


class BudgetImpactDTO(BaseModel):
    percent_of_monthly_income: str = Field(examples=["13.87"])
    within_guideline: bool = Field(description="True when below 20% of gross monthly income")
    status: str = Field(description="excellent, good, caution or warning")


class AmortizationRowDTO(BaseModel):
    period: int
    opening_balance: str
    payment: str
    principal_component: str
    interest_component: str
    closing_balance: str


class LoanCostResponseDTO(BaseModel):
    """Loan cost breakdown. All monetary values are decimal strings."""

    vehicle_price: str
    price_known: bool
    down_payment: str
    loan_amount: str
    annual_interest_rate: str = Field(examples=["0.045"])
    term_months: int = Field(examples=[60])
    monthly_loan_payment: str
    ancillary_monthly: AncillaryMonthlyDTO
    total_monthly_cost: str
    total_interest_over_term: str
    total_cost_over_term: str
    budget_impact: BudgetImpactDTO | None = None
    schedule: list[AmortizationRowDTO] = Field(default_factory=list)


class FinancingTermsRequestDTO(BaseModel):
    price: str = Field(examples=["30000.00"], pattern=DECIMAL_PATTERN)
    credit_score_tier: str | None = Field(default=None, examples=["good"])
    down_payment_share: str = Field(
        default="0.20",
        description="Down payment as a share of the price, between 0 and 1",
        pattern=SHARE_PATTERN,
    )


class FinancingOptionDTO(BaseModel):
    term_months: int
    down_payment: str
    loan_amount: str
    annual_interest_rate: str
    monthly_payment: str
    total_payments: str
    total_interest: str
    total_cost: str


class FinancingTermsResponseDTO(BaseModel):
    options: list[FinancingOptionDTO]


class LeaseOptionsRequestDTO(BaseModel):
    price: str = Field(examples=["30000.00"], pattern=DECIMAL_PATTERN)
    credit_score_tier: str | None = Field(default=None, examples=["good"])
    estimated_miles_per_year: int = Field(
        default=12_000,
        description="Miles the driver expects to drive per year",
        ge=0,
        le=MAX_MILES_PER_YEAR,
    )


class MileageAnalysisDTO(BaseModel):
    allowed_miles: int
    projected_miles: int
    excess_miles: int
    excess_fees: str
    is_overage: bool
    utilization_percent: str = Field(examples=["125.00"])


class LeaseOptionDTO(BaseModel):
    term_months: int
    vehicle_price: str
    residual_value: str
    money_factor: str
    monthly_payment: str
    total_payments: str
    upfront_costs: str
    mileage_allowance_per_year: int
    excess_mileage_fee: str
    mileage: MileageAnalysisDTO


class LeaseOptionsResponseDTO(BaseModel):
    options: list[LeaseOptionDTO]


class LeaseVsBuyRequestDTO(BaseModel):
    price: str = Field(examples=["30000.00"], pattern=DECIMAL_PATTERN)
    credit_score_tier: str | None = Field(default=None, examples=["good"])
    term_months: int = Field(default=36, description="Lease term: 24, 36 or 48 months")
    estimated_miles_per_year: int = Field(default=12_000, ge=0, le=MAX_MILES_PER_YEAR)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "price": "30000.00",
                "credit_score_tier": "good",
                "term_months": 36,
                "estimated_miles_per_year": 15000,
            }
        }
    )


class LeaseVsBuyResponseDTO(BaseModel):
    """Leasing against financing over the lease term. Money as decimal strings."""

    lease: LeaseOptionDTO
    financing: FinancingOptionDTO
    lease_cost: str
    finance_cost: str
    lease_advantage: str = Field(description="finance_cost - lease_cost; positive favors leasing")
    remaining_loan_balance: str
    vehicle_value_at_end: str
    equity_built: str
