from pydantic import BaseModel, ConfigDict, Field

MONEY_PATTERN = r"^\d{1,12}(\.\d{1,2})?$"
RATE_PATTERN = r"^\d{1,3}(\.\d{1,3})?$"


class LoanInputsDTO(BaseModel):
    """Request payload shared by the breakdown and schedule endpoints."""

    property_price: str = Field(
        description="Property price as decimal string, at most 12 integer digits",
        examples=["500000.00"],
        pattern=MONEY_PATTERN,
    )
    down_payment: str = Field(
        description="Down payment as decimal string. Cannot exceed property_price",
        examples=["100000.00"],
        pattern=MONEY_PATTERN,
    )
    loan_term_years: int = Field(
        description="Loan term in years, between 10 and 40",
        examples=[30],
        ge=10,
        le=40,
    )
    annual_interest_rate_percent: str = Field(
        description="Annual interest rate in percent as decimal string (e.g., '5.5' = 5.5%)",
        examples=["5.5"],
        pattern=RATE_PATTERN,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "property_price": "500000.00",
                "down_payment": "100000.00",
                "loan_term_years": 30,
                "annual_interest_rate_percent": "5.5",
            }
        }
    )


class PaymentComponentDTO(BaseModel):
    name: str
    amount: str
    percentage: str


class PaymentBreakdownResponseDTO(BaseModel):
    """Monthly payment estimate with its components and loan totals."""

    loan_amount: str = Field(description="property_price - down_payment", examples=["400000.00"])
    loan_to_value: str = Field(description="loan_amount / property_price", examples=["0.8000"])
    down_payment_percent: str = Field(examples=["20.00"])
    principal_and_interest: str = Field(examples=["2271.16"])
    monthly_taxes: str = Field(examples=["500.00"])
    monthly_insurance: str = Field(examples=["145.83"])
    total_monthly_payment: str = Field(
        description="Exact sum of principal_and_interest, monthly_taxes and monthly_insurance",
        examples=["2916.99"],
    )
    first_month_principal: str = Field(examples=["437.83"])
    first_month_interest: str = Field(examples=["1833.33"])
    components: list[PaymentComponentDTO]
    total_interest_paid: str = Field(examples=["417617.60"])
    total_loan_cost: str = Field(examples=["817617.60"])


class ScheduleQueryDTO(BaseModel):
    """Query parameters for paging through the amortization schedule."""

    offset: int = Field(
        default=0,
        description="Number of months to skip",
        examples=[0],
        ge=0,
    )
    limit: int = Field(
        default=480,
        description="Maximum number of months to return",
        examples=[12],
        ge=1,
        le=480,
    )
    group_by_year: bool = Field(
        default=False,
        description="Also return principal/interest totals per loan year",
    )


class AmortizationEntryDTO(BaseModel):
    month: int
    year: int
    principal_paid: str
    interest_paid: str
    remaining_balance: str


class YearlyTotalDTO(BaseModel):
    year: int
    principal_paid: str
    interest_paid: str
    ending_balance: str


class AmortizationScheduleResponseDTO(BaseModel):
    entries: list[AmortizationEntryDTO]
    total_count: int
    offset: int
    limit: int
    loan_amount: str
    principal_and_interest: str
    total_interest_paid: str
    total_loan_cost: str
    yearly: list[YearlyTotalDTO] | None = None


class LastInputsResponseDTO(BaseModel):
    property_price: str
    down_payment: str
    loan_term_years: int
    annual_interest_rate_percent: str
    is_default: bool = Field(description="True when no usable cached inputs exist")
