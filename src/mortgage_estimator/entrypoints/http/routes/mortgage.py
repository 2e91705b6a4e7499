from fastapi import APIRouter, Depends

from mortgage_estimator.entrypoints.http.dependencies import (
    get_calculate_payment_breakdown_use_case,
    get_generate_amortization_schedule_use_case,
    get_last_inputs_use_case,
)
from mortgage_estimator.entrypoints.http.dtos.mortgage import (
    AmortizationScheduleResponseDTO,
    LastInputsResponseDTO,
    LoanInputsDTO,
    PaymentBreakdownResponseDTO,
    ScheduleQueryDTO,
)
from mortgage_estimator.entrypoints.http.error_responses import ErrorResponse
from mortgage_estimator.entrypoints.http.mappers.mortgage_mapper import MortgageMapper
from mortgage_estimator.use_cases.calculate_payment_breakdown import CalculatePaymentBreakdown
from mortgage_estimator.use_cases.generate_amortization_schedule import (
    AmortizationScheduleRequest,
    GenerateAmortizationSchedule,
    Paging,
)
from mortgage_estimator.use_cases.get_last_inputs import GetLastInputs


router = APIRouter(prefix="/mortgage", tags=["Mortgage"])

VALIDATION_RESPONSE = {422: {"model": ErrorResponse, "description": "Validation error"}}


@router.post(
    "/breakdown",
    response_model=PaymentBreakdownResponseDTO,
    summary="Calculate monthly payment breakdown",
    description="""
    Estimate the monthly mortgage payment: principal & interest, taxes and insurance.

    ## Monetary Values
    - All monetary values are strings (e.g., "500000.00")
    - Responses are rounded to cents; total_monthly_payment is the sum of the rounded parts

    ## Estimates
    - Taxes: (2000 + 0.8% of property price) per year
    - Insurance: 3.50 per 1000 of property price per year
    - Principal/interest split: exact split of the first monthly payment
    """,
    responses=VALIDATION_RESPONSE,
)
def calculate_breakdown(
    payload: LoanInputsDTO,
    use_case: CalculatePaymentBreakdown = Depends(get_calculate_payment_breakdown_use_case),
) -> PaymentBreakdownResponseDTO:
    """Parse → execute → map → return."""
    inputs = MortgageMapper.to_domain_inputs(payload)

    quote = use_case.execute(inputs)

    return MortgageMapper.to_breakdown_response(quote)


@router.post(
    "/schedule",
    response_model=AmortizationScheduleResponseDTO,
    summary="Generate amortization schedule",
    description="""
    Month-by-month split of each payment into principal and interest with the remaining balance.

    ## Pagination
    - Default: the whole schedule (up to 480 months)
    - Use offset/limit to fetch a window; totals always cover the whole loan

    ## Example
    ```
    POST /v1/mortgage/schedule?offset=0&limit=12&group_by_year=true
    ```
    """,
    responses=VALIDATION_RESPONSE,
)
def generate_schedule(
    payload: LoanInputsDTO,
    query: ScheduleQueryDTO = Depends(),
    use_case: GenerateAmortizationSchedule = Depends(
        get_generate_amortization_schedule_use_case
    ),
) -> AmortizationScheduleResponseDTO:
    request = AmortizationScheduleRequest(
        inputs=MortgageMapper.to_domain_inputs(payload),
        paging=Paging(offset=query.offset, limit=query.limit),
        include_yearly_totals=query.group_by_year,
    )

    page = use_case.execute(request)

    return MortgageMapper.to_schedule_response(page, offset=query.offset, limit=query.limit)


@router.get(
    "/last-inputs",
    response_model=LastInputsResponseDTO,
    summary="Get last-used inputs",
    description="Inputs of the most recent calculation, or the defaults when none are cached.",
)
def get_last_inputs(
    use_case: GetLastInputs = Depends(get_last_inputs_use_case),
) -> LastInputsResponseDTO:
    return MortgageMapper.to_last_inputs_response(use_case.execute())
