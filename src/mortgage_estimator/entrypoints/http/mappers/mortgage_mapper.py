from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from mortgage_estimator.domain.errors import ValidationError
from mortgage_estimator.domain.mortgage import (
    AmortizationEntry,
    LoanInputs,
    PaymentComponent,
    YearlyTotal,
)
from mortgage_estimator.entrypoints.http.dtos.mortgage import (
    AmortizationEntryDTO,
    AmortizationScheduleResponseDTO,
    LastInputsResponseDTO,
    LoanInputsDTO,
    PaymentBreakdownResponseDTO,
    PaymentComponentDTO,
    YearlyTotalDTO,
)
from mortgage_estimator.use_cases.calculate_payment_breakdown import MortgageQuote
from mortgage_estimator.use_cases.generate_amortization_schedule import (
    AmortizationSchedulePage,
)
from mortgage_estimator.use_cases.get_last_inputs import LastInputsResult

CENTS = Decimal("0.01")
RATIO_PLACES = Decimal("0.0001")


def to_cents(value: Decimal) -> Decimal:
    """Round a monetary amount to cents (ROUND_HALF_UP)."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class MortgageMapper:
    """Maps between REST DTOs and domain models for mortgage calculations."""

    @staticmethod
    def to_domain_inputs(dto: LoanInputsDTO) -> LoanInputs:
        """
        Converts request DTO to domain LoanInputs.

        Handles string → Decimal conversion at the boundary.

        Raises:
            ValidationError: If string values cannot be converted to valid Decimals
        """
        errors = []
        values: dict[str, Decimal] = {}

        for field in ("property_price", "down_payment", "annual_interest_rate_percent"):
            raw = getattr(dto, field)
            try:
                values[field] = Decimal(raw)
            except (InvalidOperation, ValueError):
                errors.append(
                    {
                        "field": field,
                        "message": f"Must be a valid decimal: {raw}",
                        "code": "INVALID_DECIMAL",
                    }
                )

        if errors:
            raise ValidationError(errors=errors)

        return LoanInputs(
            property_price=values["property_price"],
            down_payment=values["down_payment"],
            loan_term_years=dto.loan_term_years,
            annual_interest_rate_percent=values["annual_interest_rate_percent"],
        )

    @staticmethod
    def to_component_response(component: PaymentComponent) -> PaymentComponentDTO:
        return PaymentComponentDTO(
            name=component.name,
            amount=str(to_cents(component.amount)),
            percentage=str(component.percentage.quantize(CENTS, rounding=ROUND_HALF_UP)),
        )

    @staticmethod
    def to_breakdown_response(quote: MortgageQuote) -> PaymentBreakdownResponseDTO:
        """
        Converts a domain MortgageQuote to the breakdown response.

        Each component is rounded to cents on its own and the total is the sum
        of the rounded components, so the response adds up to the cent.
        """
        breakdown = quote.breakdown
        principal_and_interest = to_cents(breakdown.principal_and_interest)
        monthly_taxes = to_cents(breakdown.monthly_taxes)
        monthly_insurance = to_cents(breakdown.monthly_insurance)

        return PaymentBreakdownResponseDTO(
            loan_amount=str(to_cents(quote.inputs.loan_amount)),
            loan_to_value=str(
                quote.inputs.loan_to_value.quantize(RATIO_PLACES, rounding=ROUND_HALF_UP)
            ),
            down_payment_percent=str(
                quote.inputs.down_payment_percent.quantize(CENTS, rounding=ROUND_HALF_UP)
            ),
            principal_and_interest=str(principal_and_interest),
            monthly_taxes=str(monthly_taxes),
            monthly_insurance=str(monthly_insurance),
            total_monthly_payment=str(principal_and_interest + monthly_taxes + monthly_insurance),
            first_month_principal=str(to_cents(breakdown.first_month_principal)),
            first_month_interest=str(to_cents(breakdown.first_month_interest)),
            components=[MortgageMapper.to_component_response(c) for c in quote.components],
            total_interest_paid=str(to_cents(quote.total_interest_paid)),
            total_loan_cost=str(to_cents(quote.total_loan_cost)),
        )

    @staticmethod
    def to_entry_response(entry: AmortizationEntry) -> AmortizationEntryDTO:
        return AmortizationEntryDTO(
            month=entry.month_index,
            year=entry.year,
            principal_paid=str(to_cents(entry.principal_paid)),
            interest_paid=str(to_cents(entry.interest_paid)),
            remaining_balance=str(to_cents(entry.remaining_balance)),
        )

    @staticmethod
    def to_yearly_response(total: YearlyTotal) -> YearlyTotalDTO:
        return YearlyTotalDTO(
            year=total.year,
            principal_paid=str(to_cents(total.principal_paid)),
            interest_paid=str(to_cents(total.interest_paid)),
            ending_balance=str(to_cents(total.ending_balance)),
        )

    @staticmethod
    def to_schedule_response(
        page: AmortizationSchedulePage,
        offset: int,
        limit: int,
    ) -> AmortizationScheduleResponseDTO:
        """
        Converts a schedule page to the REST response with paging metadata.

        Args:
            page: Domain schedule page
            offset: Current offset (echoed from request)
            limit: Current limit (echoed from request)
        """
        yearly = None
        if page.yearly is not None:
            yearly = [MortgageMapper.to_yearly_response(total) for total in page.yearly]

        return AmortizationScheduleResponseDTO(
            entries=[MortgageMapper.to_entry_response(entry) for entry in page.entries],
            total_count=page.total_count,
            offset=offset,
            limit=limit,
            loan_amount=str(to_cents(page.loan_amount)),
            principal_and_interest=str(to_cents(page.principal_and_interest)),
            total_interest_paid=str(to_cents(page.total_interest_paid)),
            total_loan_cost=str(to_cents(page.total_loan_cost)),
            yearly=yearly,
        )

    @staticmethod
    def to_last_inputs_response(result: LastInputsResult) -> LastInputsResponseDTO:
        inputs = result.inputs
        return LastInputsResponseDTO(
            property_price=str(inputs.property_price),
            down_payment=str(inputs.down_payment),
            loan_term_years=inputs.loan_term_years,
            annual_interest_rate_percent=str(inputs.annual_interest_rate_percent),
            is_default=result.is_default,
        )
