from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from mortgage_estimator.domain.errors import ValidationError


class InvalidInput(ValidationError):
    """Raised by the amortization engine for physically invalid loan inputs."""

    error_code: str = "INVALID_INPUT"


MIN_TERM_YEARS = 10
MAX_TERM_YEARS = 40
MONTHS_PER_YEAR = 12

# Estimates used for the taxes and insurance components of the payment
BASE_ANNUAL_TAX = Decimal("2000")
ANNUAL_TAX_RATE = Decimal("0.008")
INSURANCE_PER_THOUSAND = Decimal("3.50")


@dataclass(frozen=True, slots=True)
class LoanInputs:
    property_price: Decimal
    down_payment: Decimal
    loan_term_years: int
    annual_interest_rate_percent: Decimal

    @property
    def loan_amount(self) -> Decimal:
        return self.property_price - self.down_payment

    @property
    def monthly_rate(self) -> Decimal:
        return self.annual_interest_rate_percent / Decimal("100") / Decimal(MONTHS_PER_YEAR)

    @property
    def number_of_payments(self) -> int:
        return self.loan_term_years * MONTHS_PER_YEAR

    @property
    def loan_to_value(self) -> Decimal:
        if self.property_price == 0:
            return Decimal("0")
        return self.loan_amount / self.property_price

    @property
    def down_payment_percent(self) -> Decimal:
        if self.property_price == 0:
            return Decimal("0")
        return self.down_payment / self.property_price * Decimal("100")

    def validate(self) -> None:
        """
        Validate the input ranges accepted by the calculator form.

        Every failing field is reported, not just the first one.

        Raises:
            ValidationError: If one or more inputs are out of range
        """
        errors: list[dict[str, str]] = []

        # Guardrails: prevent float leakage past boundary
        for field in ("property_price", "down_payment", "annual_interest_rate_percent"):
            if not isinstance(getattr(self, field), Decimal):
                raise ValidationError(f"{field} must be Decimal (no floats past the boundary)")

        if self.property_price <= 0:
            errors.append(
                {
                    "field": "property_price",
                    "message": "Must be greater than 0",
                    "code": "INVALID_VALUE",
                }
            )
        if self.down_payment < 0:
            errors.append(
                {
                    "field": "down_payment",
                    "message": "Must be greater than or equal to 0",
                    "code": "INVALID_VALUE",
                }
            )
        elif self.property_price > 0 and self.down_payment > self.property_price:
            errors.append(
                {
                    "field": "down_payment",
                    "message": "Cannot exceed property_price",
                    "code": "INVALID_RANGE",
                }
            )
        if not MIN_TERM_YEARS <= self.loan_term_years <= MAX_TERM_YEARS:
            errors.append(
                {
                    "field": "loan_term_years",
                    "message": f"Must be between {MIN_TERM_YEARS} and {MAX_TERM_YEARS}",
                    "code": "INVALID_RANGE",
                }
            )
        if not Decimal("0") < self.annual_interest_rate_percent < Decimal("100"):
            errors.append(
                {
                    "field": "annual_interest_rate_percent",
                    "message": "Must be greater than 0 and less than 100",
                    "code": "INVALID_RANGE",
                }
            )

        if errors:
            raise ValidationError(errors=errors)


DEFAULT_LOAN_INPUTS = LoanInputs(
    property_price=Decimal("500000"),
    down_payment=Decimal("100000"),
    loan_term_years=30,
    annual_interest_rate_percent=Decimal("5.5"),
)


@dataclass(frozen=True, slots=True)
class PaymentBreakdown:
    principal_and_interest: Decimal
    monthly_taxes: Decimal
    monthly_insurance: Decimal
    total_monthly_payment: Decimal
    # Split of the first payment, used as the representative split in summaries
    first_month_principal: Decimal
    first_month_interest: Decimal


@dataclass(frozen=True, slots=True)
class AmortizationEntry:
    month_index: int
    principal_paid: Decimal
    interest_paid: Decimal
    remaining_balance: Decimal

    @property
    def year(self) -> int:
        return (self.month_index - 1) // MONTHS_PER_YEAR + 1

    @property
    def month_of_year(self) -> int:
        return (self.month_index - 1) % MONTHS_PER_YEAR + 1


@dataclass(frozen=True, slots=True)
class PaymentComponent:
    name: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True, slots=True)
class YearlyTotal:
    year: int
    principal_paid: Decimal
    interest_paid: Decimal
    ending_balance: Decimal
