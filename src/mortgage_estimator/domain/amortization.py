"""Amortization engine.

Pure computation over ``LoanInputs``: no I/O, no logging, no state. All
arithmetic is full-precision ``Decimal``; rounding to cents is left to the
presentation boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from mortgage_estimator.domain.mortgage import (
    ANNUAL_TAX_RATE,
    BASE_ANNUAL_TAX,
    INSURANCE_PER_THOUSAND,
    MONTHS_PER_YEAR,
    AmortizationEntry,
    InvalidInput,
    LoanInputs,
    PaymentBreakdown,
    PaymentComponent,
    YearlyTotal,
)

ZERO = Decimal("0")
ONE = Decimal("1")


@dataclass(frozen=True, slots=True)
class AmortizationSchedule:
    """
    Month-by-month amortization of a fixed-rate loan.

    Iterating yields ``number_of_payments`` entries. Each iteration recomputes
    the recurrence from the opening balance, so the schedule can be iterated
    any number of times with identical results.
    """

    loan_amount: Decimal
    monthly_rate: Decimal
    principal_and_interest: Decimal
    number_of_payments: int

    def __iter__(self) -> Iterator[AmortizationEntry]:
        balance = self.loan_amount
        for month in range(1, self.number_of_payments + 1):
            interest_paid = balance * self.monthly_rate
            principal_paid = self.principal_and_interest - interest_paid
            balance = max(ZERO, balance - principal_paid)
            yield AmortizationEntry(
                month_index=month,
                principal_paid=principal_paid,
                interest_paid=interest_paid,
                remaining_balance=balance,
            )

    def __len__(self) -> int:
        return self.number_of_payments

    @property
    def total_interest_paid(self) -> Decimal:
        return self.principal_and_interest * self.number_of_payments - self.loan_amount

    @property
    def total_loan_cost(self) -> Decimal:
        return self.loan_amount + self.total_interest_paid


def _check_inputs(inputs: LoanInputs) -> None:
    # Range checks belong to the caller; only physically impossible loans stop here
    if inputs.loan_amount < 0:
        raise InvalidInput(
            "loan amount cannot be negative",
            loan_amount=str(inputs.loan_amount),
        )
    if inputs.number_of_payments <= 0:
        raise InvalidInput(
            "number of payments must be > 0",
            number_of_payments=inputs.number_of_payments,
        )
    if inputs.monthly_rate < 0:
        raise InvalidInput(
            "interest rate cannot be negative",
            annual_interest_rate_percent=str(inputs.annual_interest_rate_percent),
        )


def _principal_and_interest(inputs: LoanInputs) -> Decimal:
    loan_amount = inputs.loan_amount
    monthly_rate = inputs.monthly_rate
    n = inputs.number_of_payments

    if monthly_rate == 0:
        return loan_amount / Decimal(n)

    # Standard amortized loan payment:
    # payment = P * (r*(1+r)^n) / ((1+r)^n - 1)
    factor = (ONE + monthly_rate) ** n
    return loan_amount * (monthly_rate * factor) / (factor - ONE)


def compute_breakdown(inputs: LoanInputs) -> PaymentBreakdown:
    """
    Compute the monthly payment estimate for a loan.

    Args:
        inputs: Loan inputs (ranges are assumed validated by the caller)

    Returns:
        PaymentBreakdown whose total is the exact sum of its components

    Raises:
        InvalidInput: If the loan amount or rate is negative, or there are no payments
    """
    _check_inputs(inputs)

    principal_and_interest = _principal_and_interest(inputs)
    monthly_taxes = (BASE_ANNUAL_TAX + inputs.property_price * ANNUAL_TAX_RATE) / MONTHS_PER_YEAR
    monthly_insurance = (
        inputs.property_price * (INSURANCE_PER_THOUSAND / Decimal("1000")) / MONTHS_PER_YEAR
    )

    first_month_interest = inputs.loan_amount * inputs.monthly_rate

    return PaymentBreakdown(
        principal_and_interest=principal_and_interest,
        monthly_taxes=monthly_taxes,
        monthly_insurance=monthly_insurance,
        total_monthly_payment=principal_and_interest + monthly_taxes + monthly_insurance,
        first_month_principal=principal_and_interest - first_month_interest,
        first_month_interest=first_month_interest,
    )


def generate_schedule(inputs: LoanInputs) -> AmortizationSchedule:
    """
    Build the amortization schedule for a loan.

    Validation happens here, not on first iteration.

    Raises:
        InvalidInput: Same conditions as compute_breakdown
    """
    _check_inputs(inputs)

    return AmortizationSchedule(
        loan_amount=inputs.loan_amount,
        monthly_rate=inputs.monthly_rate,
        principal_and_interest=_principal_and_interest(inputs),
        number_of_payments=inputs.number_of_payments,
    )


def payment_components(breakdown: PaymentBreakdown) -> list[PaymentComponent]:
    """Split the monthly payment into its four components with their share of the total."""
    amounts = [
        ("Principal", breakdown.first_month_principal),
        ("Interest", breakdown.first_month_interest),
        ("Taxes", breakdown.monthly_taxes),
        ("Insurance", breakdown.monthly_insurance),
    ]
    total = breakdown.total_monthly_payment

    return [
        PaymentComponent(
            name=name,
            amount=amount,
            percentage=amount / total * Decimal("100") if total else ZERO,
        )
        for name, amount in amounts
    ]


def yearly_totals(schedule: AmortizationSchedule) -> list[YearlyTotal]:
    totals: list[YearlyTotal] = []
    principal = interest = ZERO

    for entry in schedule:
        principal += entry.principal_paid
        interest += entry.interest_paid
        if entry.month_of_year == MONTHS_PER_YEAR or entry.month_index == len(schedule):
            totals.append(
                YearlyTotal(
                    year=entry.year,
                    principal_paid=principal,
                    interest_paid=interest,
                    ending_balance=entry.remaining_balance,
                )
            )
            principal = interest = ZERO

    return totals
