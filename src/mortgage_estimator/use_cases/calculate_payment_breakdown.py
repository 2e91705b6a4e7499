from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from mortgage_estimator.domain.amortization import (
    compute_breakdown,
    generate_schedule,
    payment_components,
)
from mortgage_estimator.domain.mortgage import LoanInputs, PaymentBreakdown, PaymentComponent
from mortgage_estimator.ports.last_inputs_store import LastInputsStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MortgageQuote:
    inputs: LoanInputs
    breakdown: PaymentBreakdown
    components: list[PaymentComponent]
    total_interest_paid: Decimal
    total_loan_cost: Decimal


class CalculatePaymentBreakdown:
    """
    Monthly payment estimate for the summary view.

    Validates the form ranges, runs the amortization engine and remembers
    the inputs so the next session starts from them.

    Rounding policy:
    - Everything returned is full precision Decimal
    - Rounding to cents is done by the presentation layer
    """

    def __init__(self, last_inputs_store: LastInputsStore) -> None:
        self._store = last_inputs_store

    def execute(self, inputs: LoanInputs) -> MortgageQuote:
        """
        Args:
            inputs: Loan inputs as entered by the user

        Returns:
            MortgageQuote with the breakdown, its components and loan totals

        Raises:
            ValidationError: If an input is out of range
            InvalidInput: If the engine rejects the loan
        """
        inputs.validate()

        breakdown = compute_breakdown(inputs)
        schedule = generate_schedule(inputs)

        self._store.save(inputs)

        logger.info(
            "Payment breakdown calculated",
            extra={
                "loan_amount": str(inputs.loan_amount),
                "loan_term_years": inputs.loan_term_years,
                "annual_interest_rate_percent": str(inputs.annual_interest_rate_percent),
            },
        )

        return MortgageQuote(
            inputs=inputs,
            breakdown=breakdown,
            components=payment_components(breakdown),
            total_interest_paid=schedule.total_interest_paid,
            total_loan_cost=schedule.total_loan_cost,
        )
