from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from itertools import islice

from mortgage_estimator.domain.amortization import generate_schedule, yearly_totals
from mortgage_estimator.domain.errors import ValidationError
from mortgage_estimator.domain.mortgage import (
    MAX_TERM_YEARS,
    MONTHS_PER_YEAR,
    AmortizationEntry,
    LoanInputs,
    YearlyTotal,
)
from mortgage_estimator.ports.last_inputs_store import LastInputsStore

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = MAX_TERM_YEARS * MONTHS_PER_YEAR


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


@dataclass(frozen=True, slots=True)
class Paging:
    offset: int = 0
    limit: int = MAX_PAGE_SIZE

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.offset < 0:
            raise PagingValidationError("offset must be >= 0")
        if self.limit <= 0:
            raise PagingValidationError("limit must be > 0")
        if self.limit > MAX_PAGE_SIZE:
            raise PagingValidationError(f"limit must be <= {MAX_PAGE_SIZE}")


@dataclass(frozen=True, slots=True)
class AmortizationScheduleRequest:
    inputs: LoanInputs
    paging: Paging = Paging()
    include_yearly_totals: bool = False


@dataclass(frozen=True, slots=True)
class AmortizationSchedulePage:
    entries: list[AmortizationEntry]
    total_count: int
    loan_amount: Decimal
    principal_and_interest: Decimal
    total_interest_paid: Decimal
    total_loan_cost: Decimal
    yearly: list[YearlyTotal] | None = None


class GenerateAmortizationSchedule:
    """
    Amortization schedule for the detail view.

    The full schedule is at most 480 months; paging only trims what is
    returned; totals always describe the whole loan.
    """

    def __init__(self, last_inputs_store: LastInputsStore) -> None:
        self._store = last_inputs_store

    def execute(self, request: AmortizationScheduleRequest) -> AmortizationSchedulePage:
        """
        Raises:
            ValidationError: If an input is out of range
            PagingValidationError: If paging parameters are invalid
            InvalidInput: If the engine rejects the loan
        """
        request.inputs.validate()
        request.paging.validate()

        schedule = generate_schedule(request.inputs)

        start = request.paging.offset
        end = request.paging.offset + request.paging.limit
        entries = list(islice(schedule, start, end))

        self._store.save(request.inputs)

        logger.info(
            "Amortization schedule generated",
            extra={
                "number_of_payments": len(schedule),
                "offset": start,
                "returned": len(entries),
            },
        )

        return AmortizationSchedulePage(
            entries=entries,
            total_count=len(schedule),
            loan_amount=schedule.loan_amount,
            principal_and_interest=schedule.principal_and_interest,
            total_interest_paid=schedule.total_interest_paid,
            total_loan_cost=schedule.total_loan_cost,
            yearly=yearly_totals(schedule) if request.include_yearly_totals else None,
        )
