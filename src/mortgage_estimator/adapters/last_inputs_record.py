"""Flat key-value encoding of ``LoanInputs`` shared by the store adapters."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Mapping

from mortgage_estimator.domain.errors import MalformedStoredInputs
from mortgage_estimator.domain.mortgage import LoanInputs

RECORD_KEYS = (
    "property_price",
    "down_payment",
    "loan_term_years",
    "annual_interest_rate_percent",
)


def to_record(inputs: LoanInputs) -> dict[str, str]:
    """Encode inputs as strings so Decimal values round-trip exactly."""
    return {
        "property_price": str(inputs.property_price),
        "down_payment": str(inputs.down_payment),
        "loan_term_years": str(inputs.loan_term_years),
        "annual_interest_rate_percent": str(inputs.annual_interest_rate_percent),
    }


def from_record(record: Mapping[str, str]) -> LoanInputs:
    """
    Decode a stored record back into LoanInputs.

    Only the encoding is checked here. Range validation stays with the use case.

    Raises:
        MalformedStoredInputs: If a key is missing or a value does not parse
    """
    missing = [key for key in RECORD_KEYS if key not in record]
    if missing:
        raise MalformedStoredInputs("stored inputs are incomplete", missing=missing)

    try:
        inputs = LoanInputs(
            property_price=Decimal(record["property_price"]),
            down_payment=Decimal(record["down_payment"]),
            loan_term_years=int(record["loan_term_years"]),
            annual_interest_rate_percent=Decimal(record["annual_interest_rate_percent"]),
        )
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise MalformedStoredInputs("stored inputs could not be decoded", reason=str(exc)) from exc

    # Decimal() accepts "NaN" and "Infinity"; neither is a usable amount
    values = (inputs.property_price, inputs.down_payment, inputs.annual_interest_rate_percent)
    if not all(value.is_finite() for value in values):
        raise MalformedStoredInputs("stored inputs contain non-finite values")

    return inputs
