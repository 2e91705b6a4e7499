"""Get last-used inputs use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mortgage_estimator.domain.errors import MalformedStoredInputs, ValidationError
from mortgage_estimator.domain.mortgage import DEFAULT_LOAN_INPUTS, LoanInputs
from mortgage_estimator.ports.last_inputs_store import LastInputsStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LastInputsResult:
    inputs: LoanInputs
    is_default: bool


class GetLastInputs:
    """
    Use case for pre-filling the calculator form.

    Responsibilities:
    - Return the cached inputs when present and valid
    - Fall back to DEFAULT_LOAN_INPUTS when the cache is empty, malformed,
      or holds values outside the accepted ranges
    """

    def __init__(self, last_inputs_store: LastInputsStore) -> None:
        self._store = last_inputs_store

    def execute(self) -> LastInputsResult:
        try:
            inputs = self._store.load()
            if inputs is not None:
                inputs.validate()
        except (MalformedStoredInputs, ValidationError) as exc:
            logger.warning(
                "Discarding unusable stored inputs",
                extra={"error_code": exc.error_code, "reason": exc.message},
            )
            inputs = None

        if inputs is None:
            return LastInputsResult(inputs=DEFAULT_LOAN_INPUTS, is_default=True)

        return LastInputsResult(inputs=inputs, is_default=False)
