from __future__ import annotations

from abc import ABC, abstractmethod

from mortgage_estimator.domain.mortgage import LoanInputs


class LastInputsStore(ABC):
    """
    Port for caching the most recently used loan inputs.

    The cache holds at most one record, stored as a flat key-value mapping.
    It belongs to the calculator front end; the amortization engine never
    touches it.

    Contract:
        - save() overwrites any previously stored record
        - load() returns None when nothing has been stored yet
        - load() raises MalformedStoredInputs when a record exists but cannot be decoded
    """

    @abstractmethod
    def load(self) -> LoanInputs | None: ...

    @abstractmethod
    def save(self, inputs: LoanInputs) -> None: ...
