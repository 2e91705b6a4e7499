from __future__ import annotations

from threading import Lock

from mortgage_estimator.adapters.last_inputs_record import from_record, to_record
from mortgage_estimator.domain.mortgage import LoanInputs
from mortgage_estimator.ports.last_inputs_store import LastInputsStore


class InMemoryLastInputsStore(LastInputsStore):
    """
    Canonical contract implementation for tests and database-less runs.

    - Keeps the encoded key-value record, not the LoanInputs object, so
      decoding behaves the same as the SQL adapter
    - A pre-seeded record may be passed in to simulate existing (or corrupt) state
    """

    def __init__(self, record: dict[str, str] | None = None) -> None:
        self._record = dict(record) if record is not None else None
        self._lock = Lock()

    def load(self) -> LoanInputs | None:
        with self._lock:
            record = self._record
        if record is None:
            return None
        return from_record(record)

    def save(self, inputs: LoanInputs) -> None:
        with self._lock:
            self._record = to_record(inputs)
