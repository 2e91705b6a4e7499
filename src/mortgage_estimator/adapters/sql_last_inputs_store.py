"""SQLAlchemy implementation of LastInputsStore."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from mortgage_estimator.adapters.last_inputs_record import from_record, to_record
from mortgage_estimator.domain.mortgage import LoanInputs
from mortgage_estimator.infra.db.models.last_input import LastInputRow
from mortgage_estimator.ports.last_inputs_store import LastInputsStore


class SqlLastInputsStore(LastInputsStore):
    """
    Stores the last-used inputs as key/value rows in the ``last_inputs`` table.

    - One row per LoanInputs field
    - save() upserts every field inside the caller's transaction
    - Commit/rollback is owned by the session provider, not this adapter
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def load(self) -> LoanInputs | None:
        """
        Load the cached inputs.

        Returns:
            LoanInputs if any row exists, None for an empty table

        Raises:
            MalformedStoredInputs: If rows exist but do not form a valid record
        """
        rows = self._session.execute(select(LastInputRow)).scalars().all()
        if not rows:
            return None

        return from_record({row.key: row.value for row in rows})

    def save(self, inputs: LoanInputs) -> None:
        # merge() updates existing keys in place and inserts missing ones
        for key, value in to_record(inputs).items():
            self._session.merge(LastInputRow(key=key, value=value))
        self._session.flush()
