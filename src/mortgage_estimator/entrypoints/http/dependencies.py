"""
Dependency injection for FastAPI routes.

Key principle: Database sessions are per-request, never cached.
Only the process-wide in-memory store is a cached singleton.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends

from mortgage_estimator.adapters.in_memory_last_inputs_store import InMemoryLastInputsStore
from mortgage_estimator.adapters.sql_last_inputs_store import SqlLastInputsStore
from mortgage_estimator.infra.db.config import database_configured
from mortgage_estimator.infra.db.session import get_session
from mortgage_estimator.ports.last_inputs_store import LastInputsStore
from mortgage_estimator.use_cases.calculate_payment_breakdown import CalculatePaymentBreakdown
from mortgage_estimator.use_cases.generate_amortization_schedule import (
    GenerateAmortizationSchedule,
)
from mortgage_estimator.use_cases.get_last_inputs import GetLastInputs


@lru_cache(maxsize=1)
def get_in_memory_store() -> InMemoryLastInputsStore:
    """Process-wide store used when no DATABASE_URL is configured."""
    return InMemoryLastInputsStore()


def get_last_inputs_store() -> Generator[LastInputsStore, None, None]:
    """
    Provides the last-inputs store for a single request.

    With DATABASE_URL set, the store wraps a per-request session; the
    underlying get_session() commits on success and rolls back on exception.
    Without it, the in-memory singleton is used.

    Yields:
        LastInputsStore: Store bound to the current request
    """
    if not database_configured():
        yield get_in_memory_store()
        return

    with get_session() as session:
        yield SqlLastInputsStore(session=session)


def get_calculate_payment_breakdown_use_case(
    store: LastInputsStore = Depends(get_last_inputs_store),
) -> CalculatePaymentBreakdown:
    return CalculatePaymentBreakdown(last_inputs_store=store)


def get_generate_amortization_schedule_use_case(
    store: LastInputsStore = Depends(get_last_inputs_store),
) -> GenerateAmortizationSchedule:
    return GenerateAmortizationSchedule(last_inputs_store=store)


def get_last_inputs_use_case(
    store: LastInputsStore = Depends(get_last_inputs_store),
) -> GetLastInputs:
    return GetLastInputs(last_inputs_store=store)
