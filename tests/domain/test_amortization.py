"""
Test suite for the amortization engine.

Covers:
- Payment formula (standard and zero-rate)
- Taxes and insurance estimates
- Exact-sum invariant of the breakdown
- Schedule recurrence, restartability and aggregates
- Engine-level rejection of physically invalid inputs
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from mortgage_estimator.domain.amortization import (
    AmortizationSchedule,
    compute_breakdown,
    generate_schedule,
    payment_components,
    yearly_totals,
)
from mortgage_estimator.domain.mortgage import DEFAULT_LOAN_INPUTS, InvalidInput, LoanInputs


def make_inputs(
    price: str = "150000",
    down: str = "30000",
    years: int = 25,
    rate: str = "3.5",
) -> LoanInputs:
    return LoanInputs(
        property_price=Decimal(price),
        down_payment=Decimal(down),
        loan_term_years=years,
        annual_interest_rate_percent=Decimal(rate),
    )


VALID_INPUTS = [
    make_inputs(),
    make_inputs("500000", "100000", 30, "4.2"),
    make_inputs("200000", "40000", 15, "3.0"),
    make_inputs("120000", "0", 20, "5.5"),
    make_inputs("75000", "75000", 10, "2.8"),
    make_inputs("400000", "50000", 40, "12.0"),
    DEFAULT_LOAN_INPUTS,
]


# ============================================================================
# PAYMENT FORMULA
# ============================================================================


def test_principal_and_interest_basic_mortgage():
    """120,000 over 25 years at 3.5%: standard formula gives ~600.75."""
    breakdown = compute_breakdown(make_inputs())

    assert Decimal("600.70") < breakdown.principal_and_interest < Decimal("600.80")


def test_principal_and_interest_large_loan():
    """400,000 over 30 years at 4.2%: ~1,956.07."""
    breakdown = compute_breakdown(make_inputs("500000", "100000", 30, "4.2"))

    assert Decimal("1956.00") < breakdown.principal_and_interest < Decimal("1956.20")


def test_principal_and_interest_shorter_term():
    """160,000 over 15 years at 3.0%: ~1,104.93."""
    breakdown = compute_breakdown(make_inputs("200000", "40000", 15, "3.0"))

    assert Decimal("1104.80") < breakdown.principal_and_interest < Decimal("1105.10")


@pytest.mark.parametrize(
    ("inputs", "quoted"),
    [
        (make_inputs(), Decimal("600.38")),
        (make_inputs("500000", "100000", 30, "4.2"), Decimal("1957.01")),
        (make_inputs("200000", "40000", 15, "3.0"), Decimal("1106.18")),
    ],
)
def test_principal_and_interest_close_to_quoted_estimates(inputs, quoted):
    """Published estimates for these loans are approximate; stay within 0.5%."""
    # The closed-form payment is 600.748..., 1956.069... and 1104.931...; the
    # quoted figures are rounded estimates, not targets for the formula.
    breakdown = compute_breakdown(inputs)

    assert abs(breakdown.principal_and_interest - quoted) / quoted < Decimal("0.005")


def test_zero_rate_is_straight_line():
    """With 0% interest the payment is exactly loan_amount / number_of_payments."""
    inputs = make_inputs("120000", "20000", 20, "0")

    breakdown = compute_breakdown(inputs)

    assert breakdown.principal_and_interest == Decimal("100000") / Decimal(240)
    assert breakdown.first_month_interest == 0
    assert breakdown.first_month_principal == breakdown.principal_and_interest


def test_tiny_rate_approaches_straight_line():
    """As the rate tends to zero the formula converges to the straight-line payment."""
    straight = compute_breakdown(make_inputs("120000", "20000", 20, "0"))
    tiny = compute_breakdown(make_inputs("120000", "20000", 20, "0.000001"))

    assert abs(tiny.principal_and_interest - straight.principal_and_interest) < Decimal("0.01")


def test_fully_paid_property_has_no_principal_and_interest():
    breakdown = compute_breakdown(make_inputs("75000", "75000", 10, "2.8"))

    assert breakdown.principal_and_interest == 0
    assert breakdown.total_monthly_payment == breakdown.monthly_taxes + breakdown.monthly_insurance


def test_higher_rate_means_higher_payment():
    low = compute_breakdown(make_inputs(rate="3.0"))
    high = compute_breakdown(make_inputs(rate="6.0"))

    assert high.principal_and_interest > low.principal_and_interest


def test_longer_term_means_lower_payment_but_more_interest():
    short = make_inputs(years=15)
    long = make_inputs(years=30)

    assert (
        compute_breakdown(long).principal_and_interest
        < compute_breakdown(short).principal_and_interest
    )
    assert (
        generate_schedule(long).total_interest_paid > generate_schedule(short).total_interest_paid
    )


def test_increasing_down_payment_strictly_decreases_payment():
    payments = [
        compute_breakdown(make_inputs(down=down)).principal_and_interest
        for down in ("0", "1000", "30000", "75000", "149999")
    ]

    assert all(later < earlier for earlier, later in zip(payments, payments[1:]))


# ============================================================================
# TAXES, INSURANCE AND TOTAL
# ============================================================================


def test_monthly_taxes_estimate():
    """(2000 + 0.8% of price) per year."""
    breakdown = compute_breakdown(make_inputs())

    assert breakdown.monthly_taxes == (Decimal("2000") + Decimal("1200")) / 12


def test_monthly_insurance_estimate():
    """3.50 per 1000 of price per year."""
    breakdown = compute_breakdown(make_inputs())

    assert breakdown.monthly_insurance == Decimal("43.75")


def test_taxes_and_insurance_ignore_down_payment():
    a = compute_breakdown(make_inputs(down="0"))
    b = compute_breakdown(make_inputs(down="100000"))

    assert a.monthly_taxes == b.monthly_taxes
    assert a.monthly_insurance == b.monthly_insurance


@pytest.mark.parametrize("inputs", VALID_INPUTS)
def test_total_is_exact_sum_of_components(inputs):
    breakdown = compute_breakdown(inputs)

    assert breakdown.total_monthly_payment == (
        breakdown.principal_and_interest + breakdown.monthly_taxes + breakdown.monthly_insurance
    )


def test_default_inputs_breakdown():
    """500,000 price, 100,000 down, 30 years at 5.5%."""
    breakdown = compute_breakdown(DEFAULT_LOAN_INPUTS)

    assert Decimal("2271.10") < breakdown.principal_and_interest < Decimal("2271.20")
    assert breakdown.monthly_taxes == Decimal("500")
    assert Decimal("145.83") < breakdown.monthly_insurance < Decimal("145.84")


# ============================================================================
# FIRST-MONTH SPLIT
# ============================================================================


def test_first_month_split_is_exact():
    inputs = make_inputs()
    breakdown = compute_breakdown(inputs)

    assert breakdown.first_month_interest == inputs.loan_amount * inputs.monthly_rate
    assert (
        breakdown.first_month_principal + breakdown.first_month_interest
        == breakdown.principal_and_interest
    )


def test_first_month_split_matches_schedule_first_entry():
    inputs = make_inputs("500000", "100000", 30, "4.2")
    breakdown = compute_breakdown(inputs)

    first = next(iter(generate_schedule(inputs)))

    assert first.month_index == 1
    assert first.interest_paid == breakdown.first_month_interest
    assert first.principal_paid == breakdown.first_month_principal


def test_payment_components_cover_total():
    breakdown = compute_breakdown(DEFAULT_LOAN_INPUTS)

    components = payment_components(breakdown)

    assert [c.name for c in components] == ["Principal", "Interest", "Taxes", "Insurance"]
    assert sum(c.amount for c in components) == breakdown.total_monthly_payment
    assert abs(sum(c.percentage for c in components) - Decimal("100")) < Decimal("0.0000001")


# ============================================================================
# SCHEDULE
# ============================================================================


@pytest.mark.parametrize("inputs", VALID_INPUTS)
def test_schedule_length_matches_number_of_payments(inputs):
    schedule = generate_schedule(inputs)

    entries = list(schedule)

    assert len(schedule) == inputs.loan_term_years * 12
    assert len(entries) == len(schedule)
    assert [e.month_index for e in entries] == list(range(1, len(schedule) + 1))


@pytest.mark.parametrize("inputs", VALID_INPUTS)
def test_schedule_ends_at_zero_balance(inputs):
    entries = list(generate_schedule(inputs))

    assert entries[-1].remaining_balance < Decimal("0.000001")


@pytest.mark.parametrize("inputs", VALID_INPUTS)
def test_schedule_balance_never_negative(inputs):
    assert all(entry.remaining_balance >= 0 for entry in generate_schedule(inputs))


def test_schedule_recurrence():
    inputs = make_inputs()
    schedule = generate_schedule(inputs)
    breakdown = compute_breakdown(inputs)

    balance = inputs.loan_amount
    for entry in schedule:
        assert entry.interest_paid == balance * inputs.monthly_rate
        assert entry.principal_paid == breakdown.principal_and_interest - entry.interest_paid
        balance = max(Decimal("0"), balance - entry.principal_paid)
        assert entry.remaining_balance == balance


def test_schedule_interest_decreases_over_time():
    entries = list(generate_schedule(make_inputs()))

    assert entries[0].interest_paid > entries[len(entries) // 2].interest_paid
    assert entries[len(entries) // 2].interest_paid > entries[-1].interest_paid


def test_schedule_is_restartable_and_deterministic():
    schedule = generate_schedule(make_inputs())

    assert list(schedule) == list(schedule)
    assert list(schedule) == list(generate_schedule(make_inputs()))


def test_schedule_is_lazy():
    schedule = generate_schedule(make_inputs(years=40))

    iterator = iter(schedule)
    first = next(iterator)

    assert isinstance(schedule, AmortizationSchedule)
    assert first.month_index == 1


def test_zero_rate_schedule_pays_constant_principal():
    inputs = make_inputs("120000", "20000", 20, "0")
    schedule = generate_schedule(inputs)

    entries = list(schedule)

    assert all(e.interest_paid == 0 for e in entries)
    assert all(e.principal_paid == schedule.principal_and_interest for e in entries)
    assert entries[-1].remaining_balance < Decimal("0.000001")
    assert schedule.total_interest_paid < Decimal("0.000001")


def test_schedule_uses_same_payment_as_breakdown():
    inputs = make_inputs("500000", "100000", 30, "4.2")

    assert (
        generate_schedule(inputs).principal_and_interest
        == compute_breakdown(inputs).principal_and_interest
    )


def test_schedule_entry_year_and_month_of_year():
    entries = list(generate_schedule(make_inputs(years=10)))

    assert (entries[0].year, entries[0].month_of_year) == (1, 1)
    assert (entries[11].year, entries[11].month_of_year) == (1, 12)
    assert (entries[12].year, entries[12].month_of_year) == (2, 1)
    assert (entries[-1].year, entries[-1].month_of_year) == (10, 12)


# ============================================================================
# AGGREGATES
# ============================================================================


def test_total_loan_cost_sum_check():
    """For 150000/30000/25y/3.5%: cost == loan + (payment * 300 - loan)."""
    inputs = make_inputs()
    schedule = generate_schedule(inputs)
    payment = compute_breakdown(inputs).principal_and_interest

    assert schedule.total_interest_paid == payment * 300 - inputs.loan_amount
    assert schedule.total_loan_cost == inputs.loan_amount + (payment * 300 - inputs.loan_amount)


def test_total_interest_matches_sum_of_schedule_interest():
    schedule = generate_schedule(make_inputs())

    interest = sum(entry.interest_paid for entry in schedule)

    assert abs(interest - schedule.total_interest_paid) < Decimal("0.000001")


def test_yearly_totals_group_by_year():
    schedule = generate_schedule(make_inputs(years=10))
    entries = list(schedule)

    totals = yearly_totals(schedule)

    assert [t.year for t in totals] == list(range(1, 11))
    assert totals[0].principal_paid == sum(e.principal_paid for e in entries[:12])
    assert totals[0].interest_paid == sum(e.interest_paid for e in entries[:12])
    assert totals[0].ending_balance == entries[11].remaining_balance
    assert totals[-1].ending_balance == entries[-1].remaining_balance


# ============================================================================
# INVALID INPUT
# ============================================================================


def test_rejects_negative_loan_amount():
    inputs = make_inputs(price="100000", down="150000")

    with pytest.raises(InvalidInput, match="loan amount cannot be negative"):
        compute_breakdown(inputs)


def test_rejects_zero_term():
    inputs = make_inputs(years=0)

    with pytest.raises(InvalidInput, match="number of payments must be > 0"):
        compute_breakdown(inputs)


def test_rejects_negative_rate():
    inputs = make_inputs(rate="-1")

    with pytest.raises(InvalidInput, match="interest rate cannot be negative"):
        compute_breakdown(inputs)


def test_generate_schedule_rejects_eagerly():
    """Errors surface when the schedule is requested, not when it is iterated."""
    with pytest.raises(InvalidInput):
        generate_schedule(make_inputs(years=-5))


def test_invalid_input_is_reported_with_code():
    with pytest.raises(InvalidInput) as exc_info:
        compute_breakdown(make_inputs(rate="-2.5"))

    assert exc_info.value.to_dict() == {
        "message": "interest rate cannot be negative",
        "code": "INVALID_INPUT",
        "annual_interest_rate_percent": "-2.5",
    }


def test_engine_does_not_enforce_form_ranges():
    """Range checks belong to the caller; a 5-year loan still computes."""
    breakdown = compute_breakdown(make_inputs(years=5))

    assert breakdown.principal_and_interest > 0
