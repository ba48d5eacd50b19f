from datetime import datetime, timedelta, timezone

import pytest

from cashflow.analytics.aggregation import (
    aggregate,
    breakdown,
    build_series,
    net_minor,
    opening_balance_minor,
    top_categories,
)
from cashflow.analytics.schemas import Summary

from factories import make_transaction


def _scenario():
    return [
        make_transaction("income", 100, "2026-05-01T09:00:00"),
        make_transaction("expense", 40, "2026-05-01T17:45:00"),
        make_transaction("income", 50, "2026-05-02T08:15:00"),
    ]


def test_aggregate_scenario():
    summary = aggregate(_scenario())

    assert summary == Summary(
        total_income=150.0,
        total_expenses=40.0,
        net_amount=110.0,
        transaction_count=3,
    )


def test_aggregate_empty_is_all_zero():
    assert aggregate([]) == Summary(
        total_income=0.0, total_expenses=0.0, net_amount=0.0, transaction_count=0
    )


def test_build_series_scenario():
    series = build_series(_scenario(), anchor_balance_minor=0)

    assert [point.model_dump() for point in series] == [
        {"date": "2026-05-01", "income": 100.0, "expense": 40.0, "net": 60.0, "cumulative_balance": 60.0},
        {"date": "2026-05-02", "income": 50.0, "expense": 0.0, "net": 50.0, "cumulative_balance": 110.0},
    ]


def test_build_series_sorts_unordered_input():
    txns = list(reversed(_scenario()))

    series = build_series(txns, anchor_balance_minor=0)

    assert [p.date for p in series] == ["2026-05-01", "2026-05-02"]
    assert series[-1].cumulative_balance == 110.0


def test_build_series_is_sparse():
    txns = [
        make_transaction("income", 10, "2026-05-01T12:00:00"),
        make_transaction("expense", 5, "2026-05-09T12:00:00"),
    ]

    series = build_series(txns, anchor_balance_minor=0)

    assert [p.date for p in series] == ["2026-05-01", "2026-05-09"]


def test_build_series_empty():
    assert build_series([], anchor_balance_minor=12345) == []


def test_build_series_groups_by_utc_day():
    late_evening_in_new_york = datetime(2026, 5, 1, 22, 0, tzinfo=timezone(timedelta(hours=-4)))
    txns = [make_transaction("income", 10, late_evening_in_new_york)]

    assert build_series(txns, 0)[0].date == "2026-05-02"


def test_series_reconciles_to_current_balance():
    txns = _scenario() + [
        make_transaction("expense", 12.34, "2026-05-03T10:00:00"),
        make_transaction("income", 0.1, "2026-05-03T11:00:00"),
        make_transaction("expense", 0.2, "2026-05-04T11:00:00"),
    ]
    current_balance_minor = 250_000

    anchor = opening_balance_minor(current_balance_minor, txns)
    series = build_series(txns, anchor)

    assert series[-1].cumulative_balance == current_balance_minor / 100
    assert anchor + net_minor(txns) == current_balance_minor
    assert series[-1].cumulative_balance == round(aggregate(txns).net_amount + anchor / 100, 2)


def test_breakdown_expense_scenario():
    txns = [
        make_transaction("expense", 60, "2026-05-01T10:00:00", category="A"),
        make_transaction("expense", 40, "2026-05-02T10:00:00", category="B"),
    ]

    result = breakdown(txns)

    assert [s.model_dump() for s in result.expense] == [
        {"category": "A", "amount": 60.0, "percentage": 60},
        {"category": "B", "amount": 40.0, "percentage": 40},
    ]
    assert result.income == []


def test_breakdown_sorts_descending_and_merges_categories():
    txns = [
        make_transaction("expense", 10, "2026-05-01T10:00:00", category="Rent"),
        make_transaction("expense", 30, "2026-05-01T11:00:00", category="Stock"),
        make_transaction("expense", 20, "2026-05-02T10:00:00", category="Rent"),
        make_transaction("income", 500, "2026-05-02T10:00:00", category="Sales"),
    ]

    result = breakdown(txns)

    assert [(s.category, s.amount) for s in result.expense] == [("Rent", 30.0), ("Stock", 30.0)]
    assert [s.percentage for s in result.expense] == [50, 50]
    assert [(s.category, s.percentage) for s in result.income] == [("Sales", 100)]


def test_breakdown_ties_keep_first_seen_order():
    txns = [
        make_transaction("expense", 25, "2026-05-01T10:00:00", category="Zeta"),
        make_transaction("expense", 25, "2026-05-01T11:00:00", category="Alpha"),
        make_transaction("expense", 50, "2026-05-01T12:00:00", category="Mid"),
    ]

    result = breakdown(txns)

    assert [s.category for s in result.expense] == ["Mid", "Zeta", "Alpha"]


def test_breakdown_zero_total_gives_zero_percentages():
    txns = [
        make_transaction("income", 0, "2026-05-01T10:00:00", category="Refund"),
        make_transaction("income", 0, "2026-05-01T11:00:00", category="Grant"),
    ]

    result = breakdown(txns)

    assert [s.percentage for s in result.income] == [0, 0]


@pytest.mark.parametrize(
    "amounts",
    [
        [12.34],
        [33.33, 33.33, 33.34, 0.5, 7.77],
        [1.0] * 7,
        [1.0] * 40,
        [999.99, 0.01],
        [0.01 * n for n in range(1, 26)],
    ],
    ids=["single", "mixed", "sevenths", "forty-equal", "skewed", "ramp"],
)
def test_breakdown_percentages_close_near_100(amounts):
    txns = [
        make_transaction("expense", round(amount, 2), "2026-05-01T10:00:00", category=f"C{i}")
        for i, amount in enumerate(amounts)
    ]

    slices = breakdown(txns).expense
    total = sum(s.percentage for s in slices)

    assert len(slices) == len(amounts)
    assert all(0 <= s.percentage <= 100 for s in slices)
    # Each slice rounds by at most half a point.
    assert abs(total - 100) <= len(slices) / 2


def test_top_categories_limits_result():
    txns = [
        make_transaction("expense", 10 * (i + 1), "2026-05-01T10:00:00", category=f"C{i}")
        for i in range(7)
    ]

    top = top_categories(breakdown(txns).expense)

    assert [s.category for s in top] == ["C6", "C5", "C4", "C3", "C2"]


def test_engine_functions_are_idempotent():
    txns = _scenario()

    assert aggregate(txns) == aggregate(txns)
    assert build_series(txns, 500) == build_series(txns, 500)
    assert breakdown(txns) == breakdown(txns)
