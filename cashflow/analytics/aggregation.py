"""Pure aggregations over an already-fetched set of transactions.

Sums are accumulated in integer minor units and converted to major
units only when building the output models, so the cumulative-balance
fold cannot drift.
"""

from collections.abc import Iterable, Sequence

from cashflow.analytics.schemas import CategoryBreakdown, CategorySlice, DailyPoint, Summary
from cashflow.analytics.scoring import round_half_up
from cashflow.transactions.models import Transaction, TransactionType, to_major


def net_minor(transactions: Iterable[Transaction]) -> int:
    return sum(t.signed_minor for t in transactions)


def aggregate(transactions: Sequence[Transaction]) -> Summary:
    income = 0
    expenses = 0
    for txn in transactions:
        if txn.type is TransactionType.income:
            income += txn.amount_minor
        else:
            expenses += txn.amount_minor

    return Summary(
        total_income=to_major(income),
        total_expenses=to_major(expenses),
        net_amount=to_major(income - expenses),
        transaction_count=len(transactions),
    )


def opening_balance_minor(current_balance_minor: int, transactions: Iterable[Transaction]) -> int:
    """Balance before the first of ``transactions``, given the balance after the last."""
    return current_balance_minor - net_minor(transactions)


def build_series(transactions: Iterable[Transaction], anchor_balance_minor: int) -> list[DailyPoint]:
    """Build the sparse daily chart series with a running balance.

    ``anchor_balance_minor`` is the balance before the earliest transaction.
    Only days with at least one transaction appear; they are ordered oldest
    first because the running balance is a left fold.
    """
    days: dict[str, list[int]] = {}
    for txn in transactions:
        totals = days.setdefault(txn.day, [0, 0])
        if txn.type is TransactionType.income:
            totals[0] += txn.amount_minor
        else:
            totals[1] += txn.amount_minor

    series: list[DailyPoint] = []
    balance = anchor_balance_minor
    for day in sorted(days):
        income, expense = days[day]
        net = income - expense
        balance += net
        series.append(
            DailyPoint(
                date=day,
                income=to_major(income),
                expense=to_major(expense),
                net=to_major(net),
                cumulative_balance=to_major(balance),
            )
        )
    return series


def _slices(totals: dict[str, int]) -> list[CategorySlice]:
    partition_total = sum(totals.values())
    slices = [
        CategorySlice(
            category=category,
            amount=to_major(amount),
            percentage=(
                round_half_up(amount / partition_total * 100) if partition_total > 0 else 0
            ),
        )
        for category, amount in totals.items()
    ]
    # sort() is stable: equal amounts keep first-seen order
    slices.sort(key=lambda s: s.amount, reverse=True)
    return slices


def breakdown(transactions: Iterable[Transaction]) -> CategoryBreakdown:
    partitions: dict[TransactionType, dict[str, int]] = {
        TransactionType.income: {},
        TransactionType.expense: {},
    }
    for txn in transactions:
        totals = partitions[txn.type]
        totals[txn.category] = totals.get(txn.category, 0) + txn.amount_minor

    return CategoryBreakdown(
        income=_slices(partitions[TransactionType.income]),
        expense=_slices(partitions[TransactionType.expense]),
    )


def top_categories(slices: Sequence[CategorySlice], limit: int = 5) -> list[CategorySlice]:
    return list(slices[:limit])
