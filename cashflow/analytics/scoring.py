"""Health score, month-over-month change and expense-ratio alerting.

Every division by zero is special-cased; no function here can return
NaN or infinity.
"""

import math
from typing import Literal

from cashflow.analytics.schemas import ExpenseAlert, Summary, TrendMetric

EXPENSE_ALERT_THRESHOLD = 80


def round_half_up(value: float) -> int:
    """Round .5 towards positive infinity (62.5 -> 63, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def health_score(income: float, expenses: float) -> int:
    """Score income against expenses on a 0-100 scale.

    Break-even maps to 50, zero expenses to 100, and anything spending
    twice the income or more to 0.
    """
    if income == 0:
        return 100 if expenses == 0 else 0
    ratio = (income - expenses) / income
    return max(0, min(100, round_half_up((ratio + 1) * 50)))


def percentage_change(current: float, previous: float) -> int:
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)


def trend_label(change: int) -> Literal["up", "down"]:
    # A flat period counts as "up".
    return "up" if change >= 0 else "down"


def trend_metric(current: float, previous: float, value: float | None = None) -> TrendMetric:
    change = percentage_change(current, previous)
    return TrendMetric(
        value=current if value is None else value,
        percentage_change=change,
        trend=trend_label(change),
    )


def expense_ratio(income: float, expenses: float) -> int:
    """Expenses as a whole-number percentage of income."""
    if income == 0:
        return 100 if expenses > 0 else 0
    return round_half_up(expenses / income * 100)


def should_alert(ratio: int, threshold: int = EXPENSE_ALERT_THRESHOLD) -> bool:
    return ratio >= threshold


def expense_alert(summary: Summary, threshold: int = EXPENSE_ALERT_THRESHOLD) -> ExpenseAlert:
    ratio = expense_ratio(summary.total_income, summary.total_expenses)
    return ExpenseAlert(expense_ratio=ratio, should_alert=should_alert(ratio, threshold))
