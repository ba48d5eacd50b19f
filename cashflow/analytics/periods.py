"""Resolution of symbolic period tokens and calendar months into date ranges.

All calendar arithmetic is done in UTC. Both bounds of a ``Period`` are
inclusive, matching the ``BETWEEN`` filter used by the transaction store.
"""

import calendar
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum

from cashflow.analytics.schemas import DateRange
from cashflow.exceptions import InvalidPeriodError
from cashflow.transactions.models import format_timestamp


class PeriodToken(StrEnum):
    last_7_days = "7d"
    last_30_days = "30d"
    last_90_days = "90d"
    last_year = "1y"


PERIOD_DURATIONS: dict[PeriodToken, timedelta] = {
    PeriodToken.last_7_days: timedelta(days=7),
    PeriodToken.last_30_days: timedelta(days=30),
    PeriodToken.last_90_days: timedelta(days=90),
    PeriodToken.last_year: timedelta(days=365),
}


@dataclass(frozen=True)
class Period:
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    def as_date_range(self) -> DateRange:
        return DateRange(start=format_timestamp(self.start), end=format_timestamp(self.end))


@dataclass(frozen=True)
class MonthPair:
    current: Period
    previous: Period


def _utc_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now.astimezone(UTC)


def parse_period_token(token: str) -> PeriodToken:
    try:
        return PeriodToken(token)
    except ValueError:
        raise InvalidPeriodError(token, [t.value for t in PeriodToken]) from None


def resolve_period(token: str, now: datetime | None = None) -> Period:
    """Map a rolling-window token to ``[now - duration, now]``."""
    duration = PERIOD_DURATIONS[parse_period_token(token)]
    end = _utc_now(now)
    return Period(start=end - duration, end=end)


def month_period(year: int, month: int) -> Period:
    last_day = calendar.monthrange(year, month)[1]
    return Period(
        start=datetime(year, month, 1, tzinfo=UTC),
        end=datetime(year, month, last_day, 23, 59, 59, 999999, tzinfo=UTC),
    )


def resolve_month_pair(now: datetime | None = None) -> MonthPair:
    """Return the calendar month containing ``now`` and the one before it."""
    moment = _utc_now(now)
    if moment.month == 1:
        previous_year, previous_month = moment.year - 1, 12
    else:
        previous_year, previous_month = moment.year, moment.month - 1
    return MonthPair(
        current=month_period(moment.year, moment.month),
        previous=month_period(previous_year, previous_month),
    )
