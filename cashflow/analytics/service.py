from datetime import datetime

import structlog

from cashflow.analytics.aggregation import aggregate, breakdown, build_series, opening_balance_minor
from cashflow.analytics.periods import resolve_month_pair, resolve_period
from cashflow.analytics.schemas import AnalyticsResponse, DashboardPeriods, DashboardResponse
from cashflow.analytics.scoring import health_score, trend_metric
from cashflow.exceptions import UserNotFoundError
from cashflow.transactions.models import to_major
from cashflow.transactions.repository import TransactionRepository
from cashflow.transactions.schemas import PeriodSummaryResponse, TransactionResponse
from cashflow.users.models import User
from cashflow.users.repository import UserRepository

logger = structlog.get_logger()


class AnalyticsService:
    """Assembles period summaries, analytics and the dashboard for one user.

    Every call fetches what it needs and recomputes from scratch; a failed
    fetch propagates and no partial response is built.
    """

    def __init__(self, transactions: TransactionRepository, users: UserRepository) -> None:
        self._transactions = transactions
        self._users = users

    async def _get_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def period_summary(
        self, user_id: str, token: str, now: datetime | None = None
    ) -> PeriodSummaryResponse:
        period = resolve_period(token, now)
        txns = await self._transactions.list_in_range(user_id, period.start, period.end)

        logger.info("period_summary_built", user_id=user_id, period=token, count=len(txns))
        return PeriodSummaryResponse(
            period=token,
            date_range=period.as_date_range(),
            summary=aggregate(txns),
            transactions=[TransactionResponse.from_transaction(txn) for txn in txns],
            count=len(txns),
        )

    async def analytics(self, user_id: str, token: str, now: datetime | None = None) -> AnalyticsResponse:
        period = resolve_period(token, now)
        user = await self._get_user(user_id)
        txns = await self._transactions.list_in_range(user_id, period.start, period.end)

        anchor = opening_balance_minor(user.current_balance_minor, txns)

        logger.info("analytics_built", user_id=user_id, period=token, count=len(txns))
        return AnalyticsResponse(
            period=token,
            date_range=period.as_date_range(),
            summary=aggregate(txns),
            chart_data=build_series(txns, anchor),
            category_breakdown=breakdown(txns),
        )

    async def dashboard(self, user_id: str, now: datetime | None = None) -> DashboardResponse:
        months = resolve_month_pair(now)
        user = await self._get_user(user_id)
        current_txns = await self._transactions.list_in_range(
            user_id, months.current.start, months.current.end
        )
        previous_txns = await self._transactions.list_in_range(
            user_id, months.previous.start, months.previous.end
        )

        current = aggregate(current_txns)
        previous = aggregate(previous_txns)

        current_score = health_score(current.total_income, current.total_expenses)
        previous_score = health_score(previous.total_income, previous.total_expenses)

        # Balance at the start of the month, reconstructed from this month's net.
        balance = user.current_balance
        month_start_balance = to_major(opening_balance_minor(user.current_balance_minor, current_txns))

        logger.info("dashboard_built", user_id=user_id, health_score=current_score)
        return DashboardResponse(
            monthly_income=trend_metric(current.total_income, previous.total_income),
            monthly_expense=trend_metric(current.total_expenses, previous.total_expenses),
            current_balance=trend_metric(balance, month_start_balance),
            health_score=trend_metric(current_score, previous_score),
            period=DashboardPeriods(
                current=months.current.as_date_range(),
                previous=months.previous.as_date_range(),
            ),
        )
