from datetime import UTC, datetime
from uuid import uuid4

import structlog

from cashflow.analytics.aggregation import aggregate
from cashflow.analytics.periods import resolve_month_pair
from cashflow.analytics.schemas import Summary
from cashflow.exceptions import NotFoundError, UserNotFoundError
from cashflow.notifications.service import NotificationService
from cashflow.transactions.models import (
    DEFAULT_CATEGORIES,
    Transaction,
    parse_timestamp,
    to_major,
    to_minor,
)
from cashflow.transactions.repository import TransactionRepository
from cashflow.transactions.schemas import (
    TransactionCreate,
    TransactionCreated,
    TransactionDeleted,
    TransactionFilter,
    TransactionResponse,
)
from cashflow.users.models import User
from cashflow.users.repository import UserRepository

logger = structlog.get_logger()


class TransactionService:
    def __init__(
        self,
        repo: TransactionRepository,
        users: UserRepository,
        notifications: NotificationService,
    ) -> None:
        self._repo = repo
        self._users = users
        self._notifications = notifications

    async def create(self, user_id: str, data: TransactionCreate) -> TransactionCreated:
        now = datetime.now(UTC)
        timestamp = now.isoformat()
        txn = Transaction(
            id=str(uuid4()),
            user_id=user_id,
            type=data.type,
            amount_minor=to_minor(data.amount),
            category=data.category or DEFAULT_CATEGORIES[data.type],
            description=data.description,
            date=parse_timestamp(data.date) if data.date else now,
            created_at=timestamp,
            updated_at=timestamp,
        )

        # Balance delta, insert and the month re-read commit together or not at all.
        try:
            balance_minor = await self._users.apply_balance_delta(user_id, txn.signed_minor)
            if balance_minor is None:
                raise UserNotFoundError(user_id)
            await self._repo.insert(txn)
            user, month_summary = await self._current_month(user_id)
            await self._repo.commit()
        except Exception:
            await self._repo.rollback()
            raise

        logger.info(
            "transaction_created",
            transaction_id=txn.id,
            user_id=user_id,
            type=txn.type,
            amount=txn.amount,
        )

        alert = await self._notifications.evaluate_and_notify(user, month_summary)
        return TransactionCreated(
            transaction=TransactionResponse.from_transaction(txn),
            current_balance=to_major(balance_minor),
            expense_alert=alert,
        )

    async def _current_month(self, user_id: str) -> tuple[User, Summary]:
        """Profile and current-month summary, read inside the open write transaction."""
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        month = resolve_month_pair().current
        month_txns = await self._repo.list_in_range(user_id, month.start, month.end)
        return user, aggregate(month_txns)

    async def get_by_id(self, user_id: str, transaction_id: str) -> TransactionResponse:
        txn = await self._repo.get_by_id(user_id, transaction_id)
        if txn is None:
            raise NotFoundError("Transaction", transaction_id)
        return TransactionResponse.from_transaction(txn)

    async def list_transactions(self, user_id: str, filters: TransactionFilter) -> list[TransactionResponse]:
        txns = await self._repo.list_filtered(user_id, filters)
        return [TransactionResponse.from_transaction(txn) for txn in txns]

    async def delete(self, user_id: str, transaction_id: str) -> TransactionDeleted:
        """Delete a transaction and reverse its effect on the balance."""
        txn = await self._repo.get_by_id(user_id, transaction_id)
        if txn is None:
            raise NotFoundError("Transaction", transaction_id)

        try:
            balance_minor = await self._users.apply_balance_delta(user_id, -txn.signed_minor)
            if balance_minor is None:
                raise UserNotFoundError(user_id)
            await self._repo.delete(user_id, transaction_id)
            await self._repo.commit()
        except Exception:
            await self._repo.rollback()
            raise

        logger.info(
            "transaction_deleted",
            transaction_id=transaction_id,
            user_id=user_id,
            reversed_type=txn.type,
        )
        return TransactionDeleted(id=transaction_id, current_balance=to_major(balance_minor))
