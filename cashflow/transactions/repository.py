from datetime import datetime

import aiosqlite
import structlog

from cashflow.exceptions import UpstreamFetchError
from cashflow.transactions.models import Transaction, format_timestamp
from cashflow.transactions.schemas import TransactionFilter

logger = structlog.get_logger()

_COLUMNS = """
    id, user_id, type, amount_minor, category, description,
    date, created_at, updated_at
"""


class TransactionRepository:
    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def _fetch(self, query: str, params: tuple | list) -> list[Transaction]:
        try:
            cursor = await self._db.execute(query, params)
            rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            logger.error("transaction_fetch_failed", error=str(exc))
            raise UpstreamFetchError("Failed to fetch transactions") from exc

        try:
            return [Transaction.from_row(dict(row)) for row in rows]
        except ValueError as exc:
            logger.error("transaction_row_rejected", error=str(exc))
            raise UpstreamFetchError(f"Malformed transaction record: {exc}") from exc

    async def insert(self, txn: Transaction) -> None:
        await self._db.execute(
            f"""
            INSERT INTO transactions ({_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                txn.id,
                txn.user_id,
                txn.type.value,
                txn.amount_minor,
                txn.category,
                txn.description,
                format_timestamp(txn.date),
                txn.created_at,
                txn.updated_at,
            ),
        )

    async def delete(self, user_id: str, transaction_id: str) -> None:
        await self._db.execute(
            "DELETE FROM transactions WHERE id = ? AND user_id = ?",
            (transaction_id, user_id),
        )

    async def get_by_id(self, user_id: str, transaction_id: str) -> Transaction | None:
        rows = await self._fetch(
            f"SELECT {_COLUMNS} FROM transactions WHERE id = ? AND user_id = ?",
            (transaction_id, user_id),
        )
        return rows[0] if rows else None

    async def list_filtered(self, user_id: str, filters: TransactionFilter) -> list[Transaction]:
        conditions: list[str] = ["user_id = ?"]
        params: list = [user_id]

        if filters.category is not None:
            conditions.append("category = ?")
            params.append(filters.category)
        if filters.type is not None:
            conditions.append("type = ?")
            params.append(filters.type.value)

        where_clause = " AND ".join(conditions)
        params.extend([filters.limit, filters.offset])

        return await self._fetch(
            f"""
            SELECT {_COLUMNS}
            FROM transactions
            WHERE {where_clause}
            ORDER BY date DESC, created_at DESC
            LIMIT ? OFFSET ?
            """,
            params,
        )

    async def list_in_range(self, user_id: str, start: datetime, end: datetime) -> list[Transaction]:
        """All of a user's transactions dated within ``[start, end]``, newest first."""
        return await self._fetch(
            f"""
            SELECT {_COLUMNS}
            FROM transactions
            WHERE user_id = ? AND date BETWEEN ? AND ?
            ORDER BY date DESC, created_at DESC
            """,
            (user_id, format_timestamp(start), format_timestamp(end)),
        )

    async def commit(self) -> None:
        await self._db.commit()

    async def rollback(self) -> None:
        await self._db.rollback()
