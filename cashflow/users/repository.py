import json

import aiosqlite
import structlog

from cashflow.exceptions import UpstreamFetchError
from cashflow.users.models import User

logger = structlog.get_logger()

_UPDATABLE_COLUMNS = frozenset(
    {
        "email",
        "name",
        "phone_number",
        "currency",
        "business_name",
        "business_type",
        "business_location",
        "team_size",
        "financial_goals",
        "expected_monthly_income_minor",
        "expected_monthly_expense_minor",
        "notification_preference",
        "updated_at",
    }
)


class UserRepository:
    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def get_by_id(self, user_id: str) -> User | None:
        try:
            cursor = await self._db.execute(
                "SELECT * FROM users WHERE user_id = ?",
                (user_id,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            logger.error("user_fetch_failed", user_id=user_id, error=str(exc))
            raise UpstreamFetchError("Failed to fetch user") from exc
        if row is None:
            return None
        return User.from_row(dict(row))

    async def create(self, data: dict) -> None:
        await self._db.execute(
            """
            INSERT INTO users (
                user_id, email, name, phone_number, currency, business_name,
                business_type, business_location, team_size, financial_goals,
                expected_monthly_income_minor, expected_monthly_expense_minor,
                notification_preference, starting_balance_minor,
                current_balance_minor, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                data["user_id"],
                data["email"],
                data.get("name"),
                data.get("phone_number"),
                data["currency"],
                data.get("business_name"),
                data.get("business_type"),
                data.get("business_location"),
                data.get("team_size", 1),
                json.dumps(data.get("financial_goals", [])),
                data.get("expected_monthly_income_minor", 0),
                data.get("expected_monthly_expense_minor", 0),
                data["notification_preference"],
                data["starting_balance_minor"],
                data["starting_balance_minor"],
                data["created_at"],
                data["updated_at"],
            ),
        )

    async def update(self, user_id: str, fields: dict) -> None:
        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update columns: {sorted(unknown)}")

        values = dict(fields)
        if "financial_goals" in values:
            values["financial_goals"] = json.dumps(values["financial_goals"])

        assignments = ", ".join(f"{column} = ?" for column in values)
        await self._db.execute(
            f"UPDATE users SET {assignments} WHERE user_id = ?",
            (*values.values(), user_id),
        )

    async def apply_balance_delta(self, user_id: str, delta_minor: int) -> int | None:
        """Add a signed delta to the stored balance in one statement.

        Returns the new balance, or None when the user does not exist.
        Does not commit; the caller owns the surrounding transaction.
        """
        cursor = await self._db.execute(
            """
            UPDATE users
            SET current_balance_minor = current_balance_minor + ?
            WHERE user_id = ?
            RETURNING current_balance_minor
            """,
            (delta_minor, user_id),
        )
        row = await cursor.fetchone()
        await cursor.close()
        if row is None:
            return None
        return int(row["current_balance_minor"])

    async def commit(self) -> None:
        await self._db.commit()
