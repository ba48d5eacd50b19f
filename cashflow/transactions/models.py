from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

MINOR_UNITS = 100

# Largest accepted amount in major units; keeps cents and running sums
# well inside SQLite's signed 64-bit INTEGER.
MAX_AMOUNT = 10_000_000_000_000

DEFAULT_CATEGORIES = {
    "income": "General Income",
    "expense": "General Expense",
}


class TransactionType(StrEnum):
    income = "income"
    expense = "expense"


def to_minor(amount: float) -> int:
    """Convert a major-unit amount (e.g. 12.34) to integer minor units (1234)."""
    return round(amount * MINOR_UNITS)


def to_major(amount_minor: int) -> float:
    return amount_minor / MINOR_UNITS


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are read as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    # Fixed width and zone so string order in storage equals time order.
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds")


@dataclass(frozen=True)
class Transaction:
    id: str
    user_id: str
    type: TransactionType
    amount_minor: int
    category: str
    description: str | None
    date: datetime
    created_at: str
    updated_at: str

    @property
    def amount(self) -> float:
        return to_major(self.amount_minor)

    @property
    def signed_minor(self) -> int:
        if self.type is TransactionType.income:
            return self.amount_minor
        return -self.amount_minor

    @property
    def day(self) -> str:
        return self.date.astimezone(UTC).date().isoformat()

    @classmethod
    def from_row(cls, row: dict) -> "Transaction":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            type=TransactionType(row["type"]),
            amount_minor=int(row["amount_minor"]),
            category=row["category"],
            description=row["description"],
            date=parse_timestamp(row["date"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
