from pydantic import BaseModel, Field, field_validator

from cashflow.analytics.schemas import DateRange, ExpenseAlert, Summary
from cashflow.transactions.models import (
    MAX_AMOUNT,
    Transaction,
    TransactionType,
    format_timestamp,
    parse_timestamp,
)


class TransactionCreate(BaseModel):
    type: TransactionType
    amount: float = Field(gt=0, le=MAX_AMOUNT)
    description: str = Field(min_length=1)
    category: str | None = None
    date: str | None = None

    @field_validator("amount")
    @classmethod
    def _at_most_two_decimals(cls, value: float) -> float:
        if abs(value * 100 - round(value * 100)) > 1e-6:
            raise ValueError("amount must have at most two decimal places")
        return value

    @field_validator("category")
    @classmethod
    def _blank_category_is_missing(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("date")
    @classmethod
    def _normalise_date(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            return format_timestamp(parse_timestamp(value))
        except ValueError:
            raise ValueError("date must be an ISO-8601 timestamp") from None


class TransactionResponse(BaseModel):
    id: str
    type: TransactionType
    amount: float
    category: str
    description: str | None
    date: str
    created_at: str
    updated_at: str

    @classmethod
    def from_transaction(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            id=txn.id,
            type=txn.type,
            amount=txn.amount,
            category=txn.category,
            description=txn.description,
            date=format_timestamp(txn.date),
            created_at=txn.created_at,
            updated_at=txn.updated_at,
        )


class TransactionFilter(BaseModel):
    category: str | None = None
    type: TransactionType | None = None
    limit: int = Field(default=50, ge=1, le=500)
    offset: int = Field(default=0, ge=0)


class TransactionCreated(BaseModel):
    transaction: TransactionResponse
    current_balance: float
    expense_alert: ExpenseAlert


class PeriodSummaryResponse(BaseModel):
    period: str
    date_range: DateRange
    summary: Summary
    transactions: list[TransactionResponse]
    count: int


class TransactionDeleted(BaseModel):
    id: str
    current_balance: float
