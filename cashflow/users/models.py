import json
from dataclasses import dataclass, field
from enum import StrEnum

from cashflow.transactions.models import to_major


class NotificationPreference(StrEnum):
    email = "email"
    sms = "sms"
    both = "both"
    none = "none"


@dataclass(frozen=True)
class User:
    user_id: str
    email: str
    name: str | None
    phone_number: str | None
    currency: str
    business_name: str | None
    business_type: str | None
    business_location: str | None
    team_size: int
    expected_monthly_income_minor: int
    expected_monthly_expense_minor: int
    notification_preference: NotificationPreference
    starting_balance_minor: int
    current_balance_minor: int
    created_at: str
    updated_at: str
    financial_goals: list[str] = field(default_factory=list)

    @property
    def current_balance(self) -> float:
        return to_major(self.current_balance_minor)

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            user_id=row["user_id"],
            email=row["email"],
            name=row["name"],
            phone_number=row["phone_number"],
            currency=row["currency"],
            business_name=row["business_name"],
            business_type=row["business_type"],
            business_location=row["business_location"],
            team_size=row["team_size"],
            financial_goals=json.loads(row["financial_goals"] or "[]"),
            expected_monthly_income_minor=row["expected_monthly_income_minor"],
            expected_monthly_expense_minor=row["expected_monthly_expense_minor"],
            notification_preference=NotificationPreference(row["notification_preference"]),
            starting_balance_minor=row["starting_balance_minor"],
            current_balance_minor=row["current_balance_minor"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
