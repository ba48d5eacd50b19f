from pydantic import BaseModel, Field

from cashflow.transactions.models import MAX_AMOUNT, to_major
from cashflow.users.models import NotificationPreference, User


class UserCreate(BaseModel):
    email: str = Field(min_length=3)
    name: str | None = None
    phone_number: str | None = None
    currency: str | None = None
    business_name: str = Field(min_length=1)
    business_type: str | None = None
    business_location: str | None = None
    team_size: int = Field(default=1, ge=1)
    financial_goals: list[str] = Field(default_factory=list)
    expected_monthly_income: float = Field(default=0.0, ge=0, le=MAX_AMOUNT)
    expected_monthly_expense: float = Field(default=0.0, ge=0, le=MAX_AMOUNT)
    notification_preference: NotificationPreference = NotificationPreference.email
    starting_balance: float = Field(default=0.0, ge=-MAX_AMOUNT, le=MAX_AMOUNT)


class UserUpdate(BaseModel):
    email: str | None = Field(default=None, min_length=3)
    name: str | None = None
    phone_number: str | None = None
    currency: str | None = None
    business_name: str | None = Field(default=None, min_length=1)
    business_type: str | None = None
    business_location: str | None = None
    team_size: int | None = Field(default=None, ge=1)
    financial_goals: list[str] | None = None
    expected_monthly_income: float | None = Field(default=None, ge=0, le=MAX_AMOUNT)
    expected_monthly_expense: float | None = Field(default=None, ge=0, le=MAX_AMOUNT)
    notification_preference: NotificationPreference | None = None


class UserResponse(BaseModel):
    user_id: str
    email: str
    name: str | None
    phone_number: str | None
    currency: str
    business_name: str | None
    business_type: str | None
    business_location: str | None
    team_size: int
    financial_goals: list[str]
    expected_monthly_income: float
    expected_monthly_expense: float
    notification_preference: NotificationPreference
    starting_balance: float
    current_balance: float
    created_at: str
    updated_at: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            phone_number=user.phone_number,
            currency=user.currency,
            business_name=user.business_name,
            business_type=user.business_type,
            business_location=user.business_location,
            team_size=user.team_size,
            financial_goals=user.financial_goals,
            expected_monthly_income=to_major(user.expected_monthly_income_minor),
            expected_monthly_expense=to_major(user.expected_monthly_expense_minor),
            notification_preference=user.notification_preference,
            starting_balance=to_major(user.starting_balance_minor),
            current_balance=user.current_balance,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
