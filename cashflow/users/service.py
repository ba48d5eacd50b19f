from datetime import UTC, datetime

import structlog

from cashflow.config import settings
from cashflow.exceptions import ConflictError, UserNotFoundError, ValidationError
from cashflow.transactions.models import to_minor
from cashflow.users.models import User
from cashflow.users.repository import UserRepository
from cashflow.users.schemas import UserCreate, UserResponse, UserUpdate

logger = structlog.get_logger()

_MONEY_FIELDS = {
    "expected_monthly_income": "expected_monthly_income_minor",
    "expected_monthly_expense": "expected_monthly_expense_minor",
}


class UserService:
    def __init__(self, repo: UserRepository) -> None:
        self._repo = repo

    async def get_user(self, user_id: str) -> User:
        user = await self._repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def get_profile(self, user_id: str) -> UserResponse:
        return UserResponse.from_user(await self.get_user(user_id))

    async def register(self, user_id: str, data: UserCreate) -> UserResponse:
        if await self._repo.get_by_id(user_id) is not None:
            raise ConflictError(f"User '{user_id}' is already registered")

        now = datetime.now(UTC).isoformat()
        await self._repo.create(
            {
                "user_id": user_id,
                "email": data.email.lower(),
                "name": data.name,
                "phone_number": data.phone_number,
                "currency": data.currency or settings.default_currency,
                "business_name": data.business_name,
                "business_type": data.business_type,
                "business_location": data.business_location,
                "team_size": data.team_size,
                "financial_goals": data.financial_goals,
                "expected_monthly_income_minor": to_minor(data.expected_monthly_income),
                "expected_monthly_expense_minor": to_minor(data.expected_monthly_expense),
                "notification_preference": data.notification_preference.value,
                "starting_balance_minor": to_minor(data.starting_balance),
                "created_at": now,
                "updated_at": now,
            }
        )
        await self._repo.commit()

        logger.info("user_registered", user_id=user_id)
        return await self.get_profile(user_id)

    async def update(self, user_id: str, data: UserUpdate) -> UserResponse:
        await self.get_user(user_id)

        update_data = data.model_dump(exclude_none=True, mode="json")
        if not update_data:
            raise ValidationError("No fields to update")

        for field_name, column in _MONEY_FIELDS.items():
            if field_name in update_data:
                update_data[column] = to_minor(update_data.pop(field_name))
        if "email" in update_data:
            update_data["email"] = update_data["email"].lower()
        update_data["updated_at"] = datetime.now(UTC).isoformat()

        await self._repo.update(user_id, update_data)
        await self._repo.commit()

        logger.info("user_updated", user_id=user_id, fields=sorted(update_data))
        return await self.get_profile(user_id)
