import structlog

from cashflow.analytics.schemas import ExpenseAlert, Summary
from cashflow.analytics.scoring import EXPENSE_ALERT_THRESHOLD, expense_alert
from cashflow.notifications.base import NotificationSender
from cashflow.users.models import NotificationPreference, User

logger = structlog.get_logger()

EMAIL_SUBJECT = "Financial Alert: High Expense Ratio - {business_name}"

EMAIL_BODY = """FINANCIAL ALERT

Hi there!

Your expenses are getting close to your income level:

Current Status:
- Monthly Income: {currency} {income:,.2f}
- Monthly Expenses: {currency} {expenses:,.2f}
- Expense Ratio: {ratio}%

Your expenses represent {ratio}% of your income. Consider:
- Reviewing and reducing non-essential expenses
- Finding ways to increase revenue
- Setting up a budget to track spending

Log into your CashFlow dashboard to see detailed analytics and AI recommendations.

Best regards,
CashFlow Team
"""

SMS_BODY = (
    "CashFlow Alert: Your expenses ({ratio}%) are close to your income. "
    "Income: {currency} {income:,.2f}, Expenses: {currency} {expenses:,.2f}. "
    "Review your spending to maintain healthy cash flow."
)


class NotificationService:
    def __init__(
        self,
        sender: NotificationSender,
        threshold: int = EXPENSE_ALERT_THRESHOLD,
    ) -> None:
        self._sender = sender
        self._threshold = threshold

    async def evaluate_and_notify(self, user: User, month_summary: Summary) -> ExpenseAlert:
        """Check the month's expense ratio and dispatch an alert if it crosses the threshold."""
        alert = expense_alert(month_summary, self._threshold)
        if alert.should_alert:
            sent = await self.send_expense_alert(user, month_summary, alert.expense_ratio)
            logger.info(
                "expense_alert_evaluated",
                user_id=user.user_id,
                expense_ratio=alert.expense_ratio,
                sent=sent,
            )
        return alert

    async def send_expense_alert(self, user: User, summary: Summary, ratio: int) -> bool:
        preference = user.notification_preference
        if preference is NotificationPreference.none:
            return False

        context = {
            "business_name": user.business_name or "Your Business",
            "currency": user.currency,
            "income": summary.total_income,
            "expenses": summary.total_expenses,
            "ratio": ratio,
        }
        attributes = {"user_id": user.user_id, "expense_ratio": ratio}

        results: list[bool] = []
        if preference in (NotificationPreference.email, NotificationPreference.both):
            results.append(await self._send_email(user, context, attributes))
        if preference in (NotificationPreference.sms, NotificationPreference.both):
            results.append(await self._send_sms(user, context, attributes))
        return any(results)

    async def _send_email(self, user: User, context: dict, attributes: dict) -> bool:
        try:
            await self._sender.send_email(
                user.email,
                EMAIL_SUBJECT.format(**context),
                EMAIL_BODY.format(**context),
                {**attributes, "notification_type": "email"},
            )
        except Exception as exc:
            logger.error("email_notification_failed", user_id=user.user_id, error=str(exc))
            return False
        return True

    async def _send_sms(self, user: User, context: dict, attributes: dict) -> bool:
        if not user.phone_number:
            logger.warning("sms_notification_skipped", user_id=user.user_id, reason="no_phone_number")
            return False
        try:
            await self._sender.send_sms(
                user.phone_number,
                SMS_BODY.format(**context),
                {**attributes, "notification_type": "sms"},
            )
        except Exception as exc:
            logger.error("sms_notification_failed", user_id=user.user_id, error=str(exc))
            return False
        return True
