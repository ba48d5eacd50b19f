import structlog

from cashflow.notifications.base import NotificationSender

logger = structlog.get_logger()


class LogNotificationSender(NotificationSender):
    """Writes notifications to the log instead of delivering them."""

    async def send_email(self, recipient: str, subject: str, body: str, attributes: dict) -> None:
        logger.info("email_notification", recipient=recipient, subject=subject, **attributes)

    async def send_sms(self, phone_number: str, body: str, attributes: dict) -> None:
        logger.info("sms_notification", phone_number=phone_number, **attributes)
