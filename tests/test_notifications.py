"""Tests for the expense-ratio alert dispatch."""

import pytest

from cashflow.analytics.schemas import Summary
from cashflow.notifications.base import NotificationSender
from cashflow.notifications.service import NotificationService
from cashflow.users.models import NotificationPreference

from factories import RecordingSender, make_user


def _summary(income: float, expenses: float) -> Summary:
    return Summary(
        total_income=income,
        total_expenses=expenses,
        net_amount=income - expenses,
        transaction_count=2,
    )


class FailingSender(NotificationSender):
    async def send_email(self, recipient, subject, body, attributes):
        raise ConnectionError("smtp down")

    async def send_sms(self, phone_number, body, attributes):
        raise ConnectionError("sms gateway down")


@pytest.mark.asyncio
async def test_alert_sends_email_with_figures():
    sender = RecordingSender()
    service = NotificationService(sender)

    alert = await service.evaluate_and_notify(make_user(), _summary(2000, 1800))

    assert alert.expense_ratio == 90
    assert alert.should_alert is True
    [email] = sender.emails
    assert email["subject"] == "Financial Alert: High Expense Ratio - Test Bakery"
    assert "USD 2,000.00" in email["body"]
    assert "USD 1,800.00" in email["body"]
    assert email["attributes"] == {
        "user_id": "user-1",
        "expense_ratio": 90,
        "notification_type": "email",
    }
    assert sender.sms == []


@pytest.mark.asyncio
async def test_no_alert_below_threshold():
    sender = RecordingSender()

    alert = await NotificationService(sender).evaluate_and_notify(make_user(), _summary(2000, 1000))

    assert alert.should_alert is False
    assert sender.emails == []


@pytest.mark.asyncio
async def test_custom_threshold():
    sender = RecordingSender()

    alert = await NotificationService(sender, threshold=50).evaluate_and_notify(
        make_user(), _summary(2000, 1000)
    )

    assert alert.should_alert is True
    assert len(sender.emails) == 1


@pytest.mark.asyncio
async def test_both_preference_sends_email_and_sms():
    sender = RecordingSender()
    user = make_user(notification_preference=NotificationPreference.both)

    sent = await NotificationService(sender).send_expense_alert(user, _summary(100, 100), 100)

    assert sent is True
    assert len(sender.emails) == 1
    assert sender.sms[0]["phone_number"] == "+15550100"
    assert "(100%)" in sender.sms[0]["body"]


@pytest.mark.asyncio
async def test_sms_without_phone_number_is_skipped():
    sender = RecordingSender()
    user = make_user(notification_preference=NotificationPreference.sms, phone_number=None)

    sent = await NotificationService(sender).send_expense_alert(user, _summary(100, 90), 90)

    assert sent is False
    assert sender.sms == []


@pytest.mark.asyncio
async def test_none_preference_sends_nothing():
    sender = RecordingSender()
    user = make_user(notification_preference=NotificationPreference.none)

    alert = await NotificationService(sender).evaluate_and_notify(user, _summary(0, 10))

    assert alert.expense_ratio == 100
    assert alert.should_alert is True
    assert sender.emails == []
    assert sender.sms == []


@pytest.mark.asyncio
async def test_delivery_failure_does_not_raise():
    user = make_user(notification_preference=NotificationPreference.both)

    sent = await NotificationService(FailingSender()).send_expense_alert(user, _summary(10, 9), 90)

    assert sent is False
