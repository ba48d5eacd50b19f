"""Tests for AI insights and chat, with and without a chat model."""

import json
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient
from langchain_core.language_models import FakeListChatModel

from cashflow.insights.service import InsightsService, parse_insights
from cashflow.transactions.repository import TransactionRepository
from cashflow.users.repository import UserRepository

from factories import make_transaction, seed_transactions

MODEL_INSIGHTS = {
    "recommendations": [
        {
            "title": "Trim supplier costs",
            "description": "Negotiate bulk pricing for flour.",
            "priority": "high",
            "category": "spending",
        }
    ],
    "spending_insights": [
        {"insight": "Stock dominates spend", "impact": "negative", "suggestion": "Order less often"}
    ],
    "cash_flow_tip": {
        "title": "Invoice faster",
        "description": "Send invoices on delivery.",
        "potential_savings": "2%",
    },
    "growth_suggestion": {
        "title": "Wholesale",
        "description": "Supply local cafes.",
        "timeframe": "short term",
    },
}


async def _seed_quarter(db):
    now = datetime.now(UTC)
    await seed_transactions(
        db,
        [
            make_transaction("income", 3000, now - timedelta(days=5), category="Sales"),
            make_transaction("income", 3000, now - timedelta(days=40), category="Sales"),
            make_transaction("expense", 1200, now - timedelta(days=6), category="Stock"),
            make_transaction("expense", 600, now - timedelta(days=7), category="Rent"),
            make_transaction("expense", 9999, now - timedelta(days=120), category="Old"),
        ],
    )


def test_parse_insights_extracts_json_from_prose():
    text = f"Here you go:\n{json.dumps(MODEL_INSIGHTS)}\nHope this helps."

    insights = parse_insights(text)

    assert insights.recommendations[0].title == "Trim supplier costs"


def test_parse_insights_rejects_text_without_json():
    with pytest.raises(ValueError):
        parse_insights("no structured answer today")


@pytest.mark.asyncio
async def test_insights_fallback_without_model(client: AsyncClient, registered_user: str, db):
    await _seed_quarter(db)

    response = await client.get("/api/v1/insights/")

    assert response.status_code == 200
    data = response.json()
    assert data["generated_by"] == "fallback"
    assert data["context"]["data_range"] == "90 days"
    assert data["context"]["transaction_count"] == 4
    # (6000 - 1800) / 3 months
    assert "USD 1,400/month" in data["insights"]["recommendations"][0]["description"]
    assert data["insights"]["spending_insights"][0]["insight"] == "Your top expense category is Stock"


@pytest.mark.asyncio
@pytest.mark.parametrize("llm", [FakeListChatModel(responses=[json.dumps(MODEL_INSIGHTS)])])
async def test_insights_from_model(client: AsyncClient, registered_user: str, db, llm):
    await _seed_quarter(db)

    response = await client.get("/api/v1/insights/")

    data = response.json()
    assert data["generated_by"] == "model"
    assert data["insights"]["cash_flow_tip"]["title"] == "Invoice faster"


@pytest.mark.asyncio
@pytest.mark.parametrize("llm", [FakeListChatModel(responses=["I cannot help with that."])])
async def test_insights_unparseable_model_reply_falls_back(
    client: AsyncClient, registered_user: str, llm
):
    response = await client.get("/api/v1/insights/")

    assert response.json()["generated_by"] == "fallback"


@pytest.mark.asyncio
async def test_insights_requires_registration(client: AsyncClient):
    response = await client.get("/api/v1/insights/")

    assert response.status_code == 400
    assert response.json()["error"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_insights_context_numbers(registered_user: str, db):
    await _seed_quarter(db)
    service = InsightsService(TransactionRepository(db), UserRepository(db), llm=None)

    context = await service.build_context(registered_user)

    assert context.monthly_income == 2000
    assert context.monthly_expenses == 600
    assert context.net_cash_flow == 1400
    assert [c.category for c in context.top_expense_categories] == ["Stock", "Rent"]
    assert context.goals == ["Build a 3-month reserve"]
    prompt = service.build_prompt(context)
    assert "- Stock: USD 1,200.00" in prompt
    assert "Team Size: 3" in prompt


@pytest.mark.asyncio
@pytest.mark.parametrize("llm", [FakeListChatModel(responses=["Cut your stock orders by 10%."])])
async def test_chat_reply_from_model(client: AsyncClient, registered_user: str, llm):
    response = await client.post("/api/v1/chat/", json={"message": "How do I save money?"})

    assert response.status_code == 200
    assert response.json()["message"] == "Cut your stock orders by 10%."


def _failing_model():
    model = MagicMock()
    model.ainvoke = AsyncMock(side_effect=RuntimeError("model unavailable"))
    return model


@pytest.mark.asyncio
@pytest.mark.parametrize("llm", [_failing_model()])
async def test_chat_model_failure_falls_back(client: AsyncClient, registered_user: str, llm):
    response = await client.post("/api/v1/chat/", json={"message": "Hello"})

    assert response.status_code == 200
    assert "USD 1,000.00 available" in response.json()["message"]


@pytest.mark.asyncio
async def test_chat_rejects_empty_message(client: AsyncClient, registered_user: str):
    response = await client.post("/api/v1/chat/", json={"message": ""})

    assert response.status_code == 422
