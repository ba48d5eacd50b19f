"""AI insights and chat over the user's recent financial summary.

The chat model is optional: when it is missing, fails, or returns
something unparseable, a deterministic fallback built from the same
numbers is returned instead.
"""

import json
import re
from datetime import UTC, datetime

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage

from cashflow.analytics.aggregation import aggregate, breakdown, top_categories
from cashflow.analytics.periods import PeriodToken, resolve_period
from cashflow.analytics.scoring import round_half_up
from cashflow.exceptions import UserNotFoundError
from cashflow.insights.prompts import CHAT_FALLBACK, CHAT_PROMPT, INSIGHTS_PROMPT
from cashflow.insights.schemas import (
    CashFlowTip,
    ChatResponse,
    FinancialContext,
    GrowthSuggestion,
    Insights,
    InsightsMeta,
    InsightsResponse,
    Recommendation,
    SpendingInsight,
    TopCategory,
)
from cashflow.transactions.models import to_major
from cashflow.transactions.repository import TransactionRepository
from cashflow.users.models import User
from cashflow.users.repository import UserRepository

logger = structlog.get_logger()

_INSIGHT_MONTHS = 3
_TOP_CATEGORY_LIMIT = 5
_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


def _message_text(message) -> str:
    content = message.content
    if isinstance(content, str):
        return content
    # Anthropic models may return a list of content blocks.
    return "".join(
        block.get("text", "") if isinstance(block, dict) else str(block) for block in content
    )


def parse_insights(text: str) -> Insights:
    match = _JSON_BLOCK.search(text)
    if match is None:
        raise ValueError("Could not find a JSON object in the model response")
    return Insights.model_validate(json.loads(match.group(0)))


def fallback_insights(context: FinancialContext) -> Insights:
    net = context.net_cash_flow
    advice = (
        "Consider investing surplus funds."
        if net > 0
        else "Focus on reducing expenses or increasing income."
    )
    top = context.top_expense_categories[0].category if context.top_expense_categories else "Unknown"
    return Insights(
        recommendations=[
            Recommendation(
                title="Monitor Cash Flow",
                description=(
                    f"Your current net cash flow is {context.currency} {net:,}/month. {advice}"
                ),
                priority="high",
                category="cash-flow",
            )
        ],
        spending_insights=[
            SpendingInsight(
                insight=f"Your top expense category is {top}",
                impact="neutral",
                suggestion="Review if this spending aligns with your business goals",
            )
        ],
        cash_flow_tip=CashFlowTip(
            title="Expense Tracking",
            description="Continue monitoring your expenses to identify optimization opportunities",
            potential_savings="5-10% of monthly expenses",
        ),
        growth_suggestion=GrowthSuggestion(
            title="Revenue Diversification",
            description=(
                "Consider adding new revenue streams to reduce dependency on current income sources"
            ),
            timeframe="medium term",
        ),
    )


class InsightsService:
    def __init__(
        self,
        transactions: TransactionRepository,
        users: UserRepository,
        llm: BaseChatModel | None,
    ) -> None:
        self._transactions = transactions
        self._users = users
        self._llm = llm

    async def _get_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def build_context(self, user_id: str, now: datetime | None = None) -> FinancialContext:
        user = await self._get_user(user_id)
        period = resolve_period(PeriodToken.last_90_days, now)
        txns = await self._transactions.list_in_range(user_id, period.start, period.end)

        summary = aggregate(txns)
        top = top_categories(breakdown(txns).expense, _TOP_CATEGORY_LIMIT)

        logger.info("insights_context_built", user_id=user_id, transaction_count=len(txns))
        return FinancialContext(
            business_name=user.business_name or "Business",
            business_type=user.business_type or "General",
            team_size=user.team_size,
            location=user.business_location or "Unknown",
            currency=user.currency,
            current_balance=user.current_balance,
            monthly_income=round_half_up(summary.total_income / _INSIGHT_MONTHS),
            monthly_expenses=round_half_up(summary.total_expenses / _INSIGHT_MONTHS),
            net_cash_flow=round_half_up(summary.net_amount / _INSIGHT_MONTHS),
            top_expense_categories=[TopCategory(category=s.category, amount=s.amount) for s in top],
            transaction_count=summary.transaction_count,
            goals=user.financial_goals,
            expected_income=to_major(user.expected_monthly_income_minor),
            expected_expenses=to_major(user.expected_monthly_expense_minor),
        )

    def build_prompt(self, context: FinancialContext) -> str:
        categories = "\n".join(
            f"- {c.category}: {context.currency} {c.amount:,.2f}"
            for c in context.top_expense_categories
        )
        goals = "\n".join(f"- {goal}" for goal in context.goals)
        return INSIGHTS_PROMPT.format(
            business_name=context.business_name,
            business_type=context.business_type,
            team_size=context.team_size,
            location=context.location,
            currency=context.currency,
            current_balance=context.current_balance,
            monthly_income=context.monthly_income,
            monthly_expenses=context.monthly_expenses,
            net_cash_flow=context.net_cash_flow,
            transaction_count=context.transaction_count,
            top_categories=categories or "- No expenses recorded",
            goals=goals or "- No specific goals set",
            expected_income=context.expected_income,
            expected_expenses=context.expected_expenses,
        )

    async def generate(self, user_id: str) -> InsightsResponse:
        context = await self.build_context(user_id)
        insights, source = await self._ask_model(context)

        return InsightsResponse(
            insights=insights,
            context=InsightsMeta(
                analysis_date=datetime.now(UTC).isoformat(),
                data_range="90 days",
                transaction_count=context.transaction_count,
            ),
            generated_by=source,
        )

    async def _ask_model(self, context: FinancialContext) -> tuple[Insights, str]:
        if self._llm is None:
            logger.info("insights_fallback", reason="no_model_configured")
            return fallback_insights(context), "fallback"

        try:
            reply = await self._llm.ainvoke([HumanMessage(content=self.build_prompt(context))])
            insights = parse_insights(_message_text(reply))
        except ValueError as exc:
            logger.warning("insights_unparseable", error=str(exc))
            return fallback_insights(context), "fallback"
        except Exception as exc:
            logger.error("insights_model_error", error=str(exc))
            return fallback_insights(context), "fallback"

        logger.info("insights_generated", recommendations=len(insights.recommendations))
        return insights, "model"


class ChatService:
    def __init__(
        self,
        transactions: TransactionRepository,
        users: UserRepository,
        llm: BaseChatModel | None,
    ) -> None:
        self._transactions = transactions
        self._users = users
        self._llm = llm

    async def reply(self, user_id: str, message: str, now: datetime | None = None) -> ChatResponse:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        period = resolve_period(PeriodToken.last_30_days, now)
        summary = aggregate(await self._transactions.list_in_range(user_id, period.start, period.end))

        values = {
            "business_name": user.business_name or "Your Business",
            "business_type": user.business_type or "Business",
            "currency": user.currency,
            "current_balance": user.current_balance,
            "recent_income": summary.total_income,
            "recent_expenses": summary.total_expenses,
        }

        text = CHAT_FALLBACK.format(**values)
        if self._llm is not None:
            try:
                reply = await self._llm.ainvoke(
                    [HumanMessage(content=CHAT_PROMPT.format(message=message, **values))]
                )
                text = _message_text(reply).strip() or text
            except Exception as exc:
                logger.error("chat_model_error", user_id=user_id, error=str(exc))

        logger.info("chat_replied", user_id=user_id)
        return ChatResponse(message=text, timestamp=datetime.now(UTC).isoformat())
