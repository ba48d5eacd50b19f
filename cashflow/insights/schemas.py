from typing import Literal

from pydantic import BaseModel, Field


class Recommendation(BaseModel):
    title: str
    description: str
    priority: Literal["high", "medium", "low"] = "medium"
    category: str = "cash-flow"


class SpendingInsight(BaseModel):
    insight: str
    impact: Literal["positive", "negative", "neutral"] = "neutral"
    suggestion: str


class CashFlowTip(BaseModel):
    title: str
    description: str
    potential_savings: str


class GrowthSuggestion(BaseModel):
    title: str
    description: str
    timeframe: str


class Insights(BaseModel):
    recommendations: list[Recommendation]
    spending_insights: list[SpendingInsight]
    cash_flow_tip: CashFlowTip
    growth_suggestion: GrowthSuggestion


class TopCategory(BaseModel):
    category: str
    amount: float


class FinancialContext(BaseModel):
    business_name: str
    business_type: str
    team_size: int
    location: str
    currency: str
    current_balance: float
    monthly_income: int
    monthly_expenses: int
    net_cash_flow: int
    top_expense_categories: list[TopCategory]
    transaction_count: int
    goals: list[str]
    expected_income: float
    expected_expenses: float


class InsightsMeta(BaseModel):
    analysis_date: str
    data_range: str
    transaction_count: int


class InsightsResponse(BaseModel):
    insights: Insights
    context: InsightsMeta
    generated_by: Literal["model", "fallback"]


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)


class ChatResponse(BaseModel):
    message: str
    timestamp: str
