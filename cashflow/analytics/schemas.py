from typing import Literal

from pydantic import BaseModel, Field


class DateRange(BaseModel):
    start: str
    end: str


class Summary(BaseModel):
    total_income: float = 0.0
    total_expenses: float = 0.0
    net_amount: float = 0.0
    transaction_count: int = 0


class DailyPoint(BaseModel):
    date: str
    income: float
    expense: float
    net: float
    cumulative_balance: float


class CategorySlice(BaseModel):
    category: str
    amount: float
    percentage: int = Field(ge=0, le=100)


class CategoryBreakdown(BaseModel):
    income: list[CategorySlice] = Field(default_factory=list)
    expense: list[CategorySlice] = Field(default_factory=list)


class TrendMetric(BaseModel):
    value: int | float
    percentage_change: int
    trend: Literal["up", "down"]


class ExpenseAlert(BaseModel):
    expense_ratio: int
    should_alert: bool


class AnalyticsResponse(BaseModel):
    period: str
    date_range: DateRange
    summary: Summary
    chart_data: list[DailyPoint]
    category_breakdown: CategoryBreakdown


class DashboardPeriods(BaseModel):
    current: DateRange
    previous: DateRange


class DashboardResponse(BaseModel):
    monthly_income: TrendMetric
    monthly_expense: TrendMetric
    current_balance: TrendMetric
    health_score: TrendMetric
    period: DashboardPeriods
