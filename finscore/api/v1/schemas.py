"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator
from finscore.domain.models import (
    Asset,
    AssetCategory,
    Frequency,
    GoalStatus,
    Liability,
    LiabilityCategory,
    RecordSnapshot,
    RecurringExpense,
    SavingsGoal,
    Transaction,
    TransactionType,
)


class TransactionIn(BaseModel):
    """Transaction record as posted by a caller"""

    id: str = Field(..., min_length=1)
    created_at: datetime
    amount: Decimal = Field(..., description="Signed amount, positive = inflow")
    type: TransactionType
    category: str = ""
    description: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: Decimal) -> Decimal:
        if value == 0:
            raise ValueError("zero-amount transactions have no economic effect")
        return value

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            timestamp=self.created_at,
            amount=self.amount,
            type=self.type,
            category=self.category,
            description=self.description,
        )


class AssetIn(BaseModel):
    id: str = Field(..., min_length=1)
    category: AssetCategory
    current_value: Decimal = Field(..., ge=0)
    currency: str = Field(..., min_length=1)
    name: Optional[str] = None

    def to_domain(self) -> Asset:
        return Asset(
            id=self.id,
            category=self.category,
            current_value=self.current_value,
            currency=self.currency,
            name=self.name,
        )


class LiabilityIn(BaseModel):
    id: str = Field(..., min_length=1)
    category: LiabilityCategory
    remaining_amount: Decimal = Field(..., ge=0)
    currency: str = Field(..., min_length=1)
    interest_rate: Optional[Decimal] = Field(default=None, ge=0)
    monthly_payment: Optional[Decimal] = Field(default=None, ge=0)
    name: Optional[str] = None

    def to_domain(self) -> Liability:
        return Liability(
            id=self.id,
            category=self.category,
            remaining_amount=self.remaining_amount,
            currency=self.currency,
            interest_rate=self.interest_rate,
            monthly_payment=self.monthly_payment,
            name=self.name,
        )


class SavingsGoalIn(BaseModel):
    id: str = Field(..., min_length=1)
    target_amount: Decimal = Field(..., gt=0)
    current_amount: Decimal = Field(..., ge=0)
    status: GoalStatus = GoalStatus.ACTIVE

    def to_domain(self) -> SavingsGoal:
        return SavingsGoal(
            id=self.id,
            target_amount=self.target_amount,
            current_amount=self.current_amount,
            status=self.status,
        )


class RecurringExpenseIn(BaseModel):
    id: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)
    frequency: Frequency
    is_active: bool = True

    def to_domain(self) -> RecurringExpense:
        return RecurringExpense(id=self.id, amount=self.amount, frequency=self.frequency, is_active=self.is_active)


class EvaluateRequest(BaseModel):
    """Request body for POST /v1/dashboard/evaluate"""

    transactions: List[TransactionIn] = []
    assets: List[AssetIn] = []
    liabilities: List[LiabilityIn] = []
    goals: List[SavingsGoalIn] = []
    recurring_expenses: List[RecurringExpenseIn] = []
    now: Optional[datetime] = Field(default=None, description="Anchor for the monthly window, defaults to current time")

    def to_snapshot(self) -> RecordSnapshot:
        return RecordSnapshot(
            transactions=tuple(t.to_domain() for t in self.transactions),
            assets=tuple(a.to_domain() for a in self.assets),
            liabilities=tuple(l.to_domain() for l in self.liabilities),
            goals=tuple(g.to_domain() for g in self.goals),
            recurring_expenses=tuple(r.to_domain() for r in self.recurring_expenses),
        )


class MonthlyBucketSchema(BaseModel):
    month: str
    income: float
    expense: float
    investment: float
    running_balance: float


class TotalsSchema(BaseModel):
    income: float
    expense: float
    investment: float
    running_balance: float
    transaction_count: int


class RatesSchema(BaseModel):
    savings_rate: float
    expense_rate: int
    investment_rate: int
    budget_adherence: float
    income_trend: int
    expense_trend: int


class ScoreSchema(BaseModel):
    formula: str
    value: int
    label: str
    breakdown: Dict[str, float]


class FeedbackSchema(BaseModel):
    tips: List[str]
    badges: List[str]


class CategoryAmountSchema(BaseModel):
    category: str
    amount: float


class NetWorthSchema(BaseModel):
    total_assets: float
    total_liabilities: float
    net_worth: float
    assets_by_category: List[CategoryAmountSchema]
    liabilities_by_category: List[CategoryAmountSchema]
    monthly_debt_payments: float


class InsightSchema(BaseModel):
    title: str
    content: str
    type: str


class DashboardResponse(BaseModel):
    """Response for the dashboard endpoints"""

    user_id: Optional[str] = None
    buckets: List[MonthlyBucketSchema]
    totals: TotalsSchema
    rates: RatesSchema
    wellness: ScoreSchema
    portfolio: ScoreSchema
    feedback: FeedbackSchema
    net_worth: NetWorthSchema
    insights: List[InsightSchema]
    monthly_bills: float
    new_badges: List[str] = []


class BadgeUnlockSchema(BaseModel):
    badge_id: str
    first_unlocked_at: str


class BadgeHistoryResponse(BaseModel):
    """Response for GET /v1/badges"""

    user_id: str
    badges: List[BadgeUnlockSchema]
