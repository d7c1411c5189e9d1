"""Domain models - pure Python dataclasses representing records and derived metrics"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Tuple

ZERO = Decimal("0")


class TransactionType(str, Enum):
    """Recorded transaction type. Informative only, classification ignores it."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class Classification(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    INVESTMENT = "investment"


class AssetCategory(str, Enum):
    CASH = "cash"
    INVESTMENTS = "investments"
    RETIREMENT = "retirement"
    REAL_ESTATE = "real_estate"
    VEHICLES = "vehicles"
    VALUABLES = "valuables"
    BUSINESS = "business"
    OTHER = "other"


class LiabilityCategory(str, Enum):
    MORTGAGE = "mortgage"
    CAR_LOAN = "car_loan"
    STUDENT_LOAN = "student_loan"
    PERSONAL_LOAN = "personal_loan"
    CREDIT_CARD = "credit_card"
    TAXES = "taxes"
    MEDICAL = "medical"
    OTHER = "other"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class ScoreFormula(str, Enum):
    """Named health score formulas. Callers always pick one explicitly."""

    WELLNESS = "wellness"  # 5-factor weighted average
    PORTFOLIO = "portfolio"  # 3-factor capped sum


class Badge(str, Enum):
    FIRST_DEPOSIT = "first_deposit"
    GOAL_SETTER = "goal_setter"
    GOAL_CRUSHER = "goal_crusher"
    DIVERSIFIED = "diversified"
    BIG_SAVER = "big_saver"
    CONSISTENT = "consistent"


class InsightType(str, Enum):
    TIP = "tip"
    WARNING = "warning"
    SUCCESS = "success"
    INFO = "info"


# --- Records (input) ---


@dataclass(frozen=True)
class Transaction:
    """Ledger entry from the record store. Positive amount = inflow."""

    id: str
    timestamp: datetime
    amount: Decimal
    type: TransactionType
    category: str
    description: str | None = None


@dataclass(frozen=True)
class Asset:
    id: str
    category: AssetCategory
    current_value: Decimal
    currency: str
    name: str | None = None


@dataclass(frozen=True)
class Liability:
    id: str
    category: LiabilityCategory
    remaining_amount: Decimal
    currency: str
    interest_rate: Decimal | None = None
    monthly_payment: Decimal | None = None
    name: str | None = None


@dataclass(frozen=True)
class SavingsGoal:
    id: str
    target_amount: Decimal
    current_amount: Decimal
    status: GoalStatus = GoalStatus.ACTIVE


@dataclass(frozen=True)
class RecurringExpense:
    id: str
    amount: Decimal
    frequency: Frequency
    is_active: bool = True


@dataclass(frozen=True)
class RecordSnapshot:
    """Complete engine input, read once from storage before evaluation"""

    transactions: Tuple[Transaction, ...] = ()
    assets: Tuple[Asset, ...] = ()
    liabilities: Tuple[Liability, ...] = ()
    goals: Tuple[SavingsGoal, ...] = ()
    recurring_expenses: Tuple[RecurringExpense, ...] = ()


# --- Derived values (output) ---


@dataclass(frozen=True)
class ClassifiedTransaction:
    transaction: Transaction
    classification: Classification


@dataclass(frozen=True)
class MonthlyBucket:
    """One calendar month of absolute sums plus the balance at month end"""

    month: str  # "YYYY-MM"
    income: Decimal = ZERO
    expense: Decimal = ZERO
    investment: Decimal = ZERO
    running_balance: Decimal = ZERO


@dataclass(frozen=True)
class Totals:
    """All-time sums over every transaction in the snapshot"""

    income: Decimal = ZERO
    expense: Decimal = ZERO
    investment: Decimal = ZERO
    running_balance: Decimal = ZERO
    transaction_count: int = 0


@dataclass(frozen=True)
class MonthlySeries:
    buckets: Tuple[MonthlyBucket, ...]
    totals: Totals

    @property
    def current(self) -> MonthlyBucket:
        return self.buckets[-1]

    @property
    def previous(self) -> MonthlyBucket:
        if len(self.buckets) < 2:
            return MonthlyBucket(month="")
        return self.buckets[-2]


@dataclass(frozen=True)
class RateSnapshot:
    """Percentages derived from the monthly series.

    savings_rate, expense_rate, investment_rate and budget_adherence are
    clamped to [0, 100]; the two trends are signed.
    """

    savings_rate: float = 0.0
    expense_rate: int = 0
    investment_rate: int = 0
    budget_adherence: float = 100.0
    income_trend: int = 0
    expense_trend: int = 0
    has_monthly_income: bool = False


@dataclass(frozen=True)
class WellnessBreakdown:
    savings: float
    budget: float
    goals: float
    diversification: float
    consistency: float


@dataclass(frozen=True)
class PortfolioBreakdown:
    savings: float
    expense: float
    investment: float


@dataclass(frozen=True)
class HealthScore:
    formula: ScoreFormula
    value: int
    label: str
    breakdown: WellnessBreakdown | PortfolioBreakdown


@dataclass(frozen=True)
class FeedbackCounts:
    """Raw counts the feedback rules need besides the score breakdown"""

    transaction_count: int = 0
    expense_month_count: int = 0
    goal_count: int = 0
    completed_goal_count: int = 0
    deposit_day_count: int = 0
    currency_count: int = 0
    deposit_total: Decimal = ZERO


@dataclass(frozen=True)
class Feedback:
    tips: Tuple[str, ...]
    badges: FrozenSet[Badge] = field(default_factory=frozenset)


@dataclass(frozen=True)
class CategoryAmount:
    category: str
    amount: Decimal


@dataclass(frozen=True)
class NetWorthSummary:
    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    assets_by_category: Tuple[CategoryAmount, ...] = ()
    liabilities_by_category: Tuple[CategoryAmount, ...] = ()
    monthly_debt_payments: Decimal = ZERO


@dataclass(frozen=True)
class Insight:
    title: str
    content: str
    type: InsightType


@dataclass(frozen=True)
class DashboardSummary:
    """Output of one full pipeline run"""

    buckets: Tuple[MonthlyBucket, ...]
    totals: Totals
    rates: RateSnapshot
    wellness: HealthScore
    portfolio: HealthScore
    feedback: Feedback
    net_worth: NetWorthSummary
    insights: Tuple[Insight, ...]
    monthly_bills: Decimal
