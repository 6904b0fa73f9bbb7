"""Domain models - immutable dataclasses representing analysis entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Tuple

from spendlens.domain.exceptions import InvalidTransactionDataError


class SpendingCategory(str, Enum):
    """Closed set of categories assigned by the categorizer"""

    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    HOUSING = "Housing"
    INCOME = "Income"
    OTHER = "Other"


class PatternType(str, Enum):
    RECURRING_CHARGE = "recurring_charge"
    SPENDING_SPIKE = "spending_spike"
    ANOMALY = "anomaly"
    TREND = "trend"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Transaction:
    """Categorized transaction handed over by the categorizer"""

    date: datetime
    description: str
    amount: float  # always a magnitude, direction lives in is_income
    category: SpendingCategory
    is_income: bool
    confidence: float = 1.0

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise InvalidTransactionDataError("Transaction description must not be empty")
        if self.amount < 0:
            raise InvalidTransactionDataError(
                f"Transaction amount must be non-negative, got {self.amount}"
            )
        if not 0.0 <= self.confidence <= 1.0:
            raise InvalidTransactionDataError(
                f"Categorization confidence must be within [0, 1], got {self.confidence}"
            )


@dataclass(frozen=True)
class CategoryBreakdown:
    """Expense totals for a single category"""

    category: SpendingCategory
    total: float
    percentage: float
    transaction_count: int


@dataclass(frozen=True)
class FinancialMetrics:
    """Aggregate cash-flow metrics over a transaction set"""

    total_spending: float
    total_income: float
    net_cash_flow: float
    average_daily: float
    average_monthly: float
    category_breakdown: Tuple[CategoryBreakdown, ...]


@dataclass(frozen=True)
class DetectedPattern:
    """Behavioral pattern found by one of the detectors"""

    type: PatternType
    description: str
    severity: Severity
    impact: float  # dollar magnitude used for ranking
    transactions: Tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class MonthlySpending:
    """Total expenses for one calendar month"""

    month: str  # YYYY-MM
    amount: float


@dataclass(frozen=True)
class AnalysisReport:
    """Metrics and patterns computed from one transaction set"""

    metrics: FinancialMetrics
    patterns: Tuple[DetectedPattern, ...]
    monthly_spending: Tuple[MonthlySpending, ...]
    average_by_category: Mapping[SpendingCategory, float]
    generated_at: datetime = field(compare=False)
