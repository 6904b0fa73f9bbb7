"""Pydantic schemas for API request/response validation"""

from datetime import datetime, timezone
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

from spendlens.domain.models import (
    AnalysisReport,
    CategoryBreakdown,
    DetectedPattern,
    FinancialMetrics,
    MonthlySpending,
    PatternType,
    Severity,
    SpendingCategory,
    Transaction,
)


class TransactionSchema(BaseModel):
    """Single categorized transaction"""

    date: datetime
    description: str = Field(..., min_length=1, description="Merchant description as it appears on the statement")
    amount: float = Field(..., ge=0, description="Absolute amount; direction is given by is_income")
    category: SpendingCategory
    is_income: bool = False
    confidence: float = Field(1.0, ge=0, le=1, description="Categorizer confidence")

    @field_validator("date")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        """Naive dates are taken as UTC; aware dates are converted to UTC"""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def to_domain(self) -> Transaction:
        return Transaction(
            date=self.date,
            description=self.description,
            amount=self.amount,
            category=self.category,
            is_income=self.is_income,
            confidence=self.confidence,
        )

    @classmethod
    def from_domain(cls, txn: Transaction) -> "TransactionSchema":
        return cls(
            date=txn.date,
            description=txn.description,
            amount=txn.amount,
            category=txn.category,
            is_income=txn.is_income,
            confidence=txn.confidence,
        )


class AnalysisRequest(BaseModel):
    """Request body shared by every /v1 analysis endpoint"""

    transactions: List[TransactionSchema]

    def to_domain(self) -> List[Transaction]:
        return [txn.to_domain() for txn in self.transactions]


class CategoryBreakdownSchema(BaseModel):
    category: SpendingCategory
    total: float
    percentage: float
    transaction_count: int

    @classmethod
    def from_domain(cls, item: CategoryBreakdown) -> "CategoryBreakdownSchema":
        return cls(
            category=item.category,
            total=item.total,
            percentage=item.percentage,
            transaction_count=item.transaction_count,
        )


class MetricsResponse(BaseModel):
    """Response for POST /v1/metrics"""

    total_spending: float
    total_income: float
    net_cash_flow: float
    average_daily: float
    average_monthly: float
    category_breakdown: List[CategoryBreakdownSchema]

    @classmethod
    def from_domain(cls, metrics: FinancialMetrics) -> "MetricsResponse":
        return cls(
            total_spending=metrics.total_spending,
            total_income=metrics.total_income,
            net_cash_flow=metrics.net_cash_flow,
            average_daily=metrics.average_daily,
            average_monthly=metrics.average_monthly,
            category_breakdown=[CategoryBreakdownSchema.from_domain(b) for b in metrics.category_breakdown],
        )


class PatternSchema(BaseModel):
    """Single detected pattern"""

    type: PatternType
    description: str
    severity: Severity
    impact: float
    transactions: List[TransactionSchema] = []

    @classmethod
    def from_domain(cls, pattern: DetectedPattern) -> "PatternSchema":
        return cls(
            type=pattern.type,
            description=pattern.description,
            severity=pattern.severity,
            impact=pattern.impact,
            transactions=[TransactionSchema.from_domain(t) for t in pattern.transactions],
        )


class PatternsResponse(BaseModel):
    """Response for POST /v1/patterns"""

    patterns: List[PatternSchema]


class MonthlySpendingSchema(BaseModel):
    month: str
    amount: float

    @classmethod
    def from_domain(cls, item: MonthlySpending) -> "MonthlySpendingSchema":
        return cls(month=item.month, amount=item.amount)


class MonthlySpendingResponse(BaseModel):
    """Response for POST /v1/monthly-spending"""

    months: List[MonthlySpendingSchema]


class AnalysisResponse(BaseModel):
    """Response for POST /v1/analysis"""

    metrics: MetricsResponse
    patterns: List[PatternSchema]
    monthly_spending: List[MonthlySpendingSchema]
    average_by_category: Dict[SpendingCategory, float]
    generated_at: datetime

    @classmethod
    def from_domain(cls, report: AnalysisReport) -> "AnalysisResponse":
        return cls(
            metrics=MetricsResponse.from_domain(report.metrics),
            patterns=[PatternSchema.from_domain(p) for p in report.patterns],
            monthly_spending=[MonthlySpendingSchema.from_domain(m) for m in report.monthly_spending],
            average_by_category=dict(report.average_by_category),
            generated_at=report.generated_at,
        )
