"""Metrics aggregation - cash flow totals, averages and category breakdown"""

import logging
from collections import defaultdict
from typing import Dict, List, Sequence

from spendlens.domain.exceptions import EmptyDatasetError
from spendlens.domain.models import (
    CategoryBreakdown,
    FinancialMetrics,
    MonthlySpending,
    SpendingCategory,
    Transaction,
)
from spendlens.utils.date_utils import DAYS_PER_MONTH, month_key, whole_days_between

logger = logging.getLogger(__name__)


def calculate_metrics(transactions: Sequence[Transaction]) -> FinancialMetrics:
    """
    Compute aggregate cash-flow metrics for a categorized transaction set.

    Requirements:
    - Income and spending totals, net cash flow = income - spending
    - Averages normalized over the date span of ALL transactions (income included),
      never shorter than one day / one month
    - Category breakdown over expenses only, largest first

    Raises:
        EmptyDatasetError: if no transactions are supplied
    """
    if not transactions:
        raise EmptyDatasetError("Cannot calculate metrics for an empty transaction set")

    income = [t for t in transactions if t.is_income]
    expenses = [t for t in transactions if not t.is_income]

    total_income = float(sum(t.amount for t in income))
    total_spending = float(sum(t.amount for t in expenses))

    # Time span in whole days, at least one
    dates = [t.date for t in transactions]
    span_days = max(1, whole_days_between(min(dates), max(dates)))
    span_months = max(1, span_days / DAYS_PER_MONTH)

    metrics = FinancialMetrics(
        total_spending=total_spending,
        total_income=total_income,
        net_cash_flow=total_income - total_spending,
        average_daily=total_spending / span_days,
        average_monthly=total_spending / span_months,
        category_breakdown=tuple(calculate_category_breakdown(expenses, total_spending)),
    )

    logger.debug(
        "Metrics calculated",
        extra={
            "transaction_count": len(transactions),
            "span_days": span_days,
            "category_count": len(metrics.category_breakdown),
        },
    )
    return metrics


def calculate_category_breakdown(
    expenses: Sequence[Transaction], total_spending: float
) -> List[CategoryBreakdown]:
    """Group expenses by category, sorted by total desc then category name asc"""
    totals: Dict[SpendingCategory, float] = defaultdict(float)
    counts: Dict[SpendingCategory, int] = defaultdict(int)

    for txn in expenses:
        totals[txn.category] += txn.amount
        counts[txn.category] += 1

    breakdown = [
        CategoryBreakdown(
            category=category,
            total=total,
            percentage=(total / total_spending * 100) if total_spending > 0 else 0.0,
            transaction_count=counts[category],
        )
        for category, total in totals.items()
    ]

    # Two passes: stable sort by name, then by total descending
    breakdown.sort(key=lambda b: b.category.value)
    breakdown.sort(key=lambda b: b.total, reverse=True)
    return breakdown


def calculate_monthly_trend(transactions: Sequence[Transaction]) -> List[MonthlySpending]:
    """Expense totals per calendar month, oldest month first"""
    monthly: Dict[str, float] = defaultdict(float)
    for txn in transactions:
        if txn.is_income:
            continue
        monthly[month_key(txn.date)] += txn.amount

    return [MonthlySpending(month=month, amount=amount) for month, amount in sorted(monthly.items())]


def calculate_average_by_category(
    transactions: Sequence[Transaction],
) -> Dict[SpendingCategory, float]:
    """Mean expense amount per category"""
    grouped: Dict[SpendingCategory, List[float]] = defaultdict(list)
    for txn in transactions:
        if not txn.is_income:
            grouped[txn.category].append(txn.amount)

    return {category: sum(amounts) / len(amounts) for category, amounts in grouped.items()}

