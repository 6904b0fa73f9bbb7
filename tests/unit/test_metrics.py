"""Unit tests for metrics aggregation"""

import dataclasses
import pytest
from datetime import datetime, timedelta
from spendlens.domain.exceptions import EmptyDatasetError
from spendlens.domain.metrics import (
    calculate_average_by_category,
    calculate_metrics,
    calculate_monthly_trend,
)
from spendlens.domain.models import SpendingCategory


def test_calculate_metrics_totals_and_averages(make_transaction):
    """Test income/spending totals, net cash flow and time-normalized averages"""
    base_date = datetime(2024, 1, 1)
    transactions = [
        make_transaction(base_date, 3000.0, "Salary", SpendingCategory.INCOME, is_income=True),
        make_transaction(base_date, 1500.0, "Rent", SpendingCategory.HOUSING),
        make_transaction(base_date + timedelta(days=14), 200.0, "Grocer", SpendingCategory.FOOD_AND_DINING),
        make_transaction(base_date + timedelta(days=30), 100.0, "Cafe", SpendingCategory.FOOD_AND_DINING),
    ]

    metrics = calculate_metrics(transactions)

    assert metrics.total_income == 3000.0
    assert metrics.total_spending == 1800.0
    assert metrics.net_cash_flow == 1200.0
    assert metrics.average_daily == pytest.approx(60.0)  # 1800 / 30 days
    assert metrics.average_monthly == pytest.approx(1800.0)  # 30 days = 1 month


def test_calculate_metrics_category_breakdown(make_transaction):
    """Test breakdown covers expenses only, with percentages and counts"""
    base_date = datetime(2024, 1, 1)
    transactions = [
        make_transaction(base_date, 3000.0, "Salary", SpendingCategory.INCOME, is_income=True),
        make_transaction(base_date, 1500.0, "Rent", SpendingCategory.HOUSING),
        make_transaction(base_date, 200.0, "Grocer", SpendingCategory.FOOD_AND_DINING),
        make_transaction(base_date, 100.0, "Cafe", SpendingCategory.FOOD_AND_DINING),
    ]

    breakdown = calculate_metrics(transactions).category_breakdown

    assert [b.category for b in breakdown] == [SpendingCategory.HOUSING, SpendingCategory.FOOD_AND_DINING]
    assert breakdown[0].total == 1500.0
    assert breakdown[0].percentage == pytest.approx(83.333, abs=1e-3)
    assert breakdown[0].transaction_count == 1
    assert breakdown[1].total == 300.0
    assert breakdown[1].percentage == pytest.approx(16.667, abs=1e-3)
    assert breakdown[1].transaction_count == 2


def test_calculate_metrics_breakdown_sums_to_total_and_is_sorted(mixed_ledger):
    """Test breakdown totals add up to total spending and are ordered largest first"""
    metrics = calculate_metrics(mixed_ledger)
    totals = [b.total for b in metrics.category_breakdown]

    assert sum(totals) == pytest.approx(metrics.total_spending)
    assert totals == sorted(totals, reverse=True)
    assert sum(b.percentage for b in metrics.category_breakdown) == pytest.approx(100.0)


def test_calculate_metrics_breakdown_tie_break_by_name(make_transaction):
    """Test equal totals are ordered by category name ascending"""
    base_date = datetime(2024, 1, 1)
    transactions = [
        make_transaction(base_date, 100.0, "Mall", SpendingCategory.SHOPPING),
        make_transaction(base_date, 50.0, "Pharmacy", SpendingCategory.HEALTHCARE),
        make_transaction(base_date, 100.0, "Cinema", SpendingCategory.ENTERTAINMENT),
    ]

    breakdown = calculate_metrics(transactions).category_breakdown

    assert [b.category for b in breakdown] == [
        SpendingCategory.ENTERTAINMENT,
        SpendingCategory.SHOPPING,
        SpendingCategory.HEALTHCARE,
    ]


def test_calculate_metrics_span_includes_income_dates(make_transaction):
    """Test the date span covers income transactions too"""
    base_date = datetime(2024, 1, 1)
    transactions = [
        make_transaction(base_date, 100.0, "Cafe", SpendingCategory.FOOD_AND_DINING),
        make_transaction(base_date + timedelta(days=60), 500.0, "Salary", SpendingCategory.INCOME, is_income=True),
    ]

    metrics = calculate_metrics(transactions)

    assert metrics.average_daily == pytest.approx(100.0 / 60)
    assert metrics.average_monthly == pytest.approx(50.0)  # 60 days = 2 months


def test_calculate_metrics_span_counts_whole_days(make_transaction):
    """Test partial days are truncated when measuring the span"""
    transactions = [
        make_transaction(datetime(2024, 1, 1, 0, 0), 60.0),
        make_transaction(datetime(2024, 1, 3, 23, 0), 60.0),
    ]

    metrics = calculate_metrics(transactions)

    assert metrics.average_daily == pytest.approx(60.0)  # 120 / 2 whole days


def test_calculate_metrics_single_instant(make_transaction):
    """Test a single-day dataset uses a one-day, one-month span"""
    metrics = calculate_metrics([make_transaction(datetime(2024, 3, 1), 50.0)])

    assert metrics.average_daily == 50.0
    assert metrics.average_monthly == 50.0


def test_calculate_metrics_all_income(make_transaction):
    """Test an income-only dataset has zero spending and no breakdown"""
    base_date = datetime(2024, 1, 1)
    transactions = [
        make_transaction(base_date, 2000.0, "Salary", SpendingCategory.INCOME, is_income=True),
        make_transaction(base_date + timedelta(days=15), 2000.0, "Salary", SpendingCategory.INCOME, is_income=True),
    ]

    metrics = calculate_metrics(transactions)

    assert metrics.total_spending == 0.0
    assert metrics.total_income == 4000.0
    assert metrics.net_cash_flow == 4000.0
    assert metrics.average_daily == 0.0
    assert metrics.average_monthly == 0.0
    assert metrics.category_breakdown == ()


def test_calculate_metrics_zero_amount_expenses(make_transaction):
    """Test percentages fall back to 0 when total spending is zero"""
    metrics = calculate_metrics([make_transaction(datetime(2024, 1, 1), 0.0, "Free Trial")])

    assert metrics.category_breakdown[0].percentage == 0.0
    assert metrics.category_breakdown[0].transaction_count == 1


def test_calculate_metrics_empty_transactions():
    """Test empty input is rejected, not defaulted"""
    with pytest.raises(EmptyDatasetError):
        calculate_metrics([])


def test_calculate_metrics_idempotent(mixed_ledger):
    """Test repeated calls on the same input give identical results"""
    first = calculate_metrics(mixed_ledger)
    second = calculate_metrics(mixed_ledger)

    assert first == second


def test_financial_metrics_immutable(mixed_ledger):
    """Test computed metrics cannot be mutated"""
    metrics = calculate_metrics(mixed_ledger)

    with pytest.raises(dataclasses.FrozenInstanceError):
        metrics.total_spending = 0.0


def test_calculate_monthly_trend(make_transaction):
    """Test monthly expense totals are chronological across a year boundary"""
    transactions = [
        make_transaction(datetime(2024, 1, 10), 40.0),
        make_transaction(datetime(2023, 12, 5), 100.0),
        make_transaction(datetime(2023, 12, 20), 25.0),
        make_transaction(datetime(2024, 1, 15), 999.0, "Salary", SpendingCategory.INCOME, is_income=True),
    ]

    months = calculate_monthly_trend(transactions)

    assert [m.month for m in months] == ["2023-12", "2024-01"]
    assert [m.amount for m in months] == [125.0, 40.0]


def test_calculate_average_by_category(make_transaction):
    """Test mean expense per category, income excluded"""
    base_date = datetime(2024, 1, 1)
    transactions = [
        make_transaction(base_date, 10.0, "Cafe", SpendingCategory.FOOD_AND_DINING),
        make_transaction(base_date, 30.0, "Cafe", SpendingCategory.FOOD_AND_DINING),
        make_transaction(base_date, 45.0, "Bus", SpendingCategory.TRANSPORTATION),
        make_transaction(base_date, 5000.0, "Salary", SpendingCategory.INCOME, is_income=True),
    ]

    averages = calculate_average_by_category(transactions)

    assert averages == {
        SpendingCategory.FOOD_AND_DINING: 20.0,
        SpendingCategory.TRANSPORTATION: 45.0,
    }
