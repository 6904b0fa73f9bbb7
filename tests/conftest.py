"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timedelta
from typing import Callable
from fastapi.testclient import TestClient
from spendlens.api.main import create_app
from spendlens.domain.models import SpendingCategory, Transaction


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for transactions with sensible defaults"""

    def _make(
        date: datetime,
        amount: float,
        description: str = "Misc Purchase",
        category: SpendingCategory = SpendingCategory.OTHER,
        is_income: bool = False,
    ) -> Transaction:
        return Transaction(
            date=date,
            description=description,
            amount=amount,
            category=category,
            is_income=is_income,
            confidence=0.9,
        )

    return _make


@pytest.fixture
def mixed_ledger(make_transaction) -> list[Transaction]:
    """
    Six months (Jan-Jun 2024) of a typical ledger:
    - Netflix $15 on the 5th of every month
    - Groceries $50 every 7 days
    - One $3000 jewelry purchase in June
    - Monthly salary
    """
    base_date = datetime(2024, 1, 1)
    transactions = []

    for month in range(1, 7):
        transactions.append(
            make_transaction(
                datetime(2024, month, 5), 15.0, "NETFLIX.COM", SpendingCategory.ENTERTAINMENT
            )
        )
        transactions.append(
            make_transaction(
                datetime(2024, month, 1), 4000.0, "Payroll Deposit", SpendingCategory.INCOME, is_income=True
            )
        )

    for day in range(0, 182, 7):
        transactions.append(
            make_transaction(
                base_date + timedelta(days=day), 50.0, "Grocery Store", SpendingCategory.FOOD_AND_DINING
            )
        )

    transactions.append(
        make_transaction(datetime(2024, 6, 20), 3000.0, "Jewelry Store", SpendingCategory.SHOPPING)
    )

    return transactions
