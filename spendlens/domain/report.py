"""Full analysis of a transaction set: metrics, ranked patterns, monthly spending and per-category averages"""

from datetime import datetime, timezone
from typing import Sequence

from spendlens.domain.metrics import (
    calculate_average_by_category,
    calculate_metrics,
    calculate_monthly_trend,
)
from spendlens.domain.models import AnalysisReport, Transaction
from spendlens.domain.patterns import detect_patterns
from spendlens.domain.thresholds import DEFAULT_THRESHOLDS, DetectionThresholds


def build_report(
    transactions: Sequence[Transaction],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
) -> AnalysisReport:
    """
    Main entry point: analyze transactions and assemble the report data.

    Raises:
        EmptyDatasetError: if no transactions are supplied
    """
    metrics = calculate_metrics(transactions)
    patterns = detect_patterns(transactions, thresholds)

    return AnalysisReport(
        metrics=metrics,
        patterns=tuple(patterns),
        monthly_spending=tuple(calculate_monthly_trend(transactions)),
        average_by_category=calculate_average_by_category(transactions),
        generated_at=datetime.now(timezone.utc),
    )
