"""Pattern detection engine - recurring charges, anomalies, spending spikes and trends"""

import logging
import math
from collections import defaultdict
from typing import Dict, List, Sequence, Set

from spendlens.domain.metrics import calculate_monthly_trend
from spendlens.domain.models import (
    DetectedPattern,
    PatternType,
    Severity,
    SpendingCategory,
    Transaction,
)
from spendlens.domain.normalizer import normalize_description
from spendlens.domain.thresholds import DEFAULT_THRESHOLDS, DetectionThresholds
from spendlens.utils.date_utils import interval_days, month_key

logger = logging.getLogger(__name__)


def find_recurring_charges(
    transactions: Sequence[Transaction],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Find near-fixed, evenly spaced charges (subscriptions, rent, utilities).

    A group of transactions sharing a normalized description is recurring when:
    - it has at least `recurring_min_occurrences` members
    - every amount is strictly within `recurring_amount_tolerance` of the group mean
    - the average gap between consecutive dates is inside the monthly cadence window

    Impact is the annualized cost (mean amount x 12).
    """
    groups: Dict[str, List[Transaction]] = defaultdict(list)
    for txn in transactions:
        groups[normalize_description(txn.description)].append(txn)

    patterns = []
    for key, txns in groups.items():
        if len(txns) < thresholds.recurring_min_occurrences:
            continue

        amounts = [t.amount for t in txns]
        avg_amount = sum(amounts) / len(amounts)
        tolerance = avg_amount * thresholds.recurring_amount_tolerance
        if not all(abs(amount - avg_amount) < tolerance for amount in amounts):
            continue

        gaps = interval_days(t.date for t in txns)
        if not gaps:
            continue
        avg_gap = sum(gaps) / len(gaps)
        if not (
            thresholds.recurring_min_interval_days
            <= avg_gap
            <= thresholds.recurring_max_interval_days
        ):
            continue

        severity = (
            Severity.MEDIUM
            if avg_amount > thresholds.recurring_medium_severity_amount
            else Severity.LOW
        )
        patterns.append(
            DetectedPattern(
                type=PatternType.RECURRING_CHARGE,
                description=f"Recurring monthly charge: {key} (${avg_amount:.2f}/month)",
                severity=severity,
                impact=avg_amount * thresholds.annualization_factor,
                transactions=tuple(txns),
            )
        )

    return patterns


def find_anomalies(
    transactions: Sequence[Transaction],
    recurring_patterns: Sequence[DetectedPattern],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Find single expenses far above the overall expense distribution.

    The threshold is mean + 3 population standard deviations over ALL expenses.
    Anything sharing a normalized description with a recognized recurring charge
    is skipped, so rent is never reported as an outlier of its own month.
    """
    excluded: Set[str] = {
        normalize_description(t.description)
        for pattern in recurring_patterns
        for t in pattern.transactions
    }

    expenses = [t for t in transactions if not t.is_income]
    if not expenses:
        return []

    amounts = [t.amount for t in expenses]
    mean = sum(amounts) / len(amounts)
    std_dev = math.sqrt(sum((amount - mean) ** 2 for amount in amounts) / len(amounts))
    upper_bound = mean + thresholds.anomaly_stddev_multiplier * std_dev

    patterns = []
    for txn in expenses:
        if normalize_description(txn.description) in excluded:
            continue
        if txn.amount <= upper_bound:
            continue

        severity = (
            Severity.HIGH
            if txn.amount > thresholds.anomaly_high_severity_amount
            else Severity.MEDIUM
        )
        patterns.append(
            DetectedPattern(
                type=PatternType.ANOMALY,
                description=f"Unusual large transaction: {txn.description} (${txn.amount:.2f})",
                severity=severity,
                impact=txn.amount,
                transactions=(txn,),
            )
        )

    return patterns


def find_spending_spikes(
    transactions: Sequence[Transaction],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Find categories whose busiest month exceeds 1.5x their monthly average.

    Only months in which the category had spending count towards its average.
    Recurring charges are NOT excluded here. No transactions are attached.
    """
    monthly_by_category: Dict[SpendingCategory, Dict[str, float]] = defaultdict(
        lambda: defaultdict(float)
    )
    for txn in transactions:
        if txn.is_income:
            continue
        monthly_by_category[txn.category][month_key(txn.date)] += txn.amount

    patterns = []
    for category, monthly in monthly_by_category.items():
        totals = list(monthly.values())
        if len(totals) < thresholds.spike_min_months:
            continue

        avg = sum(totals) / len(totals)
        peak = max(totals)
        if peak <= avg * thresholds.spike_multiplier:
            continue

        spike_amount = peak - avg
        severity = (
            Severity.HIGH
            if spike_amount > thresholds.spike_high_severity_amount
            else Severity.MEDIUM
        )
        patterns.append(
            DetectedPattern(
                type=PatternType.SPENDING_SPIKE,
                description=(
                    f"Spending spike in {category.value}: ${peak:.2f} vs avg ${avg:.2f}"
                ),
                severity=severity,
                impact=spike_amount,
            )
        )

    return patterns


def find_trends(
    transactions: Sequence[Transaction],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Compare total spending of the first and last observed month.

    Intermediate months are ignored. A first month with zero spending has no
    baseline: the percentage change would be infinite, so no trend is emitted
    rather than an unbounded "high" increase.
    """
    months = calculate_monthly_trend(transactions)
    if len(months) < 2:
        return []

    first = months[0].amount
    last = months[-1].amount
    if first <= 0:
        return []

    change = last - first
    percent_change = change / first * 100
    if abs(percent_change) <= thresholds.trend_min_percent:
        return []

    direction = "increasing" if change > 0 else "decreasing"
    severity = (
        Severity.HIGH if abs(percent_change) > thresholds.trend_high_percent else Severity.MEDIUM
    )
    return [
        DetectedPattern(
            type=PatternType.TREND,
            description=f"Spending {direction} by {abs(percent_change):.1f}% over time",
            severity=severity,
            impact=abs(change),
        )
    ]


def detect_patterns(
    transactions: Sequence[Transaction],
    thresholds: DetectionThresholds = DEFAULT_THRESHOLDS,
) -> List[DetectedPattern]:
    """
    Main entry point: run every detector and rank the results.

    Order matters: the anomaly detector consumes the recurring detector's output.
    Results are sorted by impact (highest first); equal impacts keep emission order.
    """
    recurring = find_recurring_charges(transactions, thresholds)
    anomalies = find_anomalies(transactions, recurring, thresholds)
    spikes = find_spending_spikes(transactions, thresholds)
    trends = find_trends(transactions, thresholds)

    logger.debug(
        "Patterns detected",
        extra={
            "transaction_count": len(transactions),
            "recurring_charges": len(recurring),
            "anomalies": len(anomalies),
            "spending_spikes": len(spikes),
            "trends": len(trends),
        },
    )

    patterns = recurring + anomalies + spikes + trends
    return sorted(patterns, key=lambda p: p.impact, reverse=True)
