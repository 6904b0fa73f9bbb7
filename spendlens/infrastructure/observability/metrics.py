"""Prometheus metrics for monitoring analysis volume and detected patterns"""

from typing import Sequence

from prometheus_client import Counter, Histogram

from spendlens.domain.models import DetectedPattern

# Analysis metrics
analysis_counter = Counter(
    "spendlens_analysis_total",
    "Total analysis requests served",
    ["endpoint", "outcome"],  # outcome: success | empty_dataset | invalid_data | error
)

pattern_counter = Counter(
    "spendlens_patterns_detected_total",
    "Detected patterns by type and severity",
    ["type", "severity"],
)

transactions_histogram = Histogram(
    "spendlens_transactions_per_request",
    "Number of transactions submitted per analysis request",
    buckets=[10, 50, 100, 250, 500, 1000, 5000, 10000],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(endpoint: str, transaction_count: int, patterns: Sequence[DetectedPattern] = ()) -> None:
    """Record a successful analysis and the patterns it surfaced"""
    analysis_counter.labels(endpoint=endpoint, outcome="success").inc()
    transactions_histogram.observe(transaction_count)

    for pattern in patterns:
        pattern_counter.labels(type=pattern.type.value, severity=pattern.severity.value).inc()


def record_failure(endpoint: str, outcome: str) -> None:
    """Record a rejected or failed analysis request"""
    analysis_counter.labels(endpoint=endpoint, outcome=outcome).inc()
