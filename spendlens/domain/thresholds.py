"""Heuristic thresholds used by the pattern detectors"""

from dataclasses import dataclass

# Recurring charges
RECURRING_MIN_OCCURRENCES = 2
RECURRING_AMOUNT_TOLERANCE = 0.10  # relative to the group mean
RECURRING_MIN_INTERVAL_DAYS = 25.0
RECURRING_MAX_INTERVAL_DAYS = 35.0
RECURRING_MEDIUM_SEVERITY_AMOUNT = 50.0
MONTHS_PER_YEAR = 12

# Anomalies
ANOMALY_STDDEV_MULTIPLIER = 3.0
ANOMALY_HIGH_SEVERITY_AMOUNT = 1000.0

# Spending spikes
SPIKE_MULTIPLIER = 1.5
SPIKE_MIN_MONTHS = 2
SPIKE_HIGH_SEVERITY_AMOUNT = 500.0

# Trends
TREND_MIN_PERCENT = 15.0
TREND_HIGH_PERCENT = 30.0


@dataclass(frozen=True)
class DetectionThresholds:
    """
    Tunable cut-offs for every detector.

    Defaults:
    - Recurring: >=2 charges, each within 10% of the group mean, average gap
      25-35 days (monthly billing with date jitter). Mean > $50 is medium.
    - Anomaly: amount above mean + 3 standard deviations. Over $1000 is high.
    - Spike: a month above 1.5x the category's monthly average, needs 2+ months.
      Excess over $500 is high.
    - Trend: first-to-last month change above 15%. Above 30% is high.
    """

    recurring_min_occurrences: int = RECURRING_MIN_OCCURRENCES
    recurring_amount_tolerance: float = RECURRING_AMOUNT_TOLERANCE
    recurring_min_interval_days: float = RECURRING_MIN_INTERVAL_DAYS
    recurring_max_interval_days: float = RECURRING_MAX_INTERVAL_DAYS
    recurring_medium_severity_amount: float = RECURRING_MEDIUM_SEVERITY_AMOUNT
    annualization_factor: int = MONTHS_PER_YEAR
    anomaly_stddev_multiplier: float = ANOMALY_STDDEV_MULTIPLIER
    anomaly_high_severity_amount: float = ANOMALY_HIGH_SEVERITY_AMOUNT
    spike_multiplier: float = SPIKE_MULTIPLIER
    spike_min_months: int = SPIKE_MIN_MONTHS
    spike_high_severity_amount: float = SPIKE_HIGH_SEVERITY_AMOUNT
    trend_min_percent: float = TREND_MIN_PERCENT
    trend_high_percent: float = TREND_HIGH_PERCENT


DEFAULT_THRESHOLDS = DetectionThresholds()
