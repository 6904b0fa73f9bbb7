"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from spendlens.domain import thresholds as defaults
from spendlens.domain.thresholds import DetectionThresholds


class Settings(BaseSettings):
    """Application configuration loaded from SPENDLENS_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="SPENDLENS_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Service
    service_name: str = "spendlens"
    log_level: str = "INFO"

    # Recurring charge detection
    recurring_min_occurrences: int = defaults.RECURRING_MIN_OCCURRENCES
    recurring_amount_tolerance: float = defaults.RECURRING_AMOUNT_TOLERANCE
    recurring_min_interval_days: float = defaults.RECURRING_MIN_INTERVAL_DAYS
    recurring_max_interval_days: float = defaults.RECURRING_MAX_INTERVAL_DAYS
    recurring_medium_severity_amount: float = defaults.RECURRING_MEDIUM_SEVERITY_AMOUNT
    annualization_factor: int = defaults.MONTHS_PER_YEAR

    # Anomaly detection
    anomaly_stddev_multiplier: float = defaults.ANOMALY_STDDEV_MULTIPLIER
    anomaly_high_severity_amount: float = defaults.ANOMALY_HIGH_SEVERITY_AMOUNT

    # Spending spikes
    spike_multiplier: float = defaults.SPIKE_MULTIPLIER
    spike_min_months: int = defaults.SPIKE_MIN_MONTHS
    spike_high_severity_amount: float = defaults.SPIKE_HIGH_SEVERITY_AMOUNT

    # Trends
    trend_min_percent: float = defaults.TREND_MIN_PERCENT
    trend_high_percent: float = defaults.TREND_HIGH_PERCENT

    def detection_thresholds(self) -> DetectionThresholds:
        """Detector cut-offs as a domain value"""
        return DetectionThresholds(
            recurring_min_occurrences=self.recurring_min_occurrences,
            recurring_amount_tolerance=self.recurring_amount_tolerance,
            recurring_min_interval_days=self.recurring_min_interval_days,
            recurring_max_interval_days=self.recurring_max_interval_days,
            recurring_medium_severity_amount=self.recurring_medium_severity_amount,
            annualization_factor=self.annualization_factor,
            anomaly_stddev_multiplier=self.anomaly_stddev_multiplier,
            anomaly_high_severity_amount=self.anomaly_high_severity_amount,
            spike_multiplier=self.spike_multiplier,
            spike_min_months=self.spike_min_months,
            spike_high_severity_amount=self.spike_high_severity_amount,
            trend_min_percent=self.trend_min_percent,
            trend_high_percent=self.trend_high_percent,
        )


settings = Settings()
