"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from spendlens.config import settings
from spendlens.domain.thresholds import DetectionThresholds


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_thresholds() -> DetectionThresholds:
    """Provide detector thresholds from configuration"""
    return settings.detection_thresholds()
