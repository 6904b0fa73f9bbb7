"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping every record with UTC time, level and service name"""

    def __init__(self, *args: Any, service_name: str = "spendlens", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "spendlens") -> None:
    """Route all logging through a single JSON stdout handler"""
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s", service_name=service_name)
    )
    logger.addHandler(handler)


def log_analysis(
    request_id: str,
    endpoint: str,
    transaction_count: int,
    pattern_count: int,
    duration_ms: float,
) -> None:
    """Log structured analysis outcome for a served request"""
    logging.info(
        "Analysis completed",
        extra={
            "request_id": request_id,
            "step": "analysis_complete",
            "endpoint": endpoint,
            "transaction_count": transaction_count,
            "pattern_count": pattern_count,
            "duration_ms": duration_ms,
        },
    )
