"""POST /v1/metrics, /v1/patterns, /v1/monthly-spending, /v1/analysis - transaction analysis endpoints"""

import time
import logging
from typing import Callable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request

from spendlens.api.dependencies import get_request_id, get_thresholds
from spendlens.api.v1.schemas import (
    AnalysisRequest,
    AnalysisResponse,
    MetricsResponse,
    MonthlySpendingResponse,
    MonthlySpendingSchema,
    PatternSchema,
    PatternsResponse,
)
from spendlens.domain.exceptions import EmptyDatasetError, InvalidTransactionDataError
from spendlens.domain.metrics import calculate_metrics, calculate_monthly_trend
from spendlens.domain.patterns import detect_patterns
from spendlens.domain.report import build_report
from spendlens.domain.thresholds import DetectionThresholds
from spendlens.infrastructure.observability.logging import log_analysis
from spendlens.infrastructure.observability.metrics import record_analysis, record_failure

router = APIRouter()

T = TypeVar("T")


def _run(endpoint: str, request_id: str, compute: Callable[[], T]) -> T:
    """Run a domain computation, mapping domain errors to HTTP errors"""
    try:
        return compute()

    except EmptyDatasetError as e:
        record_failure(endpoint, "empty_dataset")
        logging.warning(f"Empty dataset: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except InvalidTransactionDataError as e:
        record_failure(endpoint, "invalid_data")
        logging.warning(f"Invalid transaction data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        record_failure(endpoint, "error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/metrics", response_model=MetricsResponse)
def compute_metrics(request_body: AnalysisRequest, request: Request):
    """
    Aggregate cash-flow metrics for the submitted transactions.

    Returns 422 when the transaction list is empty.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    metrics = _run("metrics", request_id, lambda: calculate_metrics(request_body.to_domain()))

    record_analysis("metrics", len(request_body.transactions))
    log_analysis(request_id, "metrics", len(request_body.transactions), 0, (time.time() - start_time) * 1000)

    return MetricsResponse.from_domain(metrics)


@router.post("/patterns", response_model=PatternsResponse)
def compute_patterns(
    request_body: AnalysisRequest,
    request: Request,
    thresholds: DetectionThresholds = Depends(get_thresholds),
):
    """
    Detect recurring charges, anomalies, spending spikes and trends.

    Patterns are ranked by impact, highest first. An empty list yields no patterns.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    patterns = _run("patterns", request_id, lambda: detect_patterns(request_body.to_domain(), thresholds))

    record_analysis("patterns", len(request_body.transactions), patterns)
    log_analysis(
        request_id, "patterns", len(request_body.transactions), len(patterns), (time.time() - start_time) * 1000
    )

    return PatternsResponse(patterns=[PatternSchema.from_domain(p) for p in patterns])


@router.post("/monthly-spending", response_model=MonthlySpendingResponse)
def compute_monthly_spending(request_body: AnalysisRequest, request: Request):
    """Expense totals per calendar month, oldest first"""
    request_id = get_request_id(request)

    months = _run("monthly_spending", request_id, lambda: calculate_monthly_trend(request_body.to_domain()))

    record_analysis("monthly_spending", len(request_body.transactions))
    return MonthlySpendingResponse(months=[MonthlySpendingSchema.from_domain(m) for m in months])


@router.post("/analysis", response_model=AnalysisResponse)
def compute_analysis(
    request_body: AnalysisRequest,
    request: Request,
    thresholds: DetectionThresholds = Depends(get_thresholds),
):
    """
    Full analysis consumed by the advisory service.

    Flow:
    1. Validate and convert transactions
    2. Aggregate metrics (422 on empty input)
    3. Detect and rank patterns
    4. Build monthly spending series
    """
    start_time = time.time()
    request_id = get_request_id(request)

    report = _run("analysis", request_id, lambda: build_report(request_body.to_domain(), thresholds))

    record_analysis("analysis", len(request_body.transactions), report.patterns)
    log_analysis(
        request_id,
        "analysis",
        len(request_body.transactions),
        len(report.patterns),
        (time.time() - start_time) * 1000,
    )

    return AnalysisResponse.from_domain(report)
