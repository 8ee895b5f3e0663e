"""GET /v1/analytics and POST /v1/analytics/compute - dashboard aggregation endpoints"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from lab_gateway.api.v1.schemas import AnalyticsResponse, ComputeRequest
from lab_gateway.api.dependencies import get_request_id, get_session_context, get_transaction_client
from lab_gateway.infrastructure.clients.transactions import TransactionClient
from lab_gateway.domain.analytics import build_report
from lab_gateway.domain.filters import filter_transactions
from lab_gateway.domain.models import SessionContext
from lab_gateway.domain.exceptions import InvalidFilterError, TransactionAPIError
from lab_gateway.infrastructure.observability.metrics import record_report, transaction_fetch_failures_counter
from lab_gateway.infrastructure.observability.logging import log_report
from lab_gateway.config import settings

router = APIRouter()


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    request: Request,
    frequency: Optional[str] = Query(None, description="7, 30, 365, custom or all"),
    transaction_type: str = Query("all", alias="type", description="all, income or expense"),
    start_date: Optional[date] = Query(None, description="Custom range start (inclusive)"),
    end_date: Optional[date] = Query(None, description="Custom range end (inclusive)"),
    context: SessionContext = Depends(get_session_context),
    transaction_client: TransactionClient = Depends(get_transaction_client),
):
    """
    Build the analytics dashboard for the logged-in user.

    Flow:
    1. Fetch the user's transactions from the transaction store
    2. Apply the frequency/type filters selected on the transactions page
    3. Aggregate into summary and category breakdowns
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        transactions = await transaction_client.get_transactions(context.user_id)
        selected = filter_transactions(
            transactions,
            frequency=frequency,
            transaction_type=transaction_type,
            start_date=start_date,
            end_date=end_date,
        )

    except TransactionAPIError as e:
        transaction_fetch_failures_counter.inc()
        logging.error(f"Transaction API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Transaction service unavailable")

    except InvalidFilterError as e:
        logging.warning(f"Invalid filter: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    report = build_report(selected, profit_formula=settings.profit_formula)

    duration_ms = (time.time() - start_time) * 1000
    record_report("store", report.summary)
    log_report(request_id, context.user_id, report.summary, duration_ms)

    return AnalyticsResponse.from_report(report)


@router.post("/analytics/compute", response_model=AnalyticsResponse)
def compute_analytics(request_body: ComputeRequest, request: Request):
    """
    Aggregate the posted transactions without touching the transaction store.
    """
    start_time = time.time()

    transactions = [t.to_domain() for t in request_body.transactions]
    report = build_report(transactions, profit_formula=settings.profit_formula)

    duration_ms = (time.time() - start_time) * 1000
    record_report("posted", report.summary)
    log_report(get_request_id(request), "anonymous", report.summary, duration_ms)

    return AnalyticsResponse.from_report(report)
