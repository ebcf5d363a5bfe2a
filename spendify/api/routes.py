"""FastAPI endpoints for the Spendify insights API.

This module defines the expense insights routes (body and query-parameter variants) and a
health check. Validation failures map to 400 and store failures to 500, so clients can
tell a bad request from an unavailable backend.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.concurrency import run_in_threadpool

from spendify.api.dependencies import get_aggregator
from spendify.core.exceptions import FetchError, ValidationError
from spendify.core.models import InsightsReport, InsightsRequest
from spendify.core.utils import get_logger
from spendify.services.insights import InsightsAggregator

router = APIRouter()
logger = get_logger("spendify.api")

INSIGHTS_DESCRIPTION = (
    "Summarize an owner's expenses over an inclusive calendar-day window.\n\n"
    "**Response:**\n"
    "- 200 OK: totals, top categories, dominant payment method, daily breakdown and extremes.\n"
    "- 400 Bad Request: missing or malformed `ownerId`, `startDate` or `endDate`, or `endDate` before `startDate`.\n"
    "- 500 Internal Server Error: the expense store is not configured or failed."
)
INSIGHTS_RESPONSES = {
    200: {
        "description": "Insights computed.",
        "content": {
            "application/json": {
                "example": {
                    "ownerId": "u1",
                    "dateWindow": {"start": "2025-06-01", "end": "2025-06-02"},
                    "totalSpent": 150.0,
                    "transactionCount": 2,
                    "averageTransactionValue": 75.0,
                    "topCategories": [{"name": "Food", "total": 150.0}],
                    "dominantPaymentMethod": "upi",
                    "highestSingleExpense": {"category": "Food", "amount": 100.0, "date": "2025-06-01", "method": "upi"},
                    "daysInWindow": 2,
                    "uniqueDaysWithActivity": 2,
                    "dailyTotals": [{"date": "2025-06-01", "total": 100.0}, {"date": "2025-06-02", "total": 50.0}],
                }
            }
        },
    },
    400: {
        "description": "Invalid request.",
        "content": {"application/json": {"example": {"detail": "endDate must be >= startDate."}}},
    },
    500: {"description": "Expense store unavailable."},
}


async def run_insights(
    aggregator: InsightsAggregator | None, owner_id: str, start_date: str, end_date: str
) -> InsightsReport:
    """Run the aggregator off the event loop and map its errors to HTTP errors."""
    if aggregator is None:
        logger.error("Insights requested but no expense store is configured")
        raise HTTPException(500, "Expense store not configured.")
    try:
        return await run_in_threadpool(aggregator.compute_insights, owner_id, start_date, end_date)
    except ValidationError as exc:
        logger.warning(f"Rejected insights request: {exc}")
        raise HTTPException(400, str(exc)) from exc
    except FetchError as exc:
        logger.exception("Error while computing expense insights")
        raise HTTPException(
            500,
            {"message": "Unexpected error while processing expense insights.", "details": str(exc)},
        ) from exc


@router.post(
    "/expense-insights",
    response_model=InsightsReport,
    summary="Compute expense insights from a JSON body",
    description=INSIGHTS_DESCRIPTION + "\n\n**Body:** `{ ownerId, startDate, endDate }` with dates as `YYYY-MM-DD`.",
    response_description="Expense insights report.",
    responses=INSIGHTS_RESPONSES,
)
async def post_insights(
    body: InsightsRequest,
    aggregator: InsightsAggregator | None = Depends(get_aggregator),
) -> InsightsReport:
    """Compute insights for the owner and window in the request body."""
    logger.info(f"Received insights request: owner={body.owner_id}, {body.start_date}..{body.end_date}")
    if not body.owner_id:
        raise HTTPException(400, "ownerId is required in request body.")
    if not body.start_date or not body.end_date:
        raise HTTPException(400, "Both startDate and endDate are required.")
    return await run_insights(aggregator, body.owner_id, body.start_date, body.end_date)


@router.get(
    "/expense-insights",
    response_model=InsightsReport,
    summary="Compute expense insights from query parameters",
    description=INSIGHTS_DESCRIPTION + "\n\n**Query:** `?ownerId=...&startDate=YYYY-MM-DD&endDate=YYYY-MM-DD`.",
    response_description="Expense insights report.",
    responses=INSIGHTS_RESPONSES,
)
async def get_insights(
    owner_id: str | None = Query(None, alias="ownerId"),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    aggregator: InsightsAggregator | None = Depends(get_aggregator),
) -> InsightsReport:
    """Compute insights for the owner and window in the query string."""
    logger.info(f"Received insights query: owner={owner_id}, {start_date}..{end_date}")
    if not owner_id:
        raise HTTPException(400, "ownerId is required as a query param.")
    if not start_date or not end_date:
        raise HTTPException(400, "startDate and endDate are required as query params.")
    return await run_insights(aggregator, owner_id, start_date, end_date)


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
