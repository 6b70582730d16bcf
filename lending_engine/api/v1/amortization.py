"""Amortization schedule endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from starlette.responses import Response

from lending_engine.api.v1.schemas import (
    AmortizationCsvRequest,
    AmortizationRequest,
    AmortizationResponse,
)
from lending_engine.api.dependencies import get_request_id
from lending_engine.config import settings
from lending_engine.domain.amortization import amortization_to_csv, compute_amortization
from lending_engine.infrastructure.observability.metrics import record_schedule

router = APIRouter()


@router.post("/amortization", response_model=AmortizationResponse)
def create_schedule(
    request_body: AmortizationRequest,
    request_id: str = Depends(get_request_id),
):
    """
    Compute a fixed-rate repayment schedule.

    Returns:
        One row per month plus monthly payment, total interest, and total paid
    """
    try:
        result = compute_amortization(
            request_body.principal, request_body.annual_rate, request_body.term_months
        )
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_schedule(len(result.rows))
    return AmortizationResponse.from_result(result)


@router.post("/amortization/csv")
def export_schedule_csv(
    request_body: AmortizationCsvRequest,
    request_id: str = Depends(get_request_id),
):
    """Same schedule as POST /v1/amortization, rendered as a CSV download"""
    try:
        result = compute_amortization(
            request_body.principal, request_body.annual_rate, request_body.term_months
        )
        content = amortization_to_csv(result, headers=request_body.column_labels)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_schedule(len(result.rows), output_format="csv")

    filename = f"{settings.csv_filename_prefix}-{request_body.term_months}mo.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
