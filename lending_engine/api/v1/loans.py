"""Loan record endpoints - apply lifecycle, scoring, and schedule rules to a loan"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from lending_engine.api.v1.schemas import (
    AmortizationResponse,
    LoanRecord,
    LoanScheduleResponse,
    LoanUpdateRequest,
    LoanUpdateResponse,
    RescoreResponse,
    RiskScoreResponse,
)
from lending_engine.api.dependencies import get_request_id
from lending_engine.domain.exceptions import InvalidStageTransitionError
from lending_engine.domain.loan_updates import plan_loan_update, rescore_loan, schedule_for_loan
from lending_engine.infrastructure.observability.logging import log_transition_rejected
from lending_engine.infrastructure.observability.metrics import (
    record_risk_score,
    record_schedule,
    record_transition_check,
)

router = APIRouter()


@router.post("/loans/evaluate-update", response_model=LoanUpdateResponse)
def evaluate_update(
    request_body: LoanUpdateRequest,
    request_id: str = Depends(get_request_id),
):
    """
    Validate a partial loan update before the caller writes it.

    Flow:
    1. Reject an illegal stage change with 400 and the reason
    2. Rescore if any underwriting field is in the update
    3. Return the merged record, with risk_rating set when there is enough data

    Nothing is persisted here; the caller applies the returned record.
    """
    current = request_body.current.model_dump(mode="json", exclude_unset=True)
    changes = request_body.changes.model_dump(mode="json", exclude_unset=True)

    try:
        plan = plan_loan_update(current, changes)

    except InvalidStageTransitionError as e:
        record_transition_check(False)
        log_transition_rejected(request_id, e.from_stage, e.to_stage, e.reason)
        raise HTTPException(status_code=400, detail=e.reason)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if plan.stage_changed:
        record_transition_check(True)
    if plan.risk_result is not None:
        record_risk_score(plan.risk_result.rating.value, plan.risk_result.has_enough_data)

    return LoanUpdateResponse(
        loan=plan.merged,
        stage_changed=plan.stage_changed,
        previous_stage=plan.previous_stage,
        risk=RiskScoreResponse.from_result(plan.risk_result) if plan.risk_result else None,
        risk_rating=plan.risk_rating,
    )


@router.post("/loans/rescore", response_model=RescoreResponse)
def rescore(
    request_body: LoanRecord,
    request_id: str = Depends(get_request_id),
):
    """
    Re-score a loan on demand.

    risk_rating is the value to persist; it is null when fewer than two
    metrics could be scored and the stored rating should be left alone.
    """
    try:
        result, rating = rescore_loan(request_body.model_dump(mode="json"))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_risk_score(result.rating.value, result.has_enough_data)
    return RescoreResponse(result=RiskScoreResponse.from_result(result), risk_rating=rating)


@router.post("/loans/schedule", response_model=LoanScheduleResponse)
def loan_schedule(
    request_body: LoanRecord,
    request_id: str = Depends(get_request_id),
):
    """Amortization schedule from a loan's value, interest_rate, and loan_term"""
    try:
        result = schedule_for_loan(request_body.model_dump(mode="json"))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if result is None:
        return LoanScheduleResponse(applicable=False)

    record_schedule(len(result.rows))
    return LoanScheduleResponse(applicable=True, schedule=AmortizationResponse.from_result(result))
