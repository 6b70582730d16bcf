"""Risk scoring endpoints"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from lending_engine.api.v1.schemas import RatingsResponse, RiskScoreRequest, RiskScoreResponse
from lending_engine.api.dependencies import get_request_id
from lending_engine.domain.models import RiskInputs
from lending_engine.domain.scoring import RATING_LABELS, RATING_THRESHOLDS, compute_risk_score
from lending_engine.infrastructure.observability.logging import log_risk_score
from lending_engine.infrastructure.observability.metrics import record_risk_score

router = APIRouter()


@router.post("/risk-score", response_model=RiskScoreResponse)
def score_loan(
    request_body: RiskScoreRequest,
    request_id: str = Depends(get_request_id),
):
    """
    Compute composite risk score, rating, and per-metric breakdown.

    Missing inputs are reported as unscored metrics, never as errors.
    """
    start_time = time.time()

    try:
        result = compute_risk_score(RiskInputs(**request_body.model_dump()))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_risk_score(result.rating.value, result.has_enough_data)
    log_risk_score(request_id, result.score, result.rating.value, result.has_enough_data, duration_ms)

    return RiskScoreResponse.from_result(result)


@router.get("/risk-ratings", response_model=RatingsResponse)
def list_ratings():
    """Rating letters with display labels and minimum composite scores"""
    return RatingsResponse(
        labels={rating.value: label for rating, label in RATING_LABELS.items()},
        thresholds={rating.value: threshold for rating, threshold in RATING_THRESHOLDS.items()},
    )
