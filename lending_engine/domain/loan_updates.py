"""Apply the decision engine to loan records on create, update and rescore"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from lending_engine.domain.amortization import compute_amortization
from lending_engine.domain.exceptions import InvalidStageTransitionError
from lending_engine.domain.lifecycle import validate_transition
from lending_engine.domain.models import (
    AmortizationResult,
    RiskInputs,
    RiskRating,
    RiskScoreResult,
    Stage,
)
from lending_engine.domain.scoring import compute_risk_score

# Changing any of these re-runs risk scoring
RISK_FIELDS = ("credit_score", "ltv_ratio", "dti_ratio", "loan_term", "value", "approved_amount")


@dataclass(frozen=True)
class LoanUpdatePlan:
    """What the storage layer should write for an update request"""

    merged: Dict[str, Any]
    stage_changed: bool
    previous_stage: Optional[Stage]
    risk_result: Optional[RiskScoreResult]
    risk_rating: Optional[RiskRating]


def risk_inputs_from_loan(loan: Mapping[str, Any]) -> RiskInputs:
    """Build scoring inputs from a loan record; absent fields count as missing"""
    value = loan.get("value")
    return RiskInputs(
        value=value if value is not None else 0,
        credit_score=loan.get("credit_score"),
        ltv_ratio=loan.get("ltv_ratio"),
        dti_ratio=loan.get("dti_ratio"),
        loan_term=loan.get("loan_term"),
        approved_amount=loan.get("approved_amount"),
    )


def rescore_loan(loan: Mapping[str, Any]) -> Tuple[RiskScoreResult, Optional[RiskRating]]:
    """
    Score a loan on demand.

    Returns the full result plus the rating to persist, which is None when
    there is not enough data to overwrite the stored rating.
    """
    result = compute_risk_score(risk_inputs_from_loan(loan))
    return result, (result.rating if result.has_enough_data else None)


def plan_loan_update(current: Mapping[str, Any], changes: Mapping[str, Any]) -> LoanUpdatePlan:
    """
    Validate and enrich a partial update against the current loan record.

    Flow:
    1. If the update moves the loan to a different stage, check the transition
    2. If any underwriting field is touched, rescore the merged record
    3. Return the merged record with risk_rating set when there is enough data

    Raises:
        InvalidStageTransitionError: the stage change is not permitted
    """
    # A loan always has a stage; an explicit null leaves it unchanged
    changes = {key: value for key, value in changes.items() if not (key == "stage" and value is None)}
    merged: Dict[str, Any] = {**current, **changes}

    # 1. Stage transition gate
    stage_changed = False
    previous_stage: Optional[Stage] = None
    if changes.get("stage") is not None:
        current_stage = Stage(current["stage"])
        new_stage = Stage(changes["stage"])
        if current_stage is not new_stage:
            transition = validate_transition(current_stage, new_stage)
            if not transition.allowed:
                raise InvalidStageTransitionError(
                    current_stage.value, new_stage.value, transition.reason or "Transition not allowed"
                )
            stage_changed = True
            previous_stage = current_stage

    # 2. Auto risk scoring
    risk_result = None
    risk_rating = None
    if any(field in changes for field in RISK_FIELDS):
        risk_result, risk_rating = rescore_loan(merged)
        if risk_rating is not None:
            merged["risk_rating"] = risk_rating.value

    return LoanUpdatePlan(
        merged=merged,
        stage_changed=stage_changed,
        previous_stage=previous_stage,
        risk_result=risk_result,
        risk_rating=risk_rating,
    )


def schedule_for_loan(loan: Mapping[str, Any]) -> Optional[AmortizationResult]:
    """Amortization schedule for a loan, or None when rate or term is not set"""
    interest_rate = loan.get("interest_rate")
    loan_term = loan.get("loan_term")
    if interest_rate is None or loan_term is None:
        return None

    value = loan.get("value")
    return compute_amortization(value if value is not None else 0, interest_rate, loan_term)
