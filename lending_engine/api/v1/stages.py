"""Stage lifecycle endpoints - pipeline metadata and transition checks"""

from fastapi import APIRouter, Depends

from lending_engine.api.v1.schemas import StageTransitionRequest, StagesResponse, TransitionResponse
from lending_engine.api.dependencies import get_request_id
from lending_engine.domain.lifecycle import (
    ACTIVE_STAGES,
    NON_TERMINAL_STAGES,
    STAGES,
    TERMINAL_STAGES,
    VALID_TRANSITIONS,
    validate_transition,
)
from lending_engine.infrastructure.observability.logging import log_transition_rejected
from lending_engine.infrastructure.observability.metrics import record_transition_check

router = APIRouter()


@router.get("/stages", response_model=StagesResponse)
def list_stages():
    """
    Pipeline stages and the legal destinations from each one.

    The UI uses valid_transitions to disable illegal drop targets.
    """
    return StagesResponse(
        stages=list(STAGES),
        terminal=[s for s in STAGES if s in TERMINAL_STAGES],
        non_terminal=list(NON_TERMINAL_STAGES),
        active=list(ACTIVE_STAGES),
        valid_transitions={
            stage.value: [s for s in STAGES if s in targets]
            for stage, targets in VALID_TRANSITIONS.items()
        },
    )


@router.post("/stages/validate", response_model=TransitionResponse)
def check_transition(
    request_body: StageTransitionRequest,
    request_id: str = Depends(get_request_id),
):
    """
    Check a proposed stage change without applying it.

    Always returns 200; a refused move is reported through allowed/reason.
    """
    result = validate_transition(request_body.from_stage, request_body.to_stage)

    record_transition_check(result.allowed)
    if not result.allowed:
        log_transition_rejected(
            request_id, request_body.from_stage.value, request_body.to_stage.value, result.reason
        )

    return TransitionResponse(allowed=result.allowed, reason=result.reason)
