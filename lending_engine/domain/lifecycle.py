"""Loan pipeline stage state machine"""

from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple, Union

from lending_engine.domain.models import Stage, TransitionResult

StageLike = Union[Stage, str]

STAGES: Tuple[Stage, ...] = tuple(Stage)

# Stages that cannot be exited once entered
TERMINAL_STAGES: FrozenSet[Stage] = frozenset({Stage.CLOSED_WON, Stage.CLOSED_LOST})

NON_TERMINAL_STAGES: Tuple[Stage, ...] = tuple(s for s in STAGES if s not in TERMINAL_STAGES)

# Open pipeline stages, used by dashboard filters
ACTIVE_STAGES: Tuple[Stage, ...] = (
    Stage.LEAD,
    Stage.PRE_QUALIFICATION,
    Stage.UNDERWRITING,
    Stage.APPROVED,
    Stage.ACTIVE,
    Stage.MONITORING,
    Stage.COLLECTION,
)

VALID_TRANSITIONS: Mapping[Stage, FrozenSet[Stage]] = MappingProxyType(
    {
        stage: (
            frozenset()
            if stage in TERMINAL_STAGES
            else frozenset(s for s in STAGES if s is not stage)
        )
        for stage in STAGES
    }
)


def format_stage(stage: StageLike) -> str:
    """Human-readable stage label, e.g. closed_won -> Closed Won"""
    return Stage(stage).value.replace("_", " ").title()


def is_terminal(stage: StageLike) -> bool:
    return Stage(stage) in TERMINAL_STAGES


def validate_transition(from_stage: StageLike, to_stage: StageLike) -> TransitionResult:
    """
    Check whether a loan may move from one pipeline stage to another.

    Rules, applied in order:
    - Same stage: always allowed (no-op)
    - Leaving a terminal stage (closed_won, closed_lost): rejected with a reason
    - Anything else: allowed, including backward moves such as active -> lead

    The check is a pure predicate; persisting the new stage is up to the caller.
    """
    source = Stage(from_stage)
    target = Stage(to_stage)

    if source is target:
        return TransitionResult(allowed=True)

    if source in TERMINAL_STAGES:
        return TransitionResult(
            allowed=False,
            reason=f'Cannot move a loan out of terminal stage "{format_stage(source)}"',
        )

    return TransitionResult(allowed=True)
