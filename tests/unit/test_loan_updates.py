"""Unit tests for applying the decision engine to loan records"""

import pytest
from lending_engine.domain.exceptions import InvalidStageTransitionError
from lending_engine.domain.loan_updates import (
    plan_loan_update,
    rescore_loan,
    risk_inputs_from_loan,
    schedule_for_loan,
)
from lending_engine.domain.models import RiskRating, Stage


def test_risk_inputs_default_missing_fields():
    """Test absent fields are missing data and a missing amount is zero"""
    inputs = risk_inputs_from_loan({"credit_score": 700})

    assert inputs.value == 0
    assert inputs.credit_score == 700
    assert inputs.ltv_ratio is None
    assert inputs.approved_amount is None


def test_stage_change_allowed(sample_loan):
    plan = plan_loan_update(sample_loan, {"stage": "approved"})

    assert plan.stage_changed is True
    assert plan.previous_stage is Stage.UNDERWRITING
    assert plan.merged["stage"] == "approved"
    assert plan.risk_result is None  # no underwriting field touched


def test_stage_change_out_of_terminal_rejected(sample_loan):
    current = {**sample_loan, "stage": "closed_won"}

    with pytest.raises(InvalidStageTransitionError) as exc_info:
        plan_loan_update(current, {"stage": "active"})

    assert exc_info.value.from_stage == "closed_won"
    assert exc_info.value.to_stage == "active"
    assert "Closed Won" in exc_info.value.reason


def test_null_stage_keeps_current_stage(sample_loan):
    plan = plan_loan_update(sample_loan, {"stage": None, "title": "Renamed"})

    assert plan.stage_changed is False
    assert plan.previous_stage is None
    assert plan.merged["stage"] == "underwriting"
    assert plan.merged["title"] == "Renamed"


def test_same_terminal_stage_is_no_op(sample_loan):
    current = {**sample_loan, "stage": "closed_lost"}
    plan = plan_loan_update(current, {"stage": "closed_lost", "title": "Renamed"})

    assert plan.stage_changed is False
    assert plan.previous_stage is None
    assert plan.merged["title"] == "Renamed"


def test_underwriting_change_rescores(sample_loan):
    """Test touching a risk field rescores the merged record"""
    plan = plan_loan_update(sample_loan, {"dti_ratio": 20})

    # 78*.35 + 75*.25 + 93*.25 + 5*.10 + 50*.05 = 72.3
    assert plan.risk_result is not None
    assert plan.risk_result.score == 72
    assert plan.risk_rating is RiskRating.B
    assert plan.merged["risk_rating"] == "B"
    assert plan.merged["dti_ratio"] == 20


def test_rating_not_set_without_enough_data():
    current = {"stage": "lead", "value": 50000}
    plan = plan_loan_update(current, {"value": 60000})

    assert plan.risk_result is not None
    assert plan.risk_result.has_enough_data is False
    assert plan.risk_rating is None
    assert "risk_rating" not in plan.merged


def test_stored_rating_kept_without_enough_data():
    current = {"stage": "lead", "value": 50000, "risk_rating": "C"}
    plan = plan_loan_update(current, {"credit_score": None})

    assert plan.risk_rating is None
    assert plan.merged["risk_rating"] == "C"


def test_non_risk_change_skips_scoring(sample_loan):
    plan = plan_loan_update(sample_loan, {"title": "New title", "interest_rate": 7})

    assert plan.risk_result is None
    assert plan.risk_rating is None
    assert plan.merged["interest_rate"] == 7


def test_rescore_loan(sample_loan):
    result, rating = rescore_loan(sample_loan)

    assert result.score == 69
    assert rating is RiskRating.B


def test_rescore_loan_without_enough_data():
    result, rating = rescore_loan({"value": 10000})

    assert result.has_enough_data is False
    assert rating is None


def test_schedule_for_loan(sample_loan):
    schedule = schedule_for_loan(sample_loan)

    assert schedule is not None
    assert len(schedule.rows) == 360
    assert schedule.rows[-1].balance == 0


@pytest.mark.parametrize("missing", ["interest_rate", "loan_term"])
def test_schedule_not_applicable(sample_loan, missing):
    """Test a loan without rate or term has no schedule rather than an error"""
    loan = {**sample_loan, missing: None}
    assert schedule_for_loan(loan) is None
