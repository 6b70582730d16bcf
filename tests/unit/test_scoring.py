"""Unit tests for risk scoring logic"""

import pytest
from lending_engine.domain.models import RiskInputs, RiskRating, Tier
from lending_engine.domain.scoring import (
    RATING_LABELS,
    UNSCORED_LABEL,
    compute_risk_score,
    rating_for_score,
    score_credit_score,
    score_dti,
    score_loan_amount,
    score_loan_term,
    score_ltv,
    score_to_tier,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (850, 100),
        (800, 95),
        (750, 90),
        (749, 89),
        (720, 78),
        (700, 70),
        (699, 69),
        (650, 45),
        (649, 44),
        (500, 25),
        (300, 0),
        (250, 0),  # below the scale clamps to 0
    ],
)
def test_credit_score_bands(value, expected):
    assert score_credit_score(value).score == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 100),
        (50, 92),
        (59, 91),
        (59.5, 91),
        (60, 89),
        (74, 70),
        (75, 69),
        (84, 45),
        (85, 44),
        (95, 15),
        (100, 0),
        (120, 0),
    ],
)
def test_ltv_bands_decrease_as_ratio_rises(value, expected):
    assert score_ltv(value).score == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 100),
        (20, 93),
        (27, 91),
        (28, 89),
        (35, 70),
        (36, 69),
        (42, 45),
        (43, 44),
        (55, 30),
        (80, 0),
    ],
)
def test_dti_bands(value, expected):
    assert score_dti(value).score == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (6, 100),
        (12, 100),
        (24, 85),
        (36, 70),
        (60, 55),
        (120, 35),
        (300, 13),
        (360, 5),
        (480, 5),
    ],
)
def test_loan_term_bands(value, expected):
    assert score_loan_term(value).score == expected


def test_missing_metric_is_unscored():
    """Test null inputs produce an unscored metric instead of an error"""
    for scorer in (score_credit_score, score_ltv, score_dti, score_loan_term):
        metric = scorer(None)
        assert metric.tier is Tier.UNSCORED
        assert metric.score == 0
        assert metric.value is None
        assert metric.label == UNSCORED_LABEL


def test_loan_amount_pending_is_neutral():
    """Test missing approval scores 50/fair and is never unscored"""
    for value, approved in [(100000, None), (0, None), (0, 50000)]:
        metric = score_loan_amount(value, approved)
        assert metric.score == 50
        assert metric.tier is Tier.FAIR
        assert metric.value is None
        assert metric.label == "Pending approval"


@pytest.mark.parametrize(
    "approved, expected_score, expected_label",
    [
        (100000, 100, "100% approved"),
        (98000, 96, "98% approved"),
        (80000, 70, "80% approved"),
        (30000, 22, "30% approved"),
        (0, 0, "0% approved"),
    ],
)
def test_loan_amount_ratio(approved, expected_score, expected_label):
    metric = score_loan_amount(100000, approved)
    assert metric.score == expected_score
    assert metric.value == approved
    assert metric.label == expected_label


def test_metric_labels():
    assert score_credit_score(720).label == "720 · Good"
    assert score_ltv(80.0).label == "80% · Fair"
    assert score_dti(20.5).label == "20.5% · Excellent"
    assert score_loan_term(36).label == "36 mo · Good"


@pytest.mark.parametrize(
    "score, tier",
    [(100, Tier.EXCELLENT), (90, Tier.EXCELLENT), (89, Tier.GOOD), (70, Tier.GOOD),
     (69, Tier.FAIR), (45, Tier.FAIR), (44, Tier.POOR), (0, Tier.POOR)],
)
def test_score_to_tier_thresholds(score, tier):
    assert score_to_tier(score) is tier


@pytest.mark.parametrize(
    "score, rating",
    [(100, RiskRating.A), (75, RiskRating.A), (74, RiskRating.B), (55, RiskRating.B),
     (54, RiskRating.C), (35, RiskRating.C), (34, RiskRating.D), (0, RiskRating.D)],
)
def test_rating_for_score(score, rating):
    assert rating_for_score(score) is rating


def test_rating_labels_cover_every_rating():
    assert set(RATING_LABELS) == set(RiskRating)
    assert RATING_LABELS[RiskRating.A] == "Low Risk"
    assert RATING_LABELS[RiskRating.D] == "High Risk"


def test_strong_borrower_rates_a(strong_inputs: RiskInputs):
    result = compute_risk_score(strong_inputs)

    assert result.score == 94
    assert result.rating is RiskRating.A
    assert result.has_enough_data is True
    for _, metric in result.breakdown.items():
        assert metric.tier in (Tier.EXCELLENT, Tier.GOOD)


def test_weak_borrower_rates_d(weak_inputs: RiskInputs):
    result = compute_risk_score(weak_inputs)

    assert result.score == 22
    assert result.score < 35
    assert result.rating is RiskRating.D


def test_value_only_is_not_enough_data():
    """Test only the neutral amount metric counts when nothing else is known"""
    result = compute_risk_score(RiskInputs(value=0))

    assert result.score == 50
    assert result.rating is RiskRating.C
    assert result.has_enough_data is False
    assert result.breakdown.credit_score.tier is Tier.UNSCORED
    assert result.breakdown.loan_amount.tier is Tier.FAIR


def test_weights_renormalized_over_scored_metrics():
    """Test missing metrics drop out of the weighted average"""
    # credit 95 (w=0.35) and pending amount 50 (w=0.05): (33.25 + 2.5) / 0.40
    result = compute_risk_score(RiskInputs(value=100000, credit_score=800))

    assert result.score == 89
    assert result.rating is RiskRating.A
    assert result.has_enough_data is True


def test_loan_record_with_pending_approval(sample_loan):
    result = compute_risk_score(
        RiskInputs(
            value=sample_loan["value"],
            credit_score=sample_loan["credit_score"],
            ltv_ratio=sample_loan["ltv_ratio"],
            dti_ratio=sample_loan["dti_ratio"],
            loan_term=sample_loan["loan_term"],
        )
    )

    # 78*.35 + 75*.25 + 78*.25 + 5*.10 + 50*.05 = 68.55
    assert result.score == 69
    assert result.rating is RiskRating.B
    assert result.breakdown.loan_term.tier is Tier.POOR


def test_compute_risk_score_is_idempotent(strong_inputs: RiskInputs):
    assert compute_risk_score(strong_inputs) == compute_risk_score(strong_inputs)


@pytest.mark.parametrize(
    "inputs",
    [
        RiskInputs(value=1, credit_score=300, ltv_ratio=150, dti_ratio=99, loan_term=600, approved_amount=0),
        RiskInputs(value=1, credit_score=850, ltv_ratio=0, dti_ratio=0, loan_term=1, approved_amount=5),
        RiskInputs(value=0, loan_term=0),
    ],
)
def test_composite_stays_in_range(inputs: RiskInputs):
    result = compute_risk_score(inputs)
    assert 0 <= result.score <= 100
    assert result.rating is rating_for_score(result.score)


def test_result_serializes_to_plain_dict(strong_inputs: RiskInputs):
    data = compute_risk_score(strong_inputs).to_dict()

    assert data["rating"] == "A"
    assert data["breakdown"]["ltv"]["tier"] == "excellent"
    assert set(data["breakdown"]) == {"credit_score", "ltv", "dti", "loan_term", "loan_amount"}
