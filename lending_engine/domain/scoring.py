"""Risk scoring engine - composite underwriting score and letter rating"""

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from lending_engine.domain.models import (
    MetricScore,
    RiskBreakdown,
    RiskInputs,
    RiskRating,
    RiskScoreResult,
    Tier,
)
from lending_engine.utils.math_utils import format_number, lerp, round_to_int

# Nominal weights; renormalized at runtime over the metrics that were scored
WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "credit_score": 0.35,
        "ltv": 0.25,
        "dti": 0.25,
        "loan_term": 0.10,
        "loan_amount": 0.05,
    }
)

MIN_SCORED_METRICS = 2

RATING_LABELS: Mapping[RiskRating, str] = MappingProxyType(
    {
        RiskRating.A: "Low Risk",
        RiskRating.B: "Moderate Risk",
        RiskRating.C: "Elevated Risk",
        RiskRating.D: "High Risk",
    }
)

# Minimum composite score for each rating, best first
RATING_THRESHOLDS: Mapping[RiskRating, int] = MappingProxyType(
    {
        RiskRating.A: 75,
        RiskRating.B: 55,
        RiskRating.C: 35,
        RiskRating.D: 0,
    }
)

UNSCORED_LABEL = "—"

_TIER_NAMES: Dict[Tier, str] = {
    Tier.EXCELLENT: "Excellent",
    Tier.GOOD: "Good",
    Tier.FAIR: "Fair",
    Tier.POOR: "Poor",
}


def _unscored() -> MetricScore:
    return MetricScore(value=None, score=0, tier=Tier.UNSCORED, label=UNSCORED_LABEL)


def score_to_tier(score: int) -> Tier:
    if score >= 90:
        return Tier.EXCELLENT
    if score >= 70:
        return Tier.GOOD
    if score >= 45:
        return Tier.FAIR
    return Tier.POOR


def _metric(value: float, raw_score: float, unit: str = "") -> MetricScore:
    score = round_to_int(raw_score)
    tier = score_to_tier(score)
    return MetricScore(
        value=value,
        score=score,
        tier=tier,
        label=f"{format_number(value)}{unit} · {_TIER_NAMES[tier]}",
    )


def score_credit_score(value: Optional[float]) -> MetricScore:
    """Higher bureau score is better (300-850)"""
    if value is None:
        return _unscored()

    if value >= 750:
        raw = lerp(value, 750, 850, 90, 100)
    elif value >= 700:
        raw = lerp(value, 700, 749, 70, 89)
    elif value >= 650:
        raw = lerp(value, 650, 699, 45, 69)
    else:
        raw = lerp(value, 300, 649, 0, 44)

    return _metric(value, raw)


def score_ltv(value: Optional[float]) -> MetricScore:
    """Lower loan-to-value (percent) is better"""
    if value is None:
        return _unscored()

    if value < 60:
        raw = lerp(value, 0, 59, 100, 91)
    elif value < 75:
        raw = lerp(value, 60, 74, 89, 70)
    elif value < 85:
        raw = lerp(value, 75, 84, 69, 45)
    else:
        raw = lerp(value, 85, 100, 44, 0)

    return _metric(value, raw, "%")


def score_dti(value: Optional[float]) -> MetricScore:
    """Lower debt-to-income (percent) is better"""
    if value is None:
        return _unscored()

    if value < 28:
        raw = lerp(value, 0, 27, 100, 91)
    elif value < 36:
        raw = lerp(value, 28, 35, 89, 70)
    elif value < 43:
        raw = lerp(value, 36, 42, 69, 45)
    else:
        raw = lerp(value, 43, 80, 44, 0)

    return _metric(value, raw, "%")


def score_loan_term(value: Optional[float]) -> MetricScore:
    """Shorter term (months) is better"""
    if value is None:
        return _unscored()

    if value <= 12:
        raw = 100
    elif value <= 24:
        raw = lerp(value, 12, 24, 100, 85)
    elif value <= 36:
        raw = lerp(value, 24, 36, 85, 70)
    elif value <= 60:
        raw = lerp(value, 36, 60, 70, 55)
    elif value <= 120:
        raw = lerp(value, 60, 120, 55, 35)
    else:
        raw = lerp(value, 120, 360, 35, 5)

    return _metric(value, raw, " mo")


def score_loan_amount(value: float, approved_amount: Optional[float]) -> MetricScore:
    """
    Score the approved-to-requested ratio.

    No approval decision yet (or nothing requested) is neutral risk, not missing
    data: the metric gets 50 / fair and still counts toward the composite.
    """
    if approved_amount is None or value == 0:
        return MetricScore(value=None, score=50, tier=Tier.FAIR, label="Pending approval")

    ratio = approved_amount / value
    if ratio >= 0.95:
        raw = lerp(ratio, 0.95, 1.0, 90, 100)
    elif ratio >= 0.80:
        raw = lerp(ratio, 0.80, 0.95, 70, 89)
    elif ratio >= 0.60:
        raw = lerp(ratio, 0.60, 0.80, 45, 69)
    else:
        raw = lerp(ratio, 0.0, 0.60, 0, 44)

    score = round_to_int(raw)
    return MetricScore(
        value=approved_amount,
        score=score,
        tier=score_to_tier(score),
        label=f"{round_to_int(ratio * 100)}% approved",
    )


def rating_for_score(score: float) -> RiskRating:
    """
    Map composite score to a letter rating.

    Score bands:
    - 75+:    A (low risk)
    - 55-74:  B (moderate risk)
    - 35-54:  C (elevated risk)
    - 0-34:   D (high risk)
    """
    for rating, threshold in RATING_THRESHOLDS.items():
        if score >= threshold:
            return rating
    return RiskRating.D


def compute_risk_score(inputs: RiskInputs) -> RiskScoreResult:
    """
    Main entry point: score each underwriting metric and combine them.

    The composite is a weighted average over the metrics that are not
    unscored, with the remaining weights renormalized to sum to 1. With no
    scored metric the composite is 0. Never raises for missing data.
    """
    breakdown = RiskBreakdown(
        credit_score=score_credit_score(inputs.credit_score),
        ltv=score_ltv(inputs.ltv_ratio),
        dti=score_dti(inputs.dti_ratio),
        loan_term=score_loan_term(inputs.loan_term),
        loan_amount=score_loan_amount(inputs.value, inputs.approved_amount),
    )

    weighted_sum = 0.0
    total_weight = 0.0
    scored_count = 0
    for name, metric in breakdown.items():
        if metric.tier is Tier.UNSCORED:
            continue
        weight = WEIGHTS[name]
        weighted_sum += metric.score * weight
        total_weight += weight
        scored_count += 1

    score = round_to_int(weighted_sum / total_weight) if total_weight > 0 else 0

    return RiskScoreResult(
        score=score,
        rating=rating_for_score(score),
        breakdown=breakdown,
        has_enough_data=scored_count >= MIN_SCORED_METRICS,
    )
