"""Domain models - immutable value objects exchanged with the decision engine"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Stage(str, Enum):
    """Loan pipeline stage"""

    LEAD = "lead"
    PRE_QUALIFICATION = "pre_qualification"
    UNDERWRITING = "underwriting"
    APPROVED = "approved"
    ACTIVE = "active"
    MONITORING = "monitoring"
    COLLECTION = "collection"
    CLOSED_WON = "closed_won"
    CLOSED_LOST = "closed_lost"
    DEFAULT = "default"


class Tier(str, Enum):
    """Qualitative bucket for a single metric's sub-score"""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    UNSCORED = "unscored"


class RiskRating(str, Enum):
    """Letter grade derived from the composite score"""

    A = "A"
    B = "B"
    C = "C"
    D = "D"


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a stage change check"""

    allowed: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"allowed": self.allowed, "reason": self.reason}


@dataclass(frozen=True)
class RiskInputs:
    """Underwriting snapshot of a loan"""

    value: float  # requested amount, always present (0 when unknown)
    credit_score: Optional[int] = None
    ltv_ratio: Optional[float] = None  # percent
    dti_ratio: Optional[float] = None  # percent
    loan_term: Optional[float] = None  # months
    approved_amount: Optional[float] = None


@dataclass(frozen=True)
class MetricScore:
    """Sub-score for a single underwriting metric"""

    value: Optional[float]
    score: int  # 0-100
    tier: Tier
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "score": self.score,
            "tier": self.tier.value,
            "label": self.label,
        }


@dataclass(frozen=True)
class RiskBreakdown:
    """One MetricScore per scored metric"""

    credit_score: MetricScore
    ltv: MetricScore
    dti: MetricScore
    loan_term: MetricScore
    loan_amount: MetricScore

    def items(self) -> Tuple[Tuple[str, MetricScore], ...]:
        return (
            ("credit_score", self.credit_score),
            ("ltv", self.ltv),
            ("dti", self.dti),
            ("loan_term", self.loan_term),
            ("loan_amount", self.loan_amount),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {name: metric.to_dict() for name, metric in self.items()}


@dataclass(frozen=True)
class RiskScoreResult:
    """Output of risk assessment"""

    score: int  # 0-100 composite
    rating: RiskRating
    breakdown: RiskBreakdown
    has_enough_data: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "rating": self.rating.value,
            "breakdown": self.breakdown.to_dict(),
            "has_enough_data": self.has_enough_data,
        }


@dataclass(frozen=True)
class AmortizationRow:
    """Single month in a repayment schedule"""

    month: int
    payment: float
    principal: float
    interest: float
    balance: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AmortizationResult:
    """Full fixed-rate repayment schedule with totals"""

    rows: Tuple[AmortizationRow, ...]
    monthly_payment: float
    total_interest: float
    total_paid: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "monthly_payment": self.monthly_payment,
            "total_interest": self.total_interest,
            "total_paid": self.total_paid,
        }
