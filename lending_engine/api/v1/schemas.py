"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from lending_engine.config import settings
from lending_engine.domain.models import (
    AmortizationResult,
    RiskRating,
    RiskScoreResult,
    Stage,
    Tier,
)
from lending_engine.domain.scoring import RATING_LABELS


# Lifecycle


class StageTransitionRequest(BaseModel):
    """Request body for POST /v1/stages/validate"""

    from_stage: Stage
    to_stage: Stage


class TransitionResponse(BaseModel):
    """Response for POST /v1/stages/validate"""

    allowed: bool
    reason: Optional[str] = None


class StagesResponse(BaseModel):
    """Response for GET /v1/stages"""

    stages: List[Stage]
    terminal: List[Stage]
    non_terminal: List[Stage]
    active: List[Stage]
    valid_transitions: Dict[str, List[Stage]]


# Risk scoring


class RiskScoreRequest(BaseModel):
    """Request body for POST /v1/risk-score"""

    value: float = Field(..., ge=0, description="Requested loan amount")
    credit_score: Optional[int] = Field(None, ge=300, le=850)
    ltv_ratio: Optional[float] = Field(None, ge=0, description="Loan-to-value, percent")
    dti_ratio: Optional[float] = Field(None, ge=0, description="Debt-to-income, percent")
    loan_term: Optional[float] = Field(None, ge=0, description="Term in months")
    approved_amount: Optional[float] = Field(None, ge=0)


class MetricScoreSchema(BaseModel):
    """Sub-score for one underwriting metric"""

    value: Optional[float] = None
    score: int
    tier: Tier
    label: str


class RiskBreakdownSchema(BaseModel):
    credit_score: MetricScoreSchema
    ltv: MetricScoreSchema
    dti: MetricScoreSchema
    loan_term: MetricScoreSchema
    loan_amount: MetricScoreSchema


class RiskScoreResponse(BaseModel):
    """Response for POST /v1/risk-score"""

    score: int
    rating: RiskRating
    rating_label: str
    breakdown: RiskBreakdownSchema
    has_enough_data: bool

    @classmethod
    def from_result(cls, result: RiskScoreResult) -> "RiskScoreResponse":
        return cls(**result.to_dict(), rating_label=RATING_LABELS[result.rating])


class RatingsResponse(BaseModel):
    """Response for GET /v1/risk-ratings"""

    labels: Dict[str, str]
    thresholds: Dict[str, int]


# Amortization


class AmortizationRequest(BaseModel):
    """Request body for POST /v1/amortization"""

    principal: float = Field(..., ge=0, description="Loan principal")
    annual_rate: float = Field(..., ge=0, description="Annual interest rate, percent")
    term_months: int = Field(..., ge=1, le=settings.max_term_months)


class AmortizationCsvRequest(AmortizationRequest):
    """Request body for POST /v1/amortization/csv"""

    column_labels: Optional[Dict[str, str]] = Field(
        None, description="Display names for month/payment/principal/interest/balance"
    )


class AmortizationRowSchema(BaseModel):
    month: int
    payment: float
    principal: float
    interest: float
    balance: float


class AmortizationResponse(BaseModel):
    """Response for POST /v1/amortization"""

    rows: List[AmortizationRowSchema]
    monthly_payment: float
    total_interest: float
    total_paid: float

    @classmethod
    def from_result(cls, result: AmortizationResult) -> "AmortizationResponse":
        return cls(**result.to_dict())


# Loan records


class LoanRecord(BaseModel):
    """Loan fields the engine reads; other CRM fields pass through untouched"""

    model_config = ConfigDict(extra="allow")

    stage: Optional[Stage] = None
    value: Optional[float] = Field(None, ge=0)
    credit_score: Optional[int] = Field(None, ge=300, le=850)
    ltv_ratio: Optional[float] = Field(None, ge=0)
    dti_ratio: Optional[float] = Field(None, ge=0)
    loan_term: Optional[float] = Field(None, ge=1, le=settings.max_term_months)
    approved_amount: Optional[float] = Field(None, ge=0)
    interest_rate: Optional[float] = Field(None, ge=0)
    risk_rating: Optional[RiskRating] = None


class CurrentLoan(LoanRecord):
    """Stored loan state; stage is always known"""

    stage: Stage


class LoanUpdateRequest(BaseModel):
    """Request body for POST /v1/loans/evaluate-update"""

    current: CurrentLoan
    changes: LoanRecord


class LoanUpdateResponse(BaseModel):
    """Response for POST /v1/loans/evaluate-update"""

    loan: Dict[str, Any]
    stage_changed: bool
    previous_stage: Optional[Stage] = None
    risk: Optional[RiskScoreResponse] = None
    risk_rating: Optional[RiskRating] = None


class RescoreResponse(BaseModel):
    """Response for POST /v1/loans/rescore"""

    result: RiskScoreResponse
    risk_rating: Optional[RiskRating] = None


class LoanScheduleResponse(BaseModel):
    """Response for POST /v1/loans/schedule"""

    applicable: bool
    schedule: Optional[AmortizationResponse] = None
