"""Pytest fixtures for testing"""

import pytest
from typing import Any, Dict
from fastapi.testclient import TestClient
from lending_engine.api.main import create_app
from lending_engine.domain.models import RiskInputs


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def strong_inputs() -> RiskInputs:
    """Well-qualified borrower: high score, low leverage, short term, near-full approval"""
    return RiskInputs(
        credit_score=800,
        ltv_ratio=50,
        dti_ratio=20,
        loan_term=12,
        value=100000,
        approved_amount=98000,
    )


@pytest.fixture
def weak_inputs() -> RiskInputs:
    """Stretched borrower: subprime score, high leverage, long term, heavy cut on approval"""
    return RiskInputs(
        credit_score=500,
        ltv_ratio=95,
        dti_ratio=55,
        loan_term=300,
        value=100000,
        approved_amount=30000,
    )


@pytest.fixture
def sample_loan() -> Dict[str, Any]:
    """Loan record as stored by the CRM"""
    return {
        "title": "Harbor Street refinance",
        "stage": "underwriting",
        "value": 250000,
        "credit_score": 720,
        "ltv_ratio": 70,
        "dti_ratio": 32,
        "loan_term": 360,
        "approved_amount": None,
        "interest_rate": 6.5,
        "risk_rating": None,
    }
