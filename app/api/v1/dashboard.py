# app/api/v1/dashboard.py
from fastapi import APIRouter, Depends, Query
from typing import Dict, List

from app.core.dependencies import (
    get_policy_store, get_claim_store, get_insurance_option_store, get_token_store
)
from app.models.base import CamelModel
from app.models.claim import Claim
from app.models.policy import Policy
from app.storage.claim_store import ClaimStore
from app.storage.insurance_option_store import InsuranceOptionStore
from app.storage.policy_store import PolicyStore
from app.storage.token_store import TokenStore

router = APIRouter()

# ===================
# Response Models
# ===================

class OverviewStats(CamelModel):
    total_policies: int = 0
    active_policies: int = 0
    total_claims: int = 0
    pending_claims: int = 0
    insurance_options: int = 0
    tokens: int = 0
    policy_holders: int = 0

class FinancialStats(CamelModel):
    active_coverage: float = 0.0
    total_premiums: float = 0.0
    total_claimed: float = 0.0
    total_approved: float = 0.0
    total_rejected: float = 0.0
    average_claim: float = 0.0
    approval_rate: float = 0.0

class DashboardStats(CamelModel):
    overview: OverviewStats
    policies_by_status: Dict[str, int]
    claims_by_status: Dict[str, int]
    financials: FinancialStats
    average_processing_days: float = 0.0

class ExpiryAlerts(CamelModel):
    days_ahead: int
    total_expiring: int
    expiring_policies: List[Policy]

# ===================
# Endpoints
# ===================

@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    policies: PolicyStore = Depends(get_policy_store),
    claims: ClaimStore = Depends(get_claim_store),
    options: InsuranceOptionStore = Depends(get_insurance_option_store),
    tokens: TokenStore = Depends(get_token_store)
):
    """
    Get dashboard statistics.
    Returns counts per collection, claim/policy breakdowns and amounts.
    """
    policy_stats = policies.get_statistics()
    claim_stats = claims.get_statistics()

    return DashboardStats(
        overview=OverviewStats(
            total_policies=policy_stats["total"],
            active_policies=policy_stats["by_status"].get("active", 0),
            total_claims=claim_stats["total"],
            pending_claims=claim_stats["by_status"].get("pending", 0),
            insurance_options=options.count(),
            tokens=tokens.count(),
            policy_holders=policy_stats["holders"]
        ),
        policies_by_status=policy_stats["by_status"],
        claims_by_status=claim_stats["by_status"],
        financials=FinancialStats(
            active_coverage=policy_stats["active_coverage"],
            total_premiums=policy_stats["total_premiums"],
            total_claimed=claim_stats["total_claimed"],
            total_approved=claim_stats["total_approved"],
            total_rejected=claim_stats["total_rejected"],
            average_claim=claim_stats["average_claim"],
            approval_rate=claim_stats["approval_rate"]
        ),
        average_processing_days=claim_stats["average_processing_days"]
    )

@router.get("/recent-claims", response_model=List[Claim])
def get_recent_claims(
    limit: int = Query(5, ge=1, le=20, description="Number of claims to return"),
    claims: ClaimStore = Depends(get_claim_store)
):
    return claims.find({}, limit=limit)

@router.get("/recent-policies", response_model=List[Policy])
def get_recent_policies(
    limit: int = Query(5, ge=1, le=20, description="Number of policies to return"),
    policies: PolicyStore = Depends(get_policy_store)
):
    return policies.find({}, limit=limit)

@router.get("/policy-expiry-alerts", response_model=ExpiryAlerts)
def get_policy_expiry_alerts(
    days_ahead: int = Query(30, ge=1, le=365, description="Days to look ahead"),
    policies: PolicyStore = Depends(get_policy_store)
):
    """Active policies ending soon."""
    expiring = policies.get_expiring(days_ahead)
    return ExpiryAlerts(days_ahead=days_ahead, total_expiring=len(expiring), expiring_policies=expiring)
