# app/api/v1/claims.py
from fastapi import APIRouter, Depends, Query
from typing import Optional, List, Any

from app.core.dependencies import get_claim_service
from app.models.claim import Claim, ClaimCreate, ClaimCreateResponse, ClaimReviewRequest
from app.models.enums import ClaimStatus
from app.services.claim_service import ClaimService

router = APIRouter()

@router.get("", response_model=List[Claim])
def list_claims(
    policy_id: Optional[str] = Query(None, description="Only claims against this policy"),
    status: Optional[ClaimStatus] = Query(None, description="Filter: pending, approved, rejected"),
    service: ClaimService = Depends(get_claim_service)
):
    return service.list_claims(policy_id=policy_id, status=status.value if status else None)

@router.post("", response_model=ClaimCreateResponse, status_code=201)
def submit_claim(data: ClaimCreate, service: ClaimService = Depends(get_claim_service)):
    """
    Submit a claim against an existing policy.
    Evidence given as a JSON object is pinned to IPFS first.
    """
    claim = service.submit_claim(data)
    return ClaimCreateResponse(success=True, claim_id=claim.id, evidence_hash=claim.evidence)

@router.get("/{claim_id}", response_model=Claim)
def get_claim(claim_id: str, service: ClaimService = Depends(get_claim_service)):
    return service.get_claim(claim_id)

@router.get("/{claim_id}/evidence")
def get_claim_evidence(claim_id: str, service: ClaimService = Depends(get_claim_service)) -> Any:
    return service.get_evidence(claim_id)

@router.post("/{claim_id}/review", response_model=Claim)
def review_claim(
    claim_id: str,
    review: ClaimReviewRequest,
    service: ClaimService = Depends(get_claim_service)
):
    """Approve or reject a pending claim."""
    return service.review_claim(
        claim_id,
        approved=review.approved,
        processed_by=review.processed_by,
        reason=review.reason
    )
