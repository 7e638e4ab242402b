# app/api/v1/policies.py
from fastapi import APIRouter, Depends, Query
from typing import Optional, List, Any

from app.core.dependencies import get_policy_service
from app.models.enums import PolicyStatus
from app.models.policy import Policy, PolicyCreate, PolicyCreateResponse
from app.services.policy_service import PolicyService

router = APIRouter()

# ===================
# Endpoints
# ===================

@router.get("", response_model=List[Policy])
def list_policies(
    holder: Optional[str] = Query(None, description="Wallet address of the holder"),
    status: Optional[PolicyStatus] = Query(None, description="Filter: active, claimed, expired"),
    service: PolicyService = Depends(get_policy_service)
):
    """List policies, newest first."""
    return service.list_policies(holder=holder, status=status.value if status else None)

@router.post("", response_model=PolicyCreateResponse, status_code=201)
def create_policy(data: PolicyCreate, service: PolicyService = Depends(get_policy_service)):
    """
    Create a policy.
    The policy JSON is pinned to IPFS when storage is enabled, then stored
    and linked to the holder's user record.
    """
    policy = service.create_policy(data)
    return PolicyCreateResponse(success=True, policy_id=policy.id, ipfs_hash=policy.ipfs_hash)

@router.get("/{policy_id}", response_model=Policy)
def get_policy(policy_id: str, service: PolicyService = Depends(get_policy_service)):
    return service.get_policy(policy_id)

@router.get("/{policy_id}/document")
def get_policy_document(policy_id: str, service: PolicyService = Depends(get_policy_service)) -> Any:
    """Get the policy JSON pinned on IPFS."""
    return service.get_policy_document(policy_id)
