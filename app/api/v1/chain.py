# app/api/v1/chain.py
from fastapi import APIRouter, Depends, Query
from typing import List

from app.core.dependencies import get_chain_service
from app.models.chain import (
    OnChainClaim, OnChainClaimReview, CrossChainClaimRequest, OnChainPolicyPurchase,
    CoverageOptionRequest, RoleGrantRequest, RoleStatus, MintRequest, ContractWriteResponse
)
from app.services.chain_service import ChainService

router = APIRouter()

# ===================
# Claims
# ===================

@router.get("/claims", response_model=List[OnChainClaim])
def get_user_claims(
    user: str = Query(..., description="Claimant wallet address"),
    chain: ChainService = Depends(get_chain_service)
):
    return chain.get_user_claims(user)

@router.get("/claims/pending", response_model=List[OnChainClaim])
def get_pending_claims(chain: ChainService = Depends(get_chain_service)):
    """Claims still Pending or UnderReview."""
    return chain.get_claims_awaiting_review()

@router.post("/claims/{claim_id}/review", response_model=ContractWriteResponse)
def review_claim(claim_id: int, review: OnChainClaimReview, chain: ChainService = Depends(get_chain_service)):
    return ContractWriteResponse(data=chain.review_claim(claim_id, review.approved, review.reason))

@router.post("/cross-chain-claims", response_model=ContractWriteResponse)
def submit_cross_chain_claim(request: CrossChainClaimRequest, chain: ChainService = Depends(get_chain_service)):
    """Ask InsuranceCore to evaluate an RWA token for a cross-chain claim."""
    return ContractWriteResponse(data=chain.submit_cross_chain_claim(request))

# ===================
# Policies / Coverage
# ===================

@router.post("/policies", response_model=ContractWriteResponse)
def purchase_policy(request: OnChainPolicyPurchase, chain: ChainService = Depends(get_chain_service)):
    return ContractWriteResponse(data=chain.purchase_policy(request))

@router.post("/coverage-options", response_model=ContractWriteResponse)
def add_coverage_option(request: CoverageOptionRequest, chain: ChainService = Depends(get_chain_service)):
    return ContractWriteResponse(data=chain.add_coverage_option(request))

# ===================
# Roles / Tokens
# ===================

@router.get("/roles/{contract_name}/{address}", response_model=RoleStatus)
def get_role_status(contract_name: str, address: str, chain: ChainService = Depends(get_chain_service)):
    return chain.get_role_status(contract_name, address)

@router.post("/roles", response_model=ContractWriteResponse)
def grant_role(request: RoleGrantRequest, chain: ChainService = Depends(get_chain_service)):
    return ContractWriteResponse(data=chain.grant_role(request))

@router.post("/tokens/mint", response_model=ContractWriteResponse)
def mint_tokens(request: MintRequest, chain: ChainService = Depends(get_chain_service)):
    """Mint MockBSDToken for testing premium payments."""
    return ContractWriteResponse(data=chain.mint(request))
