# app/models/chain.py
"""Request/response models for smart contract interaction."""

from pydantic import Field
from typing import Optional, List, Any

from app.core.config import settings
from app.models.base import CamelModel
from app.models.enums import RoleType


# ===================
# Generic Read/Write
# ===================

class ContractWriteRequest(CamelModel):
    contract_name: str = Field(..., min_length=1)
    function_name: str = Field(..., min_length=1)
    args: List[Any] = Field(default_factory=list)


class TransactionResult(CamelModel):
    tx_hash: str
    block_number: int
    status: bool
    gas_used: Optional[int] = None
    confirmations: int = 1


class ContractReadResponse(CamelModel):
    data: Any


class ContractWriteResponse(CamelModel):
    data: TransactionResult


# ===================
# Claims
# ===================

class OnChainClaim(CamelModel):
    """Decoded ClaimProcessor.getClaim tuple."""
    id: int
    policy_id: int
    claimant: str
    amount: int
    status: int
    status_label: str
    proof: str
    verified_by: str
    required_confirmations: int


class OnChainClaimReview(CamelModel):
    approved: bool
    reason: str = ""


class CrossChainClaimRequest(CamelModel):
    token_address: str = Field(..., pattern=r"^(0x)?[0-9a-fA-F]{40}$")
    amount: int = Field(..., gt=0)
    required_confirmations: int = Field(
        default_factory=lambda: settings.DEFAULT_REQUIRED_CONFIRMATIONS, gt=0
    )


# ===================
# Policies / Coverage
# ===================

class OnChainPolicyPurchase(CamelModel):
    token_address: str
    coverage_amount: int = Field(..., gt=0)
    duration: int = Field(..., gt=0, description="Duration in days")


class CoverageOptionRequest(CamelModel):
    value: int = Field(..., gt=0)
    premium_rate: float = Field(..., gt=0, description="Premium rate in percent")
    min_duration_days: int = Field(default_factory=lambda: settings.COVERAGE_MIN_DURATION_DAYS, gt=0)
    max_duration_days: int = Field(default_factory=lambda: settings.COVERAGE_MAX_DURATION_DAYS, gt=0)


# ===================
# Roles / Tokens
# ===================

class RoleGrantRequest(CamelModel):
    contract_name: str
    role: RoleType
    target_address: str


class RoleStatus(CamelModel):
    contract: str
    address: str
    is_admin: bool
    is_default_admin: bool


class MintRequest(CamelModel):
    to: str
    amount: int = Field(..., ge=0)
