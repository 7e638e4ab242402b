# app/models/claim.py
from pydantic import Field
from typing import Optional, Any
from datetime import datetime

from app.models.base import CamelModel, BaseEntity, generate_id, utcnow
from app.models.enums import ClaimStatus


# ===================
# Main Claim Models
# ===================

class ClaimCreate(CamelModel):
    """For submitting a new claim."""
    id: Optional[str] = None
    policy_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    description: str = Field(..., min_length=1)
    # A JSON document is pinned to IPFS; a string is kept as an existing reference
    evidence: Optional[Any] = None

    class Config:
        json_schema_extra = {
            "example": {
                "policyId": "POL-001",
                "amount": 45000,
                "description": "Potential default event detected, under investigation",
                "evidence": {"report": "valuation-drop.pdf", "dropPercent": 38}
            }
        }


class Claim(BaseEntity):
    """Stored claim."""
    id: str = Field(default_factory=lambda: generate_id("clm"))
    policy_id: str
    amount: float
    status: ClaimStatus = ClaimStatus.PENDING
    timestamp: datetime = Field(default_factory=utcnow)
    description: str
    evidence: Optional[str] = None
    processed_by: Optional[str] = None
    processed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == ClaimStatus.PENDING


# ===================
# API Request/Response Models
# ===================

class ClaimCreateResponse(CamelModel):
    success: bool
    claim_id: str
    evidence_hash: Optional[str] = None


class ClaimReviewRequest(CamelModel):
    """Approve or reject a pending claim."""
    approved: bool
    processed_by: str = Field(..., min_length=1)
    reason: Optional[str] = None
