# app/models/policy.py
from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime

from app.models.base import CamelModel, BaseEntity, generate_id, to_naive_utc, utcnow
from app.models.enums import PolicyStatus


# ===================
# Main Policy Models
# ===================

class PolicyBase(CamelModel):
    """Base policy information."""
    holder: str = Field(..., min_length=1, description="Wallet address of the policy holder")
    token_id: str = Field(..., min_length=1)
    token_name: Optional[str] = None
    coverage_amount: float = Field(..., gt=0)
    premium_amount: float = Field(..., ge=0)
    start_date: datetime
    end_date: datetime
    description: Optional[str] = None
    policy_type: Optional[str] = Field(None, alias="type")

    @field_validator("start_date", "end_date")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class PolicyCreate(PolicyBase):
    """For creating a new policy."""
    id: Optional[str] = None
    status: PolicyStatus = PolicyStatus.ACTIVE

    class Config:
        json_schema_extra = {
            "example": {
                "id": "POL-004",
                "holder": "0x248dcc886995dd097Dc47b8561584D6479cF7772",
                "tokenId": "REAL-ESTATE-001",
                "tokenName": "Real Estate Project 001",
                "coverageAmount": 75000,
                "premiumAmount": 1875,
                "startDate": "2025-01-01T00:00:00",
                "endDate": "2026-01-01T00:00:00"
            }
        }


class Policy(PolicyBase, BaseEntity):
    """Stored policy."""
    id: str = Field(default_factory=lambda: generate_id("pol"))
    status: PolicyStatus = PolicyStatus.ACTIVE
    ipfs_hash: Optional[str] = None

    @property
    def is_lapsed(self) -> bool:
        return self.status == PolicyStatus.ACTIVE and self.end_date <= utcnow()


# ===================
# API Response Models
# ===================

class PolicyCreateResponse(CamelModel):
    success: bool
    policy_id: str
    ipfs_hash: Optional[str] = None


class PolicyExpireResponse(CamelModel):
    success: bool
    expired_count: int
    policy_ids: List[str]
