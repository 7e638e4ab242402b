# app/models/insurance_option.py
from pydantic import Field
from typing import Optional

from app.models.base import CamelModel, BaseEntity


class InsuranceOptionCreate(CamelModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    value: float = Field(..., gt=0)
    premium_rate: float = Field(..., gt=0, description="Annual premium rate in percent")
    description: str = Field(..., min_length=1)
    token_address: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "REAL-ESTATE-004",
                "name": "Real Estate Project 004",
                "value": 120000,
                "premiumRate": 2.5,
                "description": "A real estate project token representing a warehouse in Rotterdam."
            }
        }


class InsuranceOption(InsuranceOptionCreate, BaseEntity):
    pass


class PremiumQuoteRequest(CamelModel):
    coverage_percent: float = Field(..., description="Share of the option value to cover, in percent")
    duration_months: int = Field(12)


class PremiumQuote(CamelModel):
    option_id: str
    coverage_percent: float
    duration_months: int
    covered_value: float
    monthly_premium: float
    total_premium: float
    premium_rate_bps: int
