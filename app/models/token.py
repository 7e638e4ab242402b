# app/models/token.py
from pydantic import Field
from typing import Optional

from app.models.base import CamelModel, BaseEntity


class TokenInfo(CamelModel):
    """RWA token as exposed by the API."""
    symbol: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    address: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    decimals: int = Field(18, ge=0, le=255)
    category: Optional[str] = None
    description: Optional[str] = None


class TokenDocument(TokenInfo, BaseEntity):
    """Stored token with timestamps."""

    def to_info(self) -> TokenInfo:
        return TokenInfo(**self.model_dump(include=set(TokenInfo.model_fields)))


class OnChainTokenInfo(CamelModel):
    address: str
    name: str
    symbol: str
    decimals: int


class MessageResponse(CamelModel):
    message: str
