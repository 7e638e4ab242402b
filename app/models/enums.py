# app/models/enums.py
from enum import Enum, IntEnum


class PolicyStatus(str, Enum):
    ACTIVE = "active"
    CLAIMED = "claimed"
    EXPIRED = "expired"


class ClaimStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OnChainClaimStatus(IntEnum):
    """ClaimProcessor status enum, by index."""
    PENDING = 0
    UNDER_REVIEW = 1
    APPROVED = 2
    REJECTED = 3
    PAID = 4

    @property
    def label(self) -> str:
        return {
            0: "pending",
            1: "underReview",
            2: "approved",
            3: "rejected",
            4: "paid",
        }[self.value]


class RoleType(str, Enum):
    ADMIN = "admin"
    DEFAULT_ADMIN = "defaultAdmin"
