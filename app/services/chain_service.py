# app/services/chain_service.py
"""Insurance operations executed on chain."""

from typing import Any, List, Optional

from web3 import Web3

from app.chain.abis import ERC20_ABI
from app.chain.contracts import ContractClient, ADMIN_ROLE, DEFAULT_ADMIN_ROLE
from app.core.constants import CLAIM_PROCESSOR, INSURANCE_CORE, MOCK_BSD_TOKEN
from app.core.exceptions import ContractArgumentError, ContractCallError
from app.core.logging import get_logger
from app.models.chain import (
    OnChainClaim, CrossChainClaimRequest, OnChainPolicyPurchase, CoverageOptionRequest,
    RoleGrantRequest, RoleStatus, MintRequest, TransactionResult
)
from app.models.enums import OnChainClaimStatus, RoleType
from app.models.token import OnChainTokenInfo
from app.services.premium import to_basis_points

logger = get_logger(__name__)


def decode_claim(result: List[Any]) -> OnChainClaim:
    """Map a ClaimProcessor.getClaim tuple to a claim."""
    if len(result) < 8:
        raise ContractCallError(CLAIM_PROCESSOR, "getClaim", f"Unexpected claim tuple of length {len(result)}")

    status = int(result[4])
    try:
        label = OnChainClaimStatus(status).label
    except ValueError:
        label = "unknown"

    return OnChainClaim(
        id=int(result[0]),
        policy_id=int(result[1]),
        claimant=str(result[2]),
        amount=int(result[3]),
        status=status,
        status_label=label,
        proof=str(result[5]),
        verified_by=str(result[6]),
        required_confirmations=int(result[7])
    )


def role_id(role: str) -> bytes:
    return ADMIN_ROLE if role == RoleType.ADMIN.value else DEFAULT_ADMIN_ROLE


class ChainService:
    """Claim review, policy purchase, roles and tokens through the contracts."""

    def __init__(self, client: ContractClient):
        self.client = client

    # ===================
    # Claims
    # ===================

    def get_claim(self, claim_id: int) -> OnChainClaim:
        return decode_claim(self.client.read(CLAIM_PROCESSOR, "getClaim", [claim_id]))

    def get_user_claims(self, user: str) -> List[OnChainClaim]:
        claim_ids = self.client.read(CLAIM_PROCESSOR, "getUserClaims", [user]) or []
        return [self.get_claim(int(claim_id)) for claim_id in claim_ids]

    def get_claims_awaiting_review(self) -> List[OnChainClaim]:
        """Claims whose status is Pending or UnderReview."""
        count = int(self.client.read(CLAIM_PROCESSOR, "claimCount"))
        claims = [self.get_claim(claim_id) for claim_id in range(count)]
        pending = [c for c in claims if c.status in (OnChainClaimStatus.PENDING, OnChainClaimStatus.UNDER_REVIEW)]
        logger.info(f"{len(pending)} of {count} on-chain claims awaiting review")
        return pending

    def review_claim(self, claim_id: int, approved: bool, reason: str = "") -> TransactionResult:
        if not approved and not reason.strip():
            raise ContractArgumentError("A rejection reason is required")
        return self.client.write(
            CLAIM_PROCESSOR, "reviewClaim", [claim_id, approved, "" if approved else reason.strip()]
        )

    def submit_cross_chain_claim(self, request: CrossChainClaimRequest) -> TransactionResult:
        address = request.token_address
        if not address.startswith("0x"):
            address = f"0x{address}"
        return self.client.write(
            INSURANCE_CORE, "evaluateRWA", [address, request.amount, request.required_confirmations]
        )

    # ===================
    # Policies / Coverage
    # ===================

    def purchase_policy(self, request: OnChainPolicyPurchase) -> TransactionResult:
        return self.client.write(
            INSURANCE_CORE, "createPolicy", [request.token_address, request.coverage_amount, request.duration]
        )

    def add_coverage_option(self, request: CoverageOptionRequest) -> TransactionResult:
        if request.min_duration_days > request.max_duration_days:
            raise ContractArgumentError("Minimum duration cannot exceed maximum duration")
        return self.client.write(
            INSURANCE_CORE,
            "addCoverageOption",
            [
                request.value,
                to_basis_points(request.premium_rate),
                request.min_duration_days,
                request.max_duration_days,
            ]
        )

    # ===================
    # Roles
    # ===================

    def get_role_status(self, contract_name: str, address: str) -> RoleStatus:
        is_admin = self.client.read(contract_name, "hasRole", [ADMIN_ROLE, address])
        is_default_admin = self.client.read(contract_name, "hasRole", [DEFAULT_ADMIN_ROLE, address])
        return RoleStatus(
            contract=contract_name,
            address=address,
            is_admin=bool(is_admin),
            is_default_admin=bool(is_default_admin)
        )

    def grant_role(self, request: RoleGrantRequest) -> TransactionResult:
        logger.info(f"Granting {request.role} on {request.contract_name} to {request.target_address}")
        return self.client.write(
            request.contract_name, "grantRole", [role_id(request.role), request.target_address]
        )

    # ===================
    # Tokens
    # ===================

    def mint(self, request: MintRequest) -> TransactionResult:
        return self.client.write(MOCK_BSD_TOKEN, "mint", [request.to, request.amount])

    def fetch_token_info(self, address: str) -> Optional[OnChainTokenInfo]:
        """ERC-20 name/symbol/decimals, or None if the address is not a token."""
        if not Web3.is_address(address):
            raise ContractArgumentError(f"Invalid address: {address}")
        try:
            name = self.client.call_at(address, ERC20_ABI, "name")
            symbol = self.client.call_at(address, ERC20_ABI, "symbol")
            decimals = self.client.call_at(address, ERC20_ABI, "decimals")
        except ContractCallError as e:
            logger.warning(f"Not a readable ERC-20 token at {address}: {e.message}")
            return None
        return OnChainTokenInfo(
            address=Web3.to_checksum_address(address),
            name=name,
            symbol=symbol,
            decimals=int(decimals)
        )
