# app/services/claim_service.py
"""Claim submission and review."""

from typing import Callable, Optional, List, Any

from app.models.claim import Claim, ClaimCreate
from app.models.enums import ClaimStatus, PolicyStatus
from app.services.ipfs import IPFSStorage, require_ipfs, timestamped_name
from app.storage.claim_store import ClaimStore
from app.storage.policy_store import PolicyStore
from app.storage.user_store import UserStore
from app.core.logging import get_logger
from app.core.exceptions import (
    ClaimNotFoundError, ClaimValidationError, DuplicateClaimError,
    InvalidClaimStatusTransition, PolicyNotFoundError
)

logger = get_logger(__name__)


class ClaimService:
    """Service for claim operations."""

    def __init__(
        self,
        store: ClaimStore,
        policies: PolicyStore,
        users: UserStore,
        ipfs: Callable[[], Optional[IPFSStorage]] = lambda: None
    ):
        self.store = store
        self.policies = policies
        self.users = users
        self._resolve_ipfs = ipfs

    @property
    def ipfs(self) -> Optional[IPFSStorage]:
        return self._resolve_ipfs()

    def _store_evidence(self, evidence: Any) -> Optional[str]:
        if evidence is None:
            return None
        if isinstance(evidence, str):
            return evidence.strip() or None
        return require_ipfs(self.ipfs).store_json(evidence, timestamped_name("claim-evidence"))

    def submit_claim(self, data: ClaimCreate) -> Claim:
        """
        Submit a claim against a policy.

        The claim insert, the policy status change and the user link are
        separate writes; a failure part way leaves the earlier ones in place.
        """
        policy = self.policies.get(data.policy_id)
        if policy is None:
            raise PolicyNotFoundError(data.policy_id)
        if policy.status == PolicyStatus.EXPIRED or policy.is_lapsed:
            raise ClaimValidationError(f"policy {policy.id} has expired")

        if data.id and self.store.exists(data.id):
            raise DuplicateClaimError(data.id)

        evidence_hash = self._store_evidence(data.evidence)

        claim = Claim(
            **data.model_dump(exclude={"evidence"}, exclude_none=True),
            evidence=evidence_hash,
            status=ClaimStatus.PENDING
        )
        self.store.insert(claim)

        if policy.status != PolicyStatus.CLAIMED:
            self.policies.mark_claimed(policy.id)
        self.users.add_claim(policy.holder, claim.id)

        logger.info(f"Claim {claim.id} submitted", policy=policy.id, amount=claim.amount)
        return claim

    def get_claim(self, claim_id: str) -> Claim:
        claim = self.store.get(claim_id)
        if claim is None:
            raise ClaimNotFoundError(claim_id)
        return claim

    def list_claims(self, policy_id: Optional[str] = None, status: Optional[str] = None) -> List[Claim]:
        return self.store.search(policy_id=policy_id, status=status)

    def review_claim(
        self,
        claim_id: str,
        approved: bool,
        processed_by: str,
        reason: Optional[str] = None
    ) -> Claim:
        """Approve or reject a pending claim."""
        claim = self.get_claim(claim_id)
        new_status = ClaimStatus.APPROVED if approved else ClaimStatus.REJECTED

        if not claim.is_pending:
            raise InvalidClaimStatusTransition(claim.status, new_status.value)
        if not approved and not (reason and reason.strip()):
            raise ClaimValidationError("a reason is required to reject a claim", claim_id=claim_id)

        reviewed = self.store.record_review(
            claim_id,
            new_status,
            processed_by=processed_by,
            rejection_reason=None if approved else reason.strip()
        )
        if reviewed is None:
            # Another reviewer got there first
            current = self.get_claim(claim_id)
            raise InvalidClaimStatusTransition(current.status, new_status.value)
        return reviewed

    def get_evidence(self, claim_id: str) -> Any:
        claim = self.get_claim(claim_id)
        if not claim.evidence:
            raise ClaimNotFoundError(f"{claim_id} (no evidence)")
        return require_ipfs(self.ipfs).retrieve_json(claim.evidence)
