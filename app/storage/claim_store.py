# app/storage/claim_store.py
"""Claim storage implementation."""

from typing import Dict, Any, Optional, List

from app.storage.base import BaseStore
from app.models.claim import Claim
from app.models.enums import ClaimStatus
from app.models.base import utcnow
from app.core.constants import CLAIMS_COLLECTION
from app.core.logging import get_logger

logger = get_logger(__name__)


class ClaimStore(BaseStore[Claim]):
    """Storage for claim entities."""

    collection_name = CLAIMS_COLLECTION

    def _get_id(self, entity: Claim) -> str:
        return entity.id

    def _serialize(self, entity: Claim) -> Dict[str, Any]:
        return entity.to_document()

    def _deserialize(self, data: Dict[str, Any]) -> Claim:
        return Claim.model_validate(data)

    # Custom query methods
    def search(self, policy_id: Optional[str] = None, status: Optional[str] = None) -> List[Claim]:
        filters: Dict[str, Any] = {}
        if policy_id:
            filters["policyId"] = policy_id
        if status:
            filters["status"] = status
        return self.find(filters)

    def record_review(
        self,
        claim_id: str,
        status: ClaimStatus,
        processed_by: str,
        rejection_reason: Optional[str] = None
    ) -> Optional[Claim]:
        """Store the outcome of a review, only if the claim is still pending."""
        changes: Dict[str, Any] = {
            "status": status.value,
            "processedBy": processed_by,
            "processedAt": utcnow(),
            "updatedAt": utcnow(),
        }
        if rejection_reason:
            changes["rejectionReason"] = rejection_reason

        result = self.collection.update_one(
            {"id": claim_id, "status": ClaimStatus.PENDING.value},
            {"$set": changes}
        )
        if result.modified_count == 0:
            return None
        logger.info(f"Claim {claim_id} reviewed: {status.value} by {processed_by}")
        return self.get(claim_id)

    # Statistics
    def get_statistics(self) -> Dict[str, Any]:
        """Get claim statistics."""
        all_claims = self.get_all()

        if not all_claims:
            return {
                "total": 0,
                "by_status": {},
                "total_claimed": 0,
                "total_approved": 0,
                "total_rejected": 0,
                "average_claim": 0,
                "approval_rate": 0,
                "average_processing_days": 0
            }

        by_status = {}
        total_claimed = 0
        total_approved = 0
        total_rejected = 0
        approved_count = 0
        rejected_count = 0
        processing_days = []

        for claim in all_claims:
            by_status[claim.status] = by_status.get(claim.status, 0) + 1
            total_claimed += claim.amount

            if claim.status == ClaimStatus.APPROVED:
                approved_count += 1
                total_approved += claim.amount
            elif claim.status == ClaimStatus.REJECTED:
                rejected_count += 1
                total_rejected += claim.amount

            if claim.processed_at:
                processing_days.append((claim.processed_at - claim.timestamp).days)

        decided_count = approved_count + rejected_count

        return {
            "total": len(all_claims),
            "by_status": by_status,
            "total_claimed": round(total_claimed, 2),
            "total_approved": round(total_approved, 2),
            "total_rejected": round(total_rejected, 2),
            "average_claim": round(total_claimed / len(all_claims), 2),
            "approval_rate": round((approved_count / decided_count * 100), 2) if decided_count > 0 else 0,
            "average_processing_days": round(sum(processing_days) / len(processing_days), 1) if processing_days else 0
        }
