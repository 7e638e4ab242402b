# app/storage/policy_store.py
"""Policy storage implementation."""

import re
from typing import Dict, Any, List, Optional
from datetime import datetime, timedelta

from pymongo import ASCENDING

from app.storage.base import BaseStore
from app.models.policy import Policy
from app.models.enums import PolicyStatus
from app.models.base import utcnow
from app.core.constants import POLICIES_COLLECTION
from app.core.logging import get_logger

logger = get_logger(__name__)


class PolicyStore(BaseStore[Policy]):
    """Storage for policy entities."""

    collection_name = POLICIES_COLLECTION

    def _get_id(self, entity: Policy) -> str:
        return entity.id

    def _serialize(self, entity: Policy) -> Dict[str, Any]:
        return entity.to_document()

    def _deserialize(self, data: Dict[str, Any]) -> Policy:
        return Policy.model_validate(data)

    # Custom query methods
    def search(self, holder: Optional[str] = None, status: Optional[str] = None) -> List[Policy]:
        """List policies, optionally filtered by holder and status."""
        filters: Dict[str, Any] = {}
        if holder:
            filters["holder"] = {"$regex": f"^{re.escape(holder)}$", "$options": "i"}
        if status:
            filters["status"] = status
        return self.find(filters)

    def mark_claimed(self, policy_id: str) -> Optional[Policy]:
        """Flag a policy as claimed after a claim references it."""
        return self.update(policy_id, {"status": PolicyStatus.CLAIMED.value})

    def expire_lapsed(self, now: Optional[datetime] = None) -> List[str]:
        """Mark active policies past their end date as expired."""
        now = now or utcnow()
        lapsed = {"status": PolicyStatus.ACTIVE.value, "endDate": {"$lte": now}}
        policy_ids = [doc["id"] for doc in self.collection.find(lapsed, {"id": 1})]
        if policy_ids:
            self.collection.update_many(
                {"id": {"$in": policy_ids}},
                {"$set": {"status": PolicyStatus.EXPIRED.value, "updatedAt": now}}
            )
            logger.info(f"Expired {len(policy_ids)} policies")
        return policy_ids

    def get_expiring(self, days_ahead: int, now: Optional[datetime] = None) -> List[Policy]:
        """Active policies ending within the next N days."""
        now = now or utcnow()
        return self.find(
            {
                "status": PolicyStatus.ACTIVE.value,
                "endDate": {"$gt": now, "$lte": now + timedelta(days=days_ahead)}
            },
            sort=[("endDate", ASCENDING)]
        )

    # Statistics
    def get_statistics(self) -> Dict[str, Any]:
        """Get policy statistics."""
        all_policies = self.get_all()

        by_status = {status.value: 0 for status in PolicyStatus}
        total_coverage = 0.0
        total_premiums = 0.0

        for policy in all_policies:
            by_status[policy.status] = by_status.get(policy.status, 0) + 1
            total_premiums += policy.premium_amount
            if policy.status == PolicyStatus.ACTIVE:
                total_coverage += policy.coverage_amount

        return {
            "total": len(all_policies),
            "by_status": by_status,
            "active_coverage": round(total_coverage, 2),
            "total_premiums": round(total_premiums, 2),
            "holders": len({p.holder.lower() for p in all_policies})
        }
