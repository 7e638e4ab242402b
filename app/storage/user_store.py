# app/storage/user_store.py
"""User storage implementation."""

import re
from typing import Dict, Any, Optional

from app.storage.base import BaseStore
from app.models.user import User
from app.models.base import utcnow
from app.core.constants import USERS_COLLECTION
from app.core.logging import get_logger

logger = get_logger(__name__)


class UserStore(BaseStore[User]):
    """Links wallet addresses to their policy and claim ids."""

    collection_name = USERS_COLLECTION
    id_field = "address"

    def _get_id(self, entity: User) -> str:
        return entity.address

    def _serialize(self, entity: User) -> Dict[str, Any]:
        return entity.to_document()

    def _deserialize(self, data: Dict[str, Any]) -> User:
        return User.model_validate(data)

    def get_by_address(self, address: str) -> Optional[User]:
        return self.find_one({"address": {"$regex": f"^{re.escape(address)}$", "$options": "i"}})

    def _add_reference(self, address: str, field: str, label: str, ref_id: str):
        now = utcnow()
        existing = self.get_by_address(address)
        key = existing.address if existing else address
        self.collection.update_one(
            {"address": key},
            {
                "$addToSet": {field: ref_id},
                "$set": {"updatedAt": now},
                "$setOnInsert": {"createdAt": now},
            },
            upsert=True
        )
        logger.debug(f"Linked {label} {ref_id} to user {key}")

    def add_policy(self, address: str, policy_id: str):
        self._add_reference(address, "policies", "policy", policy_id)

    def add_claim(self, address: str, claim_id: str):
        self._add_reference(address, "claims", "claim", claim_id)
