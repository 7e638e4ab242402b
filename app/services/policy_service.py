# app/services/policy_service.py
"""Policy business logic service."""

from typing import Callable, Optional, List, Any

from app.models.policy import Policy, PolicyCreate
from app.services.ipfs import IPFSStorage, require_ipfs, timestamped_name
from app.storage.policy_store import PolicyStore
from app.storage.user_store import UserStore
from app.core.logging import get_logger
from app.core.exceptions import (
    PolicyNotFoundError, PolicyValidationError, DuplicatePolicyError
)

logger = get_logger(__name__)


class PolicyService:
    """Service for policy operations."""

    def __init__(
        self,
        store: PolicyStore,
        users: UserStore,
        ipfs: Callable[[], Optional[IPFSStorage]] = lambda: None
    ):
        self.store = store
        self.users = users
        self._resolve_ipfs = ipfs

    @property
    def ipfs(self) -> Optional[IPFSStorage]:
        return self._resolve_ipfs()

    def create_policy(self, data: PolicyCreate) -> Policy:
        """
        Create a new policy.

        1. Validate dates and id
        2. Pin the policy JSON to IPFS (when enabled)
        3. Insert the policy document
        4. Link the policy to its holder
        """
        if data.end_date <= data.start_date:
            raise PolicyValidationError(
                "End date must be after start date",
                field="endDate"
            )

        if data.id and self.store.exists(data.id):
            raise DuplicatePolicyError(data.id)

        fields = data.model_dump(exclude_none=True)
        policy = Policy(**fields)

        storage = self.ipfs
        if storage is not None:
            payload = data.model_dump(by_alias=True, exclude_none=True)
            payload["id"] = policy.id
            policy.ipfs_hash = storage.store_json(payload, timestamped_name("policy"))
        else:
            logger.debug(f"IPFS disabled, policy {policy.id} stored without ipfsHash")

        self.store.insert(policy)
        self.users.add_policy(policy.holder, policy.id)

        logger.info(f"Created policy {policy.id} for holder {policy.holder}")
        return policy

    def get_policy(self, policy_id: str) -> Policy:
        policy = self.store.get(policy_id)
        if policy is None:
            raise PolicyNotFoundError(policy_id)
        return policy

    def list_policies(self, holder: Optional[str] = None, status: Optional[str] = None) -> List[Policy]:
        return self.store.search(holder=holder, status=status)

    def get_policy_document(self, policy_id: str) -> Any:
        """Fetch the pinned policy JSON."""
        policy = self.get_policy(policy_id)
        if not policy.ipfs_hash:
            raise PolicyNotFoundError(f"{policy_id} (no IPFS document)")
        return require_ipfs(self.ipfs).retrieve_json(policy.ipfs_hash)

    def expire_policies(self) -> List[str]:
        return self.store.expire_lapsed()
