# app/api/v1/admin.py
from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.exceptions import NotConfiguredError
from app.core.dependencies import get_mongo_client, get_ipfs_resolver, get_policy_service
from app.core.logging import get_logger
from app.models.policy import PolicyExpireResponse
from app.services import ipfs
from app.services.policy_service import PolicyService

logger = get_logger(__name__)
router = APIRouter()

@router.get("/health")
def health_check(resolve_ipfs=Depends(get_ipfs_resolver)):
    """Detailed health check."""
    try:
        ipfs_status = ipfs.describe(resolve_ipfs())
    except NotConfiguredError as e:
        ipfs_status = {"enabled": False, "provider": settings.IPFS_PROVIDER, "error": e.message}
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug_mode": settings.DEBUG,
        "ipfs": ipfs_status,
        "chain": {
            "chain_id": settings.CHAIN_ID,
            "rpc_url": settings.CHAIN_RPC_URL,
            "signer_configured": settings.is_signer_configured,
            "contracts": settings.contract_addresses
        }
    }

@router.get("/database/status")
def database_status(client=Depends(get_mongo_client)):
    """Check MongoDB connection status."""
    if not client.ping():
        return {
            "connected": False,
            "database": settings.MONGODB_DB_NAME
        }
    return {
        "connected": True,
        "database": settings.MONGODB_DB_NAME,
        "collections": client.collection_counts()
    }

@router.post("/policies/expire", response_model=PolicyExpireResponse)
def expire_policies(service: PolicyService = Depends(get_policy_service)):
    """Mark active policies past their end date as expired."""
    policy_ids = service.expire_policies()
    logger.info(f"Expiry run finished: {len(policy_ids)} policies expired")
    return PolicyExpireResponse(success=True, expired_count=len(policy_ids), policy_ids=policy_ids)
