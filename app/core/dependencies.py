# app/core/dependencies.py
from fastapi import Depends
from pymongo.database import Database

from app.core.logging import get_logger

logger = get_logger(__name__)

# ===================
# Clients
# ===================

_mongo_client = None
_ipfs_storage = None
_ipfs_loaded = False
_contract_client = None

def get_mongo_client():
    """Get MongoDB client instance."""
    global _mongo_client
    if _mongo_client is None:
        from app.database.mongo_client import MongoDBClient
        _mongo_client = MongoDBClient()
        logger.info("MongoDB client initialized")
    return _mongo_client

def get_database(client=Depends(get_mongo_client)) -> Database:
    return client.db

def get_ipfs_storage():
    """Get the configured IPFS backend, or None when disabled."""
    global _ipfs_storage, _ipfs_loaded
    if not _ipfs_loaded:
        from app.services.ipfs import create_ipfs_storage
        _ipfs_storage = create_ipfs_storage()
        _ipfs_loaded = True
        logger.info(f"IPFS storage initialized: {_ipfs_storage.provider if _ipfs_storage else 'disabled'}")
    return _ipfs_storage

def get_ipfs_resolver():
    """Resolve IPFS on first use, so reads that never touch it work while it is misconfigured."""
    return get_ipfs_storage

def get_contract_client():
    """Get contract client instance."""
    global _contract_client
    if _contract_client is None:
        from app.chain.contracts import ContractClient
        _contract_client = ContractClient.from_settings()
        logger.info(f"Contract client initialized (signer: {_contract_client.signer_address or 'none'})")
    return _contract_client

# ===================
# Stores
# ===================

def get_policy_store(db: Database = Depends(get_database)):
    from app.storage.policy_store import PolicyStore
    return PolicyStore(db)

def get_claim_store(db: Database = Depends(get_database)):
    from app.storage.claim_store import ClaimStore
    return ClaimStore(db)

def get_insurance_option_store(db: Database = Depends(get_database)):
    from app.storage.insurance_option_store import InsuranceOptionStore
    return InsuranceOptionStore(db)

def get_token_store(db: Database = Depends(get_database)):
    from app.storage.token_store import TokenStore
    return TokenStore(db)

def get_user_store(db: Database = Depends(get_database)):
    from app.storage.user_store import UserStore
    return UserStore(db)

# ===================
# Service Instances
# ===================

def get_policy_service(
    store=Depends(get_policy_store),
    users=Depends(get_user_store),
    ipfs=Depends(get_ipfs_resolver)
):
    """Get policy service."""
    from app.services.policy_service import PolicyService
    return PolicyService(store, users, ipfs)

def get_claim_service(
    store=Depends(get_claim_store),
    policies=Depends(get_policy_store),
    users=Depends(get_user_store),
    ipfs=Depends(get_ipfs_resolver)
):
    """Get claim service."""
    from app.services.claim_service import ClaimService
    return ClaimService(store, policies, users, ipfs)

def get_chain_service(client=Depends(get_contract_client)):
    """Get on-chain insurance service."""
    from app.services.chain_service import ChainService
    return ChainService(client)

# ===================
# Cleanup
# ===================

def cleanup_resources():
    """Cleanup all resources on shutdown."""
    global _mongo_client, _ipfs_storage, _ipfs_loaded, _contract_client

    if _mongo_client:
        _mongo_client.close()
        _mongo_client = None
        logger.info("MongoDB client closed")

    if _ipfs_storage:
        _ipfs_storage.session.close()
    _ipfs_storage = None
    _ipfs_loaded = False
    _contract_client = None
