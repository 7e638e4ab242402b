# app/core/constants.py
"""Application constants."""


# ===================
# Collections
# ===================

POLICIES_COLLECTION = "policies"
CLAIMS_COLLECTION = "claims"
INSURANCE_OPTIONS_COLLECTION = "insuranceOptions"
TOKENS_COLLECTION = "tokens"
USERS_COLLECTION = "users"

# (collection, [(field, unique)])
COLLECTION_INDEXES = {
    POLICIES_COLLECTION: [
        ("id", True),
        ("holder", False),
        ("status", False),
        ("startDate", False),
        ("endDate", False),
    ],
    CLAIMS_COLLECTION: [
        ("id", True),
        ("policyId", False),
        ("status", False),
        ("timestamp", False),
    ],
    USERS_COLLECTION: [
        ("address", True),
        ("policies", False),
        ("claims", False),
    ],
    TOKENS_COLLECTION: [
        ("symbol", True),
        ("address", True),
        ("category", False),
    ],
    INSURANCE_OPTIONS_COLLECTION: [
        ("id", True),
    ],
}


# ===================
# Contracts
# ===================

INSURANCE_CORE = "InsuranceCore"
CLAIM_PROCESSOR = "ClaimProcessor"
TOKEN_RWA_FACTORY = "TokenRWAFactory"
MOCK_BSD_TOKEN = "MockBSDToken"


# ===================
# Premiums
# ===================

BASIS_POINTS_PER_PERCENT = 100
MONTHS_PER_YEAR = 12


# ===================
# IPFS
# ===================

IPFS_URI_PREFIX = "ipfs://"
