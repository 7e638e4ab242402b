# app/services/seed.py
"""Sample data for local development and demos."""

from datetime import timedelta
from typing import Callable, Dict, List

from pymongo.database import Database

from app.models.base import utcnow
from app.models.claim import Claim
from app.models.insurance_option import InsuranceOption
from app.models.policy import Policy
from app.models.token import TokenDocument
from app.storage.base import BaseStore
from app.storage.claim_store import ClaimStore
from app.storage.insurance_option_store import InsuranceOptionStore
from app.storage.policy_store import PolicyStore
from app.storage.token_store import TokenStore
from app.core.logging import get_logger

logger = get_logger(__name__)

SEED_USER_ADDRESS = "0x248dcc886995dd097Dc47b8561584D6479cF7772"


def _days(n: int):
    return utcnow() + timedelta(days=n)


def sample_insurance_options() -> List[InsuranceOption]:
    return [
        InsuranceOption(
            id="REAL-ESTATE-001",
            name="Real Estate Project 001",
            value=100000,
            premium_rate=2.5,
            description="A real estate project token representing a commercial property in New York."
        ),
        InsuranceOption(
            id="REAL-ESTATE-002",
            name="Real Estate Project 002",
            value=150000,
            premium_rate=3.0,
            description="A real estate project token representing a residential complex in London."
        ),
        InsuranceOption(
            id="REAL-ESTATE-003",
            name="Real Estate Project 003",
            value=200000,
            premium_rate=2.8,
            description="A real estate project token representing a mixed-use development in Singapore."
        ),
    ]


def sample_policies() -> List[Policy]:
    rows = [
        ("POL-001", "REAL-ESTATE-001", "Real Estate Project 001", 75000, 1875, -30, 335),
        ("POL-002", "REAL-ESTATE-002", "Real Estate Project 002", 112500, 3375, -60, 305),
        ("POL-003", "REAL-ESTATE-003", "Real Estate Project 003", 150000, 3500, -15, 350),
    ]
    return [
        Policy(
            id=policy_id,
            holder=SEED_USER_ADDRESS,
            token_id=token_id,
            token_name=token_name,
            coverage_amount=coverage,
            premium_amount=premium,
            start_date=_days(start),
            end_date=_days(end),
            created_at=_days(start),
            updated_at=_days(start),
        )
        for policy_id, token_id, token_name, coverage, premium, start, end in rows
    ]


def sample_claims() -> List[Claim]:
    return [
        Claim(
            id="CLM-001",
            policy_id="POL-001",
            amount=60000,
            status="approved",
            timestamp=_days(-15),
            description="Default event detected due to significant value drop in real estate project",
            evidence="ipfs://QmSampleEvidenceHash1",
            processed_by=SEED_USER_ADDRESS,
            processed_at=_days(-10),
            created_at=_days(-15),
            updated_at=_days(-10),
        ),
        Claim(
            id="CLM-002",
            policy_id="POL-002",
            amount=45000,
            status="pending",
            timestamp=_days(-5),
            description="Potential default event detected, under investigation",
            evidence="ipfs://QmSampleEvidenceHash2",
            created_at=_days(-5),
            updated_at=_days(-5),
        ),
        Claim(
            id="CLM-003",
            policy_id="POL-003",
            amount=30000,
            status="rejected",
            timestamp=_days(-30),
            description="Claim rejected due to insufficient evidence of default event",
            evidence="ipfs://QmSampleEvidenceHash3",
            processed_by=SEED_USER_ADDRESS,
            processed_at=_days(-25),
            rejection_reason="Insufficient evidence of default event",
            created_at=_days(-30),
            updated_at=_days(-25),
        ),
    ]


# Flare testnet RWA tokens
def sample_tokens() -> List[TokenDocument]:
    rows = [
        ("REAL", "Real Estate Token", "0x2D2acD205bd6d9D0BACCa14bfd1fAfFc1E6C144f", "Real Estate",
         "Tokenized real estate property representing commercial buildings"),
        ("COMM", "Commodity Token", "0x0F9Dd53E2dB1825B8C40b8AA31F4c6b1b6c81d2E", "Commodities",
         "Tokenized gold and silver reserves"),
        ("CRED", "Credit Token", "0x3Ee7094DADda15810F191DD6AcF7E4FFa37571e4", "Credit",
         "Tokenized corporate bonds and credit instruments"),
        ("INFR", "Infrastructure Token", "0x19a6304a0CF45187A5Bd6EdE94E6d146d8aDc06C", "Infrastructure",
         "Tokenized infrastructure projects like roads and utilities"),
        ("AGRI", "Agriculture Token", "0x3dAB4506BcFCaFc556d2EA245B4D6621A6Cba61A", "Agriculture",
         "Tokenized agricultural assets and farmland"),
        ("CARB", "Carbon Credit Token", "0x1D80c49BbBCd1C0911346656B7DFadfc0564c62b", "Environmental",
         "Tokenized carbon credits and environmental assets"),
        ("ART", "Art Token", "0x02f0826ef76a43f4c5e544aabf88b65fa34907c0", "Art",
         "Tokenized fine art and collectibles"),
    ]
    return [
        TokenDocument(symbol=symbol, name=name, address=address, decimals=18, category=category, description=description)
        for symbol, name, address, category, description in rows
    ]


# name -> (store class, sample factory)
SEEDS: Dict[str, tuple] = {
    "insurance-options": (InsuranceOptionStore, sample_insurance_options),
    "policies": (PolicyStore, sample_policies),
    "claims": (ClaimStore, sample_claims),
    "tokens": (TokenStore, sample_tokens),
}

# Tokens are reference data and are only removed when named explicitly
SEED_DATA_NAMES = ["insurance-options", "claims", "policies"]


def seed_collection(db: Database, name: str) -> int:
    """Insert sample data unless the collection already has documents."""
    store_class, factory = SEEDS[name]
    store: BaseStore = store_class(db)

    existing = store.count()
    if existing > 0:
        logger.info(f"Database already has {existing} {name}. Skipping seed.")
        return 0

    inserted = store.insert_many(factory())
    logger.info(f"Successfully seeded {inserted} {name}.")
    return inserted


def remove_collection(db: Database, name: str) -> int:
    store_class, _ = SEEDS[name]
    removed = store_class(db).delete_all()
    logger.info(f"Successfully removed {removed} {name}.")
    return removed


def run_for(names: List[str], action: Callable[[Database, str], int], db: Database) -> Dict[str, int]:
    return {name: action(db, name) for name in names}
