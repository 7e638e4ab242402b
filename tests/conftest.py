import hashlib
import json
from datetime import timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_mongo_client, get_ipfs_resolver, get_contract_client
from app.database.mongo_client import MongoDBClient
from app.main import app
from app.models.base import utcnow
from app.models.chain import TransactionResult
from app.services.ipfs import IPFSStorage

HOLDER = "0x248dcc886995dd097Dc47b8561584D6479cF7772"
TOKEN_ADDRESS = "0x2D2acD205bd6d9D0BACCa14bfd1fAfFc1E6C144f"


class MemoryIPFS(IPFSStorage):
    """Content-addressed dict standing in for an IPFS backend."""

    provider = "memory"

    def __init__(self):
        super().__init__(timeout=1)
        self.pinned = {}

    def _put(self, payload, name):
        content = json.dumps(payload, sort_keys=True).encode("utf-8")
        cid = "Qm" + hashlib.sha256(content).hexdigest()[:44]
        self.pinned[cid] = content
        return cid

    def _get(self, cid):
        return self.pinned[cid]


class FakeContractClient:
    """Answers reads from a table and records writes."""

    def __init__(self):
        self.reads = {}
        self.writes = []
        self.signer_address = HOLDER

    def on_read(self, contract, function, handler):
        self.reads[(contract, function)] = handler

    def read(self, contract_name, function_name, args=None):
        handler = self.reads[(contract_name, function_name)]
        return handler(*(args or [])) if callable(handler) else handler

    def call_at(self, address, abi, function_name, args=None, label=None):
        return self.read(address, function_name, args)

    def write(self, contract_name, function_name, args=None):
        self.writes.append((contract_name, function_name, list(args or [])))
        return TransactionResult(
            tx_hash="0x" + "ab" * 32,
            block_number=100 + len(self.writes),
            status=True,
            gas_used=50000,
            confirmations=1
        )


@pytest.fixture
def mongo():
    return MongoDBClient(client=mongomock.MongoClient(), db_name="safeguard_test")


@pytest.fixture
def db(mongo):
    return mongo.db


@pytest.fixture
def ipfs():
    return MemoryIPFS()


@pytest.fixture
def contracts():
    return FakeContractClient()


@pytest.fixture
def client(mongo, ipfs, contracts):
    app.dependency_overrides[get_mongo_client] = lambda: mongo
    app.dependency_overrides[get_ipfs_resolver] = lambda: lambda: ipfs
    app.dependency_overrides[get_contract_client] = lambda: contracts
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def no_ipfs_client(client):
    app.dependency_overrides[get_ipfs_resolver] = lambda: lambda: None
    return client


def policy_payload(**overrides):
    start = utcnow() - timedelta(days=1)
    payload = {
        "holder": HOLDER,
        "tokenId": "REAL-ESTATE-001",
        "tokenName": "Real Estate Project 001",
        "coverageAmount": 75000,
        "premiumAmount": 1875,
        "startDate": start.isoformat(),
        "endDate": (start + timedelta(days=365)).isoformat(),
    }
    payload.update(overrides)
    return payload


def option_payload(**overrides):
    payload = {
        "id": "REAL-ESTATE-001",
        "name": "Real Estate Project 001",
        "value": 100000,
        "premiumRate": 2.5,
        "description": "A real estate project token representing a commercial property in New York.",
    }
    payload.update(overrides)
    return payload
