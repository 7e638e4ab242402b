import json
from datetime import datetime

import pytest
import requests

from app.core.config import Settings
from app.core.exceptions import IPFSRetrievalError, IPFSStorageError, NotConfiguredError
from app.services.ipfs import (
    IPFSNodeStorage, PinataStorage, create_ipfs_storage, normalize_cid, require_ipfs
)


class FakeResponse:
    def __init__(self, payload=None, content=b"", status_code=200):
        self._payload = payload
        self.content = content
        self.status_code = status_code

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Records requests and replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def _next(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)


def test_normalize_cid():
    assert normalize_cid("ipfs://QmAbc/") == "QmAbc"
    assert normalize_cid(" QmAbc ") == "QmAbc"


def test_pinata_store_json():
    session = FakeSession(FakeResponse({"IpfsHash": "QmPolicy"}))
    storage = PinataStorage(jwt="token", session=session, timeout=5)

    cid = storage.store_json({"id": "POL-1", "startDate": datetime(2025, 1, 1)}, "policy-1.json")
    assert cid == "QmPolicy"

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "https://api.pinata.cloud/pinning/pinJSONToIPFS")
    assert kwargs["json"] == {
        "pinataContent": {"id": "POL-1", "startDate": "2025-01-01T00:00:00"},
        "pinataMetadata": {"name": "policy-1.json"},
    }
    assert kwargs["headers"] == {"Authorization": "Bearer token"}
    assert kwargs["timeout"] == 5


def test_pinata_retrieve_json():
    session = FakeSession(FakeResponse(content=b'{"report": "ok"}'))
    storage = PinataStorage(jwt="token", gateway_url="https://gw.example/", session=session)

    assert storage.retrieve_json("ipfs://QmEvidence") == {"report": "ok"}
    assert session.calls[0][1] == "https://gw.example/ipfs/QmEvidence"


def test_pinata_failure_raises_storage_error():
    session = FakeSession(FakeResponse(status_code=401))
    storage = PinataStorage(jwt="bad", session=session)
    with pytest.raises(IPFSStorageError) as exc:
        storage.store_json({"a": 1}, "x.json")
    assert exc.value.details == {"provider": "pinata"}


def test_node_add_and_cat():
    session = FakeSession(
        FakeResponse({"Name": "claim.json", "Hash": "QmNode", "Size": "20"}),
        FakeResponse(content=b'{"a": 1}')
    )
    storage = IPFSNodeStorage(api_url="http://ipfs:5001", session=session)

    assert storage.store_json({"a": 1}, "claim.json") == "QmNode"
    method, url, kwargs = session.calls[0]
    assert url == "http://ipfs:5001/api/v0/add"
    assert kwargs["params"] == {"pin": "true"}
    name, content, content_type = kwargs["files"]["file"]
    assert (name, json.loads(content), content_type) == ("claim.json", {"a": 1}, "application/json")

    assert storage.retrieve_json("QmNode") == {"a": 1}
    assert session.calls[1][1:] == ("http://ipfs:5001/api/v0/cat", {"params": {"arg": "QmNode"}, "timeout": storage.timeout})


def test_retrieve_bad_json():
    session = FakeSession(FakeResponse(content=b"<html>"))
    storage = IPFSNodeStorage(session=session)
    with pytest.raises(IPFSRetrievalError):
        storage.retrieve_json("QmBroken")


def test_connection_error():
    session = FakeSession(requests.ConnectionError("refused"))
    storage = IPFSNodeStorage(session=session)
    with pytest.raises(IPFSStorageError):
        storage.store_json({}, "x.json")


def test_create_ipfs_storage():
    assert create_ipfs_storage(Settings(IPFS_PROVIDER="disabled")) is None
    assert isinstance(create_ipfs_storage(Settings(IPFS_PROVIDER="node")), IPFSNodeStorage)
    assert isinstance(create_ipfs_storage(Settings(IPFS_PROVIDER="pinata", PINATA_JWT="jwt")), PinataStorage)

    with pytest.raises(NotConfiguredError):
        create_ipfs_storage(Settings(IPFS_PROVIDER="pinata", PINATA_JWT=None))
    with pytest.raises(ValueError):
        create_ipfs_storage(Settings(IPFS_PROVIDER="s3"))


def test_require_ipfs():
    with pytest.raises(NotConfiguredError):
        require_ipfs(None)
