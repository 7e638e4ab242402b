# app/services/ipfs.py
"""IPFS storage for policy documents and claim evidence."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from datetime import datetime, date
import json
import time

import requests

from app.core.config import Settings, settings
from app.core.constants import IPFS_URI_PREFIX
from app.core.exceptions import IPFSStorageError, IPFSRetrievalError, NotConfiguredError
from app.core.logging import get_logger

logger = get_logger(__name__)


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for datetime and date objects."""

    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


def normalize_cid(cid: str) -> str:
    """Strip an ipfs:// prefix."""
    cid = cid.strip()
    if cid.startswith(IPFS_URI_PREFIX):
        cid = cid[len(IPFS_URI_PREFIX):]
    return cid.strip("/")


def timestamped_name(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}.json"


class IPFSStorage(ABC):
    """Pins JSON documents and reads them back by content identifier."""

    provider: str = ""

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.session = session or requests.Session()
        self.timeout = timeout or settings.IPFS_TIMEOUT_SECONDS

    @abstractmethod
    def _put(self, payload: Any, name: str) -> str:
        """Pin a JSON-safe payload and return its CID."""
        pass

    @abstractmethod
    def _get(self, cid: str) -> bytes:
        """Fetch raw content for a CID."""
        pass

    def store_json(self, data: Any, name: str) -> str:
        payload = json.loads(json.dumps(data, cls=JSONEncoder))
        try:
            cid = self._put(payload, name)
        except (requests.RequestException, KeyError, ValueError) as e:
            logger.error(f"Error storing {name} on IPFS: {e}", provider=self.provider)
            raise IPFSStorageError(self.provider, str(e))
        logger.info(f"Stored {name} on IPFS", provider=self.provider, cid=cid)
        return cid

    def retrieve_json(self, cid: str) -> Any:
        cid = normalize_cid(cid)
        try:
            content = self._get(cid)
            return json.loads(content)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error retrieving from IPFS: {e}", provider=self.provider, cid=cid)
            raise IPFSRetrievalError(cid, str(e))


class PinataStorage(IPFSStorage):
    """Pinning-service backend."""

    provider = "pinata"

    def __init__(
        self,
        jwt: str,
        api_url: str = "https://api.pinata.cloud",
        gateway_url: str = "https://gateway.pinata.cloud",
        **kwargs
    ):
        super().__init__(**kwargs)
        self.jwt = jwt
        self.api_url = api_url.rstrip("/")
        self.gateway_url = gateway_url.rstrip("/")

    def _put(self, payload: Any, name: str) -> str:
        response = self.session.post(
            f"{self.api_url}/pinning/pinJSONToIPFS",
            json={"pinataContent": payload, "pinataMetadata": {"name": name}},
            headers={"Authorization": f"Bearer {self.jwt}"},
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()["IpfsHash"]

    def _get(self, cid: str) -> bytes:
        response = self.session.get(f"{self.gateway_url}/ipfs/{cid}", timeout=self.timeout)
        response.raise_for_status()
        return response.content


class IPFSNodeStorage(IPFSStorage):
    """Local IPFS node backend (Kubo RPC API)."""

    provider = "node"

    def __init__(self, api_url: str = "http://127.0.0.1:5001", **kwargs):
        super().__init__(**kwargs)
        self.api_url = api_url.rstrip("/")

    def _put(self, payload: Any, name: str) -> str:
        content = json.dumps(payload).encode("utf-8")
        response = self.session.post(
            f"{self.api_url}/api/v0/add",
            params={"pin": "true"},
            files={"file": (name, content, "application/json")},
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()["Hash"]

    def _get(self, cid: str) -> bytes:
        response = self.session.post(
            f"{self.api_url}/api/v0/cat",
            params={"arg": cid},
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.content


def create_ipfs_storage(config: Settings = settings) -> Optional[IPFSStorage]:
    """Build the backend selected by IPFS_PROVIDER, or None when disabled."""
    provider = config.IPFS_PROVIDER.lower()

    if provider == "disabled":
        return None

    if provider == "pinata":
        if not config.PINATA_JWT:
            raise NotConfiguredError("IPFS pinning service", "PINATA_JWT")
        return PinataStorage(
            jwt=config.PINATA_JWT,
            api_url=config.PINATA_API_URL,
            gateway_url=config.IPFS_GATEWAY_URL,
            timeout=config.IPFS_TIMEOUT_SECONDS
        )

    if provider == "node":
        return IPFSNodeStorage(api_url=config.IPFS_API_URL, timeout=config.IPFS_TIMEOUT_SECONDS)

    raise ValueError(f"Unknown IPFS_PROVIDER: {config.IPFS_PROVIDER} (use pinata, node or disabled)")


def require_ipfs(storage: Optional[IPFSStorage]) -> IPFSStorage:
    if storage is None:
        raise NotConfiguredError("IPFS storage", "IPFS_PROVIDER")
    return storage


def describe(storage: Optional[IPFSStorage]) -> Dict[str, Any]:
    return {"enabled": storage is not None, "provider": storage.provider if storage else None}
