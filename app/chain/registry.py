# app/chain/registry.py
"""Resolve contract names to deployed address + ABI."""

import json
from pathlib import Path
from typing import Dict, List, Optional, Any

from pydantic import BaseModel, Field

from app.chain.abis import BUILTIN_ABIS
from app.core.config import Settings, settings
from app.core.exceptions import UnknownContractError, NotConfiguredError
from app.core.logging import get_logger

logger = get_logger(__name__)


class ContractDeployment(BaseModel):
    name: str
    address: Optional[str] = None
    abi: List[Dict[str, Any]] = Field(default_factory=list)


class ContractRegistry:
    """Deployed contracts for one chain."""

    def __init__(
        self,
        chain_id: int,
        addresses: Optional[Dict[str, Optional[str]]] = None,
        deployed_contracts: Optional[Dict[str, Any]] = None
    ):
        self.chain_id = chain_id
        self._deployments: Dict[str, ContractDeployment] = {
            name: ContractDeployment(name=name, address=(addresses or {}).get(name), abi=abi)
            for name, abi in BUILTIN_ABIS.items()
        }

        # scaffold-eth layout: {"<chainId>": {"<Name>": {"address": ..., "abi": [...]}}}
        for name, entry in (deployed_contracts or {}).get(str(chain_id), {}).items():
            current = self._deployments.get(name)
            self._deployments[name] = ContractDeployment(
                name=name,
                address=entry.get("address") or (current.address if current else None),
                abi=entry.get("abi") or (current.abi if current else [])
            )

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "ContractRegistry":
        deployed = None
        if config.DEPLOYED_CONTRACTS_FILE:
            path = Path(config.DEPLOYED_CONTRACTS_FILE)
            with open(path, "r", encoding="utf-8") as f:
                deployed = json.load(f)
            logger.info(f"Loaded deployed contracts from {path}")
        return cls(config.CHAIN_ID, config.contract_addresses, deployed)

    def names(self) -> List[str]:
        return sorted(self._deployments)

    def get(self, name: str) -> ContractDeployment:
        deployment = self._deployments.get(name)
        if deployment is None:
            raise UnknownContractError(name, self.names())
        if not deployment.address:
            raise NotConfiguredError(f"Contract {name}", f"{name} address in DEPLOYED_CONTRACTS_FILE or settings")
        return deployment
