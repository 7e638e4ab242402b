# app/chain/contracts.py
"""Read and write calls against the deployed insurance contracts."""

import time
from typing import Any, Dict, List, Optional

import requests
from web3 import Web3
from web3.exceptions import Web3Exception, Web3ValidationError

from app.chain.codec import coerce_args, find_function_abi, normalize_result
from app.chain.errors import parse_contract_error
from app.chain.registry import ContractRegistry
from app.core.config import settings
from app.core.exceptions import ContractArgumentError, ContractCallError, NotConfiguredError
from app.core.logging import get_logger
from app.models.chain import TransactionResult

logger = get_logger(__name__)

# OpenZeppelin AccessControl role ids
DEFAULT_ADMIN_ROLE = b"\x00" * 32
ADMIN_ROLE = bytes(Web3.keccak(text="ADMIN_ROLE"))

CHAIN_ERRORS = (Web3Exception, ValueError, requests.RequestException)


class ContractClient:
    """Wallet-backed client for the insurance contracts."""

    def __init__(
        self,
        registry: ContractRegistry,
        web3: Optional[Web3] = None,
        private_key: Optional[str] = None,
        confirmations: int = 1,
        tx_timeout: int = 120
    ):
        self.registry = registry
        self.w3 = web3 or Web3(Web3.HTTPProvider(settings.CHAIN_RPC_URL))
        self.account = self.w3.eth.account.from_key(private_key) if private_key else None
        self.confirmations = max(confirmations, 1)
        self.tx_timeout = tx_timeout

    @classmethod
    def from_settings(cls) -> "ContractClient":
        return cls(
            registry=ContractRegistry.from_settings(),
            private_key=settings.CHAIN_PRIVATE_KEY,
            confirmations=settings.CHAIN_TX_CONFIRMATIONS,
            tx_timeout=settings.CHAIN_TX_TIMEOUT_SECONDS
        )

    @property
    def signer_address(self) -> Optional[str]:
        return self.account.address if self.account else None

    def _bind(self, address: str, abi: List[Dict[str, Any]], function_name: str, args: Optional[List[Any]]):
        function_abi = find_function_abi(abi, function_name, len(args or []))
        coerced = coerce_args(function_abi, args)
        try:
            contract = self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
            return contract.functions[function_name](*coerced)
        except (Web3ValidationError, ValueError) as e:
            raise ContractArgumentError(f"Cannot call {function_name}: {e}")

    # ===================
    # Reads
    # ===================

    def call_at(
        self,
        address: str,
        abi: List[Dict[str, Any]],
        function_name: str,
        args: Optional[List[Any]] = None,
        label: Optional[str] = None
    ) -> Any:
        """Read from any contract address with the given ABI."""
        label = label or address
        bound = self._bind(address, abi, function_name, args)
        try:
            result = bound.call()
        except CHAIN_ERRORS as e:
            message = parse_contract_error(e, abi)
            logger.error(f"Read {label}.{function_name} failed: {message}")
            raise ContractCallError(label, function_name, message)
        logger.debug(f"Read {label}.{function_name}({args or []})")
        return normalize_result(result)

    def read(self, contract_name: str, function_name: str, args: Optional[List[Any]] = None) -> Any:
        deployment = self.registry.get(contract_name)
        return self.call_at(deployment.address, deployment.abi, function_name, args, label=contract_name)

    # ===================
    # Writes
    # ===================

    def _wait_for_confirmations(self, block_number: int) -> int:
        deadline = time.monotonic() + self.tx_timeout
        confirmations = self.w3.eth.block_number - block_number + 1
        while confirmations < self.confirmations and time.monotonic() < deadline:
            time.sleep(1)
            confirmations = self.w3.eth.block_number - block_number + 1
        return confirmations

    def write(self, contract_name: str, function_name: str, args: Optional[List[Any]] = None) -> TransactionResult:
        """Sign, send and wait for a transaction."""
        if self.account is None:
            raise NotConfiguredError("Contract writes", "CHAIN_PRIVATE_KEY")

        deployment = self.registry.get(contract_name)
        bound = self._bind(deployment.address, deployment.abi, function_name, args)

        try:
            tx = bound.build_transaction({
                "from": self.account.address,
                "nonce": self.w3.eth.get_transaction_count(self.account.address, "pending"),
                "chainId": self.w3.eth.chain_id,
            })
            signed = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
            logger.info(f"Sent {contract_name}.{function_name}", tx_hash=Web3.to_hex(tx_hash), signer=self.signer_address)
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.tx_timeout)
            confirmations = self._wait_for_confirmations(receipt["blockNumber"])
        except CHAIN_ERRORS as e:
            message = parse_contract_error(e, deployment.abi)
            logger.error(f"Write {contract_name}.{function_name} failed: {message}")
            raise ContractCallError(contract_name, function_name, message)

        result = TransactionResult(
            tx_hash=Web3.to_hex(tx_hash),
            block_number=receipt["blockNumber"],
            status=receipt["status"] == 1,
            gas_used=receipt.get("gasUsed"),
            confirmations=confirmations
        )
        if not result.status:
            logger.error(f"Transaction reverted: {result.tx_hash}")
            raise ContractCallError(contract_name, function_name, f"Transaction reverted: {result.tx_hash}")

        logger.info(f"Confirmed {contract_name}.{function_name}", block=result.block_number, tx_hash=result.tx_hash)
        return result
