from unittest.mock import MagicMock

import pytest
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import ContractLogicError

from app.chain.abis import CLAIM_PROCESSOR_ABI, ACCESS_CONTROL_ABI
from app.chain.codec import coerce_args, coerce_value, find_function_abi, normalize_result
from app.chain.contracts import ADMIN_ROLE, ContractClient
from app.chain.registry import ContractRegistry
from app.core.exceptions import (
    ContractArgumentError, ContractCallError, NotConfiguredError, UnknownContractError
)
from app.services.chain_service import decode_claim

CLAIM_PROCESSOR = "0x" + "c" * 40
ACCOUNT = "0x" + "a" * 40
PRIVATE_KEY = "0x" + "11" * 32


# ===================
# Codec
# ===================

def test_find_function_abi():
    assert find_function_abi(CLAIM_PROCESSOR_ABI, "getClaim", 1)["name"] == "getClaim"
    with pytest.raises(ContractArgumentError, match="Function not found"):
        find_function_abi(CLAIM_PROCESSOR_ABI, "payOut", 0)
    with pytest.raises(ContractArgumentError, match="expects 1 arguments, got 2"):
        find_function_abi(CLAIM_PROCESSOR_ABI, "getClaim", 2)


def test_coerce_values():
    assert coerce_value("uint256", "1000") == 1000
    assert coerce_value("uint256", "0x10") == 16
    assert coerce_value("uint8", 3.0) == 3
    assert coerce_value("bool", "false") is False
    assert coerce_value("bool", 1) is True
    assert coerce_value("address", ACCOUNT) == Web3.to_checksum_address(ACCOUNT)
    assert coerce_value("uint256[]", ["1", 2]) == [1, 2]
    assert coerce_value("bytes32", "0x" + "00" * 32) == b"\x00" * 32
    assert coerce_value("string", "reason") == "reason"


def test_coerce_args_reports_parameter():
    function_abi = find_function_abi(ACCESS_CONTROL_ABI, "hasRole", 2)
    with pytest.raises(ContractArgumentError, match="Invalid argument role"):
        coerce_args(function_abi, ["0x1234", ACCOUNT])
    with pytest.raises(ContractArgumentError, match="Invalid argument account"):
        coerce_args(function_abi, [ADMIN_ROLE, "not-an-address"])


def test_normalize_result():
    raw = (1, HexBytes("0xabcd"), [b"\x01"], {"ok": True})
    assert normalize_result(raw) == [1, "0xabcd", ["0x01"], {"ok": True}]


def test_decode_claim():
    claim = decode_claim([4, 2, ACCOUNT, 900, 3, "proof", ACCOUNT, 12])
    assert claim.status_label == "rejected"
    assert claim.amount == 900

    assert decode_claim([4, 2, ACCOUNT, 900, 9, "proof", ACCOUNT, 12]).status_label == "unknown"
    with pytest.raises(ContractCallError):
        decode_claim([1, 2, 3])


# ===================
# Registry
# ===================

def test_registry_prefers_deployed_contracts_file():
    deployed = {"114": {"ClaimProcessor": {"address": CLAIM_PROCESSOR, "abi": [{"type": "function", "name": "x"}]}}}
    registry = ContractRegistry(114, {"InsuranceCore": ACCOUNT}, deployed)

    assert registry.get("ClaimProcessor").address == CLAIM_PROCESSOR
    assert registry.get("ClaimProcessor").abi == [{"type": "function", "name": "x"}]
    assert registry.get("InsuranceCore").address == ACCOUNT

    with pytest.raises(NotConfiguredError):
        registry.get("MockBSDToken")
    with pytest.raises(UnknownContractError):
        registry.get("Treasury")


def test_registry_ignores_other_chains():
    deployed = {"31337": {"ClaimProcessor": {"address": CLAIM_PROCESSOR}}}
    registry = ContractRegistry(114, {}, deployed)
    with pytest.raises(NotConfiguredError):
        registry.get("ClaimProcessor")


# ===================
# Client
# ===================

def _client(private_key=None):
    registry = ContractRegistry(114, {"ClaimProcessor": CLAIM_PROCESSOR})
    w3 = MagicMock()
    return ContractClient(registry, web3=w3, private_key=private_key), w3


def test_read_returns_normalized_result():
    client, w3 = _client()
    bound = w3.eth.contract.return_value.functions.__getitem__.return_value
    bound.return_value.call.return_value = (True, b"\xff")

    assert client.read("ClaimProcessor", "hasRole", [ADMIN_ROLE, ACCOUNT]) == [True, "0xff"]
    bound.assert_called_once_with(ADMIN_ROLE, Web3.to_checksum_address(ACCOUNT))


def test_read_revert_becomes_call_error():
    client, w3 = _client()
    bound = w3.eth.contract.return_value.functions.__getitem__.return_value
    bound.return_value.call.side_effect = ContractLogicError("execution reverted: not found")

    with pytest.raises(ContractCallError) as exc:
        client.read("ClaimProcessor", "getClaim", [1])
    assert exc.value.message == "execution reverted: not found"


def test_write_requires_signer():
    client, _ = _client()
    with pytest.raises(NotConfiguredError):
        client.write("ClaimProcessor", "reviewClaim", [1, True, ""])


def test_write_waits_for_receipt():
    client, w3 = _client(PRIVATE_KEY)
    w3.eth.send_raw_transaction.return_value = b"\x12" * 32
    w3.eth.wait_for_transaction_receipt.return_value = {"blockNumber": 10, "status": 1, "gasUsed": 21000}
    w3.eth.block_number = 10

    result = client.write("ClaimProcessor", "reviewClaim", [1, True, ""])
    assert result.tx_hash == "0x" + "12" * 32
    assert result.block_number == 10
    assert result.status is True
    assert result.gas_used == 21000


def test_write_reverted_receipt():
    client, w3 = _client(PRIVATE_KEY)
    w3.eth.send_raw_transaction.return_value = b"\x12" * 32
    w3.eth.wait_for_transaction_receipt.return_value = {"blockNumber": 10, "status": 0, "gasUsed": 21000}
    w3.eth.block_number = 10

    with pytest.raises(ContractCallError, match="Transaction reverted"):
        client.write("ClaimProcessor", "reviewClaim", [1, False, "no"])
