import pytest
from eth_abi import encode
from web3 import Web3
from web3.exceptions import ContractCustomError, ContractLogicError

from app.chain.abis import CLAIM_PROCESSOR_ABI, INSURANCE_CORE_ABI
from app.chain.errors import (
    REVERT_PREFIX, UNKNOWN_ERROR, decode_custom_error, error_selector, format_error_name, parse_contract_error
)


def _revert_data(signature, types, values):
    selector = Web3.keccak(text=signature)[:4]
    return Web3.to_hex(selector + encode(types, values))


@pytest.mark.parametrize("name,expected", [
    ("InsufficientBalance", "Insufficient Balance"),
    ("insufficientBalance", "insufficient Balance"),
    ("policy_not_active", "Policy Not Active"),
    ("NFTNotFound", "NFT Not Found"),
    ("AccessControlUnauthorizedAccount", "Access Control Unauthorized Account"),
    ("Already formatted", "Already formatted"),
    ("Paused", "Paused"),
])
def test_format_error_name(name, expected):
    assert format_error_name(name) == expected


def test_error_selector_matches_signature():
    item = {"type": "error", "name": "ClaimNotFound", "inputs": [{"name": "claimId", "type": "uint256"}]}
    assert error_selector(item) == Web3.to_hex(Web3.keccak(text="ClaimNotFound(uint256)")[:4])


def test_decode_custom_error():
    data = _revert_data("PolicyNotActive(uint256)", ["uint256"], [42])
    assert decode_custom_error(INSURANCE_CORE_ABI, data) == ("PolicyNotActive", [42])


def test_decode_unknown_selector():
    data = _revert_data("SomethingElse(uint256)", ["uint256"], [1])
    assert decode_custom_error(INSURANCE_CORE_ABI, data) is None
    assert decode_custom_error(INSURANCE_CORE_ABI, "0x12") is None
    assert decode_custom_error(INSURANCE_CORE_ABI, None) is None


def test_parse_custom_error():
    data = _revert_data("ClaimAlreadyProcessed(uint256)", ["uint256"], [7])
    error = ContractCustomError(data, data=data)
    assert parse_contract_error(error, CLAIM_PROCESSOR_ABI) == f"{REVERT_PREFIX}\nClaim Already Processed(7)"


def test_parse_require_string():
    data = _revert_data("Error(string)", ["string"], ["Coverage too high"])
    error = ContractCustomError(data, data=data)
    assert parse_contract_error(error, CLAIM_PROCESSOR_ABI) == "Coverage too high"


def test_parse_logic_error_keeps_message():
    error = ContractLogicError("execution reverted: Policy expired")
    assert parse_contract_error(error) == "execution reverted: Policy expired"


def test_parse_other_errors():
    assert parse_contract_error(ValueError("insufficient funds for gas")) == "insufficient funds for gas"
    assert parse_contract_error(ValueError()) == UNKNOWN_ERROR
