# app/chain/errors.py
"""Turn web3 errors into messages a user can read."""

import re
from typing import Any, Dict, List, Optional, Tuple

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.exceptions import ContractCustomError, ContractLogicError, ContractPanicError

from app.chain.abis import ERROR_STRING_ABI

UNKNOWN_ERROR = "An unknown error occurred"
REVERT_PREFIX = "The contract function reverted with the following reason:"


def format_error_name(error_name: str) -> str:
    """
    Format an ABI error name for display.

    "InsufficientBalance" -> "Insufficient Balance"
    "policy_not_active" -> "Policy Not Active"
    Names that already contain spaces are returned as is.
    """
    if " " in error_name:
        return error_name

    # camelCase
    if re.search(r"[a-z][A-Z]", error_name):
        spaced = re.sub(r"([a-z])([A-Z])", r"\1 \2", error_name)
        return re.sub(r"([A-Z])([A-Z][a-z])", r"\1 \2", spaced)

    # snake_case
    if "_" in error_name:
        return " ".join(word[:1].upper() + word[1:].lower() for word in error_name.split("_"))

    # PascalCase
    spaced = re.sub(r"([A-Z])", r" \1", error_name).strip()
    return spaced[:1].upper() + spaced[1:]


def _error_types(item: Dict[str, Any]) -> List[str]:
    return [param["type"] for param in item.get("inputs", [])]


def error_selector(item: Dict[str, Any]) -> str:
    signature = f"{item['name']}({','.join(_error_types(item))})"
    return Web3.to_hex(Web3.keccak(text=signature)[:4])


def decode_custom_error(abi: Optional[List[Dict[str, Any]]], data: Optional[str]) -> Optional[Tuple[str, List[Any]]]:
    """Match revert data against the ABI's error entries."""
    if not data or not isinstance(data, str) or len(data) < 10:
        return None

    selector = data[:10].lower()
    try:
        payload = bytes.fromhex(data[10:])
    except ValueError:
        return None
    errors = [item for item in (abi or []) if item.get("type") == "error"] + [ERROR_STRING_ABI]

    for item in errors:
        if error_selector(item) != selector:
            continue
        try:
            values = decode(_error_types(item), payload)
        except DecodingError:
            return None
        return item["name"], list(values)
    return None


def _format_arg(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return Web3.to_hex(value)
    return str(value)


def parse_contract_error(error: Exception, abi: Optional[List[Dict[str, Any]]] = None) -> str:
    """Build a displayable message from a failed contract call."""
    if isinstance(error, ContractCustomError):
        data = error.data if isinstance(error.data, str) else error.message
        decoded = decode_custom_error(abi, data)
        if decoded:
            name, args = decoded
            if name == "Error":
                return args[0] if args else UNKNOWN_ERROR
            return f"{REVERT_PREFIX}\n{format_error_name(name)}({','.join(_format_arg(a) for a in args)})"
        return error.message or UNKNOWN_ERROR

    if isinstance(error, (ContractLogicError, ContractPanicError)):
        return error.message or str(error) or UNKNOWN_ERROR

    message = getattr(error, "message", None) or str(error)
    return message or UNKNOWN_ERROR
