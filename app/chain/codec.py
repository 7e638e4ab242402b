# app/chain/codec.py
"""Convert JSON arguments to ABI types and contract results back to JSON."""

from typing import Any, Dict, List, Optional

from hexbytes import HexBytes
from web3 import Web3

from app.core.exceptions import ContractArgumentError


def find_function_abi(abi: List[Dict[str, Any]], name: str, arg_count: int) -> Dict[str, Any]:
    candidates = [item for item in abi if item.get("type") == "function" and item.get("name") == name]
    if not candidates:
        raise ContractArgumentError(f"Function not found in ABI: {name}")
    for item in candidates:
        if len(item.get("inputs", [])) == arg_count:
            return item
    expected = sorted({len(item.get("inputs", [])) for item in candidates})
    raise ContractArgumentError(
        f"{name} expects {' or '.join(str(n) for n in expected)} arguments, got {arg_count}"
    )


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value in (0, 1):
        return bool(value)
    raise ValueError(f"not a boolean: {value!r}")


def coerce_value(abi_type: str, value: Any) -> Any:
    """Coerce one JSON value to what web3 expects for an ABI type."""
    if abi_type.endswith("]"):
        inner = abi_type[:abi_type.rindex("[")]
        if not isinstance(value, list):
            raise ValueError(f"expected a list for {abi_type}")
        return [coerce_value(inner, v) for v in value]

    if abi_type.startswith(("uint", "int")):
        if isinstance(value, bool):
            raise ValueError(f"expected an integer for {abi_type}")
        if isinstance(value, str):
            return int(value, 0) if value.lower().startswith("0x") else int(value)
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"expected an integer for {abi_type}")
        return int(value)

    if abi_type == "address":
        if not isinstance(value, str) or not Web3.is_address(value):
            raise ValueError(f"invalid address: {value!r}")
        return Web3.to_checksum_address(value)

    if abi_type == "bool":
        return _parse_bool(value)

    if abi_type.startswith("bytes"):
        if isinstance(value, str):
            raw = bytes(HexBytes(value))
        else:
            raw = bytes(value)
        size = abi_type[len("bytes"):]
        if size and len(raw) != int(size):
            raise ValueError(f"expected {size} bytes for {abi_type}, got {len(raw)}")
        return raw

    return value


def coerce_args(function_abi: Dict[str, Any], args: Optional[List[Any]]) -> List[Any]:
    args = list(args or [])
    inputs = function_abi.get("inputs", [])
    coerced = []
    for position, (param, value) in enumerate(zip(inputs, args)):
        try:
            coerced.append(coerce_value(param["type"], value))
        except (ValueError, TypeError) as e:
            label = param.get("name") or f"arg{position}"
            raise ContractArgumentError(f"Invalid argument {label} ({param['type']}): {e}")
    return coerced


def normalize_result(value: Any) -> Any:
    """Make contract return values JSON-safe."""
    if isinstance(value, (bytes, bytearray, HexBytes)):
        return Web3.to_hex(value)
    if isinstance(value, (list, tuple)):
        return [normalize_result(v) for v in value]
    if isinstance(value, dict):
        return {k: normalize_result(v) for k, v in value.items()}
    return value
