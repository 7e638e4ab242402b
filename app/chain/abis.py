# app/chain/abis.py
"""Fallback ABI fragments for the functions this service calls.

A deployed-contracts file (DEPLOYED_CONTRACTS_FILE) takes precedence.
"""

from app.core.constants import INSURANCE_CORE, CLAIM_PROCESSOR, TOKEN_RWA_FACTORY, MOCK_BSD_TOKEN


def _fn(name, inputs=(), outputs=(), mutability="view"):
    return {
        "type": "function",
        "name": name,
        "stateMutability": mutability,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": n, "type": t} for n, t in outputs],
    }


def _error(name, inputs=()):
    return {"type": "error", "name": name, "inputs": [{"name": n, "type": t} for n, t in inputs]}


ACCESS_CONTROL_ABI = [
    _fn("hasRole", [("role", "bytes32"), ("account", "address")], [("", "bool")]),
    _fn("grantRole", [("role", "bytes32"), ("account", "address")], mutability="nonpayable"),
    _fn("revokeRole", [("role", "bytes32"), ("account", "address")], mutability="nonpayable"),
    _error("AccessControlUnauthorizedAccount", [("account", "address"), ("neededRole", "bytes32")]),
]

ERC20_ABI = [
    _fn("name", outputs=[("", "string")]),
    _fn("symbol", outputs=[("", "string")]),
    _fn("decimals", outputs=[("", "uint8")]),
    _fn("totalSupply", outputs=[("", "uint256")]),
    _fn("balanceOf", [("account", "address")], [("", "uint256")]),
]

INSURANCE_CORE_ABI = ACCESS_CONTROL_ABI + [
    _fn(
        "createPolicy",
        [("token", "address"), ("coverageAmount", "uint256"), ("duration", "uint256")],
        [("policyId", "uint256")],
        mutability="payable"
    ),
    _fn(
        "addCoverageOption",
        [("value", "uint256"), ("premiumRate", "uint256"), ("minDuration", "uint256"), ("maxDuration", "uint256")],
        mutability="nonpayable"
    ),
    _fn(
        "getCoverageOption",
        [("optionId", "uint256")],
        [("value", "uint256"), ("premiumRate", "uint256"), ("minDuration", "uint256"), ("maxDuration", "uint256")]
    ),
    _fn(
        "evaluateRWA",
        [("token", "address"), ("amount", "uint256"), ("requiredConfirmations", "uint256")],
        mutability="nonpayable"
    ),
    _fn("getClaimsByUser", [("user", "address")], [("", "uint256[]")]),
    _error("PolicyNotActive", [("policyId", "uint256")]),
    _error("InvalidCoverageAmount", [("amount", "uint256")]),
]

CLAIM_PROCESSOR_ABI = ACCESS_CONTROL_ABI + [
    _fn("claimCount", outputs=[("", "uint256")]),
    _fn(
        "getClaim",
        [("claimId", "uint256")],
        [
            ("id", "uint256"),
            ("policyId", "uint256"),
            ("claimant", "address"),
            ("amount", "uint256"),
            ("status", "uint8"),
            ("proof", "string"),
            ("verifiedBy", "address"),
            ("requiredConfirmations", "uint256"),
        ]
    ),
    _fn("getUserClaims", [("user", "address")], [("", "uint256[]")]),
    _fn(
        "reviewClaim",
        [("claimId", "uint256"), ("approved", "bool"), ("reason", "string")],
        mutability="nonpayable"
    ),
    _error("ClaimNotFound", [("claimId", "uint256")]),
    _error("ClaimAlreadyProcessed", [("claimId", "uint256")]),
]

TOKEN_RWA_FACTORY_ABI = ACCESS_CONTROL_ABI + [
    _fn(
        "createToken",
        [("name", "string"), ("symbol", "string"), ("verification", "address")],
        [("token", "address")],
        mutability="nonpayable"
    ),
]

MOCK_BSD_TOKEN_ABI = ACCESS_CONTROL_ABI + ERC20_ABI + [
    _fn("mint", [("to", "address"), ("amount", "uint256")], mutability="nonpayable"),
]

BUILTIN_ABIS = {
    INSURANCE_CORE: INSURANCE_CORE_ABI,
    CLAIM_PROCESSOR: CLAIM_PROCESSOR_ABI,
    TOKEN_RWA_FACTORY: TOKEN_RWA_FACTORY_ABI,
    MOCK_BSD_TOKEN: MOCK_BSD_TOKEN_ABI,
}

# Solidity's require/revert(string) payload
ERROR_STRING_ABI = _error("Error", [("message", "string")])
