# app/core/exceptions.py
"""Custom exceptions for SafeGuard application."""

from typing import Optional, Dict, Any, List


class SafeGuardException(Exception):
    """Base exception for all SafeGuard errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details
        }


class NotFoundError(SafeGuardException):
    """Base for lookups that found nothing."""
    status_code = 404


class ConflictError(SafeGuardException):
    """Base for duplicates and invalid transitions."""
    status_code = 409


class ValidationError(SafeGuardException):
    """Base for rejected input."""
    status_code = 400


class NotConfiguredError(SafeGuardException):
    """A feature needs configuration that is missing."""
    status_code = 503

    def __init__(self, feature: str, setting: str):
        super().__init__(
            message=f"{feature} is not configured (set {setting})",
            error_code="NOT_CONFIGURED",
            details={"feature": feature, "setting": setting}
        )


# ===================
# Policy Exceptions
# ===================

class PolicyNotFoundError(NotFoundError):
    """Policy not found in storage."""

    def __init__(self, policy_id: str):
        super().__init__(
            message=f"Policy not found: {policy_id}",
            error_code="POLICY_NOT_FOUND",
            details={"policy_id": policy_id}
        )


class PolicyValidationError(ValidationError):
    """Policy data validation error."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=f"Policy validation failed: {message}",
            error_code="POLICY_VALIDATION_ERROR",
            details={"field": field} if field else {}
        )


class DuplicatePolicyError(ConflictError):

    def __init__(self, policy_id: str):
        super().__init__(
            message=f"Policy with this ID already exists: {policy_id}",
            error_code="DUPLICATE_POLICY",
            details={"policy_id": policy_id}
        )


# ===================
# Claim Exceptions
# ===================

class ClaimNotFoundError(NotFoundError):
    """Claim not found in storage."""

    def __init__(self, claim_id: str):
        super().__init__(
            message=f"Claim not found: {claim_id}",
            error_code="CLAIM_NOT_FOUND",
            details={"claim_id": claim_id}
        )


class ClaimValidationError(ValidationError):
    """Claim data validation error."""

    def __init__(self, message: str, claim_id: Optional[str] = None):
        super().__init__(
            message=f"Claim validation failed: {message}",
            error_code="CLAIM_VALIDATION_ERROR",
            details={"claim_id": claim_id} if claim_id else {}
        )


class DuplicateClaimError(ConflictError):

    def __init__(self, claim_id: str):
        super().__init__(
            message=f"Claim with this ID already exists: {claim_id}",
            error_code="DUPLICATE_CLAIM",
            details={"claim_id": claim_id}
        )


class InvalidClaimStatusTransition(ConflictError):
    """Invalid claim status transition."""

    def __init__(self, current_status: str, new_status: str):
        super().__init__(
            message=f"Cannot transition from {current_status} to {new_status}",
            error_code="INVALID_STATUS_TRANSITION",
            details={"current_status": current_status, "new_status": new_status}
        )


# ===================
# Insurance Option Exceptions
# ===================

class InsuranceOptionNotFoundError(NotFoundError):

    def __init__(self, option_id: str):
        super().__init__(
            message=f"Insurance option not found: {option_id}",
            error_code="INSURANCE_OPTION_NOT_FOUND",
            details={"option_id": option_id}
        )


class DuplicateInsuranceOptionError(ConflictError):

    def __init__(self, option_id: str):
        super().__init__(
            message="Insurance option with this ID already exists",
            error_code="DUPLICATE_INSURANCE_OPTION",
            details={"option_id": option_id}
        )


class QuoteValidationError(ValidationError):
    """Premium quote parameters out of range."""

    def __init__(self, message: str, field: str):
        super().__init__(
            message=f"Invalid quote request: {message}",
            error_code="QUOTE_VALIDATION_ERROR",
            details={"field": field}
        )


# ===================
# Token / User Exceptions
# ===================

class TokenNotFoundError(NotFoundError):

    def __init__(self, identifier: str):
        super().__init__(
            message="Token not found",
            error_code="TOKEN_NOT_FOUND",
            details={"identifier": identifier}
        )


class DuplicateTokenError(ConflictError):

    def __init__(self, field: str, value: str):
        super().__init__(
            message=f"Token with this {field} already exists: {value}",
            error_code="DUPLICATE_TOKEN",
            details={field: value}
        )


class UserNotFoundError(NotFoundError):

    def __init__(self, address: str):
        super().__init__(
            message=f"User not found: {address}",
            error_code="USER_NOT_FOUND",
            details={"address": address}
        )


# ===================
# Storage Exceptions
# ===================

class StorageException(SafeGuardException):
    """Base exception for storage-related errors."""
    pass


class MongoConnectionError(StorageException):
    """Cannot connect to MongoDB."""

    def __init__(self, message: str):
        super().__init__(
            message=f"MongoDB connection failed: {message}",
            error_code="MONGODB_CONNECTION_ERROR"
        )


# ===================
# IPFS Exceptions
# ===================

class IPFSException(SafeGuardException):
    """Base exception for IPFS errors."""
    status_code = 502


class IPFSStorageError(IPFSException):
    """Error while pinning content."""

    def __init__(self, provider: str, message: str):
        super().__init__(
            message=f"IPFS storage failed ({provider}): {message}",
            error_code="IPFS_STORAGE_ERROR",
            details={"provider": provider}
        )


class IPFSRetrievalError(IPFSException):
    """Error while fetching content by CID."""

    def __init__(self, cid: str, message: str):
        super().__init__(
            message=f"Failed to get {cid}: {message}",
            error_code="IPFS_RETRIEVAL_ERROR",
            details={"cid": cid}
        )


# ===================
# Contract Exceptions
# ===================

class ContractException(SafeGuardException):
    """Base exception for smart contract errors."""
    status_code = 502


class UnknownContractError(NotFoundError):

    def __init__(self, contract_name: str, available: List[str]):
        super().__init__(
            message=f"Unknown contract: {contract_name}",
            error_code="UNKNOWN_CONTRACT",
            details={"contract": contract_name, "available": available}
        )


class ContractCallError(ContractException):
    """A contract read or write failed. Message is the parsed revert."""

    def __init__(self, contract_name: str, function_name: str, message: str):
        super().__init__(
            message=message,
            error_code="CONTRACT_CALL_ERROR",
            details={"contract": contract_name, "function": function_name}
        )


class ContractArgumentError(ValidationError):

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="CONTRACT_ARGUMENT_ERROR"
        )
