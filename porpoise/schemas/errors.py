"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for commitment building.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every failure in the commitment core is a caller contract violation on a
pure, deterministic computation, so none of these errors is retryable.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the package."""

    # Field encoding & padding
    INVALID_FIELD_COUNT = "INVALID_FIELD_COUNT"
    MALFORMED_HEX_FIELD = "MALFORMED_HEX_FIELD"

    # Merkle reduction
    NON_POWER_OF_TWO_INPUT = "NON_POWER_OF_TWO_INPUT"
    TRACKED_INDEX_OUT_OF_RANGE = "TRACKED_INDEX_OUT_OF_RANGE"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Contract collaborator
    CONTRACT_REJECTED = "CONTRACT_REJECTED"

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Serialized commitments
    UNSUPPORTED_SCHEMA_VERSION = "UNSUPPORTED_SCHEMA_VERSION"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class PorpoiseError(BaseModel):
    """
    Base error model for structured error communication.

    Used when an error has to cross a boundary as data (logged, returned
    from a batch job, serialized) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.NON_POWER_OF_TWO_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "PorpoiseException":
        """Convert this error model to a raisable exception."""
        return PorpoiseException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class PorpoiseException(Exception):
    """
    Base exception for all commitment errors.

    Carries structured error information and can be converted to/from
    PorpoiseError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "PORPOISE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> PorpoiseError:
        """Convert this exception to a PorpoiseError model."""
        return PorpoiseError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidFieldCountException(PorpoiseException, ValueError):
    """Raised when padding is asked for zero fields."""

    def __init__(self, count: int = 0) -> None:
        super().__init__(
            message=f"At least one field is required to build a commitment, got {count}",
            code=ErrorCodes.INVALID_FIELD_COUNT,
            details={"count": count},
        )


class MalformedHexFieldException(PorpoiseException, ValueError):
    """Raised when a hex timestamp field is not exactly 64 hex characters."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        position: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if value is not None:
            # truncated for logs
            details["value"] = value[:80]
        if position is not None:
            details["position"] = position
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_HEX_FIELD,
            details=details,
        )


class NonPowerOfTwoInputException(PorpoiseException, ValueError):
    """Raised when the reducer receives a leaf count that is not a power of two."""

    def __init__(self, count: int) -> None:
        super().__init__(
            message=(
                f"Leaf count must be a power of two, got {count}; "
                "pad the fields before reducing"
            ),
            code=ErrorCodes.NON_POWER_OF_TWO_INPUT,
            details={"count": count},
        )


class TrackedIndexOutOfRangeException(PorpoiseException, IndexError):
    """Raised when the tracked leaf index does not address a leaf."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(
            message=f"Tracked index {index} out of range for {count} leaves",
            code=ErrorCodes.TRACKED_INDEX_OUT_OF_RANGE,
            details={"index": index, "count": count},
        )


class MerkleVerificationException(PorpoiseException):
    """Raised when a Merkle proof does not reproduce its root."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = dict(details or {})
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )


class ContractRejectionException(PorpoiseException):
    """
    Raised when the contract collaborator rejects a call.

    The collaborator's reason string is carried as-is; it is never
    interpreted here.
    """

    def __init__(self, reason: str, method: str | None = None) -> None:
        details: dict[str, Any] = {"reason": reason}
        if method:
            details["method"] = method
        super().__init__(
            message=f"Contract rejected call: {reason}",
            code=ErrorCodes.CONTRACT_REJECTED,
            details=details,
        )
        self.reason = reason


class ConfigurationException(PorpoiseException):
    """Raised when configuration values cannot be parsed."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=details,
        )
