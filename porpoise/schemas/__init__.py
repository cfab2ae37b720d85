"""
Module 01 - Schemas

Purpose: Export the error taxonomy and version constants.
"""

from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    SchemaVersion,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

from .errors import (
    ErrorCodes,
    PorpoiseError,
    PorpoiseException,
    InvalidFieldCountException,
    MalformedHexFieldException,
    NonPowerOfTwoInputException,
    TrackedIndexOutOfRangeException,
    MerkleVerificationException,
    ContractRejectionException,
    ConfigurationException,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "SchemaVersion",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    # Errors
    "ErrorCodes",
    "PorpoiseError",
    "PorpoiseException",
    "InvalidFieldCountException",
    "MalformedHexFieldException",
    "NonPowerOfTwoInputException",
    "TrackedIndexOutOfRangeException",
    "MerkleVerificationException",
    "ContractRejectionException",
    "ConfigurationException",
]
