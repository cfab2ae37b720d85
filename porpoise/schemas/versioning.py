"""
Module 01 - Schemas
File: versioning.py

Purpose: Version tag of serialized commitments.

"v1" covers the current commitment rules: sha256 leaves, sorted-pair
parents, power-of-two padding and 0x-prefixed lowercase hex on the wire.
A change to any of them needs a new tag.
"""

from typing import Literal

from porpoise.schemas.errors import ErrorCodes, PorpoiseException

SCHEMA_VERSION: str = "v1"

SchemaVersion = Literal["v1"]

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({SCHEMA_VERSION})


class UnsupportedSchemaVersionError(PorpoiseException, ValueError):
    """A serialized commitment carries a version this package cannot read."""

    def __init__(self, version: str) -> None:
        super().__init__(
            message=(
                f"Unsupported schema version {version!r}, "
                f"expected one of {sorted(SUPPORTED_SCHEMA_VERSIONS)}"
            ),
            code=ErrorCodes.UNSUPPORTED_SCHEMA_VERSION,
            details={"version": version},
        )
        self.version = version


def assert_supported_schema_version(version: str) -> None:
    """
    Raises:
        UnsupportedSchemaVersionError: If version is not supported
    """
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        raise UnsupportedSchemaVersionError(version)
