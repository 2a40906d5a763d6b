"""
Schemas
File: __init__.py

Purpose: Export versioning, canonical serialization and the error taxonomy.
"""

# Version constants
from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ErrorCodes,
    MerkleEngineException,
    MerkleError,
    MerkleVerificationException,
    NotPresentException,
    SnapshotException,
    UnsupportedHashAlgorithmException,
)


__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "assert_supported_schema_version",
    "UnsupportedSchemaVersionError",
    # Canonical serialization
    "dumps_canonical",
    "canonicalize_value",
    "CANONICAL_JSON_SEPARATORS",
    # Errors
    "ErrorCodes",
    "MerkleError",
    "MerkleEngineException",
    "NotPresentException",
    "MerkleVerificationException",
    "UnsupportedHashAlgorithmException",
    "CanonicalizationException",
    "SnapshotException",
]
