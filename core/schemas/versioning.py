"""
Schemas - Versioning
File: versioning.py

Purpose: Schema version of saved TreeSnapshot and ProofBundle files.
Kept free of other schema imports so the Merkle models can depend on it.
"""

# Written into every saved tree and proof
SCHEMA_VERSION: str = "v1"

# Versions that load_tree / load_proof accept
SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({SCHEMA_VERSION})


class UnsupportedSchemaVersionError(ValueError):
    """A saved file declares a schema_version this build cannot read."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(
            f"Unsupported schema version: '{version}'. "
            f"Supported versions: {sorted(SUPPORTED_SCHEMA_VERSIONS)}"
        )


def assert_supported_schema_version(version: str) -> None:
    """
    Raises:
        UnsupportedSchemaVersionError: If a saved file's version cannot be read.
    """
    if version not in SUPPORTED_SCHEMA_VERSIONS:
        raise UnsupportedSchemaVersionError(version)
