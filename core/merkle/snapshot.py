"""
Merkle - Serializable Models

Pydantic models for trees and proofs that leave the process (files, HTTP).
All hashes are 0x-prefixed lowercase hex strings of 32 bytes.
"""
from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.crypto.hashing import from_hex, get_hash_primitive, to_hex
from core.merkle.levels import log_length
from core.merkle.merkle_tree import MerkleProof, MerkleTree, verify_merkle_proof
from core.schemas.errors import UnsupportedHashAlgorithmException
from core.schemas.versioning import SCHEMA_VERSION, assert_supported_schema_version


# 0x followed by 64 hex chars = 32 bytes
HEX_HASH_PATTERN = re.compile(r"^0x[0-9a-fA-F]{64}$")


def validate_hex_hash(value: str, field_name: str) -> str:
    """Validate that a value is a 32-byte hex hash with 0x prefix."""
    if not HEX_HASH_PATTERN.match(value):
        shown = f"{value[:20]}..." if len(value) > 20 else value
        raise ValueError(
            f"{field_name} must be a 32-byte hex string with 0x prefix "
            f"(64 hex chars), got: {shown}"
        )
    return value.lower()


def _validate_algorithm(value: str) -> str:
    try:
        return get_hash_primitive(value).name
    except UnsupportedHashAlgorithmException as e:
        raise ValueError(e.message) from e


class TreeSnapshot(BaseModel):
    """
    A built tree: its full flat log plus what is needed to interpret it.

    The log is stored as-is; loading a snapshot never rehashes leaves.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(..., description="Hash primitive name (sha256, sha3_256, blake2b)")
    leaf_count: int = Field(..., ge=0, description="Number of leaves the tree was built from")
    hashes: list[str] = Field(
        default_factory=list,
        description="Flat hash log, level 0 first, root last",
    )

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("hash_algorithm")
    @classmethod
    def validate_hash_algorithm(cls, v: str) -> str:
        return _validate_algorithm(v)

    @field_validator("hashes")
    @classmethod
    def validate_hashes(cls, v: list[str]) -> list[str]:
        return [validate_hex_hash(h, f"hashes[{i}]") for i, h in enumerate(v)]

    @model_validator(mode="after")
    def validate_log_length(self) -> "TreeSnapshot":
        expected = log_length(self.leaf_count)
        if len(self.hashes) != expected:
            raise ValueError(
                f"{self.leaf_count} leaves require {expected} hashes, "
                f"got {len(self.hashes)}"
            )
        return self

    @property
    def root(self) -> Optional[str]:
        return self.hashes[-1] if self.hashes else None

    @classmethod
    def from_tree(cls, tree: MerkleTree) -> "TreeSnapshot":
        return cls(
            hash_algorithm=tree.hash_algorithm,
            leaf_count=tree.leaf_count,
            hashes=[to_hex(h) for h in tree.hashes],
        )

    def to_tree(self) -> MerkleTree:
        return MerkleTree.from_hashes(
            [from_hex(h) for h in self.hashes],
            self.leaf_count,
            self.hash_algorithm,
        )


class ProofBundle(BaseModel):
    """An inclusion proof for one leaf, self-describing enough to verify offline."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    hash_algorithm: str = Field(...)
    leaf_count: int = Field(..., ge=0)
    index: int = Field(..., ge=0, description="0-based leaf index")
    leaf: str = Field(..., description="Leaf hash being proven")
    siblings: list[str] = Field(default_factory=list, description="Sibling hashes, bottom-up")
    root: str = Field(..., description="Root the proof was generated against")

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("hash_algorithm")
    @classmethod
    def validate_hash_algorithm(cls, v: str) -> str:
        return _validate_algorithm(v)

    @field_validator("leaf")
    @classmethod
    def validate_leaf(cls, v: str) -> str:
        return validate_hex_hash(v, "leaf")

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        return validate_hex_hash(v, "root")

    @field_validator("siblings")
    @classmethod
    def validate_siblings(cls, v: list[str]) -> list[str]:
        return [validate_hex_hash(h, f"siblings[{i}]") for i, h in enumerate(v)]

    @classmethod
    def from_proof(
        cls,
        proof: MerkleProof,
        hash_algorithm: str,
        leaf_count: int,
    ) -> "ProofBundle":
        return cls(
            hash_algorithm=hash_algorithm,
            leaf_count=leaf_count,
            index=proof.index,
            leaf=to_hex(proof.leaf),
            siblings=[to_hex(s) for s in proof.siblings],
            root=to_hex(proof.root),
        )

    def to_proof(self) -> MerkleProof:
        return MerkleProof(
            leaf=from_hex(self.leaf),
            index=self.index,
            siblings=[from_hex(s) for s in self.siblings],
            root=from_hex(self.root),
        )

    def verify(self, root: Optional[bytes] = None) -> bool:
        """Verify against the bundled root, or against ``root`` when given."""
        proof = self.to_proof()
        return verify_merkle_proof(
            proof.siblings,
            proof.root if root is None else root,
            proof.leaf,
            proof.index,
            get_hash_primitive(self.hash_algorithm),
        )


__all__ = [
    "HEX_HASH_PATTERN",
    "validate_hex_hash",
    "TreeSnapshot",
    "ProofBundle",
]
