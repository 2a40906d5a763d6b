"""
Merkle - Proof Convenience Wrappers
Thin class-based wrappers around the functions in merkle_tree.py.

This module provides:
- MerkleProver: Build trees from leaves and produce MerkleProof objects
- MerkleVerifier: Verify proofs, as a boolean or as a hard requirement
"""
from __future__ import annotations

from typing import Sequence

from core.crypto.hashing import HashPrimitive, get_hash_primitive
from core.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    verify_merkle_proof,
)
from core.schemas.errors import MerkleVerificationException


class MerkleProver:
    """
    Convenience class for generating Merkle proofs from raw leaves.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> MerkleVerifier.verify(proof)
        True
    """

    @staticmethod
    def prove(
        leaves: Sequence[bytes],
        index: int,
        primitive: HashPrimitive | None = None,
    ) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Args:
            leaves: Raw leaf byte strings (hashed here)
            index: 0-based index of the leaf to prove
            primitive: Hash primitive (default: sha256)

        Returns:
            MerkleProof for the specified leaf

        Raises:
            ValueError: If leaves is empty
            IndexError: If index is out of range
        """
        if len(leaves) == 0:
            raise ValueError("Cannot generate proof for empty leaf list")
        tree = MerkleTree(primitive)
        tree.build_tree(leaves)
        return tree.prove(index)

    @staticmethod
    def compute_root(
        leaves: Sequence[bytes],
        primitive: HashPrimitive | None = None,
    ) -> bytes:
        """
        Compute the Merkle root for raw leaves.

        Raises:
            NotPresentException: If leaves is empty
        """
        tree = MerkleTree(primitive)
        tree.build_tree(leaves)
        return tree.get_root()


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(
        proof: MerkleProof,
        primitive: HashPrimitive | None = None,
    ) -> bool:
        """Verify a MerkleProof against the root it carries."""
        return verify_merkle_proof(
            proof.siblings, proof.root, proof.leaf, proof.index, primitive
        )

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        index: int,
        siblings: list[bytes],
        root: bytes,
        primitive: HashPrimitive | None = None,
    ) -> bool:
        """
        Verify a leaf hash is included in a Merkle root using raw components.

        Args:
            leaf: The leaf hash to verify
            index: The claimed index of the leaf
            siblings: List of sibling hashes (bottom-up)
            root: The claimed Merkle root

        Returns:
            True if the proof is valid, False otherwise
        """
        return verify_merkle_proof(siblings, root, leaf, index, primitive)

    @staticmethod
    def verify_data_in_root(
        data: bytes,
        index: int,
        siblings: list[bytes],
        root: bytes,
        primitive: HashPrimitive | None = None,
    ) -> bool:
        """Same as verify_leaf_in_root, but hashes the raw leaf data first."""
        primitive = primitive or get_hash_primitive()
        return verify_merkle_proof(
            siblings, root, primitive.hash_leaf(data), index, primitive
        )

    @staticmethod
    def require_valid(
        proof: MerkleProof,
        primitive: HashPrimitive | None = None,
    ) -> None:
        """
        Raise instead of returning False when the proof does not verify.

        Raises:
            MerkleVerificationException: If the recomputed root differs
        """
        if not MerkleVerifier.verify(proof, primitive):
            raise MerkleVerificationException(
                "Merkle proof does not reproduce the claimed root",
                leaf_index=proof.index,
                details={
                    "root": "0x" + proof.root.hex(),
                    "siblings": len(proof.siblings),
                },
            )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
