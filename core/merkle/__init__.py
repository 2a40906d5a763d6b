"""
Merkle Tree Engine
Flat-log binary Merkle tree construction + proof generation/verification.

This package provides:
- MerkleTree: holds one immutable hash log; hash, build_tree, get_root,
  generate_merkle_proof, verify
- Pure functions over a log: build_tree, generate_merkle_proof, verify_merkle_proof
- Level-size arithmetic: level_sizes, log_length, proof_length, compute_tree_depth
- Serializable models and file IO: TreeSnapshot, ProofBundle, save_tree, load_tree

Commitment Rules:
1. Leaf hashing: H(data)
2. Parent hashing: H(left || right)
3. Padding: duplicate the last node of any odd-sized level below the root
4. Empty tree: no root (NotPresentException)
5. Single leaf: root = leaf hash

Usage:
    from core.merkle import MerkleTree

    tree = MerkleTree("sha256")
    tree.build_tree([b"1", b"2", b"3"])
    proof = tree.generate_merkle_proof(2, 3)
    assert tree.verify(proof, tree.get_root(), tree.hash(b"3"), 2)
"""
from .levels import (
    level_sizes,
    level_offsets,
    log_length,
    proof_length,
    compute_tree_depth,
)

from .merkle_tree import (
    MerkleProof,
    MerkleTree,
    TreeState,
    merkle_parent,
    build_tree,
    generate_merkle_proof,
    verify_merkle_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)

from .snapshot import (
    TreeSnapshot,
    ProofBundle,
)

from .io import (
    save_tree,
    load_snapshot,
    load_tree,
    save_proof,
    load_proof,
)


__all__ = [
    # Core types
    "MerkleProof",
    "MerkleTree",
    "TreeState",
    # Core functions
    "merkle_parent",
    "build_tree",
    "generate_merkle_proof",
    "verify_merkle_proof",
    # Level arithmetic
    "level_sizes",
    "level_offsets",
    "log_length",
    "proof_length",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
    # Serialization
    "TreeSnapshot",
    "ProofBundle",
    "save_tree",
    "load_snapshot",
    "load_tree",
    "save_proof",
    "load_proof",
]
