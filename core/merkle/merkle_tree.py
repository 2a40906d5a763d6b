"""
Merkle - Tree Engine
Flat-log Merkle tree construction, proof generation, and verification.

This module provides:
- build_tree: hash leaves and append every level, bottom-up, to one flat log
- generate_merkle_proof: sibling hashes for a leaf, read from the flat log
- verify_merkle_proof: recompute a root from a leaf and its siblings
- MerkleTree: holds one immutable log and exposes the operations above

Commitment Rules:
1. Leaf hashing: leaf = H(data)
2. Parent hashing: parent = H(left || right)
3. Padding: every level except the root is made even by duplicating
   its last node (at the leaves, the last leaf is hashed again)
4. Empty tree: no log, no root (get_root raises NotPresentException)
5. Single leaf: the log holds one hash, which is also the root

Log layout for leaves "1".."7" (15 entries):
    [h1 h2 h3 h4 h5 h6 h7 h7] [h12 h34 h56 h77] [h1234 h5677] [root]

Leaf ordering is defined by the caller; this module never sorts.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import HashPrimitive, get_hash_primitive
from core.merkle.levels import level_sizes, log_length
from core.schemas.errors import NotPresentException


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven
        index: The 0-based index of the leaf in the original leaf list
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def merkle_parent(
    left: bytes,
    right: bytes,
    primitive: HashPrimitive | None = None,
) -> bytes:
    """Compute the parent hash of two child nodes (order-sensitive)."""
    return (primitive or get_hash_primitive()).combine(left, right)


def build_tree(
    leaves: Sequence[bytes],
    primitive: HashPrimitive | None = None,
) -> list[bytes]:
    """
    Build the flat hash log for a sequence of leaves.

    Algorithm:
    1. Hash each leaf in order; if the leaf count is odd (and > 1),
       hash the last leaf once more
    2. For each level, combine adjacent pairs and append the parents
    3. If the new level is odd-sized and not the root, append a copy
       of its last node
    4. Stop once a level of size 1 (the root) has been appended

    Args:
        leaves: Ordered leaf byte strings
        primitive: Hash primitive (default: sha256)

    Returns:
        Every hash of every level, level 0 first; the last entry is the root.
        Empty list for no leaves.

    Example:
        >>> log = build_tree([b"1", b"2", b"3", b"4"])
        >>> len(log)
        7
    """
    primitive = primitive or get_hash_primitive()
    sizes = level_sizes(len(leaves))
    if not sizes:
        return []

    hashes: list[bytes] = [primitive.hash_leaf(leaf) for leaf in leaves]
    if len(hashes) < sizes[0]:
        hashes.append(primitive.hash_leaf(leaves[-1]))

    offset = 0
    for size, next_size in zip(sizes, sizes[1:]):
        for i in range(offset, offset + size, 2):
            hashes.append(primitive.combine(hashes[i], hashes[i + 1]))
        if next_size > size // 2:
            hashes.append(hashes[-1])
        offset += size

    return hashes


def generate_merkle_proof(
    hashes: Sequence[bytes],
    index: int,
    leaf_count: int,
) -> list[bytes]:
    """
    Collect the sibling hashes proving the leaf at ``index``.

    Walks the same level sizes build_tree used, keeping a running offset
    to the start of the current level inside the flat log. At each level
    the sibling is index + 1 for an even index and index - 1 for an odd one.

    Returns an empty proof, rather than raising, when there is nothing to
    prove: no leaves, a single leaf, an index outside [0, leaf_count), or
    a log whose length does not match leaf_count.

    Args:
        hashes: Flat log produced by build_tree
        index: 0-based leaf index
        leaf_count: Number of leaves the log was built from

    Returns:
        Sibling hashes, bottom-up
    """
    if leaf_count <= 1:
        return []

    if index < 0 or index >= leaf_count:
        logger.warning(
            f"Leaf index {index} out of range for {leaf_count} leaves; returning empty proof"
        )
        return []

    expected = log_length(leaf_count)
    if len(hashes) != expected:
        logger.warning(
            f"Hash log has {len(hashes)} entries but {leaf_count} leaves need "
            f"{expected}; returning empty proof"
        )
        return []

    proof: list[bytes] = []
    offset = 0
    for size in level_sizes(leaf_count)[:-1]:
        sibling_index = index + 1 if index % 2 == 0 else index - 1
        proof.append(hashes[offset + sibling_index])
        offset += size
        index //= 2

    return proof


def verify_merkle_proof(
    proof: Sequence[bytes],
    root: bytes,
    leaf: bytes,
    index: int,
    primitive: HashPrimitive | None = None,
) -> bool:
    """
    Verify that ``leaf`` sits at ``index`` under ``root``.

    Algorithm:
    1. Start with the leaf hash
    2. For each sibling (bottom-up):
       - even index: hash = parent(hash, sibling)
       - odd index:  hash = parent(sibling, hash)
       - index = index // 2
    3. Compare the result with the claimed root

    A malformed proof, wrong root or wrong index yields False, never an error.
    """
    if index < 0:
        return False

    primitive = primitive or get_hash_primitive()
    current = leaf
    for sibling in proof:
        if index % 2 == 0:
            current = primitive.combine(current, sibling)
        else:
            current = primitive.combine(sibling, current)
        index //= 2

    return current == root


@dataclass(frozen=True)
class TreeState:
    """One published version of a tree: its log and the leaf count it was built from."""
    hashes: tuple[bytes, ...] = ()
    leaf_count: int = 0


_EMPTY_STATE = TreeState()


class MerkleTree:
    """
    A Merkle tree backed by one flat, immutable hash log.

    The log and its leaf count live in a single frozen TreeState that is
    replaced wholesale on every build_tree() call. Readers take the state
    once per operation, so they see either the old tree or the new one,
    never the new log with the old leaf count.

    Example:
        >>> tree = MerkleTree()
        >>> log = tree.build_tree([b"a", b"b", b"c"])
        >>> proof = tree.generate_merkle_proof(2, 3)
        >>> tree.verify(proof, tree.get_root(), tree.hash(b"c"), 2)
        True
    """

    def __init__(self, primitive: HashPrimitive | str | None = None) -> None:
        if primitive is None or isinstance(primitive, str):
            primitive = get_hash_primitive(primitive)
        self._primitive = primitive
        self._state = _EMPTY_STATE

    @classmethod
    def from_hashes(
        cls,
        hashes: Sequence[bytes],
        leaf_count: int,
        primitive: HashPrimitive | str | None = None,
    ) -> "MerkleTree":
        """
        Restore a tree from a previously built log without rehashing.

        Raises:
            ValueError: If the log length does not match leaf_count
        """
        expected = log_length(leaf_count)
        if len(hashes) != expected:
            raise ValueError(
                f"Hash log for {leaf_count} leaves must have {expected} entries, "
                f"got {len(hashes)}"
            )
        tree = cls(primitive)
        tree._state = TreeState(tuple(hashes), leaf_count)
        return tree

    @property
    def primitive(self) -> HashPrimitive:
        return self._primitive

    @property
    def hash_algorithm(self) -> str:
        return self._primitive.name

    @property
    def state(self) -> TreeState:
        """The current log and leaf count, read together."""
        return self._state

    @property
    def hashes(self) -> tuple[bytes, ...]:
        """The full flat log, level 0 first."""
        return self._state.hashes

    @property
    def leaf_count(self) -> int:
        return self._state.leaf_count

    @property
    def is_empty(self) -> bool:
        return not self._state.hashes

    def hash(self, data: bytes) -> bytes:
        """Hash a single opaque byte string with this tree's primitive."""
        return self._primitive.hash_leaf(data)

    def build_tree(self, data: Sequence[bytes]) -> list[bytes]:
        """Build and store the log for ``data``; returns a copy of the log."""
        hashes = build_tree(data, self._primitive)
        self._state = TreeState(tuple(hashes), len(data))
        logger.debug(
            f"Built {self.hash_algorithm} Merkle tree: "
            f"{len(data)} leaves, {len(hashes)} hashes"
        )
        return hashes

    def get_root(self) -> bytes:
        """
        Return the root (last log entry).

        Raises:
            NotPresentException: If the tree has no leaves
        """
        hashes = self._state.hashes
        if not hashes:
            raise NotPresentException()
        return hashes[-1]

    def generate_merkle_proof(self, index: int, leaf_count: int) -> list[bytes]:
        """Sibling hashes for the leaf at ``index`` (see generate_merkle_proof)."""
        return generate_merkle_proof(self._state.hashes, index, leaf_count)

    def verify(
        self,
        proof: Sequence[bytes],
        root: bytes,
        leaf: bytes,
        index: int,
    ) -> bool:
        """Verify a proof with this tree's primitive. Does not read the log."""
        return verify_merkle_proof(proof, root, leaf, index, self._primitive)

    def prove(self, index: int) -> MerkleProof:
        """
        Build a MerkleProof for the leaf at ``index`` of the stored tree.

        Raises:
            NotPresentException: If the tree is empty
            IndexError: If index is out of range
        """
        state = self._state
        if not state.hashes:
            raise NotPresentException()
        if index < 0 or index >= state.leaf_count:
            raise IndexError(
                f"Leaf index {index} out of range for {state.leaf_count} leaves"
            )
        return MerkleProof(
            leaf=state.hashes[index],
            index=index,
            siblings=generate_merkle_proof(state.hashes, index, state.leaf_count),
            root=state.hashes[-1],
        )

    def __repr__(self) -> str:
        state = self._state
        return (
            f"MerkleTree(hash_algorithm={self.hash_algorithm!r}, "
            f"leaf_count={state.leaf_count}, hashes={len(state.hashes)})"
        )


__all__ = [
    "MerkleProof",
    "MerkleTree",
    "TreeState",
    "merkle_parent",
    "build_tree",
    "generate_merkle_proof",
    "verify_merkle_proof",
]
