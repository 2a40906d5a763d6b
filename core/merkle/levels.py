"""
Merkle - Level Sizes
Level-size arithmetic shared by the tree builder, the proof generator and
the size estimators.

A tree over n leaves is stored as one flat log, level after level. Every
level except the root is kept even-sized by duplicating its last node:

    n = 0  ->  []
    n = 1  ->  [1]
    n = 5  ->  [6, 4, 2, 1]     (5 -> 6 at the leaves, 3 -> 4 above them)
    n = 7  ->  [8, 4, 2, 1]
    n = 8  ->  [8, 4, 2, 1]

The start offset of level k in the log is sum(sizes[:k]).
"""
from __future__ import annotations


def level_sizes(leaf_count: int) -> list[int]:
    """
    Return the size of every level of the flat log, bottom-up.

    Args:
        leaf_count: Number of leaves (>= 0)

    Returns:
        List of level sizes; the last entry is 1 for any non-empty tree.

    Raises:
        ValueError: If leaf_count is negative
    """
    if leaf_count < 0:
        raise ValueError(f"leaf_count must be non-negative, got {leaf_count}")
    if leaf_count == 0:
        return []
    if leaf_count == 1:
        return [1]

    size = leaf_count + (leaf_count % 2)
    sizes = [size]
    while size > 1:
        size //= 2
        if size > 1 and size % 2 == 1:
            size += 1
        sizes.append(size)
    return sizes


def level_offsets(leaf_count: int) -> list[int]:
    """Start index of each level inside the flat log."""
    offsets: list[int] = []
    offset = 0
    for size in level_sizes(leaf_count):
        offsets.append(offset)
        offset += size
    return offsets


def log_length(leaf_count: int) -> int:
    """Total number of hashes stored for a tree of leaf_count leaves."""
    return sum(level_sizes(leaf_count))


def proof_length(leaf_count: int) -> int:
    """Number of siblings in every inclusion proof for this leaf count."""
    return max(len(level_sizes(leaf_count)) - 1, 0)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels from leaves to root, inclusive.

    A single leaf has depth 1, two leaves depth 2, an empty tree depth 0.
    """
    return len(level_sizes(num_leaves))


__all__ = [
    "level_sizes",
    "level_offsets",
    "log_length",
    "proof_length",
    "compute_tree_depth",
]
