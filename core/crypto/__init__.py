"""
Core cryptographic utilities.

Hash primitives consumed by the Merkle tree engine, plus hex helpers.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    HASH_PRIMITIVES,
    HashPrimitive,
    Sha256Primitive,
    Sha3Primitive,
    Blake2bPrimitive,
    sha256,
    hash_concat,
    get_hash_primitive,
    supported_hash_algorithms,
    to_hex,
    from_hex,
    decode_leaf,
    LEAF_ENCODINGS,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "HASH_PRIMITIVES",
    "HashPrimitive",
    "Sha256Primitive",
    "Sha3Primitive",
    "Blake2bPrimitive",
    "sha256",
    "hash_concat",
    "get_hash_primitive",
    "supported_hash_algorithms",
    "to_hex",
    "from_hex",
    "decode_leaf",
    "LEAF_ENCODINGS",
]
