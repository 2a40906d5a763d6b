"""
Crypto - Hash Primitives
Fixed-output hash functions used to build and verify Merkle trees.

This module provides:
- SHA-256 hashing for raw bytes
- HashPrimitive: the 2-to-1 compression interface the tree engine consumes
- A registry of primitives selectable by name (sha256, sha3_256, blake2b)
- Hex encoding/decoding with 0x prefix

Every primitive produces 32-byte digests:
    hash_leaf(data)        = H(data)
    combine(left, right)   = H(left || right)

combine() is order-sensitive: combine(a, b) != combine(b, a).
"""
from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod

from core.schemas.errors import UnsupportedHashAlgorithmException


DEFAULT_HASH_ALGORITHM = "sha256"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> bytes:
    """SHA-256 of the concatenation of two byte sequences."""
    return sha256(left + right)


class HashPrimitive(ABC):
    """
    Abstract 2-to-1 hash primitive.

    Subclasses only supply digest(); leaf hashing and child combination
    are defined in terms of it so every primitive follows the same rules.
    """

    digest_size: int = 32

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry name (sha256, sha3_256, blake2b)."""
        ...

    @abstractmethod
    def digest(self, data: bytes) -> bytes:
        """Hash raw bytes to a fixed-width digest."""
        ...

    def hash_leaf(self, data: bytes) -> bytes:
        """Hash a single opaque leaf."""
        return self.digest(data)

    def combine(self, left: bytes, right: bytes) -> bytes:
        """Combine two child hashes into their parent, left then right."""
        return self.digest(left + right)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class Sha256Primitive(HashPrimitive):
    """SHA-256 (default)."""

    @property
    def name(self) -> str:
        return "sha256"

    def digest(self, data: bytes) -> bytes:
        return sha256(data)


class Sha3Primitive(HashPrimitive):
    """SHA3-256 (FIPS 202)."""

    @property
    def name(self) -> str:
        return "sha3_256"

    def digest(self, data: bytes) -> bytes:
        return hashlib.sha3_256(data).digest()


class Blake2bPrimitive(HashPrimitive):
    """BLAKE2b truncated to a 32-byte digest."""

    @property
    def name(self) -> str:
        return "blake2b"

    def digest(self, data: bytes) -> bytes:
        return hashlib.blake2b(data, digest_size=self.digest_size).digest()


HASH_PRIMITIVES: dict[str, HashPrimitive] = {
    primitive.name: primitive
    for primitive in (Sha256Primitive(), Sha3Primitive(), Blake2bPrimitive())
}


def supported_hash_algorithms() -> list[str]:
    """Names accepted by get_hash_primitive(), sorted."""
    return sorted(HASH_PRIMITIVES)


def get_hash_primitive(name: str | None = None) -> HashPrimitive:
    """
    Look up a hash primitive by name.

    Args:
        name: Registry name; None selects DEFAULT_HASH_ALGORITHM.
              Matching is case-insensitive and accepts '-' for '_'.

    Raises:
        UnsupportedHashAlgorithmException: If the name is not registered.
    """
    key = (name or DEFAULT_HASH_ALGORITHM).lower().replace("-", "_")
    try:
        return HASH_PRIMITIVES[key]
    except KeyError:
        raise UnsupportedHashAlgorithmException(
            name or "", supported=supported_hash_algorithms()
        ) from None


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


# Accepted values for decode_leaf(encoding=...)
LEAF_ENCODINGS: tuple[str, ...] = ("utf-8", "utf8", "hex")


def decode_leaf(value: str, encoding: str = "utf-8") -> bytes:
    """
    Turn a textual leaf from the CLI or API into raw leaf bytes.

    Args:
        value: Leaf as text
        encoding: "utf-8" to encode the text, "hex" to decode 0x-prefixed hex

    Raises:
        ValueError: For an unknown encoding or malformed hex
    """
    if encoding == "hex":
        return from_hex(value)
    if encoding in ("utf-8", "utf8"):
        return value.encode("utf-8")
    raise ValueError(f"Unknown leaf encoding: {encoding!r} (expected 'utf-8' or 'hex')")


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
