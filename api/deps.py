"""
API Dependencies

Provides the process-wide Merkle tree and runtime configuration.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config.runtime import RuntimeConfig
from core.crypto.hashing import LEAF_ENCODINGS, decode_leaf, from_hex
from core.merkle import MerkleTree
from api.errors import InvalidHexError, UnsupportedLeafEncodingError

logger = logging.getLogger(__name__)


_config: Optional[RuntimeConfig] = None
_tree: Optional[MerkleTree] = None


def get_runtime_config() -> RuntimeConfig:
    """
    Load RuntimeConfig once per process.

    Search order for config file:
      1. ./merkle.json
      2. ./.merkle.json
      3. ~/.config/merkle/config.json

    Environment variables ALWAYS override config file values.
    A config file that cannot be parsed is skipped with a warning and the
    defaults (plus environment overrides) are used instead.
    """
    global _config
    if _config is None:
        try:
            _config = RuntimeConfig.load()
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Failed to parse config file, using defaults: {e}")
            _config = RuntimeConfig().with_env_overrides()
        logger.info(f"Using hash algorithm {_config.merkle.hash_algorithm}")
    return _config


def get_tree() -> MerkleTree:
    """The tree held by this process; empty until POST /tree."""
    global _tree
    if _tree is None:
        _tree = MerkleTree(get_runtime_config().merkle.hash_algorithm)
    return _tree


def reset_state(config: RuntimeConfig | None = None) -> None:
    """Drop the stored tree and, optionally, install a new config."""
    global _config, _tree
    _config = config
    _tree = None


def decode_leaves(values: list[str], encoding: str | None) -> list[bytes]:
    """
    Decode request leaves, turning bad hex into a 400.

    Requests can only name a valid encoding, so an unknown one comes from
    the server config and is reported as UNSUPPORTED_LEAF_ENCODING.
    """
    encoding = encoding or get_runtime_config().merkle.leaf_encoding
    if encoding not in LEAF_ENCODINGS:
        raise UnsupportedLeafEncodingError(encoding, list(LEAF_ENCODINGS))
    try:
        return [decode_leaf(v, encoding) for v in values]
    except ValueError as e:
        raise InvalidHexError(str(e), field="leaves") from e


def decode_hash(value: str, field: str) -> bytes:
    """Decode a 0x-prefixed hash, turning bad hex into a 400."""
    try:
        return from_hex(value)
    except ValueError as e:
        raise InvalidHexError(str(e), field=field) from e
