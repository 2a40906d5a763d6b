"""
Schemas - Canonical Serialization
File: canonical.py

Purpose: Deterministic JSON for tree snapshots and proof bundles.
The same tree always serializes to the same bytes, so saved files can be
diffed and hashed directly.
"""

import json
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Compact output, no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Reduce a value to JSON types with a single canonical spelling.

    Bytes become 0x-prefixed lowercase hex, matching how hashes are written
    everywhere outside the engine. None-valued dict entries are dropped.
    Floats are rejected.

    Raises:
        CanonicalizationException: For any type outside the JSON subset above.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()

    if isinstance(value, BaseModel):
        return canonicalize_value(value.model_dump(mode="json", by_alias=True), path)

    if isinstance(value, dict):
        return {
            k: canonicalize_value(v, f"{path}.{k}" if path else k)
            for k, v in value.items()
            if v is not None
        }

    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any) -> str:
    """
    Serialize to canonical JSON: sorted keys, compact, UTF-8 kept as-is.

    Example:
        >>> dumps_canonical({"b": 2, "a": b"\\x01"})
        '{"a":"0x01","b":2}'
    """
    return json.dumps(
        canonicalize_value(obj),
        sort_keys=True,
        separators=CANONICAL_JSON_SEPARATORS,
        ensure_ascii=False,
    )
