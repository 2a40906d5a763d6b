"""
Merkle - Tree & Proof IO

Save and load trees and proofs as canonical JSON files.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.merkle.merkle_tree import MerkleTree
from core.merkle.snapshot import ProofBundle, TreeSnapshot
from core.schemas.canonical import dumps_canonical
from core.schemas.errors import SnapshotException


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def dump_json(model: BaseModel) -> str:
    """Serialize a model to canonical JSON."""
    return dumps_canonical(model)


def _write_model(path: str | Path, model: BaseModel) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(model), encoding="utf-8")
    return path


def _read_model(path: str | Path, model_cls: type[ModelT]) -> ModelT:
    path = Path(path)
    if not path.exists():
        raise SnapshotException(f"File not found: {path}", path=str(path))

    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SnapshotException(
            f"Invalid JSON in {path}: {e}", path=str(path)
        ) from e

    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise SnapshotException(
            f"Invalid {model_cls.__name__} in {path}",
            path=str(path),
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def save_tree(tree: MerkleTree, path: str | Path) -> Path:
    """Write a tree's full hash log to ``path``."""
    out = _write_model(path, TreeSnapshot.from_tree(tree))
    logger.info(f"Saved tree ({tree.leaf_count} leaves) to {out}")
    return out


def load_snapshot(path: str | Path) -> TreeSnapshot:
    """
    Read and validate a TreeSnapshot.

    Raises:
        SnapshotException: If the file is missing, not JSON, or not a valid snapshot
    """
    return _read_model(path, TreeSnapshot)


def load_tree(path: str | Path) -> MerkleTree:
    """Restore a MerkleTree from a saved snapshot without rehashing."""
    tree = load_snapshot(path).to_tree()
    logger.debug(f"Loaded {tree!r} from {path}")
    return tree


def save_proof(bundle: ProofBundle, path: str | Path) -> Path:
    """Write a proof bundle to ``path``."""
    out = _write_model(path, bundle)
    logger.info(f"Saved proof for leaf {bundle.index} to {out}")
    return out


def load_proof(path: str | Path) -> ProofBundle:
    """
    Read and validate a ProofBundle.

    Raises:
        SnapshotException: If the file is missing, not JSON, or not a valid proof
    """
    return _read_model(path, ProofBundle)


__all__ = [
    "dump_json",
    "save_tree",
    "load_snapshot",
    "load_tree",
    "save_proof",
    "load_proof",
]
