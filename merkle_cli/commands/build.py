"""
CLI Tree Commands

Hash single values, build trees from leaves, and read roots of saved trees.

Usage:
    merkle hash <data> [--encoding utf-8|hex] [--algorithm NAME]
    merkle build [LEAF ...] [--file PATH] [--out PATH] [--json]
    merkle root <tree_path> [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from core.config.runtime import RuntimeConfig
from core.crypto.hashing import HashPrimitive, decode_leaf, get_hash_primitive, to_hex
from core.merkle import MerkleTree, load_tree, save_tree
from core.schemas.errors import MerkleEngineException, NotPresentException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class TreeSummary:
    """Summary of a built or loaded tree for CLI output."""
    hash_algorithm: str = ""
    leaf_count: int = 0
    log_length: int = 0
    root: str | None = None
    saved_to: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.saved_to is None:
            del d["saved_to"]
        return d


def _runtime_config(args: Namespace) -> RuntimeConfig:
    return getattr(args, "runtime_config", None) or RuntimeConfig()


def resolve_primitive(args: Namespace) -> HashPrimitive:
    """Hash primitive from --algorithm, falling back to the config file/env."""
    name = getattr(args, "algorithm", None) or _runtime_config(args).merkle.hash_algorithm
    return get_hash_primitive(name)


def resolve_encoding(args: Namespace) -> str:
    return getattr(args, "encoding", None) or _runtime_config(args).merkle.leaf_encoding


def read_leaves(args: Namespace, encoding: str) -> list[bytes]:
    """Leaves from positional arguments, then from --file (one leaf per line)."""
    raw: list[str] = list(args.leaves or [])
    if args.file:
        path = Path(args.file)
        raw.extend(path.read_text(encoding="utf-8").splitlines())
        logger.debug(f"Read leaves from {path}")
    return [decode_leaf(value, encoding) for value in raw]


def summarize(tree: MerkleTree, saved_to: Path | None = None) -> TreeSummary:
    return TreeSummary(
        hash_algorithm=tree.hash_algorithm,
        leaf_count=tree.leaf_count,
        log_length=len(tree.hashes),
        root=None if tree.is_empty else to_hex(tree.get_root()),
        saved_to=str(saved_to) if saved_to else None,
    )


def print_summary_human(summary: TreeSummary) -> None:
    print(f"hash_algorithm: {summary.hash_algorithm}")
    print(f"leaf_count: {summary.leaf_count}")
    print(f"log_length: {summary.log_length}")
    print(f"root: {summary.root or '<none>'}")
    if summary.saved_to:
        print(f"saved_to: {summary.saved_to}")


def hash_cmd(args: Namespace) -> int:
    """Print the leaf hash of a single value."""
    try:
        primitive = resolve_primitive(args)
        data = decode_leaf(args.data, resolve_encoding(args))
    except (MerkleEngineException, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    digest = to_hex(primitive.hash_leaf(data))
    if args.json:
        print(json.dumps({"hash_algorithm": primitive.name, "hash": digest}, indent=2))
    else:
        print(digest)
    return EXIT_SUCCESS


def build_cmd(args: Namespace) -> int:
    """Build a tree from leaves, print its summary, optionally save it."""
    try:
        primitive = resolve_primitive(args)
        leaves = read_leaves(args, resolve_encoding(args))
    except (MerkleEngineException, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    tree = MerkleTree(primitive)
    tree.build_tree(leaves)
    logger.info(f"Built tree over {tree.leaf_count} leaves")

    saved_to = save_tree(tree, args.out) if args.out else None
    summary = summarize(tree, saved_to)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)
    return EXIT_SUCCESS


def root_cmd(args: Namespace) -> int:
    """Print the root of a saved tree; fails on an empty tree."""
    try:
        tree = load_tree(args.tree_path)
        root = tree.get_root()
    except NotPresentException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except MerkleEngineException as e:
        print(f"Error loading tree: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({"hash_algorithm": tree.hash_algorithm, "root": to_hex(root)}, indent=2))
    else:
        print(to_hex(root))
    return EXIT_SUCCESS
