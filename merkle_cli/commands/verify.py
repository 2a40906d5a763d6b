"""
CLI Verify Command

Verify a saved inclusion proof offline:
- Recompute the root from the leaf and its siblings
- Compare against the bundled root, or an externally supplied one
- Optionally recompute the leaf hash from raw data

Usage:
    merkle verify <proof_path> [--root 0x..] [--data TEXT] [--encoding utf-8|hex] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from typing import Any

from core.crypto.hashing import decode_leaf, from_hex, get_hash_primitive, to_hex
from core.merkle import load_proof, verify_merkle_proof
from core.schemas.errors import MerkleEngineException
from merkle_cli.commands.build import resolve_encoding


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    hash_algorithm: str = ""
    index: int = 0
    leaf: str = ""
    root: str = ""
    valid: bool = False
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["errors"]:
            del d["errors"]
        return d


def print_summary_human(summary: VerifySummary) -> None:
    print(f"proof: {summary.proof_path}")
    print(f"hash_algorithm: {summary.hash_algorithm}")
    print(f"index: {summary.index}")
    print(f"leaf: {summary.leaf}")
    print(f"root: {summary.root}")
    print(f"valid: {str(summary.valid).lower()}")
    for err in summary.errors:
        print(f"  ✗ {err}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0 valid, 1 error, 2 proof does not verify)
    """
    try:
        bundle = load_proof(args.proof_path)
    except MerkleEngineException as e:
        print(f"Error loading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof = bundle.to_proof()
    primitive = get_hash_primitive(bundle.hash_algorithm)

    try:
        root = from_hex(args.root) if args.root else proof.root
        if args.data is not None:
            leaf = primitive.hash_leaf(decode_leaf(args.data, resolve_encoding(args)))
        else:
            leaf = proof.leaf
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    valid = verify_merkle_proof(proof.siblings, root, leaf, proof.index, primitive)

    summary = VerifySummary(
        proof_path=str(args.proof_path),
        hash_algorithm=bundle.hash_algorithm,
        index=proof.index,
        leaf=to_hex(leaf),
        root=to_hex(root),
        valid=valid,
    )
    if not valid:
        summary.errors.append("Recomputed root does not match")
        if leaf != proof.leaf:
            summary.errors.append("Leaf hash differs from the one in the proof")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
