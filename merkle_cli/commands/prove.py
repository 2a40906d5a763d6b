"""
CLI Prove Command

Generate an inclusion proof for one leaf of a saved tree.

Usage:
    merkle prove <tree_path> --index N [--leaf-count N] [--out PATH] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import replace

from core.merkle import ProofBundle, load_tree, save_proof
from core.schemas.errors import MerkleEngineException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def print_bundle_human(bundle: ProofBundle) -> None:
    print(f"hash_algorithm: {bundle.hash_algorithm}")
    print(f"index: {bundle.index}")
    print(f"leaf_count: {bundle.leaf_count}")
    print(f"leaf: {bundle.leaf}")
    print(f"root: {bundle.root}")
    print(f"siblings ({len(bundle.siblings)}):")
    for sibling in bundle.siblings:
        print(f"  {sibling}")


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code
    """
    try:
        tree = load_tree(args.tree_path)
        proof = tree.prove(args.index)
    except MerkleEngineException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except IndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    leaf_count = tree.leaf_count
    if args.leaf_count is not None and args.leaf_count != tree.leaf_count:
        # Walk the saved log with the caller's leaf count instead
        leaf_count = args.leaf_count
        proof = replace(proof, siblings=tree.generate_merkle_proof(proof.index, leaf_count))
    logger.debug(f"Generated {len(proof.siblings)} siblings for leaf {proof.index}")

    bundle = ProofBundle.from_proof(proof, tree.hash_algorithm, leaf_count)

    if args.out:
        save_proof(bundle, args.out)

    if args.json:
        print(bundle.model_dump_json(indent=2))
    else:
        print_bundle_human(bundle)
    return EXIT_SUCCESS
