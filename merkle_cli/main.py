"""
Merkle CLI - Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_cli hash <data> [--encoding utf-8|hex] [--algorithm NAME] [--json]
    python -m merkle_cli build [LEAF ...] [--file PATH] [--out PATH] [--json]
    python -m merkle_cli root <tree_path> [--json]
    python -m merkle_cli prove <tree_path> --index N [--leaf-count N] [--out PATH] [--json]
    python -m merkle_cli verify <proof_path> [--root HEX] [--data TEXT] [--json]
    python -m merkle_cli config --init

Environment Variables:
    MERKLE_HASH_ALGORITHM       Hash primitive (sha256, sha3_256, blake2b)
    MERKLE_LEAF_ENCODING        Leaf text decoding (utf-8, hex)
    MERKLE_LOG_LEVEL            Log level (default: INFO)
    MERKLE_LOG_FILE             Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import RuntimeConfig, get_default_config_template
from core.crypto.hashing import supported_hash_algorithms
from merkle_cli import __version__
from merkle_cli.commands import build, prove, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def _add_encoding_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--encoding",
        type=str,
        choices=["utf-8", "hex"],
        default=None,
        help="How leaf text is turned into bytes (default: from config, utf-8)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Merkle tree engine CLI - build trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file, YAML or JSON (default: ./merkle.json or ~/.config/merkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks for unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="Hash a single value as a leaf",
        description="Print the leaf hash of one value.",
    )
    hash_parser.add_argument("data", type=str, help="Value to hash")
    hash_parser.add_argument(
        "--algorithm",
        type=str,
        choices=supported_hash_algorithms(),
        default=None,
        help="Hash primitive (default: from config, sha256)",
    )
    _add_encoding_flag(hash_parser)
    _add_json_flag(hash_parser)
    hash_parser.set_defaults(func=build.hash_cmd)

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a Merkle tree from leaves",
        description="Hash leaves, build every level, print the root and optionally save the tree.",
    )
    build_parser.add_argument("leaves", nargs="*", help="Leaf values, in order")
    build_parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Read additional leaves from a file, one per line",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Save the tree (full hash log) as JSON",
    )
    build_parser.add_argument(
        "--algorithm",
        type=str,
        choices=supported_hash_algorithms(),
        default=None,
        help="Hash primitive (default: from config, sha256)",
    )
    _add_encoding_flag(build_parser)
    _add_json_flag(build_parser)
    build_parser.set_defaults(func=build.build_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root of a saved tree",
        description="Print the root of a saved tree. Fails if the tree is empty.",
    )
    root_parser.add_argument("tree_path", type=str, help="Path to a saved tree")
    _add_json_flag(root_parser)
    root_parser.set_defaults(func=build.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate an inclusion proof for one leaf",
        description="Read sibling hashes for a leaf out of a saved tree.",
    )
    prove_parser.add_argument("tree_path", type=str, help="Path to a saved tree")
    prove_parser.add_argument(
        "--index", "-i",
        type=int,
        required=True,
        help="0-based leaf index",
    )
    prove_parser.add_argument(
        "--leaf-count",
        type=int,
        default=None,
        help="Leaf count to walk (default: the tree's own leaf count)",
    )
    prove_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Save the proof as JSON",
    )
    _add_json_flag(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a saved inclusion proof",
        description="Recompute the root from a proof and compare.",
    )
    verify_parser.add_argument("proof_path", type=str, help="Path to a saved proof")
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Verify against this 0x-prefixed root instead of the bundled one",
    )
    verify_parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Recompute the leaf hash from this raw value",
    )
    _add_encoding_flag(verify_parser)
    _add_json_flag(verify_parser)
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Create or show configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show the effective configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle.json",
        help="Path for config file (default: merkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: merkle config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = RuntimeConfig.load(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(
        level=args.log_level or config.logging.level,
        log_file=config.logging.file,
    )

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
