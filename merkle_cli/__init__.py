"""
Merkle CLI

Command-line interface for the Merkle tree engine.

Usage:
    python -m merkle_cli hash "hello"
    python -m merkle_cli build 1 2 3 4 5 6 7 --out tree.json
    python -m merkle_cli root tree.json
    python -m merkle_cli prove tree.json --index 3 --out proof.json
    python -m merkle_cli verify proof.json
"""

__version__ = "0.1.0"
