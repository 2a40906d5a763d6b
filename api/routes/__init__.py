"""API route handlers."""

from api.routes import health, tree, proofs

__all__ = ["health", "tree", "proofs"]
