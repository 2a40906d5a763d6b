"""
Tree Routes

Hash values, build the stored tree and read it back.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import decode_leaves, get_tree
from api.models.requests import BuildTreeRequest, HashRequest
from api.models.responses import HashResponse, RootResponse, TreeResponse
from core.crypto.hashing import to_hex
from core.merkle import MerkleTree


logger = logging.getLogger(__name__)

router = APIRouter(tags=["tree"])


def _tree_response(tree: MerkleTree) -> TreeResponse:
    return TreeResponse(
        hash_algorithm=tree.hash_algorithm,
        leaf_count=tree.leaf_count,
        root=None if tree.is_empty else to_hex(tree.get_root()),
        hashes=[to_hex(h) for h in tree.hashes],
    )


@router.post("/hash", response_model=HashResponse)
async def hash_value(request: HashRequest) -> HashResponse:
    """Hash a single value with the stored tree's primitive."""
    tree = get_tree()
    (data,) = decode_leaves([request.data], request.encoding)
    return HashResponse(
        hash_algorithm=tree.hash_algorithm,
        hash=to_hex(tree.hash(data)),
    )


@router.post("/tree", response_model=TreeResponse)
async def build_tree(request: BuildTreeRequest) -> TreeResponse:
    """
    Build a tree from the given leaves and store it, replacing any previous tree.

    Returns the full hash log, level 0 first.
    """
    leaves = decode_leaves(request.leaves, request.encoding)
    tree = get_tree()
    tree.build_tree(leaves)
    logger.info(f"Stored tree over {tree.leaf_count} leaves")
    return _tree_response(tree)


@router.get("/tree", response_model=TreeResponse)
async def get_stored_tree() -> TreeResponse:
    """Return the stored tree (empty log if nothing was built)."""
    return _tree_response(get_tree())


@router.get("/tree/root", response_model=RootResponse)
async def get_root() -> RootResponse:
    """
    Return the root of the stored tree.

    Responds 404 NOT_PRESENT when the tree is empty.
    """
    return RootResponse(root=to_hex(get_tree().get_root()))
