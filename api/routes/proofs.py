"""
Proof Routes

Generate inclusion proofs from the stored tree and verify proofs.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.deps import decode_hash, get_tree
from api.models.requests import ProofRequest, VerifyRequest
from api.models.responses import ProofResponse, VerifyResponse
from core.crypto.hashing import to_hex


router = APIRouter(tags=["proofs"])


@router.post("/proof", response_model=ProofResponse)
async def generate_proof(request: ProofRequest) -> ProofResponse:
    """
    Generate sibling hashes for a leaf of the stored tree.

    Never fails: an index or leaf count that does not fit the stored tree
    yields an empty sibling list.
    """
    siblings = get_tree().generate_merkle_proof(request.index, request.leaf_count)
    return ProofResponse(
        index=request.index,
        leaf_count=request.leaf_count,
        siblings=[to_hex(s) for s in siblings],
    )


@router.post("/verify", response_model=VerifyResponse)
async def verify_proof(request: VerifyRequest) -> VerifyResponse:
    """
    Verify that a leaf hash sits at an index under a root.

    A proof that does not reproduce the root is not an error: valid is false.
    """
    proof = [decode_hash(h, f"proof[{i}]") for i, h in enumerate(request.proof)]
    root = decode_hash(request.root, "root")
    leaf = decode_hash(request.leaf, "leaf")
    valid = get_tree().verify(proof, root, leaf, request.index)
    return VerifyResponse(valid=valid)
