"""
API Request Models

Pydantic models for API request validation.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


LeafEncoding = Literal["utf-8", "hex"]


class HashRequest(BaseModel):
    """Request body for POST /hash endpoint."""

    data: str = Field(..., description="Value to hash as a leaf")
    encoding: Optional[LeafEncoding] = Field(
        default=None,
        description="'utf-8' to hash the text, 'hex' to hash 0x-prefixed bytes (default: server config)",
    )


class BuildTreeRequest(BaseModel):
    """Request body for POST /tree endpoint."""

    leaves: list[str] = Field(
        default_factory=list,
        description="Ordered leaves; an empty list clears the stored tree",
    )
    encoding: Optional[LeafEncoding] = Field(
        default=None,
        description="How leaves are turned into bytes (default: server config)",
    )


class ProofRequest(BaseModel):
    """Request body for POST /proof endpoint."""

    index: int = Field(..., description="0-based leaf index")
    leaf_count: int = Field(..., description="Number of leaves the stored tree was built from")


class VerifyRequest(BaseModel):
    """Request body for POST /verify endpoint. All hashes are 0x-prefixed hex."""

    proof: list[str] = Field(default_factory=list, description="Sibling hashes, bottom-up")
    root: str = Field(..., description="Claimed root")
    leaf: str = Field(..., description="Leaf hash (not raw data)")
    index: int = Field(..., description="0-based leaf index")
