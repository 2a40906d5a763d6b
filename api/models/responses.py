"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-engine-api"
    version: str = "v1"


class HashResponse(BaseModel):
    """Response for POST /hash endpoint."""

    ok: bool = True
    hash_algorithm: str = Field(..., description="Hash primitive used")
    hash: str = Field(..., description="0x-prefixed leaf hash")


class TreeResponse(BaseModel):
    """Response for POST /tree and GET /tree endpoints."""

    ok: bool = True
    hash_algorithm: str = Field(..., description="Hash primitive used")
    leaf_count: int = Field(..., description="Number of leaves")
    root: str | None = Field(default=None, description="Root hash, null for an empty tree")
    hashes: list[str] = Field(default_factory=list, description="Flat hash log, level 0 first")


class RootResponse(BaseModel):
    """Response for GET /tree/root endpoint."""

    ok: bool = True
    root: str = Field(..., description="Root hash")


class ProofResponse(BaseModel):
    """Response for POST /proof endpoint."""

    ok: bool = True
    index: int = Field(..., description="Requested leaf index")
    leaf_count: int = Field(..., description="Requested leaf count")
    siblings: list[str] = Field(default_factory=list, description="Sibling hashes, bottom-up")


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the proof reproduces the root")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
