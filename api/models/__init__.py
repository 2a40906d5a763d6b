"""API request and response models."""

from api.models.requests import (
    HashRequest,
    BuildTreeRequest,
    ProofRequest,
    VerifyRequest,
)
from api.models.responses import (
    HealthResponse,
    HashResponse,
    TreeResponse,
    RootResponse,
    ProofResponse,
    VerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "HashRequest",
    "BuildTreeRequest",
    "ProofRequest",
    "VerifyRequest",
    "HealthResponse",
    "HashResponse",
    "TreeResponse",
    "RootResponse",
    "ProofResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
