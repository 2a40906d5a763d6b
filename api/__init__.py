"""
Merkle Engine API (FastAPI)

HTTP API holding one Merkle tree per process:
- POST /hash - Hash a single value
- POST /tree - Build and store a tree
- GET /tree, GET /tree/root - Read the stored tree
- POST /proof - Generate an inclusion proof
- POST /verify - Verify an inclusion proof
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
