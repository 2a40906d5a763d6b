"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly (host/port from MERKLE_API_HOST / MERKLE_API_PORT)
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import get_runtime_config
from api.errors import APIError, api_error_handler, engine_error_handler, generic_error_handler
from api.routes import health, tree, proofs
from core.schemas.errors import MerkleEngineException


# Configure logging: respects MERKLE_LOG_LEVEL env var and merkle.json logging.level
def _resolve_log_level() -> int:
    """Resolve log level from the runtime config, defaulting to INFO."""
    raw = get_runtime_config().logging.level
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Engine API",
        description="""
HTTP API over a flat-log binary Merkle tree.

## Endpoints

- **POST /hash** - Hash a single value as a leaf
- **POST /tree** - Build and store a tree from ordered leaves
- **GET /tree** - Full hash log of the stored tree
- **GET /tree/root** - Root of the stored tree (404 when empty)
- **POST /proof** - Sibling hashes for a leaf
- **POST /verify** - Check a proof against a root
- **GET /health** - Health check

Hashes are 0x-prefixed hex strings.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(MerkleEngineException, engine_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(tree.router)
    app.include_router(proofs.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    config = get_runtime_config()
    uvicorn.run(app, host=config.api.host, port=config.api.port)
