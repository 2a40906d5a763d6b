"""
API Error Handling

Standardized error handling for the API.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, MerkleEngineException


# Engine error codes that map to something other than 400
ENGINE_STATUS_CODES: dict[str, int] = {
    ErrorCodes.NOT_PRESENT: 404,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class UnsupportedLeafEncodingError(APIError):
    """The server's configured leaf encoding is not one decode_leaf accepts."""

    def __init__(self, encoding: str, supported: list[str]):
        super().__init__(
            code=ErrorCodes.UNSUPPORTED_LEAF_ENCODING,
            message=f"Server is configured with unsupported leaf encoding: {encoding!r}",
            status_code=500,
            details={"encoding": encoding, "supported": supported},
        )


class InvalidHexError(APIError):
    """A hash or leaf was not valid 0x-prefixed hex."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            code=ErrorCodes.INVALID_HEX,
            message=message,
            status_code=400,
            details={"field": field} if field else None,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def engine_error_handler(request: Request, exc: MerkleEngineException) -> JSONResponse:
    """Handle engine exceptions (NotPresent, unsupported algorithm, ...)."""
    return JSONResponse(
        status_code=ENGINE_STATUS_CODES.get(exc.code, 400),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
