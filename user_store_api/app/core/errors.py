"""
Error types shared by the storage, service and API layers.

``StorageError`` and ``ValidationError`` are raised by the lower
layers and never reach the client directly.  Endpoints translate them
into ``ApiError``, which the handler registered in ``main`` renders
as ``{"error": "<code>"}`` so no internal detail leaks out.
"""

from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class StorageError(Exception):
    """A user document could not be read, parsed or written."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class ValidationError(Exception):
    """Caller supplied input failed a precondition."""

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code


class ApiError(HTTPException):
    """HTTP error carrying a machine-readable error code."""

    def __init__(self, code: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(status_code=status_code, detail=code)
        self.code = code


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.code})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render unparseable requests without echoing the input back."""
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "invalid-body"})
