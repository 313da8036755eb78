# designsight/core/errors.py
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from designsight.core.logging import logger


class UpstreamServiceError(Exception):
    """
    A dependency (blob store, vision API, PDF renderer) failed or is unavailable.
    Never retried; surfaced to the client with the dependency's message.
    """
    def __init__(self, dependency: str, message: str):
        super().__init__(f"{dependency}: {message}")
        self.dependency = dependency
        self.message = message


class BlobNotFoundError(UpstreamServiceError):
    """The requested object key does not exist in the blob store"""
    def __init__(self, key: str):
        super().__init__("storage", f"Object not found: {key}")
        self.key = key


def failure(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return ", ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return failure(str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _format_validation_errors(exc)
        logger.bind(path=request.url.path).info(f"Rejected invalid request: {message}")
        return failure(message, status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(UpstreamServiceError)
    async def upstream_exception_handler(request: Request, exc: UpstreamServiceError):
        logger.bind(path=request.url.path, dependency=exc.dependency).error(str(exc))
        return failure(str(exc), status.HTTP_502_BAD_GATEWAY)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.bind(path=request.url.path).exception(f"Unhandled error: {exc}")
        return failure("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)
